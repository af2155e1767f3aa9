"""Association handle codec.

A handle is ``"<zone_id>:<vpc_id>"``. The colon is a protocol delimiter and is
not escapable, so neither component may contain it. Route 53 hosted zone ids
and EC2 VPC ids are alphanumeric with dashes.
"""

from __future__ import annotations

from r53_association.errors import MalformedHandleError

SEPARATOR = ":"


def encode(zone_id: str, vpc_id: str) -> str:
    for label, value in (("zone_id", zone_id), ("vpc_id", vpc_id)):
        if not value:
            raise ValueError(f"{label} must be non-empty")
        if SEPARATOR in value:
            raise ValueError(f"{label} must not contain {SEPARATOR!r}: {value!r}")
    return f"{zone_id}{SEPARATOR}{vpc_id}"


def decode(handle: str) -> tuple[str, str]:
    parts = handle.split(SEPARATOR)
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise MalformedHandleError(handle)
    return parts[0], parts[1]


def clean_zone_id(zone_id: str) -> str:
    """Strip the ``/hostedzone/`` prefix Route 53 puts on zone ids in responses."""
    return zone_id.removeprefix("/hostedzone/")


def clean_change_id(change_id: str) -> str:
    """Strip the ``/change/`` prefix Route 53 puts on change ids in responses."""
    return change_id.removeprefix("/change/")
