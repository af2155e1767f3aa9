from __future__ import annotations

import pytest

from r53_association.errors import MalformedHandleError
from r53_association.identifiers import clean_change_id, clean_zone_id, decode, encode


@pytest.mark.parametrize(
    ("zone_id", "vpc_id"),
    [
        ("Z0123456789ABCDEFGHIJ", "vpc-0a1b2c3d4e5f67890"),
        ("Z1", "vpc-1"),
        ("z", "v"),
    ],
)
def test_decode_reverses_encode(zone_id: str, vpc_id: str) -> None:
    handle = encode(zone_id, vpc_id)
    assert handle == f"{zone_id}:{vpc_id}"
    assert decode(handle) == (zone_id, vpc_id)


@pytest.mark.parametrize("handle", ["", "onlyzone", "a:b:c", ":vpc", "zone:", ":"])
def test_decode_rejects_malformed_handles(handle: str) -> None:
    with pytest.raises(MalformedHandleError, match="expected ZONEID:VPCID") as excinfo:
        decode(handle)
    assert excinfo.value.code == "malformed_handle"
    assert excinfo.value.handle == handle


@pytest.mark.parametrize(
    ("zone_id", "vpc_id"),
    [("", "vpc-1"), ("Z1", ""), ("Z:1", "vpc-1"), ("Z1", "vpc:1")],
)
def test_encode_rejects_components_that_cannot_round_trip(zone_id: str, vpc_id: str) -> None:
    with pytest.raises(ValueError):
        encode(zone_id, vpc_id)


def test_clean_ids_strip_route53_prefixes() -> None:
    assert clean_zone_id("/hostedzone/Z1") == "Z1"
    assert clean_zone_id("Z1") == "Z1"
    assert clean_change_id("/change/C1") == "C1"
    assert clean_change_id("C1") == "C1"
