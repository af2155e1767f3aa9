"""Detection of the Route 53 "VPC already associated" conflict.

Route 53 offers no call that tells the VPC account whether it is already
associated with a hosted zone owned by another account. The only signal is the
ConflictingDomainExists error returned when the association is requested again.
All knowledge of that error text lives here.
"""

from __future__ import annotations

import re

from botocore.exceptions import ClientError

from r53_association.config import DEFAULT_CONFLICT_PATTERN
from r53_association.errors import PatternMatchError
from r53_association.identifiers import clean_zone_id


def error_text(error: BaseException) -> str:
    """Render an error as ``"<Code>: <Message>"`` when it carries a Route 53 error body."""
    if isinstance(error, ClientError):
        body = error.response.get("Error", {})
        code = body.get("Code", "Unknown")
        message = body.get("Message", str(error))
        return f"{code}: {message}"
    return str(error)


def error_code(error: BaseException) -> str:
    if isinstance(error, ClientError):
        return str(error.response.get("Error", {}).get("Code", "Unknown"))
    return type(error).__name__


def compile_conflict_pattern(
    zone_id: str,
    vpc_id: str,
    template: str = DEFAULT_CONFLICT_PATTERN,
) -> re.Pattern[str]:
    try:
        source = template.format(
            vpc_id=re.escape(vpc_id),
            zone_id=re.escape(clean_zone_id(zone_id)),
        )
        return re.compile(source)
    except (re.error, KeyError, IndexError, ValueError) as exc:
        raise PatternMatchError(
            f"invalid already-associated pattern {template!r}: {exc}"
        ) from exc


def is_already_associated_conflict(
    error: BaseException,
    zone_id: str,
    vpc_id: str,
    template: str = DEFAULT_CONFLICT_PATTERN,
) -> bool:
    """Return True if ``error`` says ``vpc_id`` is already associated with ``zone_id``.

    Raises PatternMatchError when the pattern cannot be built, so a broken
    pattern is never mistaken for "no match".
    """
    pattern = compile_conflict_pattern(zone_id, vpc_id, template)
    return pattern.search(error_text(error)) is not None


def is_error_code(error: BaseException, code: str) -> bool:
    return isinstance(error, ClientError) and error_code(error) == code
