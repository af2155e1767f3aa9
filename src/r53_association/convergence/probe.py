"""Cross-account convergence probe.

Re-requesting an association is the only way the VPC account can observe a
cross-account join. The outcome is inverted: a successful re-request means
Route 53 still treats it as new (pending), while the already-associated
conflict means the join is visible (converged).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from botocore.exceptions import ClientError

from r53_association.config import DEFAULT_CONFLICT_PATTERN
from r53_association.convergence.conflict import is_already_associated_conflict

logger = logging.getLogger(__name__)


class ProbeOutcome(str, Enum):
    PENDING = "PENDING"
    CONVERGED = "CONVERGED"
    FATAL = "FATAL"


@dataclass(frozen=True)
class ProbeResult:
    outcome: ProbeOutcome
    error: BaseException | None = None


def classify_probe_error(
    error: BaseException | None,
    zone_id: str,
    vpc_id: str,
    template: str = DEFAULT_CONFLICT_PATTERN,
) -> ProbeResult:
    """Map the outcome of a re-issued associate call to a tri-state result.

    A PatternMatchError from the conflict check propagates; it is a local
    defect rather than a remote answer.
    """
    if error is None:
        return ProbeResult(ProbeOutcome.PENDING)
    if is_already_associated_conflict(error, zone_id, vpc_id, template):
        return ProbeResult(ProbeOutcome.CONVERGED)
    return ProbeResult(ProbeOutcome.FATAL, error)


def probe_association(
    client: Any,
    request: dict[str, Any],
    template: str = DEFAULT_CONFLICT_PATTERN,
) -> ProbeResult:
    zone_id = request["HostedZoneId"]
    vpc_id = request["VPC"]["VPCId"]
    try:
        client.associate_vpc_with_hosted_zone(**request)
    except ClientError as exc:
        return classify_probe_error(exc, zone_id, vpc_id, template)
    return classify_probe_error(None, zone_id, vpc_id, template)
