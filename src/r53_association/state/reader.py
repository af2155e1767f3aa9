"""Remote state reader for hosted zone VPC membership."""

from __future__ import annotations

import logging
from typing import Any

from botocore.exceptions import ClientError

from r53_association.convergence.conflict import error_code, error_text, is_error_code
from r53_association.domain.models import ZoneVPC
from r53_association.errors import NotFoundError, RemoteRejectedError

logger = logging.getLogger(__name__)

NO_SUCH_HOSTED_ZONE = "NoSuchHostedZone"


def remote_error(action: str, zone_id: str, exc: ClientError) -> NotFoundError | RemoteRejectedError:
    """Map a Route 53 error on a zone-scoped call to this package's errors."""
    if is_error_code(exc, NO_SUCH_HOSTED_ZONE):
        return NotFoundError(f"Route 53 Hosted Zone ({zone_id}) not found")
    logger.warning("Route 53 %s for zone %s failed: %s", action, zone_id, error_text(exc))
    return RemoteRejectedError(
        f"error {action} Route 53 Hosted Zone ({zone_id}): {error_text(exc)}",
        error_code=error_code(exc),
    )


class RemoteStateReader:
    def __init__(self, client: Any) -> None:
        self._client = client

    def list_zone_vpcs(self, zone_id: str) -> list[ZoneVPC]:
        try:
            response = self._client.get_hosted_zone(Id=zone_id)
        except ClientError as exc:
            raise remote_error("reading", zone_id, exc) from exc
        return [
            ZoneVPC(vpc_id=str(entry.get("VPCId")), vpc_region=entry.get("VPCRegion"))
            for entry in response.get("VPCs", []) or []
        ]

    def list_associated_networks(self, zone_id: str) -> set[str]:
        """Return the VPC ids associated with ``zone_id``.

        Raises NotFoundError if the hosted zone does not exist.
        """
        return {vpc.vpc_id for vpc in self.list_zone_vpcs(zone_id)}

    def get_zone_association(self, zone_id: str, vpc_id: str) -> ZoneVPC | None:
        for vpc in self.list_zone_vpcs(zone_id):
            if vpc.vpc_id == vpc_id:
                return vpc
        return None
