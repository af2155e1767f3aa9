"""VPC association authorization grants.

Runs with credentials of the account that owns the hosted zone. A grant must
exist before the VPC account can associate its VPC with the zone.
"""

from __future__ import annotations

import logging
from typing import Any

from botocore.exceptions import ClientError

from r53_association.domain.models import Grant
from r53_association.state.reader import remote_error

logger = logging.getLogger(__name__)


class AuthorizationManager:
    def __init__(self, client: Any) -> None:
        self._client = client

    def authorize(
        self,
        zone_id: str,
        vpc_id: str,
        vpc_region: str,
        owner_account: str | None = None,
    ) -> Grant:
        logger.info(
            "Authorizing VPC %s (%s, account %s) for hosted zone %s",
            vpc_id,
            vpc_region,
            owner_account or "unknown",
            zone_id,
        )
        try:
            self._client.create_vpc_association_authorization(
                HostedZoneId=zone_id,
                VPC={"VPCId": vpc_id, "VPCRegion": vpc_region},
            )
        except ClientError as exc:
            raise remote_error("authorizing VPC association for", zone_id, exc) from exc
        return Grant(
            zone_id=zone_id,
            vpc_id=vpc_id,
            vpc_region=vpc_region,
            owner_account=owner_account,
        )

    def list_grants(self, zone_id: str) -> set[str]:
        vpc_ids: set[str] = set()
        token: str | None = None

        try:
            while True:
                params: dict[str, Any] = {"HostedZoneId": zone_id}
                if token:
                    params["NextToken"] = token
                resp = self._client.list_vpc_association_authorizations(**params)
                for entry in resp.get("VPCs", []) or []:
                    vpc_ids.add(str(entry.get("VPCId")))
                token = resp.get("NextToken")
                if not token:
                    break
        except ClientError as exc:
            raise remote_error("listing VPC association authorizations for", zone_id, exc) from exc

        return vpc_ids

    def revoke(self, zone_id: str, vpc_id: str, vpc_region: str) -> None:
        logger.info("Revoking authorization of VPC %s for hosted zone %s", vpc_id, zone_id)
        try:
            self._client.delete_vpc_association_authorization(
                HostedZoneId=zone_id,
                VPC={"VPCId": vpc_id, "VPCRegion": vpc_region},
            )
        except ClientError as exc:
            raise remote_error("revoking VPC association authorization for", zone_id, exc) from exc
