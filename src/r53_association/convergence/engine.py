"""Association convergence engine.

Drives create/read/delete for a single hosted zone / VPC association. Creating
an association is not atomic: Route 53 applies the change asynchronously, and
across accounts there is no change receipt to poll at all, so the engine waits
until the association is observable before reporting success.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import replace
from typing import Any

from botocore.exceptions import ClientError

from r53_association.config import Settings, load_settings
from r53_association.convergence.change_tracker import change_info_from_response, change_refresh
from r53_association.convergence.conflict import (
    error_code,
    error_text,
    is_already_associated_conflict,
)
from r53_association.convergence.probe import ProbeOutcome, probe_association
from r53_association.convergence.waiter import StateChangeConf
from r53_association.declarations.models import AssociationDeclaration
from r53_association.domain.models import Association, ChangeStatus
from r53_association.errors import RemoteRejectedError
from r53_association.execution.aws_client import client_region
from r53_association.identifiers import decode, encode

logger = logging.getLogger(__name__)


class AssociationEngine:
    """Create, read and delete hosted zone / VPC associations."""

    def __init__(
        self,
        client: Any,
        region: str | None = None,
        settings: Settings | None = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._client = client
        self._settings = settings if settings is not None else load_settings()
        self._region = region or client_region(client) or self._settings.aws.default_region
        self._sleep = sleep
        self._clock = clock

    @property
    def region(self) -> str | None:
        return self._region

    def build_request(self, declaration: AssociationDeclaration) -> dict[str, Any]:
        vpc_region = declaration.vpc_region or self._region
        if not vpc_region:
            raise ValueError(
                f"vpc_region is required for VPC {declaration.vpc_id}: "
                "no explicit region and no default region configured"
            )
        return {
            "HostedZoneId": declaration.zone_id,
            "VPC": {"VPCId": declaration.vpc_id, "VPCRegion": vpc_region},
            "Comment": self._settings.association.comment,
        }

    def create(self, declaration: AssociationDeclaration) -> Association:
        request = self.build_request(declaration)
        zone_id = declaration.zone_id
        vpc_id = declaration.vpc_id
        vpc_region = request["VPC"]["VPCRegion"]
        template = self._settings.association.conflict_pattern

        logger.debug(
            "Associating Route53 Private Zone %s with VPC %s with region %s",
            zone_id,
            vpc_id,
            vpc_region,
        )

        response: dict[str, Any] | None = None
        try:
            response = self._client.associate_vpc_with_hosted_zone(**request)
        except ClientError as exc:
            if not declaration.cross_account:
                raise self._rejected("associating", zone_id, vpc_id, exc) from exc
            if not is_already_associated_conflict(exc, zone_id, vpc_id, template):
                raise self._rejected("associating", zone_id, vpc_id, exc) from exc
            logger.info(
                "VPC %s already associated with hosted zone %s from the zone owner's side",
                vpc_id,
                zone_id,
            )

        handle = encode(zone_id, vpc_id)

        if declaration.cross_account:
            refresh = self._cross_account_refresh(request)
        else:
            change = change_info_from_response(response or {})
            logger.debug("Waiting for Route 53 change %s (%s)", change.change_id, change.status)
            refresh = change_refresh(self._client, change.change_id)

        conf = StateChangeConf.from_settings(
            refresh,
            self._settings.wait,
            pending=(ChangeStatus.PENDING.value,),
            target=(ChangeStatus.INSYNC.value,),
            sleep=self._sleep,
            clock=self._clock,
        )
        conf.wait_for_state()
        logger.info("Association %s converged", handle)

        association = self.read(handle)
        return replace(
            association,
            vpc_region=vpc_region,
            cross_account=declaration.cross_account,
        )

    def _cross_account_refresh(self, request: dict[str, Any]):
        zone_id = request["HostedZoneId"]
        vpc_id = request["VPC"]["VPCId"]
        template = self._settings.association.conflict_pattern

        def refresh() -> tuple[Any, str]:
            result = probe_association(self._client, request, template)
            if result.outcome is ProbeOutcome.CONVERGED:
                return result, ChangeStatus.INSYNC.value
            if result.outcome is ProbeOutcome.PENDING:
                return result, ChangeStatus.PENDING.value
            raise self._rejected("associating", zone_id, vpc_id, result.error) from result.error

        return refresh

    def read(self, handle: str) -> Association:
        zone_id, vpc_id = decode(handle)
        return Association(zone_id=zone_id, vpc_id=vpc_id)

    def import_association(self, handle: str) -> Association:
        """Adopt an existing association by its ``ZONEID:VPCID`` handle."""
        association = self.read(handle)
        logger.info("Imported association %s", association.handle)
        return association

    def delete(self, handle: str, vpc_region: str | None = None) -> None:
        zone_id, vpc_id = decode(handle)
        region = vpc_region or self._region

        logger.debug("Disassociating Route 53 Hosted Zone (%s) Association: %s", zone_id, vpc_id)

        vpc: dict[str, str] = {"VPCId": vpc_id}
        if region:
            vpc["VPCRegion"] = region

        try:
            self._client.disassociate_vpc_from_hosted_zone(
                HostedZoneId=zone_id,
                VPC=vpc,
                Comment=self._settings.association.comment,
            )
        except ClientError as exc:
            raise RemoteRejectedError(
                f"error disassociating Route 53 Hosted Zone ({zone_id}) "
                f"Association ({vpc_id}): {error_text(exc)}",
                error_code=error_code(exc),
            ) from exc


    @staticmethod
    def _rejected(
        action: str, zone_id: str, vpc_id: str, exc: BaseException
    ) -> RemoteRejectedError:
        logger.warning(
            "Route 53 rejected %s zone %s with VPC %s: %s", action, zone_id, vpc_id, error_text(exc)
        )
        return RemoteRejectedError(
            f"error {action} Route 53 Hosted Zone ({zone_id}) with VPC ({vpc_id}): "
            f"{error_text(exc)}",
            error_code=error_code(exc),
        )
