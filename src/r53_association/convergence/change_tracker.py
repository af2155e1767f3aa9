"""Polling of Route 53 change requests."""

from __future__ import annotations

import logging
from typing import Any

from botocore.exceptions import ClientError

from r53_association.convergence.conflict import error_code, error_text
from r53_association.domain.models import ChangeInfo
from r53_association.errors import RemoteRejectedError
from r53_association.identifiers import clean_change_id

logger = logging.getLogger(__name__)


def change_info_from_response(response: dict[str, Any]) -> ChangeInfo:
    info = response.get("ChangeInfo") or {}
    return ChangeInfo(
        change_id=clean_change_id(str(info.get("Id", ""))),
        status=str(info.get("Status", "")),
    )


def get_change_status(client: Any, change_id: str) -> ChangeInfo:
    change_id = clean_change_id(change_id)
    try:
        response = client.get_change(Id=change_id)
    except ClientError as exc:
        logger.warning("GetChange %s failed: %s", change_id, error_text(exc))
        raise RemoteRejectedError(
            f"error reading Route 53 change ({change_id}): {error_text(exc)}",
            error_code=error_code(exc),
        ) from exc
    return change_info_from_response(response)


def change_refresh(client: Any, change_id: str):
    """Build a waiter refresh callable reporting the change's status."""

    def refresh() -> tuple[ChangeInfo, str]:
        info = get_change_status(client, change_id)
        return info, info.status

    return refresh
