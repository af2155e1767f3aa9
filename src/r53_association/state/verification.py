"""Presence and absence checks for associations and authorization grants.

A hosted zone that no longer exists satisfies every absence check.
"""

from __future__ import annotations

from r53_association.authorization.grants import AuthorizationManager
from r53_association.errors import NotFoundError, VerificationError
from r53_association.identifiers import decode
from r53_association.state.reader import RemoteStateReader


def check_association_exists(reader: RemoteStateReader, handle: str) -> None:
    if not handle:
        raise VerificationError("No zone association ID is set")
    zone_id, vpc_id = decode(handle)
    if vpc_id not in reader.list_associated_networks(zone_id):
        raise VerificationError(f"VPC {vpc_id} is not associated with hosted zone {zone_id}")


def check_association_destroyed(reader: RemoteStateReader, handle: str) -> None:
    zone_id, vpc_id = decode(handle)
    try:
        vpc_ids = reader.list_associated_networks(zone_id)
    except NotFoundError:
        return
    if vpc_id in vpc_ids:
        raise VerificationError(
            f"VPC {vpc_id} is still associated with hosted zone {zone_id}"
        )


def check_authorization_exists(manager: AuthorizationManager, handle: str) -> None:
    if not handle:
        raise VerificationError("No VPC association authorization ID is set")
    zone_id, vpc_id = decode(handle)
    if vpc_id not in manager.list_grants(zone_id):
        raise VerificationError("VPC association authorization not found")


def check_authorization_destroyed(manager: AuthorizationManager, handle: str) -> None:
    zone_id, vpc_id = decode(handle)
    try:
        vpc_ids = manager.list_grants(zone_id)
    except NotFoundError:
        return
    if vpc_id in vpc_ids:
        raise VerificationError(
            f"VPC association authorization for zone {zone_id} with {vpc_id} still exists"
        )
