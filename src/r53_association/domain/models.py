"""Domain objects for hosted zone / VPC associations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from r53_association.identifiers import encode


class ChangeStatus(str, Enum):
    PENDING = "PENDING"
    INSYNC = "INSYNC"


@dataclass(frozen=True)
class Association:
    zone_id: str
    vpc_id: str
    vpc_region: str | None = None
    cross_account: bool = False

    @property
    def handle(self) -> str:
        return encode(self.zone_id, self.vpc_id)

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.handle,
            "zone_id": self.zone_id,
            "vpc_id": self.vpc_id,
            "vpc_region": self.vpc_region,
            "cross_account": self.cross_account,
        }


@dataclass(frozen=True)
class ChangeInfo:
    change_id: str
    status: str


@dataclass(frozen=True)
class ZoneVPC:
    """A VPC entry as listed on a hosted zone."""

    vpc_id: str
    vpc_region: str | None = None


@dataclass(frozen=True)
class Grant:
    zone_id: str
    vpc_id: str
    vpc_region: str
    owner_account: str | None = None

    @property
    def handle(self) -> str:
        return encode(self.zone_id, self.vpc_id)
