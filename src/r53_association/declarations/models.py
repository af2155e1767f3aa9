"""Declared association models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from r53_association.identifiers import SEPARATOR

# Every declared attribute forces replacement when changed.
REPLACEMENT_FIELDS = ("zone_id", "vpc_id", "vpc_region", "cross_account")


def _ensure_list(v: Any) -> list:
    if v is None:
        return []
    return v


class AssociationDeclaration(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    zone_id: str = Field(min_length=1)
    vpc_id: str = Field(min_length=1)
    vpc_region: str | None = Field(default=None)
    cross_account: bool = Field(default=False)

    @field_validator("zone_id", "vpc_id")
    @classmethod
    def _validate_identifier(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must be non-empty")
        if SEPARATOR in value:
            raise ValueError(f"must not contain {SEPARATOR!r}")
        return value

    @field_validator("vpc_region", mode="before")
    @classmethod
    def _blank_region_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class DeclarationFile(BaseModel):
    version: int = Field(default=1)
    associations: list[AssociationDeclaration] = Field(default_factory=list)

    @field_validator("associations", mode="before")
    @classmethod
    def _validate_associations(cls, v: Any) -> list:
        return _ensure_list(v)

    @classmethod
    def from_yaml(cls, data: dict[str, object]) -> "DeclarationFile":
        return cls.model_validate(data)


def requires_replacement(
    current: AssociationDeclaration,
    desired: AssociationDeclaration,
) -> list[str]:
    """Return the attributes whose change forces destroy-then-recreate."""
    return [
        name for name in REPLACEMENT_FIELDS if getattr(current, name) != getattr(desired, name)
    ]
