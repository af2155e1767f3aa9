"""Configuration management for the Route 53 VPC association engine."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

_config_logger = logging.getLogger(__name__)

DEFAULT_COMMENT = "Managed by route53-vpc-association"

# Route 53 reports "already associated" as a ConflictingDomainExists error whose
# message names both the VPC and the hosted zone.
DEFAULT_CONFLICT_PATTERN = (
    "ConflictingDomainExists: The VPC {vpc_id} .* associated with the hosted zone {zone_id} .*"
)


class LoggingSettings(BaseModel):
    level: str = Field(default="INFO", description="Python logging level name")
    file: str | None = Field(default=None, description="Optional log file path")


class AWSSettings(BaseModel):
    default_region: str | None = Field(default=None)
    default_profile: str | None = Field(default=None)


class ExecutionSettings(BaseModel):
    sdk_timeout_seconds: int = Field(default=30, ge=1, le=300)
    max_retries: int = Field(default=2, ge=0, le=10)


class WaitSettings(BaseModel):
    """Polling parameters shared by the same-account and cross-account waits."""

    delay_seconds: float = Field(default=30.0, ge=0)
    timeout_seconds: float = Field(default=600.0, gt=0)
    min_interval_seconds: float = Field(default=2.0, gt=0)
    max_interval_seconds: float = Field(default=10.0, gt=0)

    @model_validator(mode="after")
    def _check_interval_bounds(self) -> "WaitSettings":
        if self.max_interval_seconds < self.min_interval_seconds:
            raise ValueError("max_interval_seconds must be >= min_interval_seconds")
        return self


class AssociationSettings(BaseModel):
    comment: str = Field(default=DEFAULT_COMMENT, max_length=256)
    conflict_pattern: str = Field(
        default=DEFAULT_CONFLICT_PATTERN,
        description="Template with {vpc_id} and {zone_id} placeholders",
    )

    @field_validator("conflict_pattern")
    @classmethod
    def _require_placeholders(cls, value: str) -> str:
        for placeholder in ("{vpc_id}", "{zone_id}"):
            if placeholder not in value:
                raise ValueError(f"conflict_pattern must contain {placeholder}")
        return value


class Settings(BaseModel):
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    aws: AWSSettings = Field(default_factory=AWSSettings)
    execution: ExecutionSettings = Field(default_factory=ExecutionSettings)
    wait: WaitSettings = Field(default_factory=WaitSettings)
    association: AssociationSettings = Field(default_factory=AssociationSettings)


ENV_KEYS = {
    "log_level": "LOG_LEVEL",
    "log_file": "LOG_FILE",
    "aws_region": "AWS_DEFAULT_REGION",
    "aws_profile": "AWS_PROFILE",
    "max_retries": "R53_ASSOC_MAX_RETRIES",
    "wait_delay": "R53_ASSOC_WAIT_DELAY_SECONDS",
    "wait_timeout": "R53_ASSOC_WAIT_TIMEOUT_SECONDS",
    "wait_min_interval": "R53_ASSOC_WAIT_MIN_INTERVAL_SECONDS",
    "wait_max_interval": "R53_ASSOC_WAIT_MAX_INTERVAL_SECONDS",
    "comment": "R53_ASSOC_COMMENT",
    "conflict_pattern": "R53_ASSOC_CONFLICT_PATTERN",
}


def _project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _resolve_path(path: str) -> str:
    candidate = Path(path)
    root = _project_root().resolve()
    if candidate.is_absolute():
        resolved = candidate.resolve()
    else:
        resolved = (root / candidate).resolve()
    if not resolved.is_relative_to(root):
        raise ValueError(f"Path traversal detected: '{path}' resolves outside project root")
    return str(resolved)


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        _config_logger.warning(
            "Invalid integer value for %s: %r, using default %d", key, value, default
        )
        return default


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        _config_logger.warning(
            "Invalid float value for %s: %r, using default %s", key, value, default
        )
        return default


def load_settings() -> Settings:
    """Load configuration and cache the result."""

    return _load_settings_cached()


@lru_cache(maxsize=1)
def _load_settings_cached() -> Settings:
    load_dotenv(dotenv_path=_project_root() / ".env")
    log_file_env = os.getenv(ENV_KEYS["log_file"])

    settings_data: dict[str, object] = {
        "logging": {
            "level": os.getenv(ENV_KEYS["log_level"], LoggingSettings().level),
            "file": _resolve_path(log_file_env) if log_file_env else None,
        },
        "aws": {
            "default_region": os.getenv("AWS_REGION") or os.getenv(ENV_KEYS["aws_region"]),
            "default_profile": os.getenv(ENV_KEYS["aws_profile"]),
        },
        "execution": {
            "sdk_timeout_seconds": _env_int(
                "SDK_TIMEOUT_SECONDS",
                ExecutionSettings().sdk_timeout_seconds,
            ),
            "max_retries": _env_int(
                ENV_KEYS["max_retries"],
                ExecutionSettings().max_retries,
            ),
        },
        "wait": {
            "delay_seconds": _env_float(ENV_KEYS["wait_delay"], WaitSettings().delay_seconds),
            "timeout_seconds": _env_float(
                ENV_KEYS["wait_timeout"], WaitSettings().timeout_seconds
            ),
            "min_interval_seconds": _env_float(
                ENV_KEYS["wait_min_interval"], WaitSettings().min_interval_seconds
            ),
            "max_interval_seconds": _env_float(
                ENV_KEYS["wait_max_interval"], WaitSettings().max_interval_seconds
            ),
        },
        "association": {
            "comment": os.getenv(ENV_KEYS["comment"], AssociationSettings().comment),
            "conflict_pattern": os.getenv(
                ENV_KEYS["conflict_pattern"], AssociationSettings().conflict_pattern
            ),
        },
    }

    try:
        settings = Settings.model_validate(settings_data)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid configuration: {exc}") from exc

    return settings
