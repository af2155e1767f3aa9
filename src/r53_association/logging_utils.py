"""Logging setup for the r53-association command line."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from r53_association.config import load_settings

_logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# A cross-account wait re-issues the associate call every few seconds; the SDK
# would log each request and retry at the root level.
_SDK_LOGGERS = ("boto3", "botocore", "urllib3")


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: str | None = None) -> int:
    """Install stderr (and optional file) handlers and return the root level.

    ``level`` overrides ``LOG_LEVEL``. SDK loggers stay at WARNING or above
    whatever the root level is.
    """
    settings = load_settings()
    root_level = _resolve_level(level or settings.logging.level)
    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    handlers: list[logging.Handler] = [stream_handler]

    if settings.logging.file:
        try:
            Path(settings.logging.file).parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(settings.logging.file)
        except OSError as exc:
            _logger.warning("Failed to open log file %s: %s", settings.logging.file, exc)
        else:
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)

    logging.basicConfig(level=root_level, handlers=handlers, force=True)

    sdk_level = max(root_level, logging.WARNING)
    for name in _SDK_LOGGERS:
        logging.getLogger(name).setLevel(sdk_level)

    return root_level
