from __future__ import annotations

import os

import pytest

from r53_association import config
from r53_association.config import AWSSettings, Settings, WaitSettings


def pytest_sessionstart(session: pytest.Session) -> None:
    # Keep unit tests away from any real AWS profile.
    os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> None:
    config._load_settings_cached.cache_clear()
    yield
    config._load_settings_cached.cache_clear()


@pytest.fixture
def fast_settings() -> Settings:
    return Settings(
        aws=AWSSettings(default_region="us-east-1"),
        wait=WaitSettings(
            delay_seconds=0,
            timeout_seconds=10,
            min_interval_seconds=1,
            max_interval_seconds=1,
        ),
    )
