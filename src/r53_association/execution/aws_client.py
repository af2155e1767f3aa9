"""Route 53 client factory."""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from collections.abc import Callable

import boto3
from botocore.config import Config

from r53_association.config import Settings, load_settings

ClientCacheKey = tuple[str, ...]

_CLIENT_CACHE: OrderedDict[ClientCacheKey, tuple[object, float]] = OrderedDict()
_CLIENT_CACHE_LOCK = threading.Lock()
_CLIENT_TTL_SECONDS = 3600  # 1 hour
_CLIENT_CACHE_MAX_SIZE = 64

ROUTE53_SERVICE = "route53"


def _get_cached_client(
    key: ClientCacheKey,
    build_client: Callable[[], object],
) -> object:
    now = time.monotonic()
    with _CLIENT_CACHE_LOCK:
        cached = _CLIENT_CACHE.get(key)
        if cached is not None:
            client, created_at = cached
            if now - created_at < _CLIENT_TTL_SECONDS:
                _CLIENT_CACHE.move_to_end(key)
                return client
            del _CLIENT_CACHE[key]
        client = build_client()
        _CLIENT_CACHE[key] = (client, now)
        while len(_CLIENT_CACHE) > _CLIENT_CACHE_MAX_SIZE:
            _CLIENT_CACHE.popitem(last=False)
        return client


def _profile_cache_key(
    service: str,
    region: str | None,
    profile: str | None,
    settings: Settings,
) -> ClientCacheKey:
    return (
        "profile",
        service,
        region or settings.aws.default_region or "",
        profile or settings.aws.default_profile or "",
    )


def get_client(
    region: str | None = None,
    profile: str | None = None,
    service: str = ROUTE53_SERVICE,
):
    settings = load_settings()
    key = _profile_cache_key(service, region, profile, settings)
    return _get_cached_client(
        key,
        lambda: _create_client_with_profile(service, region, profile, settings),
    )


def _create_client_with_profile(
    service: str,
    region: str | None,
    profile: str | None,
    settings: Settings,
):
    session = boto3.Session(
        profile_name=profile or settings.aws.default_profile,
        region_name=region or settings.aws.default_region,
    )
    return session.client(service, config=_get_service_config(settings))


def _get_service_config(settings: Settings) -> Config:
    return Config(
        read_timeout=settings.execution.sdk_timeout_seconds,
        connect_timeout=settings.execution.sdk_timeout_seconds,
        retries={"max_attempts": settings.execution.max_retries + 1, "mode": "standard"},
    )


def client_region(client: object) -> str | None:
    """Return the region a boto3 client was built for, if it exposes one."""
    meta = getattr(client, "meta", None)
    return getattr(meta, "region_name", None)
