from __future__ import annotations

import pytest

from r53_association import config


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "load_dotenv", lambda **_: None)


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in config.ENV_KEYS.values():
        monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("AWS_REGION", raising=False)

    settings = config.load_settings()

    assert settings.wait.delay_seconds == 30
    assert settings.wait.timeout_seconds == 600
    assert settings.wait.min_interval_seconds == 2
    assert settings.association.comment == config.DEFAULT_COMMENT
    assert settings.association.conflict_pattern == config.DEFAULT_CONFLICT_PATTERN
    assert settings.aws.default_region is None


def test_load_settings_is_cached() -> None:
    assert config.load_settings() is config.load_settings()


def test_wait_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("R53_ASSOC_WAIT_DELAY_SECONDS", "5")
    monkeypatch.setenv("R53_ASSOC_WAIT_TIMEOUT_SECONDS", "120.5")
    monkeypatch.setenv("R53_ASSOC_WAIT_MIN_INTERVAL_SECONDS", "1")
    monkeypatch.setenv("R53_ASSOC_WAIT_MAX_INTERVAL_SECONDS", "3")
    monkeypatch.setenv("AWS_REGION", "ap-northeast-1")

    settings = config.load_settings()

    assert settings.wait.delay_seconds == 5
    assert settings.wait.timeout_seconds == 120.5
    assert settings.wait.max_interval_seconds == 3
    assert settings.aws.default_region == "ap-northeast-1"


def test_env_float_invalid_value_returns_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEST_FLOAT_INVALID", "not_a_float")
    assert config._env_float("TEST_FLOAT_INVALID", 2.5) == 2.5


def test_env_int_uses_default_for_blank(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEST_INT_VALUE", "")
    assert config._env_int("TEST_INT_VALUE", 7) == 7


def test_resolve_path_absolute_outside_project_rejected() -> None:
    with pytest.raises(ValueError, match="Path traversal detected"):
        config._resolve_path("/tmp/example")


def test_invalid_interval_bounds_raise_runtime_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("R53_ASSOC_WAIT_MIN_INTERVAL_SECONDS", "20")
    monkeypatch.setenv("R53_ASSOC_WAIT_MAX_INTERVAL_SECONDS", "10")

    with pytest.raises(RuntimeError, match="Invalid configuration"):
        config.load_settings()


def test_conflict_pattern_requires_placeholders(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("R53_ASSOC_CONFLICT_PATTERN", "ConflictingDomainExists: .*")

    with pytest.raises(RuntimeError, match="Invalid configuration"):
        config.load_settings()


def test_custom_conflict_pattern(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("R53_ASSOC_CONFLICT_PATTERN", "ConflictingDomainExists: .*{vpc_id}.*{zone_id}")

    settings = config.load_settings()

    assert settings.association.conflict_pattern.endswith("{zone_id}")
