"""Tests for :mod:`app_settings`."""

from __future__ import annotations

import pytest

import app_settings

_ENV_KEYS = (
    "PROFILE_STORE_BACKEND",
    "PROFILE_STORE_PATH",
    "PROFILE_STORE_QUOTA_BYTES",
    "PROFILE_KEY_PREFIX",
    "PROFILE_LOADING_TIMEOUT",
    "ENABLE_DEV_CONTROLS",
    "SHARE_LINK_TIMEOUT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _no_secrets(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(app_settings, "_safe_secret", lambda key: None)
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    settings = app_settings.load_settings()
    assert settings.store_backend == "rocksdict"
    assert settings.store_path == "profile-store"
    assert settings.store_quota_bytes == app_settings.DEFAULT_QUOTA_BYTES
    assert settings.key_prefix == "mixmi"
    assert settings.loading_timeout_seconds == 2.0
    assert settings.enable_dev_controls is False
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROFILE_STORE_BACKEND", "Memory")
    monkeypatch.setenv("PROFILE_STORE_QUOTA_BYTES", "0")
    monkeypatch.setenv("PROFILE_LOADING_TIMEOUT", "5")
    monkeypatch.setenv("ENABLE_DEV_CONTROLS", "yes")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = app_settings.load_settings()
    assert settings.store_backend == "memory"
    assert settings.store_quota_bytes is None
    assert settings.loading_timeout_seconds == 5.0
    assert settings.enable_dev_controls is True
    assert settings.log_level == "DEBUG"


def test_invalid_values_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROFILE_STORE_BACKEND", "redis")
    monkeypatch.setenv("PROFILE_LOADING_TIMEOUT", "soon")
    monkeypatch.setenv("SHARE_LINK_TIMEOUT", "-1")
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    settings = app_settings.load_settings()
    assert settings.store_backend == "rocksdict"
    assert settings.loading_timeout_seconds == 2.0
    assert settings.share_link_timeout == 3.0
    assert settings.log_level == "INFO"


def test_secrets_take_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(app_settings, "_safe_secret", lambda key: "linkbio" if key == "PROFILE_KEY_PREFIX" else None)
    monkeypatch.setenv("PROFILE_KEY_PREFIX", "ignored")
    assert app_settings.load_settings().key_prefix == "linkbio"
