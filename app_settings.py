"""Application configuration helpers for Streamlit surfaces."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

import streamlit as st

from profile_store import BACKEND_MEMORY, BACKEND_ROCKSDICT
from services.storage_keys import DEFAULT_KEY_PREFIX

logger = logging.getLogger(__name__)

# Roughly what browsers allow a single origin in localStorage.
DEFAULT_QUOTA_BYTES = 5 * 1024 * 1024
_BACKENDS = {BACKEND_ROCKSDICT, BACKEND_MEMORY}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class AppSettings:
    """Immutable configuration bundle for the profile page."""

    store_backend: str
    store_path: str
    store_quota_bytes: int | None
    key_prefix: str
    loading_timeout_seconds: float
    enable_dev_controls: bool
    share_link_timeout: float
    log_level: str


def _safe_secret(key: str) -> Any:
    """Return a Streamlit secret when available."""

    try:
        return st.secrets.get(key)
    except Exception:
        return None


def _setting(key: str, default: Any = None) -> Any:
    value = _safe_secret(key)
    if value is None or value == "":
        value = os.getenv(key)
    if value is None or value == "":
        return default
    return value


def _coerce_bool(value: Any, default: bool = False) -> bool:
    """Parse truthy/falsey strings and primitives into booleans."""

    if isinstance(value, bool):
        return value
    if value is None:
        return default
    if isinstance(value, (int, float)):
        return bool(value)
    text = str(value).strip().lower()
    if not text:
        return default
    if text in {"1", "true", "yes", "on", "enabled", "enable"}:
        return True
    if text in {"0", "false", "no", "off", "disabled", "disable"}:
        return False
    return default


def _coerce_float(value: Any, default: float, *, minimum: float = 0.0) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if number <= minimum:
        return default
    return number


def _coerce_quota(value: Any, default: int | None) -> int | None:
    """Parse the quota; ``0`` or a negative number disables it."""

    if value is None:
        return default
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if number > 0 else None


def load_settings() -> AppSettings:
    """Collect runtime configuration from environment and secrets."""

    backend = str(_setting("PROFILE_STORE_BACKEND", BACKEND_ROCKSDICT)).strip().lower()
    if backend not in _BACKENDS:
        logger.warning("Unknown PROFILE_STORE_BACKEND %r; using %s", backend, BACKEND_ROCKSDICT)
        backend = BACKEND_ROCKSDICT
    log_level = str(_setting("LOG_LEVEL", "INFO")).strip().upper()
    if log_level not in _LOG_LEVELS:
        log_level = "INFO"
    return AppSettings(
        store_backend=backend,
        store_path=str(_setting("PROFILE_STORE_PATH", "profile-store")),
        store_quota_bytes=_coerce_quota(_setting("PROFILE_STORE_QUOTA_BYTES"), DEFAULT_QUOTA_BYTES),
        key_prefix=str(_setting("PROFILE_KEY_PREFIX", DEFAULT_KEY_PREFIX)).strip() or DEFAULT_KEY_PREFIX,
        loading_timeout_seconds=_coerce_float(_setting("PROFILE_LOADING_TIMEOUT"), 2.0),
        enable_dev_controls=_coerce_bool(_setting("ENABLE_DEV_CONTROLS"), default=False),
        share_link_timeout=_coerce_float(_setting("SHARE_LINK_TIMEOUT"), 3.0),
        log_level=log_level,
    )


__all__ = ["AppSettings", "DEFAULT_QUOTA_BYTES", "load_settings"]
