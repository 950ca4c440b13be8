"""Helper functions wiring the profile services into Streamlit session state."""

from __future__ import annotations

import functools
import logging
from typing import Any, MutableMapping

from app_settings import AppSettings, load_settings
from models import SENTINEL
from profile_store import BACKEND_ROCKSDICT, KV, open_kv
from services import media_urls
from services.edit_mode import EditModeMachine
from services.identity_binding import IdentityBinding
from services.profile_repository import ProfileRepository
from services.seeding import SeedingPolicy
from services.storage_keys import namespace_prefixes, resolve
from services.update_dispatcher import UpdateDispatcher
from services.wallet_session import ACCOUNT_MAP_KEY, WalletSession

logger = logging.getLogger(__name__)

SETTINGS_KEY = "__profile_settings__"
_KV_KEY = "__profile_kv__"
_REPOSITORY_KEY = "__profile_repository__"
_WALLET_KEY = "__wallet_session__"
_BINDING_KEY = "__identity_binding__"

# RocksDB holds a process-wide lock on its directory, so sessions share one handle.
_SHARED_STORES: dict[str, KV] = {}


def get_settings(session_state: MutableMapping[str, Any]) -> AppSettings:
    settings = session_state.get(SETTINGS_KEY)
    if not isinstance(settings, AppSettings):
        settings = load_settings()
        session_state[SETTINGS_KEY] = settings
    return settings


def get_kv(session_state: MutableMapping[str, Any]) -> KV:
    kv = session_state.get(_KV_KEY)
    if isinstance(kv, KV):
        return kv
    settings = get_settings(session_state)
    if settings.store_backend == BACKEND_ROCKSDICT:
        kv = _SHARED_STORES.get(settings.store_path)
        if kv is None:
            kv = open_kv(
                settings.store_path,
                backend=settings.store_backend,
                quota_bytes=settings.store_quota_bytes,
            )
            _SHARED_STORES[settings.store_path] = kv
    else:
        kv = open_kv(settings.store_path, backend=settings.store_backend, quota_bytes=settings.store_quota_bytes)
    session_state[_KV_KEY] = kv
    return kv


def get_repository(session_state: MutableMapping[str, Any]) -> ProfileRepository:
    repository = session_state.get(_REPOSITORY_KEY)
    if not isinstance(repository, ProfileRepository):
        repository = ProfileRepository(get_kv(session_state))
        session_state[_REPOSITORY_KEY] = repository
    return repository


def get_wallet(session_state: MutableMapping[str, Any]) -> WalletSession:
    wallet = session_state.get(_WALLET_KEY)
    if not isinstance(wallet, WalletSession):
        wallet = WalletSession(session_state, get_kv(session_state))
        session_state[_WALLET_KEY] = wallet
    return wallet


def get_binding(session_state: MutableMapping[str, Any]) -> IdentityBinding:
    """Return the session's identity binding, synced with the active wallet."""

    binding = session_state.get(_BINDING_KEY)
    if not isinstance(binding, IdentityBinding):
        settings = get_settings(session_state)
        repository = get_repository(session_state)
        resolver = functools.partial(media_urls.resolve_media, timeout=settings.share_link_timeout)
        dispatcher = UpdateDispatcher(
            repository,
            resolve(SENTINEL, prefix=settings.key_prefix),
            media_resolver=resolver,
        )
        machine = EditModeMachine(dispatcher, loading_timeout_seconds=settings.loading_timeout_seconds)
        binding = IdentityBinding(
            get_wallet(session_state),
            SeedingPolicy(repository),
            machine,
            key_prefix=settings.key_prefix,
        )
        session_state[_BINDING_KEY] = binding
    binding.sync()
    return binding


def get_machine(session_state: MutableMapping[str, Any]) -> EditModeMachine:
    return get_binding(session_state).machine


def reset_profiles(session_state: MutableMapping[str, Any]) -> tuple[int, Exception | None]:
    """Clear every stored profile and reseed the bound identity."""

    settings = get_settings(session_state)
    try:
        removed = get_repository(session_state).reset(
            namespace_prefixes(settings.key_prefix),
            keep=(ACCOUNT_MAP_KEY,),
        )
    except Exception as exc:
        logger.error("Profile reset failed", exc_info=True)
        return 0, exc
    binding = get_binding(session_state)
    binding.bind(binding.current_identity)
    return removed, None


__all__ = [
    "SETTINGS_KEY",
    "get_binding",
    "get_kv",
    "get_machine",
    "get_repository",
    "get_settings",
    "get_wallet",
    "reset_profiles",
]
