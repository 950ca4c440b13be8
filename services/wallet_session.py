"""Wallet connection state for one Streamlit session.

The real wallet handshake happens in the browser extension; this module only
tracks which account is active, remembers accounts seen on this store and
notifies subscribers when the active account changes.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, MutableMapping

from models import SENTINEL_HANDLE, Identity, NamedIdentity, parse_identity
from profile_store import KV

logger = logging.getLogger(__name__)

ACCOUNT_MAP_KEY = "mixmi_account_profile_map"
DEV_ADDRESS = "SP00000000000000000000"
_ACTIVE_KEY = "__wallet_active_address__"

IdentityListener = Callable[["Identity | None"], None]


class WalletSession:
    def __init__(self, session_state: MutableMapping[str, Any], kv: KV | None = None) -> None:
        self._state = session_state
        self._kv = kv
        self._listeners: list[IdentityListener] = []

    def get_active_identity(self) -> Identity | None:
        """Return the connected account, or ``None`` while disconnected."""

        address = self._state.get(_ACTIVE_KEY)
        if not isinstance(address, str) or not address:
            return None
        return parse_identity(address)

    def on_identity_change(self, callback: IdentityListener) -> None:
        self._listeners.append(callback)

    def connect(self, address: str) -> Identity:
        address = (address or "").strip()
        if not address:
            raise ValueError("wallet address must be a non-empty string")
        if address == SENTINEL_HANDLE:
            # Reserved for the disconnected profile stored under the legacy keys.
            raise ValueError(f"wallet address {address!r} is reserved")
        if self._state.get(_ACTIVE_KEY) == address:
            return parse_identity(address)
        self._state[_ACTIVE_KEY] = address
        self._remember(address)
        identity = parse_identity(address)
        logger.info("Wallet connected: %s", address)
        self._notify(identity)
        return identity

    def disconnect(self) -> None:
        if self._state.pop(_ACTIVE_KEY, None) is None:
            return
        logger.info("Wallet disconnected")
        self._notify(None)

    def switch_account(self, address: str) -> Identity:
        """Make ``address`` the active account; same as connecting to it."""

        return self.connect(address)

    def list_known_identities(self) -> list[NamedIdentity]:
        return [NamedIdentity(address) for address in sorted(self._account_map()) if address != SENTINEL_HANDLE]

    def _account_map(self) -> dict[str, str]:
        if self._kv is None:
            return {}
        raw = self._kv.get(ACCOUNT_MAP_KEY)
        if raw is None:
            return {}
        try:
            payload = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring unreadable account map under %s", ACCOUNT_MAP_KEY)
            return {}
        if not isinstance(payload, dict):
            return {}
        return {str(address): str(handle) for address, handle in payload.items() if address}

    def _remember(self, address: str) -> None:
        if self._kv is None:
            return
        accounts = self._account_map()
        if address in accounts:
            return
        accounts[address] = address
        try:
            self._kv.put(ACCOUNT_MAP_KEY, json.dumps(accounts, sort_keys=True))
        except Exception:
            logger.warning("Could not record account %s in the account map", address, exc_info=True)

    def _notify(self, identity: Identity | None) -> None:
        for listener in list(self._listeners):
            listener(identity)


__all__ = ["ACCOUNT_MAP_KEY", "DEV_ADDRESS", "WalletSession"]
