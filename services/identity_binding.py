"""Keep the profile page bound to the wallet's active identity."""

from __future__ import annotations

import logging

from models import SENTINEL, Identity
from services.edit_mode import EditModeMachine
from services.seeding import SeedingPolicy, SeedOutcome
from services.storage_keys import DEFAULT_KEY_PREFIX, StorageKeySet, resolve
from services.wallet_session import WalletSession

logger = logging.getLogger(__name__)


class IdentityBinding:
    """Reloads records through the seeding policy whenever the identity changes.

    Every change (connect, disconnect, account switch) drops unsaved edits of
    the previous identity before the new records are installed.
    """

    def __init__(
        self,
        wallet: WalletSession,
        seeding: SeedingPolicy,
        machine: EditModeMachine,
        *,
        key_prefix: str = DEFAULT_KEY_PREFIX,
    ) -> None:
        self._wallet = wallet
        self._seeding = seeding
        self._machine = machine
        self._prefix = key_prefix
        self._identity: Identity | None = None
        self._keys: StorageKeySet | None = None
        self.last_outcome: SeedOutcome | None = None
        wallet.on_identity_change(self._on_identity_change)

    @property
    def current_identity(self) -> Identity | None:
        return self._identity

    @property
    def keys(self) -> StorageKeySet | None:
        return self._keys

    @property
    def machine(self) -> EditModeMachine:
        return self._machine

    def sync(self) -> bool:
        """Rebind if the wallet's active identity differs from the bound one."""

        active = self._wallet.get_active_identity() or SENTINEL
        if self._identity is not None and active == self._identity:
            return False
        self.bind(active)
        return True

    def bind(self, identity: Identity | None) -> SeedOutcome:
        identity = identity or SENTINEL
        keys = resolve(identity, prefix=self._prefix)
        previous = self._identity
        self._identity = identity
        self._keys = keys
        self._machine.dispatcher.rebind(keys)
        outcome = self._seeding.resolve(keys, identity)
        self._machine.replace_records(outcome.records)
        self.last_outcome = outcome
        logger.info(
            "Profile bound to %s (previous: %s, seeded: %s)",
            identity.handle,
            previous.handle if previous is not None else "none",
            outcome.seeded,
        )
        return outcome

    def _on_identity_change(self, identity: Identity | None) -> None:
        self.bind(identity)


__all__ = ["IdentityBinding"]
