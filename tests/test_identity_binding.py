"""Tests for :mod:`services.identity_binding` and :mod:`services.wallet_session`."""

from __future__ import annotations

import pytest

from example_content import EXAMPLE_SPOTLIGHT
from models import SENTINEL, NamedIdentity, SpotlightItem
from profile_store import BACKEND_MEMORY, open_kv
from services.edit_mode import EditModeMachine, ProfileMode
from services.identity_binding import IdentityBinding
from services.profile_repository import ProfileRepository
from services.seeding import SeedingPolicy
from services.storage_keys import LEGACY_KEY_SET, resolve
from services.update_dispatcher import UpdateDispatcher, UpdateTarget
from services.wallet_session import WalletSession


def _wire(session_state: dict | None = None):
    session_state = {} if session_state is None else session_state
    kv = open_kv("unused", backend=BACKEND_MEMORY)
    repository = ProfileRepository(kv)
    wallet = WalletSession(session_state, kv)
    dispatcher = UpdateDispatcher(repository, resolve(SENTINEL), media_resolver=lambda url: ("unknown", ""))
    machine = EditModeMachine(dispatcher)
    binding = IdentityBinding(wallet, SeedingPolicy(repository), machine)
    return binding, wallet, repository, session_state


def test_sync_binds_sentinel_while_disconnected() -> None:
    binding, _, _, _ = _wire()
    assert binding.sync() is True
    assert binding.current_identity is SENTINEL
    assert binding.keys == LEGACY_KEY_SET
    assert binding.machine.records.spotlight == EXAMPLE_SPOTLIGHT
    assert binding.sync() is False


def test_connect_rebinds_to_namespaced_keys() -> None:
    binding, wallet, repository, _ = _wire()
    binding.sync()

    wallet.connect("SP3ABC")

    assert binding.current_identity == NamedIdentity("SP3ABC")
    assert binding.keys.profile == "mixmi:SP3ABC:profile"
    assert binding.machine.dispatcher.keys == binding.keys
    assert binding.machine.records.profile.wallet_address == "SP3ABC"
    assert repository.has_record(binding.keys, "profile")


def test_account_switch_discards_unsaved_edits() -> None:
    binding, wallet, _, _ = _wire()
    wallet.connect("SP_A")
    machine = binding.machine
    machine.enter_edit()
    machine.stage(UpdateTarget.SPOTLIGHT_ITEMS, [SpotlightItem(id="x", title="Unsaved")])

    wallet.switch_account("SP_B")

    assert machine.mode is ProfileMode.VIEW
    assert machine.records.spotlight == EXAMPLE_SPOTLIGHT
    wallet.switch_account("SP_A")
    assert machine.records.spotlight == EXAMPLE_SPOTLIGHT


def test_saved_edits_are_isolated_per_identity() -> None:
    binding, wallet, _, _ = _wire()
    wallet.connect("SP_A")
    machine = binding.machine
    machine.enter_edit()
    machine.stage(UpdateTarget.PROFILE_FIELDS, {"display_name": "Alice"})
    assert machine.request_save()

    wallet.switch_account("SP_B")
    assert machine.records.profile.display_name == "Your Name"

    wallet.switch_account("SP_A")
    assert machine.records.profile.display_name == "Alice"


def test_disconnect_returns_to_sentinel() -> None:
    binding, wallet, _, _ = _wire()
    wallet.connect("SP3ABC")
    wallet.disconnect()
    assert binding.current_identity is SENTINEL
    assert binding.keys == LEGACY_KEY_SET


def test_sync_notices_changes_made_elsewhere() -> None:
    binding, _, repository, session_state = _wire()
    binding.sync()
    other_tab = WalletSession(session_state, repository.kv)
    other_tab.connect("SP_OTHER")

    assert binding.sync() is True
    assert binding.current_identity == NamedIdentity("SP_OTHER")


def test_known_identities_are_remembered() -> None:
    _, wallet, _, _ = _wire()
    wallet.connect("SP_B")
    wallet.connect("SP_A")
    assert wallet.list_known_identities() == [NamedIdentity("SP_A"), NamedIdentity("SP_B")]


def test_connect_rejects_blank_address() -> None:
    _, wallet, _, _ = _wire()
    with pytest.raises(ValueError):
        wallet.connect("   ")
    assert wallet.get_active_identity() is None


def test_reserved_default_address_is_rejected() -> None:
    binding, wallet, repository, _ = _wire()
    binding.sync()
    with pytest.raises(ValueError):
        wallet.connect("default")
    assert wallet.get_active_identity() is None
    assert binding.keys == LEGACY_KEY_SET

    repository.kv.put("mixmi_account_profile_map", '{"default": "default", "SP_A": "SP_A"}')
    assert wallet.list_known_identities() == [NamedIdentity("SP_A")]
