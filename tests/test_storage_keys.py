"""Tests for :mod:`services.storage_keys`."""

from __future__ import annotations

import pytest

from models import SENTINEL, NamedIdentity, parse_identity
from services import storage_keys


def test_sentinel_uses_legacy_keys() -> None:
    keys = storage_keys.resolve(SENTINEL)
    assert keys.profile == "mixmi_profile_data"
    assert keys.spotlight == "mixmi_spotlight_items"
    assert keys.media == "mixmi_media_items"
    assert keys.shop == "mixmi_shop_items"
    assert keys.sticker == "mixmi_sticker_data"


def test_named_identity_keys_embed_handle_verbatim() -> None:
    keys = storage_keys.resolve(NamedIdentity("SP2J6ZY48GV1EZ5V2V5RB9MP66SW86PYKKNRV9EJ7"))
    assert keys.profile == "mixmi:SP2J6ZY48GV1EZ5V2V5RB9MP66SW86PYKKNRV9EJ7:profile"
    assert keys.key_for("shop") == "mixmi:SP2J6ZY48GV1EZ5V2V5RB9MP66SW86PYKKNRV9EJ7:shop"


def test_distinct_identities_never_share_keys() -> None:
    handles = ["abc", "ABC", "abc:profile", "abc:", "default", "a", "b"]
    key_sets = [storage_keys.resolve(NamedIdentity(handle)) for handle in handles]
    key_sets.append(storage_keys.resolve(SENTINEL))
    seen: set[str] = set()
    for keys in key_sets:
        batch = set(keys)
        assert len(batch) == 5
        assert seen.isdisjoint(batch)
        seen |= batch


def test_resolve_is_deterministic_and_honours_prefix() -> None:
    identity = NamedIdentity("abc123")
    assert storage_keys.resolve(identity) == storage_keys.resolve(identity)
    custom = storage_keys.resolve(identity, prefix="linkbio")
    assert custom.sticker == "linkbio:abc123:sticker"


def test_parse_identity_maps_empty_and_default_to_sentinel() -> None:
    assert parse_identity(None) is SENTINEL
    assert parse_identity("") is SENTINEL
    assert parse_identity("default") is SENTINEL
    assert parse_identity("abc123") == NamedIdentity("abc123")


def test_key_for_rejects_unknown_record() -> None:
    with pytest.raises(KeyError):
        storage_keys.resolve(SENTINEL).key_for("avatar")


def test_namespace_prefixes_cover_legacy_and_named_keys() -> None:
    prefixes = storage_keys.namespace_prefixes("mixmi")
    assert all(key.startswith(prefixes) for key in storage_keys.resolve(SENTINEL))
    assert all(key.startswith(prefixes) for key in storage_keys.resolve(NamedIdentity("abc")))
