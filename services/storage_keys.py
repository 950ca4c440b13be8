"""Per-identity storage key namespaces."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from models import (
    RECORD_MEDIA,
    RECORD_NAMES,
    RECORD_PROFILE,
    RECORD_SHOP,
    RECORD_SPOTLIGHT,
    RECORD_STICKER,
    Identity,
    NamedIdentity,
)

DEFAULT_KEY_PREFIX = "mixmi"
LEGACY_PREFIX = "mixmi_"

# Written by the single-profile build, before wallets namespaced the store.
# The disconnected page keeps reading and writing these.
LEGACY_KEYS: dict[str, str] = {
    RECORD_PROFILE: "mixmi_profile_data",
    RECORD_SPOTLIGHT: "mixmi_spotlight_items",
    RECORD_MEDIA: "mixmi_media_items",
    RECORD_SHOP: "mixmi_shop_items",
    RECORD_STICKER: "mixmi_sticker_data",
}


@dataclass(frozen=True)
class StorageKeySet:
    profile: str
    spotlight: str
    media: str
    shop: str
    sticker: str

    def key_for(self, record_name: str) -> str:
        if record_name not in RECORD_NAMES:
            raise KeyError(record_name)
        return getattr(self, record_name)

    def as_mapping(self) -> dict[str, str]:
        return {name: self.key_for(name) for name in RECORD_NAMES}

    def __iter__(self) -> Iterator[str]:
        return iter(self.key_for(name) for name in RECORD_NAMES)


LEGACY_KEY_SET = StorageKeySet(**LEGACY_KEYS)


def resolve(identity: Identity, *, prefix: str = DEFAULT_KEY_PREFIX) -> StorageKeySet:
    """Return the five record keys for ``identity``.

    Named identities are embedded verbatim: ``<prefix>:<handle>:<record>``.
    Record names never contain ``:``, so the record is always the text after
    the last colon and distinct handles can never share a key.
    """

    if not isinstance(identity, NamedIdentity):
        return LEGACY_KEY_SET
    namespace = f"{prefix}:{identity.handle}"
    return StorageKeySet(**{name: f"{namespace}:{name}" for name in RECORD_NAMES})


def namespace_prefixes(prefix: str = DEFAULT_KEY_PREFIX) -> tuple[str, ...]:
    """Key prefixes owned by the profile page (legacy and namespaced)."""

    return (LEGACY_PREFIX, f"{prefix}:")


__all__ = [
    "DEFAULT_KEY_PREFIX",
    "LEGACY_KEYS",
    "LEGACY_KEY_SET",
    "LEGACY_PREFIX",
    "StorageKeySet",
    "namespace_prefixes",
    "resolve",
]
