"""Read and write the five profile records for one key set."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from models import (
    RECORD_MEDIA,
    RECORD_NAMES,
    RECORD_PROFILE,
    RECORD_SHOP,
    RECORD_SPOTLIGHT,
    RECORD_STICKER,
    ProfileRecord,
    ProfileRecords,
    StickerRecord,
    media_from_list,
    shop_from_list,
    spotlight_from_list,
)
from profile_store import KV
from services import record_codec
from services.errors import StorageQuotaExceeded, StorageWriteError
from services.storage_keys import StorageKeySet

logger = logging.getLogger(__name__)

_PARSERS: dict[str, Callable[[Any], Any]] = {
    RECORD_PROFILE: ProfileRecord.from_dict,
    RECORD_SPOTLIGHT: spotlight_from_list,
    RECORD_MEDIA: media_from_list,
    RECORD_SHOP: shop_from_list,
    RECORD_STICKER: StickerRecord.from_dict,
}


@dataclass(slots=True)
class SaveResult:
    """Outcome of persisting one record."""

    record: str
    value: Any
    error: StorageWriteError | None = None
    validation: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None


class ProfileRepository:
    """Typed access to profile records stored in a :class:`KV`."""

    def __init__(self, kv: KV, *, defaults: ProfileRecords | None = None) -> None:
        self._kv = kv
        self._defaults = defaults or ProfileRecords()

    @property
    def kv(self) -> KV:
        return self._kv

    @property
    def defaults(self) -> ProfileRecords:
        return self._defaults

    def read(self, keys: StorageKeySet, record_name: str) -> Any:
        """Return one record, or its typed default when absent or unreadable."""

        key = keys.key_for(record_name)
        return record_codec.decode(
            self._kv.get(key),
            self._defaults.record(record_name),
            _PARSERS[record_name],
            key=key,
        )

    def load(self, keys: StorageKeySet) -> ProfileRecords:
        """Return all five records; never fails."""

        return ProfileRecords(**{name: self.read(keys, name) for name in RECORD_NAMES})

    def has_record(self, keys: StorageKeySet, record_name: str) -> bool:
        return self._kv.get(keys.key_for(record_name)) is not None

    def save(self, keys: StorageKeySet, record_name: str, value: Any) -> SaveResult:
        """Persist a single record; failures come back on the result."""

        key = keys.key_for(record_name)
        try:
            self._kv.put(key, record_codec.encode(value, key=key))
        except StorageWriteError as exc:
            logger.error("Skipped write of %s: %s", key, exc)
            return SaveResult(record=record_name, value=value, error=exc)
        except StorageQuotaExceeded as exc:
            error = StorageWriteError(key, str(exc), reason="quota")
            logger.error("Storage quota exceeded writing %s: %s", key, exc)
            return SaveResult(record=record_name, value=value, error=error)
        except Exception as exc:
            error = StorageWriteError(key, str(exc) or type(exc).__name__, reason="backend")
            logger.error("Storage backend failed writing %s", key, exc_info=True)
            return SaveResult(record=record_name, value=value, error=error)
        logger.debug("Saved %s", key)
        return SaveResult(record=record_name, value=value)

    def save_all(self, keys: StorageKeySet, records: ProfileRecords) -> list[SaveResult]:
        return [self.save(keys, name, records.record(name)) for name in RECORD_NAMES]

    def reset(self, prefixes: Iterable[str], *, keep: Iterable[str] = ()) -> int:
        """Delete every stored key under ``prefixes`` except ``keep``; return how many were removed."""

        prefixes = tuple(prefixes)
        keep = set(keep)
        doomed = [key for key in self._kv.keys() if key.startswith(prefixes) and key not in keep]
        removed = sum(1 for key in doomed if self._kv.delete(key))
        logger.info("Reset profile store: removed %d keys", removed)
        return removed


__all__ = ["ProfileRepository", "SaveResult"]
