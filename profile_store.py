"""String-valued key/value store backing profile records (RocksDB or in-process)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Iterator, Optional

from services.errors import StorageQuotaExceeded

logger = logging.getLogger(__name__)

BACKEND_ROCKSDICT = "rocksdict"
BACKEND_MEMORY = "memory"


def _entry_size(key: str, value: str) -> int:
    return len(key.encode("utf-8")) + len(value.encode("utf-8"))


@dataclass
class KV:
    store: object
    backend: str
    quota_bytes: int | None = None
    _used: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        self._used = sum(_entry_size(key, value) for key, value in self.items())

    @property
    def used_bytes(self) -> int:
        return self._used

    def get(self, key: str) -> Optional[str]:
        if self.backend == BACKEND_ROCKSDICT:
            raw = self.store.get(key.encode("utf-8"))
            return raw.decode("utf-8") if raw else None
        return self.store.get(key)

    def put(self, key: str, value: str) -> None:
        previous = self.get(key)
        previous_size = _entry_size(key, previous) if previous is not None else 0
        required = self._used - previous_size + _entry_size(key, value)
        if self.quota_bytes and required > self.quota_bytes:
            raise StorageQuotaExceeded(key, required, self.quota_bytes)
        if self.backend == BACKEND_ROCKSDICT:
            self.store[key.encode("utf-8")] = value.encode("utf-8")
        else:
            self.store[key] = value
        self._used = required

    def delete(self, key: str) -> bool:
        previous = self.get(key)
        if previous is None:
            return False
        if self.backend == BACKEND_ROCKSDICT:
            del self.store[key.encode("utf-8")]
        else:
            del self.store[key]
        self._used -= _entry_size(key, previous)
        return True

    def keys(self) -> list[str]:
        return [key for key, _ in self.items()]

    def items(self) -> Iterator[tuple[str, str]]:
        if self.backend == BACKEND_ROCKSDICT:
            for key, value in self.store.items():
                yield key.decode("utf-8"), value.decode("utf-8")
        else:
            yield from list(self.store.items())

    def close(self):
        if self.backend == BACKEND_ROCKSDICT:
            self.store.close()


def open_kv(path: str, *, backend: str = BACKEND_ROCKSDICT, quota_bytes: int | None = None) -> KV:
    """Open the profile KV store, falling back to an in-process dict when RocksDB is unavailable."""

    if backend == BACKEND_ROCKSDICT:
        os.makedirs(path, exist_ok=True)
        try:
            from rocksdict import Rdict

            return KV(store=Rdict(path), backend=BACKEND_ROCKSDICT, quota_bytes=quota_bytes)
        except Exception:
            logger.warning("Unable to open RocksDB store at %s; using in-memory profiles", path, exc_info=True)
    elif backend != BACKEND_MEMORY:
        logger.warning("Unknown profile store backend %r; using in-memory profiles", backend)
    return KV(store={}, backend=BACKEND_MEMORY, quota_bytes=quota_bytes)


__all__ = ["BACKEND_MEMORY", "BACKEND_ROCKSDICT", "KV", "open_kv"]
