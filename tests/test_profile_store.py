"""Tests for :mod:`profile_store`."""

from __future__ import annotations

import sys

import pytest

from profile_store import BACKEND_MEMORY, KV, open_kv
from services.errors import StorageQuotaExceeded


def test_memory_store_get_put_delete() -> None:
    kv = open_kv("unused", backend=BACKEND_MEMORY)
    assert kv.get("k") is None
    kv.put("k", "value")
    assert kv.get("k") == "value"
    assert kv.used_bytes == len("k") + len("value")
    assert kv.delete("k") is True
    assert kv.delete("k") is False
    assert kv.used_bytes == 0


def test_quota_rejects_oversized_write_and_keeps_previous_value() -> None:
    kv = open_kv("unused", backend=BACKEND_MEMORY, quota_bytes=30)
    kv.put("k", "x" * 20)
    with pytest.raises(StorageQuotaExceeded) as excinfo:
        kv.put("k", "y" * 40)
    assert excinfo.value.quota == 30
    assert kv.get("k") == "x" * 20


def test_quota_counts_replacement_not_sum() -> None:
    kv = open_kv("unused", backend=BACKEND_MEMORY, quota_bytes=30)
    kv.put("k", "x" * 20)
    kv.put("k", "y" * 25)
    assert kv.get("k") == "y" * 25
    assert kv.used_bytes == 26


def test_existing_entries_count_towards_quota() -> None:
    kv = KV(store={"a": "x" * 10}, backend=BACKEND_MEMORY, quota_bytes=15)
    assert kv.used_bytes == 11
    with pytest.raises(StorageQuotaExceeded):
        kv.put("b", "y" * 10)


def test_unknown_backend_falls_back_to_memory() -> None:
    kv = open_kv("unused", backend="redis")
    assert kv.backend == BACKEND_MEMORY


def test_missing_rocksdict_falls_back_to_memory(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setitem(sys.modules, "rocksdict", None)
    kv = open_kv(str(tmp_path / "store"), quota_bytes=100)
    assert kv.backend == BACKEND_MEMORY
    assert kv.quota_bytes == 100
