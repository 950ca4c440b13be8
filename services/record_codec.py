"""JSON codec for profile records with typed fallbacks."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, TypeVar

from services.errors import StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)

T = TypeVar("T")

SCHEMA_VERSION = 1
_ENVELOPE_KEYS = {"v", "data"}


def to_payload(value: Any) -> Any:
    """Convert record dataclasses (and sequences of them) into JSON-ready values."""

    if hasattr(value, "asdict"):
        return value.asdict()
    if isinstance(value, (list, tuple)):
        return [to_payload(entry) for entry in value]
    return value


def encode(value: Any, *, key: str = "<record>") -> str:
    """Serialise ``value`` into the canonical versioned string form.

    Raises :class:`StorageWriteError` when the value cannot be serialised;
    the repository turns that into a skipped write.
    """

    try:
        return json.dumps(
            {"v": SCHEMA_VERSION, "data": to_payload(value)},
            sort_keys=True,
            separators=(",", ":"),
            allow_nan=False,
        )
    except (TypeError, ValueError) as exc:
        raise StorageWriteError(key, f"unable to serialise record: {exc}", reason="serialization") from exc


def _unwrap(document: Any) -> Any:
    if isinstance(document, dict) and set(document) == _ENVELOPE_KEYS:
        version = document["v"]
        if not isinstance(version, int) or isinstance(version, bool):
            raise ValueError(f"malformed schema version {version!r}")
        if version > SCHEMA_VERSION:
            raise ValueError(f"record schema v{version} is newer than supported v{SCHEMA_VERSION}")
        return document["data"]
    # Records written before versioning are bare payloads (schema v0).
    return document


def decode(
    raw: str | None,
    fallback: T,
    parser: Callable[[Any], T] | None = None,
    *,
    key: str = "<record>",
) -> T:
    """Decode ``raw`` with ``parser``; return ``fallback`` when absent or unreadable.

    Never raises: every failure is logged as a :class:`StorageReadError`.
    """

    if raw is None:
        return fallback
    try:
        payload = _unwrap(json.loads(raw))
        return parser(payload) if parser is not None else payload
    except Exception as exc:
        error = StorageReadError(key, str(exc) or type(exc).__name__)
        logger.warning("Unreadable record, using default: %s", error)
        return fallback


__all__ = ["SCHEMA_VERSION", "decode", "encode", "to_payload"]
