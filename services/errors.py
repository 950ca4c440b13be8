"""Error taxonomy for the profile store."""

from __future__ import annotations


class ProfileStoreError(Exception):
    """Base class for profile store failures."""


class StorageReadError(ProfileStoreError):
    """A stored record could not be read or decoded."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"{key}: {message}")
        self.key = key


class StorageWriteError(ProfileStoreError):
    """A record could not be persisted."""

    def __init__(self, key: str, message: str, *, reason: str = "backend") -> None:
        super().__init__(f"{key}: {message}")
        self.key = key
        self.reason = reason

    @property
    def retryable(self) -> bool:
        # A value that cannot be serialised will fail the same way again.
        return self.reason != "serialization"


class StorageQuotaExceeded(ProfileStoreError):
    """Raised by the KV store when a write would exceed its byte quota."""

    def __init__(self, key: str, required: int, quota: int) -> None:
        super().__init__(f"writing {key} needs {required} bytes; quota is {quota}")
        self.key = key
        self.required = required
        self.quota = quota


class InvalidTransitionError(ProfileStoreError):
    """Requested edit-mode transition is not in the transition table."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(f"invalid mode transition {current} -> {target}")
        self.current = current
        self.target = target


class ClassificationError(ProfileStoreError):
    """A media URL could not be classified."""

    def __init__(self, url: str, message: str = "Unsupported media link") -> None:
        super().__init__(message)
        self.url = url
        self.message = message


__all__ = [
    "ClassificationError",
    "InvalidTransitionError",
    "ProfileStoreError",
    "StorageQuotaExceeded",
    "StorageReadError",
    "StorageWriteError",
]
