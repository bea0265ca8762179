"""Key-value storage contract.

The schedule snapshot is persisted as a handful of independent string entries,
the same way a browser keeps values in local storage. Backends only move
strings around; serialization lives in the schedule layer.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class StorageError(Exception):
    """Base error for key-value backends."""


class StorageReadError(StorageError):
    """Raised when a backend cannot read a key."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Failed to read '{key}': {reason}")


class StorageWriteError(StorageError):
    """Raised when a backend rejects a write."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Failed to write '{key}': {reason}")


@runtime_checkable
class KeyValueStorage(Protocol):
    """String key-value store used by ScheduleStore."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...

    def delete(self, key: str) -> None:
        """Remove key if present."""
        ...

    def keys(self) -> list[str]:
        """Return all stored keys."""
        ...
