"""
Abstract Storage Interface

DESIGN DECISION: Storage is a plain string key/value API, shaped like
the browser's Web Storage. This allows us to:
1. Keep durable data in files and the session mirror in memory
2. Use in-memory storage for testing
3. Enforce a byte quota the same way regardless of backend

Record stores sit on top of this and own all encoding and decoding.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorage(ABC):
    """
    Abstract interface for string key/value storage.

    Values are whole documents; there are no partial updates.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under ``key``.

        Returns:
            The stored text, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store ``value`` under ``key``, replacing any previous value.

        Raises:
            QuotaExceededError: If the write would exceed the quota
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove ``key``; removing an absent key is not an error."""
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """All keys currently stored."""
        pass

    def used_bytes(self, exclude: Optional[str] = None) -> int:
        """Total UTF-8 size of keys and values, optionally ignoring one key."""
        total = 0
        for key in self.keys():
            if key == exclude:
                continue
            value = self.get_item(key) or ""
            total += len(key.encode("utf-8")) + len(value.encode("utf-8"))
        return total


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class QuotaExceededError(StorageError):
    """A write would exceed the storage quota."""
    pass


class LoadError(StorageError):
    """Stored value is present but unreadable or fails decoding."""

    def __init__(self, storage_key: str, message: str):
        self.storage_key = storage_key
        super().__init__(f"Could not load '{storage_key}': {message}")


class SaveError(StorageError):
    """Writing a store to durable or mirror storage failed."""

    def __init__(self, storage_key: str, message: str):
        self.storage_key = storage_key
        super().__init__(f"Could not save '{storage_key}': {message}")
