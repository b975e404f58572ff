"""
Storage Backends

- JsonFileStorage: durable, one file per key, survives restarts.
- MemoryStorage: a dict, used as the per-session mirror and in tests.

Both enforce an optional byte quota over all stored keys and values.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from daybook.services.storage.interface import (
    KeyValueStorage,
    QuotaExceededError,
    StorageError,
)


def _check_quota(
    storage: KeyValueStorage,
    quota_bytes: Optional[int],
    key: str,
    value: str,
) -> None:
    if quota_bytes is None:
        return
    needed = len(key.encode("utf-8")) + len(value.encode("utf-8"))
    if storage.used_bytes(exclude=key) + needed > quota_bytes:
        raise QuotaExceededError(
            f"Storing '{key}' needs {needed} bytes; quota of {quota_bytes} bytes exceeded"
        )


class MemoryStorage(KeyValueStorage):
    """In-memory storage. Lives exactly as long as the object."""

    def __init__(self, quota_bytes: Optional[int] = None):
        self._items: dict[str, str] = {}
        self._quota_bytes = quota_bytes

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        _check_quota(self, self._quota_bytes, key, value)
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()


class JsonFileStorage(KeyValueStorage):
    """
    Durable storage backed by a directory.

    Each key is stored as ``<directory>/<key>.json``. Writes go through a
    temporary file and an atomic rename so a crash never leaves a
    half-written value behind.
    """

    SUFFIX = ".json"

    def __init__(
        self,
        directory: Union[str, Path],
        quota_bytes: Optional[int] = None,
    ):
        self._directory = Path(directory)
        self._quota_bytes = quota_bytes

    @property
    def directory(self) -> Path:
        return self._directory

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in (".", ".."):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self._directory / f"{key}{self.SUFFIX}"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        _check_quota(self, self._quota_bytes, key, value)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._directory, prefix=f".{key}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

    def remove_item(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to remove '{key}': {e}") from e

    def keys(self) -> list[str]:
        if not self._directory.is_dir():
            return []
        return sorted(
            p.name[:-len(self.SUFFIX)]
            for p in self._directory.iterdir()
            if p.is_file() and p.name.endswith(self.SUFFIX) and not p.name.startswith(".")
        )
