"""Services package."""

from daybook.services.storage import (
    JsonFileStorage,
    KeyValueStorage,
    LoadError,
    MemoryStorage,
    QuotaExceededError,
    RecordStore,
    SaveError,
    SequenceRecordStore,
    StorageError,
)

__all__ = [
    "JsonFileStorage",
    "KeyValueStorage",
    "LoadError",
    "MemoryStorage",
    "QuotaExceededError",
    "RecordStore",
    "SaveError",
    "SequenceRecordStore",
    "StorageError",
]
