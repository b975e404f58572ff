"""
Storage Services Package

String key/value storages (durable files, in-memory session mirror) and
the record stores that keep page data in step with them.
"""

from daybook.services.storage.interface import (
    KeyValueStorage,
    LoadError,
    QuotaExceededError,
    SaveError,
    StorageError,
)
from daybook.services.storage.backends import JsonFileStorage, MemoryStorage
from daybook.services.storage.record_store import (
    ErrorHandler,
    RecordStore,
    SequenceRecordStore,
)

__all__ = [
    # Interfaces
    "KeyValueStorage",
    # Exceptions
    "LoadError",
    "QuotaExceededError",
    "SaveError",
    "StorageError",
    # Backends
    "JsonFileStorage",
    "MemoryStorage",
    # Record stores
    "ErrorHandler",
    "RecordStore",
    "SequenceRecordStore",
]
