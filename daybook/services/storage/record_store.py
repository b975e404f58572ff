"""
Record Stores

An in-memory mapping of records kept in step with storage. Every
mutation rewrites the whole structure, first to durable storage and
then to a session-scoped mirror under ``<key>_backup``. The mirror is
never read back.

Failures never raise out of the store:
- a malformed or unreadable stored value leaves the store empty
- a failed write keeps the in-memory state
and in both cases the ``on_error`` callback receives a LoadError or
SaveError so the page can tell the user.
"""

from operator import attrgetter
from typing import Callable, Generic, Optional, TypeVar

import structlog
from pydantic import BaseModel, TypeAdapter

from daybook.services.storage.interface import (
    KeyValueStorage,
    LoadError,
    SaveError,
    StorageError,
)


V = TypeVar("V", bound=BaseModel)

ErrorHandler = Callable[[StorageError], None]


class RecordStore(Generic[V]):
    """
    Key -> record mapping persisted as a single JSON object.

    Keys are date keys (``YYYY-MM-DD``) or ids; ``key_validator`` can
    reject malformed keys when loading.
    """

    def __init__(
        self,
        storage_key: str,
        record_type: type[V],
        durable: KeyValueStorage,
        mirror: Optional[KeyValueStorage] = None,
        backup_suffix: str = "_backup",
        on_error: Optional[ErrorHandler] = None,
        key_validator: Optional[Callable[[str], object]] = None,
    ):
        self._storage_key = storage_key
        self._record_type = record_type
        self._durable = durable
        self._mirror = mirror
        self._backup_suffix = backup_suffix
        self._on_error = on_error
        self._key_validator = key_validator
        self._adapter = self._build_adapter(record_type)
        self._records: dict[str, V] = {}
        self._last_error: Optional[StorageError] = None
        self._logger = structlog.get_logger(__name__).bind(storage_key=storage_key)

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def _build_adapter(self, record_type: type[V]) -> TypeAdapter:
        return TypeAdapter(dict[str, record_type])

    def _decode(self, raw: str) -> dict[str, V]:
        records = self._adapter.validate_json(raw)
        if self._key_validator is not None:
            for key in records:
                self._key_validator(key)
        return dict(records)

    def _encode(self) -> str:
        return self._adapter.dump_json(self._records, by_alias=True).decode("utf-8")

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def storage_key(self) -> str:
        return self._storage_key

    @property
    def backup_key(self) -> str:
        return f"{self._storage_key}{self._backup_suffix}"

    @property
    def last_error(self) -> Optional[StorageError]:
        """The most recent LoadError or SaveError, if any."""
        return self._last_error

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def load(self) -> dict[str, V]:
        """
        Replace the in-memory state with what durable storage holds.

        An absent key yields an empty mapping. A malformed value also
        yields an empty mapping, and reports a LoadError.
        """
        try:
            raw = self._durable.get_item(self._storage_key)
        except StorageError as e:
            return self._load_failed(str(e))

        if raw is None:
            self._records = {}
            self._logger.debug("store_empty")
            return self.get_all()

        try:
            self._records = self._decode(raw)
        except ValueError as e:
            # json and pydantic validation errors are both ValueErrors
            return self._load_failed(str(e))

        self._logger.debug("store_loaded", records=len(self._records))
        return self.get_all()

    def get_all(self) -> dict[str, V]:
        """Snapshot of the current in-memory state. Never touches storage."""
        return dict(self._records)

    def get(self, key: str) -> Optional[V]:
        return self._records.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._records

    def __len__(self) -> int:
        return len(self._records)

    def put(self, key: str, value: V) -> bool:
        """
        Insert or replace the record under ``key`` and persist.

        Returns True if both writes succeeded.
        """
        self._records[key] = value
        return self._persist()

    def delete(self, key: str) -> bool:
        """Remove the record under ``key`` (if any) and persist."""
        self._records.pop(key, None)
        return self._persist()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _persist(self) -> bool:
        payload = self._encode()
        try:
            self._durable.set_item(self._storage_key, payload)
            if self._mirror is not None:
                self._mirror.set_item(self.backup_key, payload)
        except StorageError as e:
            error = SaveError(self._storage_key, str(e))
            self._logger.error("store_save_failed", error=str(e))
            self._report(error)
            return False

        self._logger.debug("store_saved", records=len(self._records), size=len(payload))
        return True

    def _load_failed(self, message: str) -> dict[str, V]:
        self._records = {}
        error = LoadError(self._storage_key, message)
        self._logger.error("store_load_failed", error=message)
        self._report(error)
        return self.get_all()

    def _report(self, error: StorageError) -> None:
        self._last_error = error
        if self._on_error is not None:
            self._on_error(error)


class SequenceRecordStore(RecordStore[V]):
    """
    Ordered records persisted as a JSON array.

    Each record carries its own key (``id`` by default). New records
    can be prepended to keep the list newest-first.
    """

    def __init__(
        self,
        storage_key: str,
        record_type: type[V],
        durable: KeyValueStorage,
        mirror: Optional[KeyValueStorage] = None,
        backup_suffix: str = "_backup",
        on_error: Optional[ErrorHandler] = None,
        key_of: Callable[[V], str] = attrgetter("id"),
    ):
        self._key_of = key_of
        super().__init__(
            storage_key,
            record_type,
            durable,
            mirror=mirror,
            backup_suffix=backup_suffix,
            on_error=on_error,
        )

    def _build_adapter(self, record_type: type[V]) -> TypeAdapter:
        return TypeAdapter(list[record_type])

    def _decode(self, raw: str) -> dict[str, V]:
        records: dict[str, V] = {}
        for record in self._adapter.validate_json(raw):
            key = self._key_of(record)
            if key in records:
                raise ValueError(f"Duplicate record key: {key!r}")
            records[key] = record
        return records

    def _encode(self) -> str:
        return self._adapter.dump_json(list(self._records.values()), by_alias=True).decode("utf-8")

    def values(self) -> list[V]:
        """Records in stored order."""
        return list(self._records.values())

    def prepend(self, value: V) -> bool:
        """Insert ``value`` at the front (replacing any record with the same key) and persist."""
        key = self._key_of(value)
        rest = {k: v for k, v in self._records.items() if k != key}
        self._records = {key: value, **rest}
        return self._persist()
