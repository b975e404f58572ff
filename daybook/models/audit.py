"""
Audit Models for Daybook

Every mutation of a record store, and every storage failure, produces
an audit event. Events go to the structured log only; nothing reads
them back.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from daybook.models.base import utcnow


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Notes
    NOTE_CREATED = "note_created"
    NOTE_UPDATED = "note_updated"
    NOTE_DELETED = "note_deleted"

    # Expenses and timesheet
    EXPENSES_SAVED = "expenses_saved"
    EXPENSES_DELETED = "expenses_deleted"
    TIME_ENTRY_SAVED = "time_entry_saved"
    TIME_ENTRY_DELETED = "time_entry_deleted"

    # Failures
    VALIDATION_FAILED = "validation_failed"
    LOAD_FAILED = "load_failed"
    SAVE_FAILED = "save_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """A single audit event."""

    timestamp: datetime = Field(
        default_factory=utcnow,
        description="When the event occurred (UTC)"
    )
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # What the event is about
    storage_key: Optional[str] = Field(
        default=None,
        description="Storage key of the affected store"
    )
    record_key: Optional[str] = Field(
        default=None,
        description="Date key or note id of the affected record"
    )

    description: str = Field(
        ...,
        description="Human-readable description"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details"
    )
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict[str, Any]:
        """Convert to dictionary for structured logging."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "storage_key": self.storage_key,
            "record_key": self.record_key,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Factory for the events the pages emit.

    Keeps event wording consistent across the three pages.
    """

    @staticmethod
    def note_created(storage_key: str, note_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NOTE_CREATED,
            storage_key=storage_key,
            record_key=note_id,
            description="Note created",
        )

    @staticmethod
    def note_updated(storage_key: str, note_id: str, fields: list[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NOTE_UPDATED,
            severity=AuditSeverity.DEBUG,
            storage_key=storage_key,
            record_key=note_id,
            description="Note edited",
            details={"fields": fields},
        )

    @staticmethod
    def note_deleted(storage_key: str, note_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NOTE_DELETED,
            storage_key=storage_key,
            record_key=note_id,
            description="Note deleted",
        )

    @staticmethod
    def expenses_saved(
        storage_key: str,
        day: str,
        count: int,
        total: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_SAVED,
            storage_key=storage_key,
            record_key=day,
            description=f"Saved {count} expense(s) for {day}",
            details={"count": count, "total": total},
        )

    @staticmethod
    def expenses_deleted(storage_key: str, day: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_DELETED,
            storage_key=storage_key,
            record_key=day,
            description=f"Deleted expenses for {day}",
        )

    @staticmethod
    def time_entry_saved(
        storage_key: str,
        day: str,
        arrival: str,
        departure: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TIME_ENTRY_SAVED,
            storage_key=storage_key,
            record_key=day,
            description=f"Saved time entry for {day}",
            details={"arrival": arrival, "departure": departure},
        )

    @staticmethod
    def time_entry_deleted(storage_key: str, day: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TIME_ENTRY_DELETED,
            storage_key=storage_key,
            record_key=day,
            description=f"Deleted time entry for {day}",
        )

    @staticmethod
    def validation_failed(
        storage_key: str,
        record_key: str,
        issues: list[dict],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            storage_key=storage_key,
            record_key=record_key,
            description="Form rejected by validation",
            details={"issues": issues},
        )

    @staticmethod
    def load_failed(storage_key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            storage_key=storage_key,
            description="Stored data could not be read; starting empty",
            error_message=error_message,
        )

    @staticmethod
    def save_failed(storage_key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            storage_key=storage_key,
            description="Data kept in memory but not persisted",
            error_message=error_message,
        )
