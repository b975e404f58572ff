"""
Audit Logger

Every record mutation and every storage failure is logged as a typed
AuditEvent through structlog. The log is diagnostic only: failures are
reported to the user by the page, never retried, and nothing reads the
audit trail back.
"""

import logging
import sys

import structlog

from daybook.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from daybook.services.storage import LoadError, SaveError, StorageError


def configure_logging(level: str = "INFO") -> None:
    """Configure stdlib logging and structlog for JSON output."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """Central audit logging service for the three pages."""

    def __init__(self):
        self._logger = structlog.get_logger("daybook.audit")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_storage_error(self, error: StorageError) -> None:
        """Log a LoadError or SaveError reported by a record store."""
        storage_key = getattr(error, "storage_key", "unknown")
        if isinstance(error, LoadError):
            self.log(AuditEventBuilder.load_failed(storage_key, str(error)))
        elif isinstance(error, SaveError):
            self.log(AuditEventBuilder.save_failed(storage_key, str(error)))
        else:
            self._logger.error("storage_error", storage_key=storage_key, error=str(error))

    def log_note_created(self, storage_key: str, note_id: str) -> None:
        self.log(AuditEventBuilder.note_created(storage_key, note_id))

    def log_note_updated(self, storage_key: str, note_id: str, fields: list[str]) -> None:
        self.log(AuditEventBuilder.note_updated(storage_key, note_id, fields))

    def log_note_deleted(self, storage_key: str, note_id: str) -> None:
        self.log(AuditEventBuilder.note_deleted(storage_key, note_id))

    def log_expenses_saved(self, storage_key: str, day: str, count: int, total: str) -> None:
        self.log(AuditEventBuilder.expenses_saved(storage_key, day, count, total))

    def log_expenses_deleted(self, storage_key: str, day: str) -> None:
        self.log(AuditEventBuilder.expenses_deleted(storage_key, day))

    def log_time_entry_saved(
        self,
        storage_key: str,
        day: str,
        arrival: str,
        departure: str,
    ) -> None:
        self.log(AuditEventBuilder.time_entry_saved(storage_key, day, arrival, departure))

    def log_time_entry_deleted(self, storage_key: str, day: str) -> None:
        self.log(AuditEventBuilder.time_entry_deleted(storage_key, day))

    def log_validation_failed(self, storage_key: str, record_key: str, issues: list[dict]) -> None:
        self.log(AuditEventBuilder.validation_failed(storage_key, record_key, issues))
