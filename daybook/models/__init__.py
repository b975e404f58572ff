"""
Data Models Package

All records that reach storage are pydantic models; stored values are
decoded into these types at the storage boundary.
"""

from daybook.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from daybook.models.expense import MAX_AMOUNT, DayExpenseRecord, Expense, parse_amount
from daybook.models.note import Note
from daybook.models.timesheet import TimeEntry, is_valid_time, parse_time
from daybook.models.validation import ValidationIssue, ValidationResult

__all__ = [
    # Records
    "DayExpenseRecord",
    "Expense",
    "Note",
    "TimeEntry",
    # Helpers
    "MAX_AMOUNT",
    "is_valid_time",
    "parse_amount",
    "parse_time",
    # Validation
    "ValidationIssue",
    "ValidationResult",
    # Audit
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
