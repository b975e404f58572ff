"""
Tests for Daybook models

Test strategy:
1. Unit tests for individual components (models, calendar, stats, validation)
2. Integration tests for page controllers (with in-memory storage)
3. No Streamlit needed to run the tests
"""

import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from daybook.config import DEFAULT_ARRIVAL
from daybook.models import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
    MAX_AMOUNT,
    DayExpenseRecord,
    Expense,
    Note,
    TimeEntry,
    ValidationIssue,
    ValidationResult,
    parse_amount,
    parse_time,
)


class TestNoteModel:
    """Tests for the Note model."""

    def test_new_note_is_empty(self):
        """A new note has an id, empty text and equal timestamps."""
        note = Note.new()
        assert note.id
        assert note.title == ""
        assert note.content == ""
        assert note.created_at == note.updated_at

    def test_new_notes_have_distinct_ids(self):
        assert Note.new().id != Note.new().id

    def test_edit_keeps_created_at(self):
        """Editing refreshes updated_at but never created_at."""
        created = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
        note = Note(id="n1", created_at=created, updated_at=created)
        edited = note.edit(title="Compras")
        assert edited.title == "Compras"
        assert edited.content == ""
        assert edited.created_at == created
        assert edited.updated_at > created

    def test_edit_returns_new_instance(self):
        note = Note.new()
        edited = note.edit(content="texto")
        assert note.content == ""
        assert edited.content == "texto"
        assert edited.id == note.id

    def test_note_is_frozen(self):
        note = Note.new()
        with pytest.raises(ValidationError):
            note.title = "x"

    def test_stored_form_uses_camel_case(self):
        """Stored JSON keeps createdAt/updatedAt names."""
        note = Note.new().edit(title="A")
        stored = note.to_storage()
        assert set(stored) == {"id", "title", "content", "createdAt", "updatedAt"}
        assert isinstance(stored["createdAt"], str)

    def test_decodes_stored_form(self):
        """Notes written by the browser version decode unchanged."""
        note = Note.model_validate({
            "id": "abc",
            "title": "T",
            "content": "C",
            "createdAt": "2025-01-01T10:00:00.000Z",
            "updatedAt": "2025-01-02T10:00:00.000Z",
        })
        assert note.id == "abc"
        assert note.created_at.year == 2025
        assert note.updated_at.day == 2

    def test_rejects_updated_before_created(self):
        with pytest.raises(ValidationError, match="updated before it was created"):
            Note.model_validate({
                "id": "abc",
                "createdAt": "2025-01-02T10:00:00Z",
                "updatedAt": "2025-01-01T10:00:00Z",
            })

    def test_display_title_fallback(self):
        assert Note.new().display_title == "Sem título"
        assert Note.new().edit(title=" Ideia ").display_title == "Ideia"


class TestExpenseModels:
    """Tests for Expense and DayExpenseRecord."""

    def test_parse_amount(self):
        assert parse_amount("12.50") == Decimal("12.50")
        assert parse_amount(" 7.49 ") == Decimal("7.49")

    @pytest.mark.parametrize("text", ["", "   ", "abc", None, "NaN", "Infinity"])
    def test_parse_amount_invalid_is_zero(self, text):
        """Blank or unparsable amounts count as zero."""
        assert parse_amount(text) == Decimal(0)

    @pytest.mark.parametrize("text", ["1e30", "9" * 29, "-1e30", "1e9999999", "1000000000000"])
    def test_parse_amount_out_of_range_is_zero(self, text):
        """Amounts beyond MAX_AMOUNT are treated like unparsable text."""
        assert parse_amount(text) == Decimal(0)
        assert Expense(amount=text).is_positive is False

    def test_parse_amount_bounds(self):
        assert parse_amount(str(MAX_AMOUNT)) == MAX_AMOUNT
        assert parse_amount("1e-30") == Decimal("1e-30")
        assert Expense(amount="1e-30").is_positive is True

    def test_total_of_many_max_amounts_is_exact(self):
        record = DayExpenseRecord(expenses=[Expense(amount=str(MAX_AMOUNT))] * 1000)
        assert record.total() == MAX_AMOUNT * 1000

    def test_expense_is_positive(self):
        assert Expense(amount="0.01").is_positive is True
        assert Expense(amount="0").is_positive is False
        assert Expense(amount="-5").is_positive is False
        assert Expense(amount="").is_positive is False

    def test_numeric_amount_is_kept_as_text(self):
        """Plain numbers in stored data are accepted and kept as text."""
        expense = Expense.model_validate({"id": "e1", "amount": 12.5, "description": ""})
        assert expense.amount == "12.5"
        assert expense.parsed_amount() == Decimal("12.5")

    def test_boolean_amount_rejected(self):
        with pytest.raises(ValidationError):
            Expense.model_validate({"id": "e1", "amount": True})

    def test_day_total(self):
        record = DayExpenseRecord(expenses=[
            Expense(amount="12.50"),
            Expense(amount="7.49"),
            Expense(amount="junk"),
        ])
        assert record.total() == Decimal("19.99")
        assert record.has_expenses is True

    def test_empty_day(self):
        record = DayExpenseRecord()
        assert record.total() == Decimal(0)
        assert record.has_expenses is False
        assert record.notes is None


class TestTimeEntryModel:
    """Tests for the TimeEntry model."""

    def test_departure_required(self):
        """A time entry never exists without a departure."""
        with pytest.raises(ValidationError):
            TimeEntry(arrival="08:00")
        with pytest.raises(ValidationError):
            TimeEntry(arrival="08:00", departure="")

    def test_effective_arrival_defaults(self):
        entry = TimeEntry(departure="17:00")
        assert entry.arrival is None
        assert entry.effective_arrival == DEFAULT_ARRIVAL == "08:00"

    def test_blank_arrival_is_default(self):
        entry = TimeEntry(arrival="  ", departure="17:00")
        assert entry.arrival is None
        assert entry.effective_arrival == "08:00"

    def test_rejects_malformed_time(self):
        with pytest.raises(ValidationError, match="Invalid time of day"):
            TimeEntry(arrival="8h", departure="17:00")
        with pytest.raises(ValidationError, match="Invalid time of day"):
            TimeEntry(departure="25:00")

    def test_accepts_seconds(self):
        entry = TimeEntry(departure="17:30:15")
        assert parse_time(entry.departure).second == 15

    def test_stored_form_round_trip(self):
        entry = TimeEntry(arrival="09:00", departure="18:00", notes="home office")
        restored = TimeEntry.model_validate(json.loads(json.dumps(entry.to_storage())))
        assert restored == entry


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        result = ValidationResult(issues=[
            ValidationIssue(
                field="departure",
                issue_type="missing",
                message="Hora de saída é obrigatória!",
                severity="error",
            ),
        ])
        assert result.has_errors is True
        assert result.is_valid is False
        assert result.error_count == 1
        assert result.first_error.field == "departure"

    def test_validation_result_info_only(self):
        """Info issues don't count as errors."""
        result = ValidationResult(issues=[
            ValidationIssue(
                field="expenses",
                issue_type="dropped",
                message="1 gasto(s) sem valor foram ignorados",
                severity="info",
            ),
        ])
        assert result.is_valid is True
        assert result.first_error is None

    def test_issue_severity_pattern(self):
        with pytest.raises(ValidationError):
            ValidationIssue(field="x", issue_type="y", message="z", severity="fatal")


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        event = AuditEvent(
            event_type=AuditEventType.NOTE_CREATED,
            description="Note created",
        )
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        event = AuditEventBuilder.expenses_saved("expenses_data", "2024-03-12", 2, "19.99")
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "expenses_saved"
        assert log_dict["record_key"] == "2024-03-12"
        assert log_dict["details"] == {"count": 2, "total": "19.99"}

    def test_failure_events_are_errors(self):
        assert AuditEventBuilder.load_failed("k", "bad").severity == AuditSeverity.ERROR
        assert AuditEventBuilder.save_failed("k", "full").severity == AuditSeverity.ERROR
        assert AuditEventBuilder.validation_failed("k", "d", []).severity == AuditSeverity.WARNING

    def test_delete_events(self):
        expenses = AuditEventBuilder.expenses_deleted("expenses_data", "2024-03-12")
        entry = AuditEventBuilder.time_entry_deleted("timesheet_data", "2024-03-12")
        assert expenses.event_type == AuditEventType.EXPENSES_DELETED
        assert entry.event_type == AuditEventType.TIME_ENTRY_DELETED
        assert entry.to_log_dict()["record_key"] == "2024-03-12"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
