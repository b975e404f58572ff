"""
Page Controllers for Daybook

This module ties the components together for the three pages:
1. Notes (add → edit → delete, newest first)
2. Expenses (pick a day → enter expenses → save → weekly chart)
3. Timesheet (pick a day → arrival/departure → save → weekly hours)

DESIGN DECISION: Each controller owns its record store. A controller
is built when its page is activated and dropped with the session; no
store is shared between pages.

The controllers enforce the boundaries:
- Nothing invalid is persisted (validation before every save)
- Deletion happens only after explicit confirmation
- Storage failures become an "Erro" toast, never an exception
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import NamedTuple, Optional

import structlog

from daybook.audit import AuditLogger, configure_logging
from daybook.calendar import date_key, month_grid, month_rows, parse_date_key, week_of
from daybook.config import DEFAULT_ARRIVAL, Settings, get_settings
from daybook.models import (
    DayExpenseRecord,
    Expense,
    Note,
    TimeEntry,
    ValidationResult,
)
from daybook.notifications import EDITED, SAVED, ToastNotifier
from daybook.services.storage import (
    JsonFileStorage,
    KeyValueStorage,
    MemoryStorage,
    RecordStore,
    SequenceRecordStore,
    StorageError,
)
from daybook.stats import WeekStats, expense_week_stats, round_2, timesheet_week_stats
from daybook.validation import validate_day_expenses, validate_time_entry


logger = structlog.get_logger(__name__)


class EntryValidationError(Exception):
    """A form failed validation; nothing was saved."""

    def __init__(self, result: ValidationResult):
        self.result = result
        issue = result.first_error
        super().__init__(issue.message if issue else "Invalid entry")


class NoteNotFoundError(KeyError):
    """No note with the given id."""
    pass


class _PageController:
    """Shared wiring: error reporting through toast and audit log."""

    def __init__(
        self,
        notifier: Optional[ToastNotifier] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._notifier = notifier or ToastNotifier()
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def notifier(self) -> ToastNotifier:
        return self._notifier

    def _on_storage_error(self, error: StorageError) -> None:
        self._audit_logger.log_storage_error(error)
        self._notifier.error()


class NotesController(_PageController):
    """
    Notes page.

    Notes are kept newest-first. Only one note is in edit mode at a time.
    """

    def __init__(
        self,
        durable: KeyValueStorage,
        mirror: Optional[KeyValueStorage] = None,
        storage_key: str = "notes_data",
        backup_suffix: str = "_backup",
        notifier: Optional[ToastNotifier] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        super().__init__(notifier, audit_logger)
        self._store: SequenceRecordStore[Note] = SequenceRecordStore(
            storage_key,
            Note,
            durable,
            mirror=mirror,
            backup_suffix=backup_suffix,
            on_error=self._on_storage_error,
        )
        self._store.load()
        self.editing_id: Optional[str] = None

    @property
    def store(self) -> SequenceRecordStore[Note]:
        return self._store

    def notes(self) -> list[Note]:
        return self._store.values()

    def get_note(self, note_id: str) -> Note:
        note = self._store.get(note_id)
        if note is None:
            raise NoteNotFoundError(note_id)
        return note

    def add_note(self) -> Note:
        """Create an empty note at the top of the list and start editing it."""
        note = Note.new()
        self.editing_id = note.id
        if self._store.prepend(note):
            self._audit_logger.log_note_created(self._store.storage_key, note.id)
            self._notifier.success(SAVED)
        return note

    def update_note(
        self,
        note_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Note:
        note = self.get_note(note_id).edit(title=title, content=content)
        if self._store.put(note_id, note):
            fields = [name for name, value in (("title", title), ("content", content)) if value is not None]
            self._audit_logger.log_note_updated(self._store.storage_key, note_id, fields)
        return note

    def toggle_edit(self, note_id: str) -> bool:
        """
        Enter or leave edit mode for a note.

        Returns True when the note is now being edited.
        """
        if self.editing_id == note_id:
            self.editing_id = None
            self._notifier.success(EDITED)
            return False
        self.editing_id = note_id
        return True

    def delete_note(self, note_id: str, confirmed: bool = False) -> bool:
        """
        Delete a note once the user confirmed.

        Returns True if the note was removed from the list.
        """
        if not confirmed or note_id not in self._store:
            return False
        self._store.delete(note_id)
        if self.editing_id == note_id:
            self.editing_id = None
        self._audit_logger.log_note_deleted(self._store.storage_key, note_id)
        return True

    def count_label(self) -> str:
        count = len(self._store)
        if count == 1:
            return "1 anotação salva"
        return f"{count} anotações salvas"


class _WeekPageController(_PageController, ABC):
    """
    Calendar surface shared by the expenses and timesheet pages.

    The month grid is derived from ``current_date`` (today by default);
    clicking a day selects the Monday-start week around it.
    """

    def __init__(
        self,
        notifier: Optional[ToastNotifier] = None,
        audit_logger: Optional[AuditLogger] = None,
        today: Optional[date] = None,
    ):
        super().__init__(notifier, audit_logger)
        self.current_date: date = today or date.today()
        self.selected_week: list[date] = []
        self._open_days: set[str] = set()

    def month_grid(self) -> list[date]:
        return month_grid(self.current_date)

    def month_rows(self) -> list[list[Optional[date]]]:
        return month_rows(self.current_date)

    def select_date(self, day: date) -> list[date]:
        self.selected_week = week_of(day)
        return self.selected_week

    def is_selected(self, day: date) -> bool:
        return day in self.selected_week

    def toggle_day(self, day: date) -> bool:
        """Open or close a day's form. Returns True when now open."""
        key = date_key(day)
        if key in self._open_days:
            self._open_days.discard(key)
            return False
        self._open_days.add(key)
        return True

    def close_day(self, day: date) -> None:
        self._open_days.discard(date_key(day))

    def is_open(self, day: date) -> bool:
        return date_key(day) in self._open_days

    @abstractmethod
    def week_stats(self) -> WeekStats:
        """Chart series for the selected week; empty when none is selected."""
        pass


class ExpensesController(_WeekPageController):
    """Expenses page: one DayExpenseRecord per date key."""

    def __init__(
        self,
        durable: KeyValueStorage,
        mirror: Optional[KeyValueStorage] = None,
        storage_key: str = "expenses_data",
        backup_suffix: str = "_backup",
        notifier: Optional[ToastNotifier] = None,
        audit_logger: Optional[AuditLogger] = None,
        today: Optional[date] = None,
    ):
        super().__init__(notifier, audit_logger, today)
        self._store: RecordStore[DayExpenseRecord] = RecordStore(
            storage_key,
            DayExpenseRecord,
            durable,
            mirror=mirror,
            backup_suffix=backup_suffix,
            on_error=self._on_storage_error,
            key_validator=parse_date_key,
        )
        self._store.load()

    @property
    def store(self) -> RecordStore[DayExpenseRecord]:
        return self._store

    def day_record(self, day: date) -> Optional[DayExpenseRecord]:
        return self._store.get(date_key(day))

    def save_day(
        self,
        day: date,
        expenses: list[Expense],
        notes: Optional[str] = None,
    ) -> DayExpenseRecord:
        """
        Save a day's expenses.

        Lines without a positive amount are dropped. If none remain the
        save is refused with EntryValidationError and the store is left
        untouched.
        """
        key = date_key(day)
        result, kept = validate_day_expenses(expenses)
        if not result.is_valid:
            self._audit_logger.log_validation_failed(
                self._store.storage_key,
                key,
                [issue.model_dump() for issue in result.issues],
            )
            raise EntryValidationError(result)

        record = DayExpenseRecord(expenses=kept, notes=notes or None)
        total = str(round_2(record.total()))
        if self._store.put(key, record):
            self._audit_logger.log_expenses_saved(
                self._store.storage_key,
                key,
                len(kept),
                total,
            )
            self._notifier.success(SAVED)
        self.close_day(day)
        return record

    def delete_day(self, day: date, confirmed: bool = False) -> bool:
        key = date_key(day)
        if not confirmed or key not in self._store:
            return False
        self._store.delete(key)
        self._audit_logger.log_expenses_deleted(self._store.storage_key, key)
        return True

    def week_stats(self) -> WeekStats:
        if not self.selected_week:
            return WeekStats()
        return expense_week_stats(self.selected_week, self._store.get_all())


class TimesheetController(_WeekPageController):
    """Timesheet page: one TimeEntry per date key."""

    def __init__(
        self,
        durable: KeyValueStorage,
        mirror: Optional[KeyValueStorage] = None,
        storage_key: str = "timesheet_data",
        backup_suffix: str = "_backup",
        notifier: Optional[ToastNotifier] = None,
        audit_logger: Optional[AuditLogger] = None,
        today: Optional[date] = None,
    ):
        super().__init__(notifier, audit_logger, today)
        self._store: RecordStore[TimeEntry] = RecordStore(
            storage_key,
            TimeEntry,
            durable,
            mirror=mirror,
            backup_suffix=backup_suffix,
            on_error=self._on_storage_error,
            key_validator=parse_date_key,
        )
        self._store.load()

    @property
    def store(self) -> RecordStore[TimeEntry]:
        return self._store

    def entry(self, day: date) -> Optional[TimeEntry]:
        return self._store.get(date_key(day))

    def save_entry(
        self,
        day: date,
        arrival: Optional[str],
        departure: Optional[str],
        notes: Optional[str] = None,
    ) -> TimeEntry:
        """
        Save a day's times.

        A missing departure refuses the save with EntryValidationError.
        """
        key = date_key(day)
        result = validate_time_entry(arrival, departure)
        if not result.is_valid:
            self._audit_logger.log_validation_failed(
                self._store.storage_key,
                key,
                [issue.model_dump() for issue in result.issues],
            )
            raise EntryValidationError(result)

        entry = TimeEntry(
            arrival=arrival or DEFAULT_ARRIVAL,
            departure=departure,
            notes=notes or None,
        )
        if self._store.put(key, entry):
            self._audit_logger.log_time_entry_saved(
                self._store.storage_key,
                key,
                entry.effective_arrival,
                entry.departure,
            )
            self._notifier.success(SAVED)
        self.close_day(day)
        return entry

    def delete_entry(self, day: date, confirmed: bool = False) -> bool:
        key = date_key(day)
        if not confirmed or key not in self._store:
            return False
        self._store.delete(key)
        self._audit_logger.log_time_entry_deleted(self._store.storage_key, key)
        return True

    def week_stats(self) -> WeekStats:
        if not self.selected_week:
            return WeekStats()
        return timesheet_week_stats(self.selected_week, self._store.get_all())


class AppComponents(NamedTuple):
    notes: NotesController
    expenses: ExpensesController
    timesheet: TimesheetController
    notifier: ToastNotifier


def create_app_components(
    settings: Optional[Settings] = None,
    durable: Optional[KeyValueStorage] = None,
    session_storage: Optional[KeyValueStorage] = None,
    today: Optional[date] = None,
) -> AppComponents:
    """
    Build the three page controllers for one session.

    Args:
        settings: Application settings (defaults to get_settings())
        durable: Durable storage; defaults to files under the data dir
        session_storage: Session-scoped mirror; defaults to a fresh MemoryStorage
        today: Reference date for the calendars
    """
    settings = settings or get_settings()
    storage_settings = settings.storage
    app_settings = settings.app

    configure_logging(app_settings.log_level)

    durable = durable or JsonFileStorage(
        storage_settings.data_dir,
        quota_bytes=storage_settings.quota_bytes,
    )
    if session_storage is None:
        session_storage = MemoryStorage(quota_bytes=storage_settings.quota_bytes)

    notifier = ToastNotifier(duration_seconds=app_settings.toast_duration_seconds)
    audit_logger = AuditLogger()
    suffix = storage_settings.backup_suffix

    logger.info(
        "app_components_created",
        environment=app_settings.app_environment,
        durable=type(durable).__name__,
    )

    return AppComponents(
        notes=NotesController(
            durable,
            session_storage,
            storage_key=storage_settings.notes_key,
            backup_suffix=suffix,
            notifier=notifier,
            audit_logger=audit_logger,
        ),
        expenses=ExpensesController(
            durable,
            session_storage,
            storage_key=storage_settings.expenses_key,
            backup_suffix=suffix,
            notifier=notifier,
            audit_logger=audit_logger,
            today=today,
        ),
        timesheet=TimesheetController(
            durable,
            session_storage,
            storage_key=storage_settings.timesheet_key,
            backup_suffix=suffix,
            notifier=notifier,
            audit_logger=audit_logger,
            today=today,
        ),
        notifier=notifier,
    )
