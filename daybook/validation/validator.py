"""
Form Validation

Checks a day's form before the page saves it.

- Expenses: blank, zero or unparsable amounts are dropped; the save is
  refused if nothing with a positive amount remains.
- Timesheet: the departure time is required and both times must be
  well formed.

IMPORTANT: Validation only reports. Dropping invalid expense lines is
the one normalization performed, and the caller gets the kept lines
back explicitly.
"""

from typing import Optional, Sequence

from daybook.models.expense import Expense
from daybook.models.timesheet import is_valid_time
from daybook.models.validation import ValidationIssue, ValidationResult


def positive_expenses(expenses: Sequence[Expense]) -> list[Expense]:
    """The expenses that would be persisted, in their original order."""
    return [e for e in expenses if e.is_positive]


def validate_day_expenses(
    expenses: Sequence[Expense],
) -> tuple[ValidationResult, list[Expense]]:
    """
    Validate a day's expense lines.

    Returns:
        (result, kept_expenses)
    """
    kept = positive_expenses(expenses)
    issues = []

    if not kept:
        issues.append(ValidationIssue(
            field="expenses",
            issue_type="not_positive",
            message="Adicione pelo menos um gasto com valor!",
            severity="error",
            suggested_fix="Enter an amount greater than zero",
        ))
    elif len(kept) < len(expenses):
        issues.append(ValidationIssue(
            field="expenses",
            issue_type="dropped",
            message=f"{len(expenses) - len(kept)} gasto(s) sem valor foram ignorados",
            severity="info",
        ))

    return ValidationResult(issues=issues), kept


def validate_time_entry(
    arrival: Optional[str],
    departure: Optional[str],
) -> ValidationResult:
    """Validate a day's arrival/departure before saving."""
    issues = []

    if not departure or not departure.strip():
        issues.append(ValidationIssue(
            field="departure",
            issue_type="missing",
            message="Hora de saída é obrigatória!",
            severity="error",
        ))
    elif not is_valid_time(departure):
        issues.append(ValidationIssue(
            field="departure",
            issue_type="invalid_format",
            message=f"Hora de saída inválida: {departure}",
            severity="error",
            suggested_fix="Use the HH:MM format",
        ))

    if arrival and arrival.strip() and not is_valid_time(arrival):
        issues.append(ValidationIssue(
            field="arrival",
            issue_type="invalid_format",
            message=f"Hora de chegada inválida: {arrival}",
            severity="error",
            suggested_fix="Use the HH:MM format",
        ))

    return ValidationResult(issues=issues)
