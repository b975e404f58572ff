"""Validation package."""

from daybook.validation.validator import (
    positive_expenses,
    validate_day_expenses,
    validate_time_entry,
)

__all__ = [
    "positive_expenses",
    "validate_day_expenses",
    "validate_time_entry",
]
