"""
Expense Models

Expenses are grouped into day buckets keyed by ``YYYY-MM-DD``.
Amounts are kept as the text the user typed; they are only parsed
when something needs the number (validation, totals).
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from pydantic import Field, field_validator

from daybook.models.base import StoredModel, new_id


# Largest amount a single expense line may hold
MAX_AMOUNT = Decimal("999999999999.99")


def parse_amount(text: Optional[str]) -> Decimal:
    """
    Parse a decimal amount typed by the user.

    Blank, unparsable or non-finite text counts as zero, and so does
    anything beyond ``MAX_AMOUNT`` in either direction.
    """
    if text is None:
        return Decimal(0)
    try:
        value = Decimal(text.strip())
    except InvalidOperation:
        return Decimal(0)
    if not value.is_finite() or value.copy_abs() > MAX_AMOUNT:
        return Decimal(0)
    return value


class Expense(StoredModel):
    """A single expense line inside a day bucket."""

    id: str = Field(
        default_factory=new_id,
        min_length=1,
        description="Opaque unique identifier"
    )
    amount: str = Field(
        default="",
        description="Decimal amount as text; must be > 0 to be saved"
    )
    description: str = Field(
        default="",
        description="What the money was spent on (optional)"
    )

    @field_validator('amount', mode='before')
    @classmethod
    def coerce_amount(cls, v: Any) -> Any:
        """Older data may hold plain numbers; keep amounts as text."""
        if isinstance(v, bool):
            raise ValueError("Amount cannot be a boolean")
        if isinstance(v, (int, float, Decimal)):
            return str(v)
        return v

    @classmethod
    def new(cls, amount: str = "", description: str = "") -> 'Expense':
        return cls(amount=amount, description=description)

    def parsed_amount(self) -> Decimal:
        return parse_amount(self.amount)

    @property
    def is_positive(self) -> bool:
        return self.parsed_amount() > 0


class DayExpenseRecord(StoredModel):
    """Everything recorded for one calendar day."""

    expenses: list[Expense] = Field(
        default_factory=list,
        description="Expenses in the order they were entered"
    )
    notes: Optional[str] = Field(
        default=None,
        description="Free-text notes about the day"
    )

    @property
    def has_expenses(self) -> bool:
        return len(self.expenses) > 0

    def total(self) -> Decimal:
        """Sum of all parsed amounts (unparsable amounts count as zero)."""
        return sum((e.parsed_amount() for e in self.expenses), Decimal(0))
