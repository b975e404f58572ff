"""
Weekly Statistics

Reduces one Monday-start week of records into chart points and a
weekly total. Missing or partial data is skipped, never raised.

Rounding:
- expenses: each day's point is rounded to 2 places; the weekly total
  is the exact sum of the unrounded day totals
- hours: each day is rounded to 2 places and the weekly total is the
  sum of those rounded figures
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional, Sequence

from pydantic import BaseModel, Field

from daybook.calendar import date_key, weekday_index, weekday_label
from daybook.config import DEFAULT_ARRIVAL
from daybook.models.expense import DayExpenseRecord
from daybook.models.timesheet import TimeEntry, parse_time


# One stable color per weekday, Monday first
DAY_COLORS = (
    "#a855f7",
    "#facc15",
    "#f97316",
    "#10b981",
    "#3b82f6",
    "#ec4899",
    "#8b5cf6",
)

CENTS = Decimal("0.01")


def round_2(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


class ChartPoint(BaseModel):
    """One weekday's value, shared by the proportion chart and the bar chart."""

    label: str = Field(..., description="Weekday label, e.g. 'Ter'")
    value: float = Field(..., description="Value rounded to 2 decimals")
    color_index: int = Field(..., ge=0, le=6, description="Monday-first weekday position")

    @property
    def color(self) -> str:
        return DAY_COLORS[self.color_index]


class WeekStats(BaseModel):
    """Chart series and total for one week."""

    points: list[ChartPoint] = Field(default_factory=list)
    total: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.points

    def as_rows(self) -> list[dict]:
        """Rows for plotting: label, value, color."""
        return [
            {"label": p.label, "value": p.value, "color": p.color}
            for p in self.points
        ]


def _point(day: date, value: Decimal) -> ChartPoint:
    return ChartPoint(
        label=weekday_label(day),
        value=float(value),
        color_index=weekday_index(day),
    )


def expense_week_stats(
    week: Sequence[date],
    records: Mapping[str, DayExpenseRecord],
) -> WeekStats:
    """Per-day expense totals for the week; days without expenses are omitted."""
    points = []
    total = Decimal(0)

    for day in week:
        record = records.get(date_key(day))
        if record is None or not record.has_expenses:
            continue
        day_total = record.total()
        total += day_total
        points.append(_point(day, round_2(day_total)))

    return WeekStats(points=points, total=float(total))


def worked_hours(arrival: Optional[str], departure: Optional[str]) -> Decimal:
    """
    Hours between arrival and departure, never negative.

    A missing arrival means ``DEFAULT_ARRIVAL``; a missing departure
    means no hours. Unparsable times count as no hours.
    """
    if not departure:
        return Decimal(0)
    try:
        start = parse_time(arrival or DEFAULT_ARRIVAL)
        end = parse_time(departure)
    except ValueError:
        return Decimal(0)

    seconds = (
        datetime.combine(date.min, end) - datetime.combine(date.min, start)
    ).total_seconds()
    if seconds <= 0:
        return Decimal(0)
    return Decimal(int(seconds)) / Decimal(3600)


def timesheet_week_stats(
    week: Sequence[date],
    records: Mapping[str, TimeEntry],
) -> WeekStats:
    """Per-day worked hours for the week; days without a departure are omitted."""
    points = []
    total = Decimal(0)

    for day in week:
        entry = records.get(date_key(day))
        if entry is None or not entry.departure:
            continue
        hours = round_2(worked_hours(entry.effective_arrival, entry.departure))
        total += hours
        points.append(_point(day, hours))

    return WeekStats(points=points, total=float(total))
