"""
Calendar arithmetic for the weekly pages.

Pure functions, no state. Weeks start on Monday; Python's
``date.weekday()`` already numbers Monday as 0 and Sunday as 6, which
is the position used for labels and chart colors.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Optional, Union


WEEKDAY_LABELS = ("Seg", "Ter", "Qua", "Qui", "Sex", "Sáb", "Dom")

# Header of the month grid, Sunday first
GRID_HEADER = ("D", "S", "T", "Q", "Q", "S", "S")

MONTH_NAMES = (
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
)

DateLike = Union[date, datetime]


def _as_date(value: DateLike) -> date:
    """Local calendar date of ``value``; aware datetimes are shifted to local time."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def month_grid(reference: DateLike) -> list[date]:
    """
    Every day of the reference month, in order.

    When the reference is itself the 1st, the 7 days before the 1st are
    prepended so the grid does not open on a short row.
    """
    ref = _as_date(reference)
    first = ref.replace(day=1)
    days_in_month = calendar.monthrange(ref.year, ref.month)[1]

    dates = []
    if ref.day == 1:
        dates.extend(first - timedelta(days=7 - i) for i in range(7))
    dates.extend(first + timedelta(days=i) for i in range(days_in_month))
    return dates


def week_of(reference: DateLike) -> list[date]:
    """The Monday-start week containing ``reference``."""
    ref = _as_date(reference)
    monday = ref - timedelta(days=ref.weekday())
    return [monday + timedelta(days=i) for i in range(7)]


def date_key(value: DateLike) -> str:
    """Canonical ``YYYY-MM-DD`` key of the local calendar date."""
    return _as_date(value).isoformat()


def parse_date_key(key: str) -> date:
    """Inverse of ``date_key``; only the exact ``YYYY-MM-DD`` form is accepted."""
    parsed = date.fromisoformat(key)
    if parsed.isoformat() != key:
        raise ValueError(f"Not a YYYY-MM-DD date key: {key!r}")
    return parsed


def weekday_index(value: DateLike) -> int:
    """Monday-first position, 0 (Monday) to 6 (Sunday)."""
    return _as_date(value).weekday()


def weekday_label(value: DateLike) -> str:
    return WEEKDAY_LABELS[weekday_index(value)]


def month_title(value: DateLike) -> str:
    ref = _as_date(value)
    return f"{MONTH_NAMES[ref.month - 1]} de {ref.year}"


def format_day(value: DateLike) -> str:
    """Day header text, ``DD/MM``."""
    return _as_date(value).strftime("%d/%m")


def month_rows(reference: DateLike) -> list[list[Optional[date]]]:
    """
    Lay ``month_grid`` out in rows of 7 under a Sunday-first header.

    Cells before the first date and after the last one are ``None``.
    """
    dates = month_grid(reference)
    leading = (dates[0].weekday() + 1) % 7
    cells: list[Optional[date]] = [None] * leading + list(dates)
    if len(cells) % 7:
        cells.extend([None] * (7 - len(cells) % 7))
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]
