"""Calendar package: month grids, Monday-start weeks and date keys."""

from daybook.calendar.dates import (
    GRID_HEADER,
    WEEKDAY_LABELS,
    date_key,
    format_day,
    month_grid,
    month_rows,
    month_title,
    parse_date_key,
    week_of,
    weekday_index,
    weekday_label,
)

__all__ = [
    "GRID_HEADER",
    "WEEKDAY_LABELS",
    "date_key",
    "format_day",
    "month_grid",
    "month_rows",
    "month_title",
    "parse_date_key",
    "week_of",
    "weekday_index",
    "weekday_label",
]
