"""Weekly statistics for the expense and timesheet charts."""

from daybook.stats.aggregator import (
    DAY_COLORS,
    ChartPoint,
    WeekStats,
    expense_week_stats,
    round_2,
    timesheet_week_stats,
    worked_hours,
)

__all__ = [
    "DAY_COLORS",
    "ChartPoint",
    "WeekStats",
    "expense_week_stats",
    "round_2",
    "timesheet_week_stats",
    "worked_hours",
]
