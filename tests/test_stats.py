"""Tests for weekly expense and timesheet statistics."""

from datetime import date
from decimal import Decimal

import pytest

from daybook.calendar import week_of
from daybook.models import DayExpenseRecord, Expense, TimeEntry
from daybook.stats import (
    DAY_COLORS,
    ChartPoint,
    WeekStats,
    expense_week_stats,
    timesheet_week_stats,
    worked_hours,
)


# Monday 11 March 2024 .. Sunday 17 March 2024
WEEK = week_of(date(2024, 3, 13))


def day_record(*amounts, notes=None):
    return DayExpenseRecord(
        expenses=[Expense(amount=a) for a in amounts],
        notes=notes,
    )


class TestExpenseWeekStats:
    """Per-day expense totals."""

    def test_single_day(self):
        """Tuesday with [12.50, 7.49] gives one point ('Ter', 19.99)."""
        stats = expense_week_stats(WEEK, {"2024-03-12": day_record("12.50", "7.49")})
        assert stats.points == [ChartPoint(label="Ter", value=19.99, color_index=1)]
        assert stats.total == 19.99

    def test_days_without_expenses_are_omitted(self):
        records = {
            "2024-03-11": day_record(),
            "2024-03-13": day_record("5"),
            "2024-03-17": day_record("2.5"),
        }
        stats = expense_week_stats(WEEK, records)
        assert [p.label for p in stats.points] == ["Qua", "Dom"]
        assert [p.color_index for p in stats.points] == [2, 6]

    def test_records_outside_week_ignored(self):
        records = {
            "2024-03-10": day_record("100"),
            "2024-03-18": day_record("100"),
            "2024-03-15": day_record("1"),
        }
        stats = expense_week_stats(WEEK, records)
        assert stats.total == 1.0
        assert [p.label for p in stats.points] == ["Sex"]

    def test_unparsable_amounts_count_zero(self):
        stats = expense_week_stats(WEEK, {"2024-03-11": day_record("abc", "", "3")})
        assert stats.points[0].value == 3.0

    @pytest.mark.parametrize("amount", ["1e30", "9" * 29, "1e9999999"])
    def test_out_of_range_amounts_count_zero(self, amount):
        """Stored data with an absurd amount still aggregates without raising."""
        records = {"2024-03-12": day_record(amount, "4.50")}
        stats = expense_week_stats(WEEK, records)
        assert stats.points == [ChartPoint(label="Ter", value=4.5, color_index=1)]
        assert stats.total == 4.5

    def test_tiny_amounts_round_to_zero(self):
        stats = expense_week_stats(WEEK, {"2024-03-12": day_record("1e-30")})
        assert stats.points == [ChartPoint(label="Ter", value=0.0, color_index=1)]
        assert Decimal(str(stats.total)) == Decimal("1e-30")

    def test_day_values_rounded_total_not(self):
        """Each point is rounded to 2 places; the total is the raw sum."""
        records = {
            "2024-03-11": day_record("1.005"),
            "2024-03-12": day_record("1.005"),
        }
        stats = expense_week_stats(WEEK, records)
        assert [p.value for p in stats.points] == [1.01, 1.01]
        assert stats.total == 2.01
        assert Decimal(str(stats.total)) == Decimal("2.010")

    def test_empty_week(self):
        stats = expense_week_stats(WEEK, {})
        assert stats.is_empty
        assert stats.total == 0.0


class TestWorkedHours:
    """Hours between arrival and departure."""

    def test_full_day(self):
        assert worked_hours("08:00", "17:30") == Decimal("9.5")

    def test_departure_before_arrival_is_zero(self):
        assert worked_hours("09:00", "08:00") == 0

    def test_missing_arrival_uses_default(self):
        assert worked_hours(None, "12:00") == Decimal(4)
        assert worked_hours("", "12:00") == Decimal(4)

    def test_missing_departure_is_zero(self):
        assert worked_hours("08:00", None) == 0
        assert worked_hours("08:00", "") == 0

    def test_unparsable_time_is_zero(self):
        assert worked_hours("08:00", "late") == 0

    def test_partial_hours(self):
        assert worked_hours("08:10", "09:00").quantize(Decimal("0.01")) == Decimal("0.83")


class TestTimesheetWeekStats:
    """Per-day worked hours."""

    def test_hours_per_day(self):
        records = {
            "2024-03-11": TimeEntry(arrival="08:00", departure="17:30"),
            "2024-03-12": TimeEntry(departure="12:00"),
        }
        stats = timesheet_week_stats(WEEK, records)
        assert [(p.label, p.value) for p in stats.points] == [("Seg", 9.5), ("Ter", 4.0)]
        assert stats.total == 13.5

    def test_negative_day_clamped_but_emitted(self):
        """A departure before arrival still shows as a 0-hour day."""
        stats = timesheet_week_stats(WEEK, {"2024-03-14": TimeEntry(arrival="09:00", departure="08:00")})
        assert stats.points == [ChartPoint(label="Qui", value=0.0, color_index=3)]
        assert stats.total == 0.0

    def test_total_sums_rounded_days(self):
        """The weekly total adds up the already-rounded day values."""
        records = {
            "2024-03-11": TimeEntry(arrival="08:00", departure="08:20"),
            "2024-03-12": TimeEntry(arrival="08:00", departure="08:20"),
            "2024-03-13": TimeEntry(arrival="08:00", departure="08:20"),
        }
        stats = timesheet_week_stats(WEEK, records)
        assert [p.value for p in stats.points] == [0.33, 0.33, 0.33]
        assert stats.total == 0.99


class TestChartPoint:
    """Colors and rows for the charts."""

    @pytest.mark.parametrize("index", range(7))
    def test_color_by_weekday(self, index):
        point = ChartPoint(label="x", value=1.0, color_index=index)
        assert point.color == DAY_COLORS[index]

    def test_color_index_bounds(self):
        with pytest.raises(ValueError):
            ChartPoint(label="x", value=1.0, color_index=7)

    def test_as_rows(self):
        stats = WeekStats(points=[ChartPoint(label="Ter", value=19.99, color_index=1)], total=19.99)
        assert stats.as_rows() == [{"label": "Ter", "value": 19.99, "color": "#facc15"}]
