"""Tests for month grids, weeks and date keys."""

from datetime import date, datetime, timedelta, timezone

import pytest

from daybook.calendar import (
    GRID_HEADER,
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


class TestWeekOf:
    """Monday-start weeks."""

    @pytest.mark.parametrize("offset", range(14))
    def test_week_properties(self, offset):
        """7 consecutive days, starting Monday, containing the reference."""
        reference = date(2024, 2, 26) + timedelta(days=offset)
        week = week_of(reference)
        assert len(week) == 7
        assert week[0].weekday() == 0
        assert reference in week
        for earlier, later in zip(week, week[1:]):
            assert later - earlier == timedelta(days=1)

    def test_sunday_is_last_day(self):
        """A Sunday belongs to the week that started the Monday before."""
        week = week_of(date(2024, 3, 17))
        assert week[0] == date(2024, 3, 11)
        assert week[-1] == date(2024, 3, 17)

    def test_monday_starts_its_own_week(self):
        assert week_of(date(2024, 3, 11))[0] == date(2024, 3, 11)

    def test_week_across_year_boundary(self):
        week = week_of(date(2025, 1, 1))
        assert week[0] == date(2024, 12, 30)
        assert week[-1] == date(2025, 1, 5)

    def test_accepts_datetime(self):
        assert week_of(datetime(2024, 3, 13, 23, 59)) == week_of(date(2024, 3, 13))


class TestMonthGrid:
    """Month grid with the leading padding week."""

    def test_mid_month_has_no_padding(self):
        grid = month_grid(date(2024, 2, 15))
        assert grid[0] == date(2024, 2, 1)
        assert grid[-1] == date(2024, 2, 29)
        assert len(grid) == 29

    @pytest.mark.parametrize("reference", [
        date(2024, 1, 31),
        date(2023, 2, 10),
        date(2024, 4, 2),
        date(2024, 12, 25),
    ])
    def test_covers_whole_month_in_order(self, reference):
        grid = month_grid(reference)
        assert grid[0].day == 1
        assert all(d.month == reference.month for d in grid)
        for earlier, later in zip(grid, grid[1:]):
            assert later - earlier == timedelta(days=1)
        assert (grid[-1] + timedelta(days=1)).day == 1

    def test_first_of_month_prepends_previous_week(self):
        """On the 1st, exactly 7 days precede day 1, ending the day before."""
        grid = month_grid(date(2024, 3, 1))
        assert len(grid) == 7 + 31
        assert grid[:7] == [date(2024, 2, 23) + timedelta(days=i) for i in range(7)]
        assert grid[6] == date(2024, 2, 29)
        assert grid[7] == date(2024, 3, 1)

    def test_first_of_january_pads_into_december(self):
        grid = month_grid(date(2025, 1, 1))
        assert grid[0] == date(2024, 12, 25)
        assert grid[7] == date(2025, 1, 1)

    def test_second_of_month_has_no_padding(self):
        assert month_grid(date(2024, 3, 2))[0] == date(2024, 3, 1)


class TestMonthRows:
    """Display rows under the Sunday-first header."""

    def test_header(self):
        assert GRID_HEADER == ("D", "S", "T", "Q", "Q", "S", "S")

    def test_rows_align_with_weekday(self):
        # 1 March 2024 is a Friday: Sunday-first column 5
        rows = month_rows(date(2024, 3, 15))
        assert all(len(row) == 7 for row in rows)
        assert rows[0][:5] == [None] * 5
        assert rows[0][5] == date(2024, 3, 1)
        cells = [d for row in rows for d in row if d is not None]
        assert cells == month_grid(date(2024, 3, 15))

    def test_sunday_first_day_has_no_leading_blank(self):
        # 1 September 2024 is a Sunday
        rows = month_rows(date(2024, 9, 10))
        assert rows[0][0] == date(2024, 9, 1)


class TestDateKeys:
    """Canonical date keys and labels."""

    def test_date_key(self):
        assert date_key(date(2024, 3, 5)) == "2024-03-05"

    def test_date_key_uses_local_date_of_naive_datetime(self):
        """Late-evening local times keep their own calendar date."""
        assert date_key(datetime(2024, 3, 5, 23, 30)) == "2024-03-05"

    def test_date_key_of_aware_datetime_is_local(self):
        moment = datetime(2024, 3, 5, 12, 0, tzinfo=timezone.utc)
        assert date_key(moment) == moment.astimezone().date().isoformat()

    def test_parse_date_key(self):
        assert parse_date_key("2024-03-05") == date(2024, 3, 5)
        with pytest.raises(ValueError):
            parse_date_key("not-a-date")

    @pytest.mark.parametrize("key", ["20240305", "2024-W10-2", "2024-03-05T00:00"])
    def test_parse_date_key_only_accepts_canonical_form(self, key):
        """Other ISO spellings would never match a key built by date_key."""
        with pytest.raises(ValueError):
            parse_date_key(key)

    def test_weekday_labels(self):
        week = week_of(date(2024, 3, 13))
        assert [weekday_label(d) for d in week] == ["Seg", "Ter", "Qua", "Qui", "Sex", "Sáb", "Dom"]
        assert [weekday_index(d) for d in week] == list(range(7))

    def test_display_helpers(self):
        assert month_title(date(2026, 10, 19)) == "outubro de 2026"
        assert format_day(date(2026, 10, 9)) == "09/10"
