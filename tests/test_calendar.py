"""Tests for core/day_key.py and core/calendar_view.py"""
from datetime import date

import pytest

from config.exceptions import InvalidDayKeyError
from core.calendar_view import (
    MonthCursor,
    days_in_month,
    first_weekday,
    is_today,
    month_grid,
)
from core.day_key import DayKey, month_prefix, year_prefix


class TestDayKey:
    """Tests for the DayKey dataclass."""

    def test_str_uses_zero_based_month(self):
        assert str(DayKey(2024, 0, 15)) == "2024-0-15"
        assert str(DayKey(2024, 11, 1)) == "2024-11-1"

    def test_parse(self):
        assert DayKey.parse("2024-10-5") == DayKey(2024, 10, 5)

    @pytest.mark.parametrize("text", ["", "2024-0", "2024/0/15", "2024-00x-1", "foo"])
    def test_parse_rejects_garbage(self, text):
        with pytest.raises(InvalidDayKeyError):
            DayKey.parse(text)

    def test_parse_rejects_month_out_of_range(self):
        with pytest.raises(InvalidDayKeyError):
            DayKey.parse("2024-12-1")

    def test_day_out_of_range(self):
        with pytest.raises(InvalidDayKeyError):
            DayKey(2024, 0, 0)

    def test_date_conversion(self):
        key = DayKey.from_date(date(2024, 1, 15))
        assert key == DayKey(2024, 0, 15)
        assert key.to_date() == date(2024, 1, 15)

    def test_ordering(self):
        assert DayKey(2024, 1, 1) < DayKey(2024, 10, 1)

    def test_prefixes(self):
        assert year_prefix(2024) == "2024-"
        assert month_prefix(2024, 1) == "2024-1-"


class TestCalendarFunctions:
    """Tests for the month grid helpers."""

    def test_days_in_month(self):
        assert days_in_month(2024, 1) == 29
        assert days_in_month(2023, 1) == 28
        assert days_in_month(2024, 0) == 31
        assert days_in_month(2024, 3) == 30

    def test_first_weekday_sunday_first(self):
        # 1 Sep 2024 was a Sunday, 1 Jan 2024 a Monday
        assert first_weekday(2024, 8) == 0
        assert first_weekday(2024, 0) == 1

    def test_month_grid(self):
        grid = month_grid(2024, 0)
        assert all(len(week) == 7 for week in grid)
        assert grid[0][:2] == [0, 1]
        days = [d for week in grid for d in week if d]
        assert days == list(range(1, 32))

    def test_is_today(self):
        today = date(2024, 1, 15)
        assert is_today(2024, 0, 15, today)
        assert not is_today(2024, 1, 15, today)


class TestMonthCursor:
    """Tests for month navigation."""

    def test_today(self):
        assert MonthCursor.today(date(2024, 3, 9)) == MonthCursor(2024, 2)

    def test_next_wraps_year(self):
        assert MonthCursor(2024, 11).next() == MonthCursor(2025, 0)

    def test_previous_wraps_year(self):
        assert MonthCursor(2024, 0).previous() == MonthCursor(2023, 11)

    def test_shift_many(self):
        assert MonthCursor(2024, 5).shift(-18) == MonthCursor(2022, 11)
        assert MonthCursor(2024, 5).shift(25) == MonthCursor(2026, 6)

    def test_day_key(self):
        assert str(MonthCursor(2024, 1).day_key(29)) == "2024-1-29"

    def test_label_and_days(self):
        cursor = MonthCursor(2024, 1)
        assert cursor.label == "February 2024"
        assert cursor.days == 29
