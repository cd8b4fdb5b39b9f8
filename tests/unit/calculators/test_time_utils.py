"""Unit tests for time utility functions.

This module tests clock parsing, decimal-hour formatting and the date
helpers used throughout the timesheet engine.
"""

import datetime as dt
from decimal import Decimal

import pytest

from timesheet_engine.calculators.time_utils import (
    day_of_week,
    format_decimal_hours,
    is_valid_clock_time,
    parse_iso_date,
    time_to_minutes,
    week_bounds,
)


class TestTimeToMinutes:
    """Test converting clock strings to minutes since midnight."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("00:00", 0),
            ("08:30", 510),
            ("8:05", 485),
            ("23:59", 1439),
            ("12:00:45", 720),
        ],
    )
    def test_valid_times(self, value, expected):
        assert time_to_minutes(value) == expected

    @pytest.mark.parametrize(
        "value", ["", "   ", None, "abc", "24:00", "12:60", "12", "12:5", "1230"]
    )
    def test_invalid_or_unset_times_are_zero(self, value):
        assert time_to_minutes(value) == 0

    def test_accepts_time_objects(self):
        assert time_to_minutes(dt.time(17, 15)) == 1035

    def test_surrounding_whitespace_is_ignored(self):
        assert time_to_minutes(" 09:00 ") == 540


class TestIsValidClockTime:
    """Test clock-time validity check."""

    def test_valid(self):
        assert is_valid_clock_time("07:45")

    @pytest.mark.parametrize("value", ["", None, "7h45", "25:00", "10:75"])
    def test_invalid(self, value):
        assert not is_valid_clock_time(value)


class TestFormatDecimalHours:
    """Test minutes to decimal hours formatting."""

    @pytest.mark.parametrize(
        "minutes,expected",
        [
            (0, "0.00"),
            (30, "0.50"),
            (90, "1.50"),
            (450, "7.50"),
            (780, "13.00"),
            (10, "0.17"),
            (1, "0.02"),
        ],
    )
    def test_formats_two_decimals(self, minutes, expected):
        assert format_decimal_hours(minutes) == expected

    @pytest.mark.parametrize(
        "minutes", [None, -1, float("nan"), float("inf"), Decimal("NaN")]
    )
    def test_non_finite_or_negative_is_zero(self, minutes):
        assert format_decimal_hours(minutes) == "0.00"

    def test_rounds_half_up(self):
        assert format_decimal_hours(3) == "0.05"
        assert format_decimal_hours(Decimal("0.3")) == "0.01"


class TestDateHelpers:
    """Test ISO date parsing, weekday names and week bounds."""

    def test_parse_iso_date(self):
        assert parse_iso_date("2024-06-10") == dt.date(2024, 6, 10)
        assert parse_iso_date(dt.date(2024, 6, 10)) == dt.date(2024, 6, 10)

    @pytest.mark.parametrize(
        "value", ["", None, "2024-6-10", "2024-13-01", "2024-02-30", "10/06/2024"]
    )
    def test_parse_iso_date_invalid(self, value):
        assert parse_iso_date(value) is None

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2024-06-10", "Monday"),
            ("2024-06-16", "Sunday"),
            ("2024-02-29", "Thursday"),
            ("2023-12-31", "Sunday"),
        ],
    )
    def test_day_of_week(self, value, expected):
        assert day_of_week(value) == expected

    def test_day_of_week_invalid_is_empty(self):
        assert day_of_week("not-a-date") == ""
        assert day_of_week("") == ""

    @pytest.mark.parametrize(
        "reference",
        [dt.date(2024, 6, 10), dt.date(2024, 6, 12), dt.date(2024, 6, 16)],
    )
    def test_week_bounds_monday_to_sunday(self, reference):
        assert week_bounds(reference) == ("2024-06-10", "2024-06-16")

    def test_week_bounds_across_year_end(self):
        assert week_bounds(dt.date(2025, 1, 1)) == ("2024-12-30", "2025-01-05")
