"""Time calculation utilities for the timesheet engine.

This module provides low-level helpers for:
- Converting HH:MM clock strings to minutes since midnight
- Formatting minutes as decimal hours ("7.50")
- Deriving weekday names and week ranges from ISO dates

Malformed input to any helper yields a neutral default
(0 minutes, "0.00", an empty string) instead of raising. Clock times have
no timezone; they are plain times of day.
"""

import datetime as dt
import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Tuple, Union

WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

_CLOCK_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")
_ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _split_clock(value: str) -> Optional[Tuple[int, int]]:
    match = _CLOCK_PATTERN.match(value.strip())
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours, minutes


def is_valid_clock_time(value: Optional[str]) -> bool:
    """Check whether a value is a well-formed 24-hour HH:MM clock time.

    Example:
        >>> is_valid_clock_time("08:30")
        True
        >>> is_valid_clock_time("25:00")
        False
    """
    if not isinstance(value, str) or not value.strip():
        return False
    return _split_clock(value) is not None


def time_to_minutes(value: Union[str, dt.time, None]) -> int:
    """Convert an HH:MM clock time to minutes since midnight.

    Args:
        value: Clock time as "HH:MM" string or dt.time; may be empty

    Returns:
        Minutes since midnight (0-1439), or 0 for unset/malformed input

    Example:
        >>> time_to_minutes("08:30")
        510
        >>> time_to_minutes("")
        0
        >>> time_to_minutes("not a time")
        0
    """
    if isinstance(value, dt.time):
        return value.hour * 60 + value.minute
    if not isinstance(value, str) or not value.strip():
        return 0

    parts = _split_clock(value)
    if parts is None:
        return 0
    hours, minutes = parts
    return hours * 60 + minutes


def format_decimal_hours(minutes: Union[int, float, Decimal, None]) -> str:
    """Format a minute count as decimal hours with exactly two decimals.

    Args:
        minutes: Duration in minutes

    Returns:
        Hours string such as "7.50"; "0.00" for None, NaN or negative input

    Example:
        >>> format_decimal_hours(90)
        '1.50'
        >>> format_decimal_hours(-5)
        '0.00'

    Note:
        Rounds half up, so 10 minutes (0.1666...) renders as "0.17".
    """
    if minutes is None:
        return "0.00"
    if isinstance(minutes, float) and (math.isnan(minutes) or math.isinf(minutes)):
        return "0.00"
    if isinstance(minutes, Decimal) and not minutes.is_finite():
        return "0.00"
    if minutes < 0:
        return "0.00"

    hours = Decimal(str(minutes)) / Decimal("60")
    return str(hours.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def parse_iso_date(value: Union[str, dt.date, None]) -> Optional[dt.date]:
    """Parse a zero-padded YYYY-MM-DD string into a date, or None when invalid."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str) or not _ISO_DATE_PATTERN.match(value.strip()):
        return None
    try:
        return dt.date.fromisoformat(value.strip())
    except ValueError:
        return None


def day_of_week(value: Union[str, dt.date, None]) -> str:
    """Get the full English weekday name for a date.

    The name is derived from the calendar date alone, so there is no
    timezone or midnight drift.

    Example:
        >>> day_of_week("2024-06-10")
        'Monday'
        >>> day_of_week("")
        ''
    """
    parsed = parse_iso_date(value)
    if parsed is None:
        return ""
    return WEEKDAY_NAMES[parsed.weekday()]


def week_bounds(reference: Optional[dt.date] = None) -> Tuple[str, str]:
    """Get the Monday and Sunday (ISO strings) of the week containing a date.

    Args:
        reference: Any date in the week; defaults to today

    Example:
        >>> week_bounds(dt.date(2024, 6, 12))
        ('2024-06-10', '2024-06-16')
    """
    reference = reference or dt.date.today()
    monday = reference - dt.timedelta(days=reference.weekday())
    sunday = monday + dt.timedelta(days=6)
    return monday.isoformat(), sunday.isoformat()
