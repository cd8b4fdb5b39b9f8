"""Aggregators for combining job entries into daily and weekly totals.

This package holds the timesheet store (the aggregation root), the pure
daily recompute and the weekly roll-up.
"""

from timesheet_engine.aggregators.day_aggregator import (
    DayTotals,
    calculate_day_totals,
    recalculate_day,
)
from timesheet_engine.aggregators.timesheet_store import (
    MAX_JOBS_PER_DAY,
    TimesheetStore,
)
from timesheet_engine.aggregators.weekly_hours_calculator import (
    WeeklyHoursCalculator,
    WeeklySummary,
)

__all__ = [
    "DayTotals",
    "MAX_JOBS_PER_DAY",
    "TimesheetStore",
    "WeeklyHoursCalculator",
    "WeeklySummary",
    "calculate_day_totals",
    "recalculate_day",
]
