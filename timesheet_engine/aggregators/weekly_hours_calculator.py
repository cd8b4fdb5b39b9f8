"""Weekly hours calculator for payroll summaries.

This module rolls stored days within an inclusive date range up into
weekly totals and provides a pandas breakdown for reporting.
"""

import logging
from dataclasses import dataclass, field
from typing import List

import pandas as pd

from timesheet_engine.aggregators.timesheet_store import (
    DateKey,
    TimesheetStore,
    as_date_text,
)
from timesheet_engine.calculators.time_utils import format_decimal_hours
from timesheet_engine.models.day import DayRecord
from timesheet_engine.utils.logging_utils import log_function_call

logger = logging.getLogger(__name__)

DAILY_BREAKDOWN_COLUMNS = [
    "Date",
    "Day of Week",
    "On-Call",
    "Jobs",
    "Total Minutes",
    "Net Minutes",
    "Total Hours",
    "Net Hours",
]


@dataclass
class WeeklySummary:
    """Container for a weekly roll-up.

    Attributes:
        start_date: First date of the range (inclusive)
        end_date: Last date of the range (inclusive)
        days: Stored days inside the range, sorted by date
        total_minutes: Sum of the days' total minutes
        net_minutes: Sum of the days' net minutes

    Example:
        >>> summary = WeeklySummary("2024-06-10", "2024-06-16")
        >>> summary.total_hours
        '0.00'
    """

    start_date: str
    end_date: str
    days: List[DayRecord] = field(default_factory=list)
    total_minutes: int = 0
    net_minutes: int = 0

    @property
    def total_hours(self) -> str:
        return format_decimal_hours(self.total_minutes)

    @property
    def net_hours(self) -> str:
        return format_decimal_hours(self.net_minutes)

    @property
    def on_call_days(self) -> List[str]:
        """Dates flagged on-call within the range."""
        return [day.date for day in self.days if day.is_on_call]

    @property
    def is_empty(self) -> bool:
        return not self.days

    def to_dataframe(self) -> pd.DataFrame:
        """Daily breakdown with one row per included day.

        Returns:
            DataFrame with DAILY_BREAKDOWN_COLUMNS
        """
        rows = [
            {
                "Date": day.date,
                "Day of Week": day.day_of_week,
                "On-Call": day.is_on_call,
                "Jobs": len(day.non_empty_jobs()),
                "Total Minutes": day.total_minutes,
                "Net Minutes": day.net_minutes,
                "Total Hours": format_decimal_hours(day.total_minutes),
                "Net Hours": format_decimal_hours(day.net_minutes),
            }
            for day in self.days
        ]
        return pd.DataFrame(rows, columns=DAILY_BREAKDOWN_COLUMNS)


class WeeklyHoursCalculator:
    """Calculates weekly totals from a timesheet store.

    The calculator:
    1. Selects stored dates with start <= date <= end (ISO string order)
    2. Sorts them ascending
    3. Sums each day's total and net minutes

    Days that were never edited are simply absent; they add nothing.

    Example:
        >>> calculator = WeeklyHoursCalculator(store)
        >>> summary = calculator.calculate("2024-06-10", "2024-06-16")
        >>> summary.total_minutes
        780
    """

    def __init__(self, store: TimesheetStore):
        self.store = store

    @log_function_call
    def calculate(self, start_date: DateKey, end_date: DateKey) -> WeeklySummary:
        """Roll up stored days in an inclusive date range.

        Args:
            start_date: Range start (YYYY-MM-DD or date)
            end_date: Range end (YYYY-MM-DD or date)

        Returns:
            WeeklySummary; empty when no stored day falls in the range
        """
        start = as_date_text(start_date)
        end = as_date_text(end_date)

        if start > end:
            logger.warning(f"Start date {start} is after end date {end}")

        days = self.store.days_in_range(start, end)
        summary = WeeklySummary(
            start_date=start,
            end_date=end,
            days=days,
            total_minutes=sum(day.total_minutes for day in days),
            net_minutes=sum(day.net_minutes for day in days),
        )

        logger.info(
            f"Weekly summary {start} to {end}: {len(days)} day(s), "
            f"total={summary.total_hours}h net={summary.net_hours}h"
        )
        return summary
