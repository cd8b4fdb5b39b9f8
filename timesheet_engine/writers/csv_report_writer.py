"""CSV export of daily and weekly timesheets.

The export is a single comma-delimited sheet: metadata rows, a column
header, one row per non-empty job, then totals. Rows are assembled as
plain lists of differing widths and rendered through pandas, which quotes
any value holding a delimiter, quote or line break. Each row keeps its
own width; blank rows stay empty lines.
"""

import csv
import logging
import re
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from timesheet_engine.aggregators.timesheet_store import DateKey, TimesheetStore
from timesheet_engine.aggregators.weekly_hours_calculator import WeeklyHoursCalculator
from timesheet_engine.calculators.time_utils import format_decimal_hours
from timesheet_engine.models.day import DayRecord
from timesheet_engine.models.job import JobEntry

logger = logging.getLogger(__name__)

Row = List[str]

JOB_COLUMNS: Row = [
    "Job Number",
    "Job Location",
    "Travel Start",
    "Work Start",
    "Work Finish",
    "Travel Home Arrival",
    "Job Hours",
]

DAY_COLUMNS: Row = [
    "Date",
    "Day of Week",
    "Daily Total Hours",
    "Daily Net Hours",
    "On-Call",
]

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


def sanitize_filename(value: str) -> str:
    """Replace every character outside [A-Za-z0-9_.-] with "_".

    Example:
        >>> sanitize_filename("Jane O'Neil")
        'Jane_O_Neil'
    """
    return _UNSAFE_FILENAME_CHARS.sub("_", value)


def export_filename(
    employee_name: str, start_date: str, end_date: Optional[str] = None
) -> str:
    """Build the download filename for a CSV export.

    Example:
        >>> export_filename("Jane Doe", "2024-06-10", "2024-06-16")
        'Jane_Doe_timesheet_2024-06-10_to_2024-06-16.csv'
        >>> export_filename("", "2024-06-10")
        'timesheet_2024-06-10.csv'
    """
    period = start_date if not end_date or end_date == start_date else (
        f"{start_date}_to_{end_date}"
    )
    stem = f"timesheet_{period}"
    if employee_name:
        stem = f"{employee_name}_{stem}"
    return sanitize_filename(stem) + ".csv"


def _job_cells(job: JobEntry) -> Row:
    return [
        job.job_number,
        job.job_location,
        job.travel_start_time,
        job.work_start_time,
        job.work_finish_time,
        job.travel_home_time,
        format_decimal_hours(job.total_minutes),
    ]


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def _render_row(row: Row) -> str:
    if not row:
        return "\n"
    return pd.DataFrame([row], dtype=object).to_csv(
        index=False,
        header=False,
        na_rep="",
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\n",
    )


def render_rows(rows: List[Row]) -> str:
    """Render ragged rows as CSV text, one line per row at its own width.

    Example:
        >>> print(render_rows([["Weekly Timesheet"], [], ["a", "b,c"]]), end="")
        Weekly Timesheet
        <BLANKLINE>
        a,"b,c"
    """
    return "".join(_render_row(row) for row in rows)


class TimesheetCsvWriter:
    """Produces CSV exports from a timesheet store.

    Example:
        >>> writer = TimesheetCsvWriter(store)
        >>> text = writer.weekly_csv("2024-06-10", "2024-06-16")
        >>> writer.save(Path("out") / writer.weekly_filename("2024-06-10", "2024-06-16"), text)
    """

    def __init__(self, store: TimesheetStore):
        self.store = store

    def _metadata_rows(self, title: str) -> List[Row]:
        return [
            [title],
            ["Employee Name", self.store.employee_name],
            ["Truck Number", self.store.truck_number],
        ]

    def daily_rows(self, date: DateKey) -> List[Row]:
        """Rows of the daily export for one date."""
        day = self.store.get_or_default(date)

        rows = self._metadata_rows("Daily Timesheet")
        rows += [
            ["Date", day.date],
            ["Day of Week", day.day_of_week],
            ["On-Call Day", _yes_no(day.is_on_call)],
            [],
            list(JOB_COLUMNS),
        ]
        rows += [_job_cells(job) for job in day.non_empty_jobs()]
        rows += [
            [],
            ["Total Hours", format_decimal_hours(day.total_minutes)],
            ["Net Working Hours", format_decimal_hours(day.net_minutes)],
        ]
        return rows

    def weekly_rows(self, start_date: DateKey, end_date: DateKey) -> List[Row]:
        """Rows of the weekly export for an inclusive range.

        Day columns are filled only on each day's first row so a day reads
        as one group.
        """
        summary = WeeklyHoursCalculator(self.store).calculate(start_date, end_date)

        rows = self._metadata_rows("Weekly Timesheet")
        rows += [
            ["Week Of", f"{summary.start_date} to {summary.end_date}"],
            [],
            DAY_COLUMNS + JOB_COLUMNS,
        ]

        for day in summary.days:
            rows += self._day_rows(day)

        rows += [
            [],
            [
                "Weekly Totals",
                "",
                summary.total_hours,
                summary.net_hours,
                "",
            ],
        ]
        return rows

    def _day_rows(self, day: DayRecord) -> List[Row]:
        day_cells = [
            day.date,
            day.day_of_week,
            format_decimal_hours(day.total_minutes),
            format_decimal_hours(day.net_minutes),
            _yes_no(day.is_on_call),
        ]
        blank_day = [""] * len(DAY_COLUMNS)

        jobs = day.non_empty_jobs()
        if not jobs:
            return [day_cells + [""] * len(JOB_COLUMNS)]

        return [
            (day_cells if index == 0 else blank_day) + _job_cells(job)
            for index, job in enumerate(jobs)
        ]

    def daily_csv(self, date: DateKey) -> str:
        """CSV text for one day."""
        return render_rows(self.daily_rows(date))

    def weekly_csv(self, start_date: DateKey, end_date: DateKey) -> str:
        """CSV text for an inclusive date range."""
        return render_rows(self.weekly_rows(start_date, end_date))

    def daily_filename(self, date: DateKey) -> str:
        return export_filename(self.store.employee_name, str(date))

    def weekly_filename(self, start_date: DateKey, end_date: DateKey) -> str:
        return export_filename(self.store.employee_name, str(start_date), str(end_date))

    @staticmethod
    def save(path: Union[str, Path], content: str) -> Path:
        """Write generated text (CSV or report) to a local file.

        Args:
            path: Destination file; parent directories are created

        Returns:
            The written path
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        logger.info(f"Wrote {len(content)} characters to {target}")
        return target
