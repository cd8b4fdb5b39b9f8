"""Prompt text assembly for daily and weekly timesheet summaries.

The assembled text is deterministic for a given store state, so the same
data always yields the same prompt. It is handed to the summarization
service (or shown as-is) and the engine does nothing further with it.
"""

import logging
from typing import List

from timesheet_engine.aggregators.timesheet_store import DateKey, TimesheetStore
from timesheet_engine.aggregators.weekly_hours_calculator import (
    WeeklyHoursCalculator,
    WeeklySummary,
)
from timesheet_engine.calculators.time_utils import format_decimal_hours
from timesheet_engine.models.day import DayRecord
from timesheet_engine.models.job import JobEntry
from timesheet_engine.models.summary import SummaryDay, SummaryJob, SummaryRequest

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"

DAILY_INSTRUCTIONS = [
    "Generate a concise daily timesheet summary based on the following information.",
    "",
    "**Instructions for AI:**",
    "- Format the output as a simple, easy-to-read text block or bulleted list.",
    "- ABSOLUTELY NO TABLES, MARKDOWN TABLES, OR ASCII ART TABLES.",
    "- Focus on clarity and readability for an email.",
]

WEEKLY_INSTRUCTIONS = [
    "Generate a comprehensive weekly timesheet summary for payroll based on "
    "the following daily information.",
    "",
    "**Instructions for AI:**",
    "- Format the output as a simple, easy-to-read text block or bulleted list.",
    "- ABSOLUTELY NO TABLES, MARKDOWN TABLES, OR ASCII ART TABLES.",
    "- Focus on clarity and readability for an email.",
    "- Ensure all time entries (Travel Start, Work Start, Work Finish, "
    "Travel Home Arrival) are explicitly listed for each job.",
    '- Clearly state if a day was "On-Call" and explain the travel deduction '
    "rule for on-call days in the final summary.",
]

ON_CALL_FOOTNOTE = (
    'Note on Travel Deduction: For days marked as "On-Call", the standard '
    "1-hour travel time deduction is NOT applied to the Net Working Hours "
    "calculation."
)


def _or_na(value: str) -> str:
    return value or NOT_AVAILABLE


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def _job_lines(job: JobEntry, indent: str, total_label: str) -> List[str]:
    return [
        f"{indent}- Job Number: {_or_na(job.job_number)}",
        f"{indent}  Location: {_or_na(job.job_location)}",
        f"{indent}  Travel Start: {_or_na(job.travel_start_time)}",
        f"{indent}  Work Start: {_or_na(job.work_start_time)}",
        f"{indent}  Work Finish: {_or_na(job.work_finish_time)}",
        f"{indent}  Travel Home Arrival: {_or_na(job.travel_home_time)}",
        f"{indent}  {total_label}: {format_decimal_hours(job.total_minutes)} Hrs",
        "",
    ]


def _summary_day(day: DayRecord) -> SummaryDay:
    return SummaryDay(
        date=day.date,
        day_of_week=day.day_of_week,
        is_on_call=day.is_on_call,
        total_hours=format_decimal_hours(day.total_minutes),
        net_hours=format_decimal_hours(day.net_minutes),
        jobs=[
            SummaryJob(
                job_number=job.job_number,
                job_location=job.job_location,
                travel_start_time=job.travel_start_time,
                work_start_time=job.work_start_time,
                work_finish_time=job.work_finish_time,
                travel_home_time=job.travel_home_time,
                hours=format_decimal_hours(job.total_minutes),
            )
            for job in day.non_empty_jobs()
        ],
    )


class PromptBuilder:
    """Builds summary prompts and payloads from a timesheet store.

    Example:
        >>> builder = PromptBuilder(store)
        >>> print(builder.build_daily_prompt("2024-06-10"))
    """

    def __init__(self, store: TimesheetStore):
        self.store = store

    def build_daily_prompt(self, date: DateKey) -> str:
        """Assemble the daily summary prompt for one date.

        A date without stored data renders as its default (empty) day.
        """
        day = self.store.get_or_default(date)

        lines = list(DAILY_INSTRUCTIONS)
        lines += [
            "",
            f"Employee Name: {_or_na(self.store.employee_name)}",
            f"Truck Number: {_or_na(self.store.truck_number)}",
            f"Date: {day.date}",
            f"Day of Week: {_or_na(day.day_of_week)}",
            f"On-Call Day: {_yes_no(day.is_on_call)}",
            "",
            "Job Details:",
        ]

        jobs = day.non_empty_jobs()
        if not jobs:
            lines.append("No job entries for this day.")
        else:
            lines.append("Jobs for today:")
            for job in jobs:
                lines += _job_lines(job, indent="", total_label="Total Time for Job")

        lines += [
            "",
            f"Summary for {day.day_of_week}, {day.date}:",
            f"Total Hours for All Jobs: {format_decimal_hours(day.total_minutes)} Hrs",
            f"Net Working Hours: {format_decimal_hours(day.net_minutes)} Hrs",
        ]
        return "\n".join(lines) + "\n"

    def build_weekly_prompt(self, start_date: DateKey, end_date: DateKey) -> str:
        """Assemble the weekly payroll prompt for an inclusive date range."""
        summary = WeeklyHoursCalculator(self.store).calculate(start_date, end_date)
        return self._render_weekly(summary)

    def build_daily_request(self, date: DateKey) -> SummaryRequest:
        """Structured payload for a daily summary."""
        day = self.store.get_or_default(date)
        return SummaryRequest(
            kind="daily",
            employee_name=self.store.employee_name,
            truck_number=self.store.truck_number,
            start_date=day.date,
            end_date=day.date,
            days=[_summary_day(day)],
            total_hours=format_decimal_hours(day.total_minutes),
            net_hours=format_decimal_hours(day.net_minutes),
            prompt=self.build_daily_prompt(day.date),
        )

    def build_weekly_request(
        self, start_date: DateKey, end_date: DateKey
    ) -> SummaryRequest:
        """Structured payload for a weekly summary."""
        summary = WeeklyHoursCalculator(self.store).calculate(start_date, end_date)
        return SummaryRequest(
            kind="weekly",
            employee_name=self.store.employee_name,
            truck_number=self.store.truck_number,
            start_date=summary.start_date,
            end_date=summary.end_date,
            days=[_summary_day(day) for day in summary.days],
            total_hours=summary.total_hours,
            net_hours=summary.net_hours,
            prompt=self._render_weekly(summary),
        )

    def _render_weekly(self, summary: WeeklySummary) -> str:
        lines = list(WEEKLY_INSTRUCTIONS)
        lines += [
            "",
            f"Employee Name: {_or_na(self.store.employee_name)}",
            f"Truck Number: {_or_na(self.store.truck_number)}",
            f"Week of: {summary.start_date} to {summary.end_date}",
            "",
            "--- Daily Breakdown ---",
        ]

        if summary.is_empty:
            lines.append("No timesheet data entered for the selected week.")

        for day in summary.days:
            lines += [
                "",
                f"{day.day_of_week}, {day.date}:",
                f"  Total Hours: {format_decimal_hours(day.total_minutes)} Hrs",
                f"  Net Working Hours: {format_decimal_hours(day.net_minutes)} Hrs",
                f"  On-Call Day: {_yes_no(day.is_on_call)}",
            ]
            jobs = day.non_empty_jobs()
            if not jobs:
                lines.append("  Jobs: No job entries recorded.")
                continue
            lines.append("  Jobs:")
            for job in jobs:
                lines += _job_lines(job, indent="    ", total_label="Total for job")

        lines += [
            "",
            "--- Overall Weekly Summary ---",
            f"Total Hours for the Week: {summary.total_hours} Hrs",
            f"Total Net Working Hours for the Week: {summary.net_hours} Hrs",
            "",
            ON_CALL_FOOTNOTE,
        ]
        logger.debug(
            f"Built weekly prompt for {summary.start_date} to {summary.end_date} "
            f"covering {len(summary.days)} day(s)"
        )
        return "\n".join(lines) + "\n"
