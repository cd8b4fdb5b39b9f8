"""Soft checks on a day's job entries.

The engine accepts anything a user types: malformed times count as 0
minutes and out-of-order times clamp to 0. These checks explain such
cases after the fact so a caller can surface them.
"""

import logging
from typing import Any, Dict, Optional

from timesheet_engine.calculators.duration_calculator import (
    calculate_segment_minutes,
    calculate_span_minutes,
)
from timesheet_engine.calculators.time_utils import is_valid_clock_time, time_to_minutes
from timesheet_engine.models.day import DayRecord
from timesheet_engine.models.job import TIME_FIELDS, JobEntry
from timesheet_engine.validators.validation_report import ValidationReport

logger = logging.getLogger(__name__)


def _context(day: DayRecord, job: JobEntry) -> Dict[str, Any]:
    return {"date": day.date, "job": job.job_number or job.id[:8]}


def validate_job(day: DayRecord, job: JobEntry, report: ValidationReport) -> None:
    """Check one job's clock times."""
    if job.is_empty:
        return
    context = _context(day, job)

    previous_field: Optional[str] = None
    for field in TIME_FIELDS:
        value = getattr(job, field)
        if not value:
            continue
        if not is_valid_clock_time(value):
            report.add_warning(
                field, "Unrecognized time, counted as 0 minutes", value, context
            )
            continue
        if previous_field is not None:
            previous = getattr(job, previous_field)
            if time_to_minutes(value) < time_to_minutes(previous):
                report.add_warning(
                    field,
                    f"Earlier than {previous_field} ({previous}); "
                    f"overnight segments count as 0 minutes",
                    value,
                    context,
                )
        previous_field = field

    segment = calculate_segment_minutes(job)
    span = calculate_span_minutes(job)
    if span > segment:
        report.add_info(
            "total_minutes",
            f"Missing times leave {span - segment} minute(s) between the first "
            f"and last entry uncounted",
            segment,
            context,
        )


def validate_day(day: DayRecord, max_jobs: int = 12) -> ValidationReport:
    """Run all soft checks on a day.

    Args:
        day: Day to inspect
        max_jobs: Job capacity of the store the day belongs to

    Returns:
        ValidationReport; never raises for bad entries
    """
    report = ValidationReport()

    for job in day.jobs:
        validate_job(day, job, report)

    if len(day.jobs) >= max_jobs:
        report.add_info(
            "jobs",
            f"Day is at the maximum of {max_jobs} jobs",
            len(day.jobs),
            {"date": day.date},
        )

    if report.issues:
        logger.debug(f"Validation of {day.date}: {report.summary()}")
    return report
