"""Seeding a timesheet store from command-line options."""

import csv
import logging
from typing import Dict, Iterable, List, Optional, Tuple

import click

from timesheet_engine.aggregators.timesheet_store import TimesheetStore
from timesheet_engine.calculators.time_utils import parse_iso_date
from timesheet_engine.cli.error_handlers import (
    ConfigurationError,
    DataValidationError,
)
from timesheet_engine.cli.utils.formatters import format_info, format_warning
from timesheet_engine.config.settings import TimesheetSettings
from timesheet_engine.models.day import DayRecord
from timesheet_engine.models.job import EDITABLE_FIELDS
from timesheet_engine.reports.report_session import ReportSession
from timesheet_engine.services.summary_service import SummaryService
from timesheet_engine.validators.day_validator import validate_day
from timesheet_engine.validators.validation_report import ValidationSeverity

logger = logging.getLogger(__name__)

JOB_SPEC_HELP = (
    "Job as DATE,NUMBER,LOCATION,TRAVEL_START,WORK_START,WORK_FINISH,TRAVEL_HOME "
    '(CSV quoting allowed, e.g. 2024-06-10,J-1,"Main St, Unit 4",08:00,08:30,16:30,17:00). '
    "Trailing times may be omitted. Repeat for more jobs."
)

JobSpec = Tuple[str, Dict[str, str]]


def parse_job_spec(spec: str) -> JobSpec:
    """Split a --job value into its date and editable fields.

    Example:
        >>> parse_job_spec('2024-06-10,J-1,"Main St, Unit 4",08:00,08:30')
        ('2024-06-10', {'job_number': 'J-1', 'job_location': 'Main St, Unit 4',
         'travel_start_time': '08:00', 'work_start_time': '08:30'})

    Raises:
        DataValidationError: If the date is invalid or there are too many values
    """
    values = next(csv.reader([spec], skipinitialspace=True), [])
    if not values:
        raise DataValidationError("Empty job specification")

    date = parse_iso_date(values[0].strip())
    if date is None:
        raise DataValidationError(
            f"Invalid job date {values[0]!r} in {spec!r}",
            "Use the YYYY-MM-DD format",
        )

    cells = values[1:]
    if len(cells) > len(EDITABLE_FIELDS):
        raise DataValidationError(
            f"Too many values in job {spec!r}: expected at most "
            f"{len(EDITABLE_FIELDS) + 1}"
        )
    return date.isoformat(), dict(zip(EDITABLE_FIELDS, (c.strip() for c in cells)))


def build_store(
    settings: TimesheetSettings,
    employee: Optional[str],
    truck: Optional[str],
    jobs: Iterable[JobSpec],
    on_call_dates: Iterable[str] = (),
) -> TimesheetStore:
    """Create a store and apply header, jobs and on-call flags.

    Jobs fill a day's default rows first; further jobs are appended.

    Raises:
        DataValidationError: If a day receives more jobs than it can hold
    """
    store = TimesheetStore.from_settings(settings)
    store.set_employee_name(employee)
    store.set_truck_number(truck)

    used: Dict[str, int] = {}
    for date, fields in jobs:
        index = used.get(date, 0)
        day = store.get_or_default(date)
        if index < len(day.jobs):
            job_id = day.jobs[index].id
        else:
            job = store.add_job(date)
            if job is None:
                raise DataValidationError(
                    f"Too many jobs for {date}: maximum is {store.max_jobs}"
                )
            job_id = job.id
        store.update_job(date, job_id, **fields)
        used[date] = index + 1

    for date in on_call_dates:
        parsed = parse_iso_date(date)
        if parsed is None:
            raise DataValidationError(f"Invalid on-call date {date!r}")
        store.set_on_call(parsed, True)

    logger.info(f"Seeded store with {len(store)} day(s)")
    return store


def echo_validation(days: List[DayRecord], max_jobs: int) -> int:
    """Print soft validation findings for the given days.

    Returns:
        Number of findings printed
    """
    count = 0
    for day in days:
        report = validate_day(day, max_jobs)
        for issue in report.issues:
            formatter = (
                format_info
                if issue.severity == ValidationSeverity.INFO
                else format_warning
            )
            click.echo(formatter(str(issue)))
            count += 1
    return count


def open_report_session(
    store: TimesheetStore, settings: TimesheetSettings
) -> ReportSession:
    """Report session backed by the configured summarization service.

    Raises:
        ConfigurationError: If no summarization API key is configured
    """
    service = SummaryService.from_settings(settings)
    if not service.is_configured:
        raise ConfigurationError(
            "Summarization API key is not configured",
            "Set SUMMARY_API_KEY in the environment or .env file",
        )
    return ReportSession(store, service=service)
