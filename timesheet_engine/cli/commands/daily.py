"""Daily report command."""

import datetime as dt
from pathlib import Path
from typing import Optional, Tuple

import click

from timesheet_engine.calculators.time_utils import format_decimal_hours, parse_iso_date
from timesheet_engine.cli.error_handlers import (
    APIError,
    DataValidationError,
    with_error_handling,
)
from timesheet_engine.cli.utils.formatters import (
    format_info,
    format_success,
    format_table,
)
from timesheet_engine.cli.utils.timesheet_input import (
    JOB_SPEC_HELP,
    build_store,
    echo_validation,
    open_report_session,
    parse_job_spec,
)
from timesheet_engine.config.settings import get_config
from timesheet_engine.models.day import DayRecord
from timesheet_engine.reports.prompt_builder import PromptBuilder
from timesheet_engine.writers.csv_report_writer import JOB_COLUMNS, TimesheetCsvWriter


def job_rows(day: DayRecord):
    return [
        [
            job.job_number,
            job.job_location,
            job.travel_start_time,
            job.work_start_time,
            job.work_finish_time,
            job.travel_home_time,
            format_decimal_hours(job.total_minutes),
        ]
        for job in day.non_empty_jobs()
    ]


@click.command(name="daily-report")
@click.option(
    "--date",
    "date_text",
    type=str,
    default=None,
    help="Report date (YYYY-MM-DD). Defaults to today.",
)
@click.option("--employee", type=str, default=None, help="Employee name")
@click.option("--truck", type=str, default=None, help="Truck number")
@click.option("--job", "job_specs", multiple=True, help=JOB_SPEC_HELP)
@click.option("--on-call", is_flag=True, help="Mark the day as on-call")
@click.option(
    "--csv",
    "csv_path",
    type=click.Path(),
    default=None,
    help="CSV output file, or an existing directory to use the default filename",
)
@click.option(
    "--summarize", is_flag=True, help="Send the day to the summarization service"
)
@click.option("--show-prompt", is_flag=True, help="Print the assembled report prompt")
@click.option("--debug", is_flag=True, help="Show full stack traces on errors")
def daily_report(
    date_text: Optional[str],
    employee: Optional[str],
    truck: Optional[str],
    job_specs: Tuple[str, ...],
    on_call: bool,
    csv_path: Optional[str],
    summarize: bool,
    show_prompt: bool,
    debug: bool,
):
    """Compute hours for one day and optionally export or summarize it.

    Example:
        timesheet-cli daily-report --date 2024-06-10 --employee "Jane Doe" \\
            --job "2024-06-10,J-1,Depot,08:00,08:30,16:30,17:00" --csv day.csv
    """
    with with_error_handling(debug):
        report_date = dt.date.today() if date_text is None else parse_iso_date(date_text)
        if report_date is None:
            raise DataValidationError(
                f"Invalid date: {date_text}", "Use the YYYY-MM-DD format"
            )
        date = report_date.isoformat()

        jobs = [parse_job_spec(spec) for spec in job_specs]
        stray = sorted({job_date for job_date, _ in jobs if job_date != date})
        if stray:
            raise DataValidationError(
                f"Jobs dated {', '.join(stray)} do not belong to {date}"
            )

        settings = get_config()
        store = build_store(
            settings, employee, truck, jobs, on_call_dates=[date] if on_call else []
        )
        day = store.get_or_default(date)

        click.echo(format_info(f"{day.day_of_week}, {date}"))
        click.echo(format_table(JOB_COLUMNS, job_rows(day)))
        click.echo(f"Total Hours:       {format_decimal_hours(day.total_minutes)}")
        click.echo(f"Net Working Hours: {format_decimal_hours(day.net_minutes)}")
        click.echo(f"On-Call Day:       {'Yes' if day.is_on_call else 'No'}")
        echo_validation([day], store.max_jobs)

        if show_prompt:
            click.echo()
            click.echo(PromptBuilder(store).build_daily_prompt(date))

        if csv_path:
            writer = TimesheetCsvWriter(store)
            path = Path(csv_path)
            if path.is_dir():
                path = path / writer.daily_filename(date)
            target = writer.save(path, writer.daily_csv(date))
            click.echo(format_success(f"CSV written to {target}"))

        if summarize:
            session = open_report_session(store, settings)
            text = session.generate_daily_report(date)
            if text is None:
                raise APIError(session.error_message)
            click.echo()
            click.echo(format_success("Daily report generated"))
            click.echo(text)
