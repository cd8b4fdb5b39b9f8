"""Weekly report command."""

from pathlib import Path
from typing import Optional, Tuple

import click

from timesheet_engine.aggregators.weekly_hours_calculator import WeeklyHoursCalculator
from timesheet_engine.calculators.time_utils import (
    format_decimal_hours,
    parse_iso_date,
    week_bounds,
)
from timesheet_engine.cli.error_handlers import (
    APIError,
    DataValidationError,
    with_error_handling,
)
from timesheet_engine.cli.utils.formatters import (
    format_info,
    format_success,
    format_table,
    format_warning,
)
from timesheet_engine.cli.utils.timesheet_input import (
    JOB_SPEC_HELP,
    build_store,
    echo_validation,
    open_report_session,
    parse_job_spec,
)
from timesheet_engine.config.settings import get_config
from timesheet_engine.reports.prompt_builder import PromptBuilder
from timesheet_engine.writers.csv_report_writer import TimesheetCsvWriter

DAY_TABLE_HEADERS = ["Date", "Day of Week", "Jobs", "Total Hours", "Net Hours", "On-Call"]


def _checked_date(value: str, option: str) -> str:
    parsed = parse_iso_date(value)
    if parsed is None:
        raise DataValidationError(
            f"Invalid {option}: {value}", "Use the YYYY-MM-DD format"
        )
    return parsed.isoformat()


@click.command(name="weekly-report")
@click.option("--start", "start_text", default=None, help="First day (YYYY-MM-DD)")
@click.option("--end", "end_text", default=None, help="Last day (YYYY-MM-DD)")
@click.option("--employee", type=str, default=None, help="Employee name")
@click.option("--truck", type=str, default=None, help="Truck number")
@click.option("--job", "job_specs", multiple=True, help=JOB_SPEC_HELP)
@click.option(
    "--on-call-date",
    "on_call_dates",
    multiple=True,
    help="Date (YYYY-MM-DD) to mark as on-call. Repeatable.",
)
@click.option(
    "--csv",
    "csv_path",
    type=click.Path(),
    default=None,
    help="CSV output file, or an existing directory to use the default filename",
)
@click.option(
    "--summarize", is_flag=True, help="Send the week to the summarization service"
)
@click.option(
    "--email",
    "recipient",
    default=None,
    help="Compose a mailto link for the generated report (requires --summarize)",
)
@click.option("--show-prompt", is_flag=True, help="Print the assembled report prompt")
@click.option("--debug", is_flag=True, help="Show full stack traces on errors")
def weekly_report(
    start_text: Optional[str],
    end_text: Optional[str],
    employee: Optional[str],
    truck: Optional[str],
    job_specs: Tuple[str, ...],
    on_call_dates: Tuple[str, ...],
    csv_path: Optional[str],
    summarize: bool,
    recipient: Optional[str],
    show_prompt: bool,
    debug: bool,
):
    """Aggregate hours over a date range (Monday to Sunday of this week by default).

    Only days that received a job or an on-call flag are reported.

    Example:
        timesheet-cli weekly-report --start 2024-06-10 --end 2024-06-16 \\
            --job "2024-06-10,J-1,Depot,08:00,08:30,16:30,17:00" \\
            --on-call-date 2024-06-12 --summarize --email payroll@example.com
    """
    with with_error_handling(debug):
        default_start, default_end = week_bounds()
        start = _checked_date(start_text, "start date") if start_text else default_start
        end = _checked_date(end_text, "end date") if end_text else default_end
        if start > end:
            raise DataValidationError("Start date must be before or equal to end date")

        settings = get_config()
        store = build_store(
            settings,
            employee,
            truck,
            [parse_job_spec(spec) for spec in job_specs],
            on_call_dates,
        )

        summary = WeeklyHoursCalculator(store).calculate(start, end)
        click.echo(format_info(f"Week of {start} to {end}"))
        if summary.is_empty:
            click.echo(format_warning("No timesheet data entered for the selected week"))
        else:
            rows = [
                [
                    day.date,
                    day.day_of_week,
                    len(day.non_empty_jobs()),
                    format_decimal_hours(day.total_minutes),
                    format_decimal_hours(day.net_minutes),
                    "Yes" if day.is_on_call else "No",
                ]
                for day in summary.days
            ]
            click.echo(format_table(DAY_TABLE_HEADERS, rows))
        click.echo(f"Total Hours for the Week:       {summary.total_hours}")
        click.echo(f"Net Working Hours for the Week: {summary.net_hours}")
        echo_validation(summary.days, store.max_jobs)

        if show_prompt:
            click.echo()
            click.echo(PromptBuilder(store).build_weekly_prompt(start, end))

        if csv_path:
            writer = TimesheetCsvWriter(store)
            path = Path(csv_path)
            if path.is_dir():
                path = path / writer.weekly_filename(start, end)
            target = writer.save(path, writer.weekly_csv(start, end))
            click.echo(format_success(f"CSV written to {target}"))

        if not summarize:
            if recipient:
                raise DataValidationError(
                    "Please generate the weekly report first before sharing.",
                    "Add --summarize to generate the report",
                )
            return

        session = open_report_session(store, settings)
        text = session.generate_weekly_report(start, end)
        if text is None:
            raise APIError(session.error_message)
        click.echo()
        click.echo(format_success("Weekly report generated"))
        click.echo(text)

        if recipient:
            draft = session.share_weekly_report_via_email(recipient)
            click.echo()
            click.echo(format_info(f"Subject: {draft.subject}"))
            click.echo(draft.mailto_url)
