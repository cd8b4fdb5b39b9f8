"""Timesheet CLI.

Command-line interface for computing field-service timesheet hours and
producing daily and weekly reports.
"""

import click

from timesheet_engine import __version__
from timesheet_engine.cli.commands.daily import daily_report
from timesheet_engine.cli.commands.weekly import weekly_report
from timesheet_engine.config.logging_config import LoggingConfig, configure_logging
from timesheet_engine.config.settings import get_config


@click.group(
    help="Timesheet CLI - Compute job hours and build daily and weekly reports"
)
@click.version_option(version=__version__)
@click.option(
    "--log-format",
    type=click.Choice(["standard", "json"]),
    default="standard",
    help="Log output format",
)
def cli(log_format: str):
    """Timesheet CLI main entry point."""
    configure_logging(LoggingConfig.from_settings(get_config(), log_format=log_format))


cli.add_command(daily_report)
cli.add_command(weekly_report)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
