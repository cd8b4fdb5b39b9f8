"""CLI commands."""

from timesheet_engine.cli.commands.daily import daily_report
from timesheet_engine.cli.commands.weekly import weekly_report

__all__ = ["daily_report", "weekly_report"]
