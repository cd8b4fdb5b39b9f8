"""Error handling for CLI commands."""

import sys
import traceback
from typing import Optional

import click
from pydantic import ValidationError

from timesheet_engine.cli.utils.formatters import format_error, format_warning
from timesheet_engine.services.errors import (
    EmailHandoffError,
    ReportError,
    SummaryGenerationError,
)


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""

    exit_code = 1
    label = "Error"

    def __init__(self, message: str, recovery_hint: Optional[str] = None):
        """
        Initialize CLI error.

        Args:
            message: Error message to display
            recovery_hint: Optional hint for recovering from the error
        """
        self.message = message
        self.recovery_hint = recovery_hint
        super().__init__(message)


class ConfigurationError(CLIError):
    """Missing or invalid settings (e.g. no summarization API key)."""

    exit_code = 1
    label = "Configuration Error"


class APIError(CLIError):
    """The summarization service failed."""

    exit_code = 2
    label = "API Error"


class DataValidationError(CLIError):
    """Command-line timesheet input could not be used."""

    exit_code = 3
    label = "Data Validation Error"


class ProcessingError(CLIError):
    """Report assembly or export failed."""

    exit_code = 4
    label = "Processing Error"


def _as_cli_error(error: Exception) -> Optional[CLIError]:
    if isinstance(error, CLIError):
        return error
    if isinstance(error, SummaryGenerationError):
        return APIError(error.message, "Check SUMMARY_API_KEY and network access")
    if isinstance(error, EmailHandoffError):
        return DataValidationError(error.message)
    if isinstance(error, ReportError):
        return ProcessingError(error.message)
    if isinstance(error, (ValidationError, ValueError)):
        return DataValidationError(str(error))
    if isinstance(error, OSError):
        return ProcessingError(str(error), "Check the output path is writable")
    return None


def handle_cli_error(error: Exception, debug: bool = False) -> int:
    """
    Report an exception to the user and pick the exit code.

    Args:
        error: The exception that occurred
        debug: Whether to show the full stack trace

    Returns:
        Exit code: 1 configuration, 2 API, 3 input data, 4 processing,
        130 cancelled, 255 anything unexpected
    """
    if isinstance(error, click.Abort):
        click.echo(format_warning("\nOperation cancelled by user"))
        return 130

    cli_error = _as_cli_error(error)
    if cli_error is not None:
        click.echo(format_error(f"{cli_error.label}: {cli_error.message}"))
        if cli_error.recovery_hint:
            click.echo(format_warning(f"Hint: {cli_error.recovery_hint}"))
        return cli_error.exit_code

    click.echo(format_error(f"Unexpected Error: {type(error).__name__}"))
    click.echo(str(error))
    if debug:
        click.echo("\nFull stack trace:")
        click.echo(traceback.format_exc())
    else:
        click.echo(format_warning("\nRun with --debug flag for full stack trace"))
    return 255


def with_error_handling(debug: bool = False):
    """
    Context manager that turns exceptions into a message and exit code.

    Example:
        @click.command()
        @click.option('--debug', is_flag=True)
        def my_command(debug):
            with with_error_handling(debug):
                ...
    """

    class ErrorHandler:
        def __init__(self, show_debug: bool):
            self.show_debug = show_debug

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            if exc_val is not None and not isinstance(exc_val, click.exceptions.Exit):
                sys.exit(handle_cli_error(exc_val, self.show_debug))
            return False

    return ErrorHandler(debug)
