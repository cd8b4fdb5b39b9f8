"""Errors raised while producing or handing off reports.

All of them are recoverable and user-facing: their message is meant to be
shown as-is, and none of them touch timesheet data.
"""


class ReportError(Exception):
    """Base class for report generation and handoff failures."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class SummaryGenerationError(ReportError):
    """The summarization service failed or returned no usable text."""


class EmailHandoffError(ReportError):
    """An email could not be composed because a precondition is missing."""
