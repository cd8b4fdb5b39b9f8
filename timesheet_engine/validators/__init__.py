"""Soft validation of timesheet days."""

from timesheet_engine.validators.day_validator import validate_day, validate_job
from timesheet_engine.validators.validation_report import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
)

__all__ = [
    "ValidationIssue",
    "ValidationReport",
    "ValidationSeverity",
    "validate_day",
    "validate_job",
]
