"""Data models for the timesheet engine.

This package contains Pydantic models for all timesheet entities:
- BaseDataModel: Base class with common configuration
- JobEntry: One job worked on a day
- DayRecord: One calendar day with its jobs and derived totals
- TimesheetHeader: Employee and truck shared by all days
- SummaryRequest: Structured payload for the summarization service
"""

from timesheet_engine.models.base import BaseDataModel
from timesheet_engine.models.day import DayRecord, TimesheetHeader
from timesheet_engine.models.job import EDITABLE_FIELDS, TIME_FIELDS, JobEntry
from timesheet_engine.models.summary import SummaryDay, SummaryJob, SummaryRequest

__all__ = [
    "BaseDataModel",
    "DayRecord",
    "EDITABLE_FIELDS",
    "JobEntry",
    "SummaryDay",
    "SummaryJob",
    "SummaryRequest",
    "TIME_FIELDS",
    "TimesheetHeader",
]
