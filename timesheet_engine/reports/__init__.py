"""Report assembly: summary prompts and the report session."""

from timesheet_engine.reports.prompt_builder import PromptBuilder
from timesheet_engine.reports.report_session import ReportSession

__all__ = ["PromptBuilder", "ReportSession"]
