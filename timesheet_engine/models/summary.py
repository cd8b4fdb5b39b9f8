"""Structured payload handed to the summarization service.

The payload carries both the structured facts (employee, dates, jobs,
totals) and the fully assembled prompt text sent to the model.
"""

from typing import Any, Dict, List, Literal

from pydantic import Field

from timesheet_engine.models.base import BaseDataModel


class SummaryJob(BaseDataModel):
    """One non-empty job as it appears in a report."""

    job_number: str = ""
    job_location: str = ""
    travel_start_time: str = ""
    work_start_time: str = ""
    work_finish_time: str = ""
    travel_home_time: str = ""
    hours: str = "0.00"


class SummaryDay(BaseDataModel):
    """One day block of a report."""

    date: str
    day_of_week: str
    is_on_call: bool = False
    total_hours: str = "0.00"
    net_hours: str = "0.00"
    jobs: List[SummaryJob] = Field(default_factory=list)


class SummaryRequest(BaseDataModel):
    """A daily or weekly summary request.

    Attributes:
        kind: "daily" or "weekly"
        employee_name: Employee from the timesheet header
        truck_number: Truck from the timesheet header
        start_date: First date covered
        end_date: Last date covered (equal to start_date for daily)
        days: Day blocks included in the report
        total_hours: Grand total hours
        net_hours: Grand net hours
        prompt: Assembled prompt text
    """

    kind: Literal["daily", "weekly"]
    employee_name: str = ""
    truck_number: str = ""
    start_date: str
    end_date: str
    days: List[SummaryDay] = Field(default_factory=list)
    total_hours: str = "0.00"
    net_hours: str = "0.00"
    prompt: str = Field(..., min_length=1)

    def to_api_payload(self) -> Dict[str, Any]:
        """Request body for a generateContent call."""
        return {"contents": [{"role": "user", "parts": [{"text": self.prompt}]}]}
