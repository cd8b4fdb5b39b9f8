"""Day record and timesheet header models.

A DayRecord holds one calendar day's jobs, its on-call flag and the
derived daily totals. The weekday is derived from the date key and is
never stored.
"""

from typing import List, Optional

from pydantic import Field, field_validator

from timesheet_engine.calculators.time_utils import day_of_week, parse_iso_date
from timesheet_engine.models.base import BaseDataModel
from timesheet_engine.models.job import JobEntry

DEFAULT_JOB_COUNT = 3


class TimesheetHeader(BaseDataModel):
    """Employee and truck details shared by every day of a timesheet.

    Attributes:
        employee_name: Name of the field-service employee
        truck_number: Truck assigned to the employee
    """

    employee_name: str = Field("", description="Employee name")
    truck_number: str = Field("", description="Truck number")

    @field_validator("employee_name", "truck_number", mode="before")
    @classmethod
    def normalize_text(cls, v: Optional[str]) -> str:
        """Coerce None to "" and strip surrounding whitespace."""
        return "" if v is None else str(v).strip()


class DayRecord(BaseDataModel):
    """Represents one calendar day of a timesheet.

    Attributes:
        date: ISO date key (YYYY-MM-DD)
        is_on_call: On-call days are exempt from the travel deduction
        jobs: Ordered job entries
        total_minutes: Derived sum of job minutes
        net_minutes: Derived minutes after deductions

    Example:
        >>> day = DayRecord.default("2024-06-10")
        >>> day.day_of_week
        'Monday'
        >>> len(day.jobs)
        3
    """

    date: str = Field(..., description="ISO date (YYYY-MM-DD)")
    is_on_call: bool = Field(False, description="On-call day flag")
    jobs: List[JobEntry] = Field(default_factory=list)
    total_minutes: int = Field(0, ge=0, description="Derived total minutes")
    net_minutes: int = Field(0, ge=0, description="Derived net minutes")

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v) -> str:
        """Ensure the date key is a valid zero-padded ISO date."""
        parsed = parse_iso_date(v)
        if parsed is None:
            raise ValueError(f"date must be a valid YYYY-MM-DD string, got {v!r}")
        return parsed.isoformat()

    @classmethod
    def default(cls, date: str, job_count: int = DEFAULT_JOB_COUNT) -> "DayRecord":
        """Create the record shown for a date that has no stored data yet."""
        return cls(date=date, jobs=[JobEntry.create() for _ in range(job_count)])

    @property
    def day_of_week(self) -> str:
        """Full weekday name of the record's date."""
        return day_of_week(self.date)

    def find_job(self, job_id: str) -> Optional[JobEntry]:
        """Look up a job by id."""
        for job in self.jobs:
            if job.id == job_id:
                return job
        return None

    def non_empty_jobs(self) -> List[JobEntry]:
        """Jobs with at least one authored field set, in order."""
        return [job for job in self.jobs if not job.is_empty]

    @property
    def has_entries(self) -> bool:
        """True when at least one job carries data."""
        return any(not job.is_empty for job in self.jobs)
