"""Job entry data model.

A JobEntry is one row of a field-service day: a job number and location
plus four optional clock times (travel start, work start, work finish,
travel home arrival).
"""

import uuid
from typing import Optional, Tuple

from pydantic import Field, field_validator

from timesheet_engine.models.base import BaseDataModel

LABEL_FIELDS: Tuple[str, ...] = ("job_number", "job_location")
TIME_FIELDS: Tuple[str, ...] = (
    "travel_start_time",
    "work_start_time",
    "work_finish_time",
    "travel_home_time",
)
EDITABLE_FIELDS: Tuple[str, ...] = LABEL_FIELDS + TIME_FIELDS


def _new_job_id() -> str:
    return uuid.uuid4().hex


class JobEntry(BaseDataModel):
    """Represents a single job worked on a day.

    Time fields are "" when unset, otherwise an "HH:MM" 24-hour clock
    string. Malformed strings are kept as entered; the duration engine
    treats them as 0 minutes.

    Attributes:
        id: Opaque identifier, fixed at creation
        job_number: Free-text job number
        job_location: Free-text job location
        travel_start_time: When travel to the job started
        work_start_time: When work on site started
        work_finish_time: When work on site finished
        travel_home_time: When the worker arrived home
        total_minutes: Derived duration; set by the engine, never by callers

    Example:
        >>> job = JobEntry.create()
        >>> job.is_empty
        True
        >>> job.total_minutes
        0
    """

    id: str = Field(default_factory=_new_job_id, frozen=True, min_length=1)
    job_number: str = Field("", description="Job number")
    job_location: str = Field("", description="Job location")
    travel_start_time: str = Field("", description="Travel start (HH:MM)")
    work_start_time: str = Field("", description="Work start (HH:MM)")
    work_finish_time: str = Field("", description="Work finish (HH:MM)")
    travel_home_time: str = Field("", description="Travel home arrival (HH:MM)")
    total_minutes: int = Field(0, ge=0, description="Derived job duration")

    @field_validator(*EDITABLE_FIELDS, mode="before")
    @classmethod
    def normalize_text(cls, v: Optional[str]) -> str:
        """Coerce None to "" and strip surrounding whitespace."""
        if v is None:
            return ""
        if not isinstance(v, str):
            raise ValueError("value must be a string")
        return v.strip()

    @classmethod
    def create(cls) -> "JobEntry":
        """Create an empty job with a fresh id."""
        return cls()

    @property
    def is_empty(self) -> bool:
        """True when none of the six authored fields is set."""
        return not any(getattr(self, name) for name in EDITABLE_FIELDS)

    def time_values(self) -> Tuple[str, str, str, str]:
        """The four clock-time fields in chronological field order."""
        return (
            self.travel_start_time,
            self.work_start_time,
            self.work_finish_time,
            self.travel_home_time,
        )
