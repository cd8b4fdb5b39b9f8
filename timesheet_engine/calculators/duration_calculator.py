"""Job duration engine for field-service timesheets.

A job carries four optional clock times: travel start, work start, work
finish and travel home. Two duration rules exist and exactly one is used,
chosen explicitly through DurationPolicy:

- SEGMENT (default): sum of the three consecutive segments
  travel->work start, work start->work finish, work finish->home. A
  segment counts only when both of its ends are set and is clamped at 0.
- SPAN: latest minus earliest of the set times; fewer than two set times
  give 0. An unset time and literal midnight are indistinguishable here.
"""

from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from timesheet_engine.calculators.time_utils import time_to_minutes

if TYPE_CHECKING:
    from timesheet_engine.models.job import JobEntry


class DurationPolicy(str, Enum):
    """Rule used to turn a job's clock times into worked minutes."""

    SEGMENT = "segment"
    SPAN = "span"


def segment_minutes(start: Optional[str], end: Optional[str]) -> int:
    """Minutes between two clock times, 0 if either is unset or end < start.

    Example:
        >>> segment_minutes("08:00", "08:30")
        30
        >>> segment_minutes("17:00", "08:00")
        0
        >>> segment_minutes("", "08:00")
        0
    """
    if not start or not end:
        return 0
    return max(0, time_to_minutes(end) - time_to_minutes(start))


def calculate_segment_minutes(job: "JobEntry") -> int:
    """Sequential-segment duration of a job.

    Example:
        >>> from timesheet_engine.models.job import JobEntry
        >>> job = JobEntry(travel_start_time="08:00", work_start_time="08:30",
        ...                work_finish_time="16:30", travel_home_time="17:00")
        >>> calculate_segment_minutes(job)
        540
    """
    return (
        segment_minutes(job.travel_start_time, job.work_start_time)
        + segment_minutes(job.work_start_time, job.work_finish_time)
        + segment_minutes(job.work_finish_time, job.travel_home_time)
    )


def calculate_span_minutes(job: "JobEntry") -> int:
    """Span duration of a job: latest set time minus earliest set time."""
    set_minutes: List[int] = [
        minutes
        for minutes in (time_to_minutes(value) for value in job.time_values())
        if minutes != 0
    ]
    if len(set_minutes) < 2:
        return 0
    return max(set_minutes) - min(set_minutes)


def calculate_job_minutes(
    job: "JobEntry", policy: DurationPolicy = DurationPolicy.SEGMENT
) -> int:
    """Calculate a job's worked minutes under the given policy.

    Args:
        job: Job entry with clock-time fields
        policy: Duration policy to apply

    Returns:
        Non-negative minute count
    """
    if policy == DurationPolicy.SPAN:
        return calculate_span_minutes(job)
    return calculate_segment_minutes(job)
