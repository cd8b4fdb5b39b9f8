"""Daily totals for a timesheet day.

Recomputation is a pure function of a day's jobs and on-call flag. The
store calls recalculate_day() after every mutation instead of keeping
incremental state.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from timesheet_engine.calculators.deduction_calculator import (
    DEFAULT_RULES,
    DeductionRules,
    calculate_net_minutes,
)
from timesheet_engine.calculators.duration_calculator import (
    DurationPolicy,
    calculate_job_minutes,
)
from timesheet_engine.models.day import DayRecord
from timesheet_engine.models.job import JobEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayTotals:
    """Derived totals for one day.

    Attributes:
        total_minutes: Sum of job minutes
        net_minutes: Total after travel/lunch deductions
    """

    total_minutes: int
    net_minutes: int


def calculate_day_totals(
    jobs: Iterable[JobEntry],
    is_on_call: bool,
    policy: DurationPolicy = DurationPolicy.SEGMENT,
    rules: DeductionRules = DEFAULT_RULES,
) -> DayTotals:
    """Calculate a day's total and net minutes without mutating anything.

    Args:
        jobs: Jobs of the day
        is_on_call: On-call flag of the day
        policy: Duration policy for each job
        rules: Deduction rules for net minutes

    Returns:
        DayTotals for the day

    Example:
        >>> from timesheet_engine.models.job import JobEntry
        >>> job = JobEntry(travel_start_time="08:00", work_start_time="08:30",
        ...                work_finish_time="16:30", travel_home_time="17:00")
        >>> calculate_day_totals([job], is_on_call=False)
        DayTotals(total_minutes=540, net_minutes=450)
    """
    total_minutes = sum(calculate_job_minutes(job, policy) for job in jobs)
    net_minutes = calculate_net_minutes(total_minutes, is_on_call, rules)
    return DayTotals(total_minutes=total_minutes, net_minutes=net_minutes)


def recalculate_day(
    day: DayRecord,
    policy: DurationPolicy = DurationPolicy.SEGMENT,
    rules: DeductionRules = DEFAULT_RULES,
) -> DayRecord:
    """Refresh every derived field of a day record in place.

    Each job's total_minutes is recomputed first, then the day's totals.

    Returns:
        The same DayRecord, for chaining
    """
    for job in day.jobs:
        job.total_minutes = calculate_job_minutes(job, policy)

    totals = calculate_day_totals(day.jobs, day.is_on_call, policy, rules)
    day.total_minutes = totals.total_minutes
    day.net_minutes = totals.net_minutes

    logger.debug(
        f"Recalculated {day.date}: total={totals.total_minutes}min "
        f"net={totals.net_minutes}min on_call={day.is_on_call}"
    )
    return day
