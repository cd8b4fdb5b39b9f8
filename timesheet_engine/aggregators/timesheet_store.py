"""In-memory timesheet store.

The store is the aggregation root: it owns every DayRecord (and through
them every JobEntry), keyed by ISO date. Keys appear only when a day is
first edited; nothing is pre-populated and nothing is deleted.

Every mutation works on a copy of the day, recomputes the derived totals
and then swaps the copy in, so readers only ever see the state before or
after an edit. Readers get snapshots, never the stored objects.
"""

import datetime as dt
import logging
import threading
from collections import OrderedDict
from typing import Callable, Dict, List, Optional, Union

from timesheet_engine.aggregators.day_aggregator import recalculate_day
from timesheet_engine.calculators.deduction_calculator import (
    DEFAULT_RULES,
    DeductionRules,
)
from timesheet_engine.calculators.duration_calculator import DurationPolicy
from timesheet_engine.calculators.time_utils import parse_iso_date
from timesheet_engine.config.settings import TimesheetSettings
from timesheet_engine.models.day import DEFAULT_JOB_COUNT, DayRecord, TimesheetHeader
from timesheet_engine.models.job import EDITABLE_FIELDS, JobEntry
from timesheet_engine.utils.logging_utils import LogContext

logger = logging.getLogger(__name__)

MAX_JOBS_PER_DAY = 12

# Unedited days whose default record is remembered, least recently viewed
# dropped first
VIEWED_DEFAULTS_LIMIT = 64

DateKey = Union[str, dt.date]


def as_date_text(date: DateKey) -> str:
    """Render a date key as its ISO string.

    Dates and datetimes become YYYY-MM-DD; strings that are not valid ISO
    dates are returned unchanged.
    """
    parsed = parse_iso_date(date)
    if parsed is None:
        return date if isinstance(date, str) else str(date)
    return parsed.isoformat()


class TimesheetStore:
    """Mapping from calendar date to DayRecord plus a shared header.

    Attributes:
        header: Employee and truck details shared by all days
        policy: Duration policy applied to every job
        rules: Deduction rules applied to every day
        max_jobs: Capacity of a day's job list
        default_jobs: Number of empty jobs a new day starts with

    Example:
        >>> store = TimesheetStore()
        >>> day = store.get_or_default("2024-06-10")
        >>> store.has_day("2024-06-10")
        False
        >>> store.update_job("2024-06-10", day.jobs[0].id, work_start_time="08:00",
        ...                  work_finish_time="12:00").total_minutes
        240
        >>> store.dates()
        ['2024-06-10']
    """

    def __init__(
        self,
        policy: DurationPolicy = DurationPolicy.SEGMENT,
        rules: DeductionRules = DEFAULT_RULES,
        max_jobs: int = MAX_JOBS_PER_DAY,
        default_jobs: int = DEFAULT_JOB_COUNT,
        header: Optional[TimesheetHeader] = None,
    ):
        if default_jobs < 1 or default_jobs > max_jobs:
            raise ValueError(
                f"default_jobs ({default_jobs}) must be between 1 and "
                f"max_jobs ({max_jobs})"
            )

        self.header = header or TimesheetHeader()
        self.policy = policy
        self.rules = rules
        self.max_jobs = max_jobs
        self.default_jobs = default_jobs

        self._days: Dict[str, DayRecord] = {}
        # Defaults handed out for unseen dates; kept so job ids stay stable
        # between viewing a day and editing it.
        self._viewed_defaults: "OrderedDict[str, DayRecord]" = OrderedDict()
        self._revision = 0
        self._lock = threading.RLock()

    @classmethod
    def from_settings(cls, settings: TimesheetSettings) -> "TimesheetStore":
        """Create a store using the configured policy, rules and capacities."""
        return cls(
            policy=settings.duration_policy,
            rules=settings.get_deduction_rules(),
            max_jobs=settings.max_jobs_per_day,
            default_jobs=min(settings.default_jobs_per_day, settings.max_jobs_per_day),
        )

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def revision(self) -> int:
        """Counter bumped by every successful mutation."""
        return self._revision

    @property
    def employee_name(self) -> str:
        return self.header.employee_name

    @property
    def truck_number(self) -> str:
        return self.header.truck_number

    def __len__(self) -> int:
        return len(self._days)

    def __contains__(self, date: object) -> bool:
        if not isinstance(date, (str, dt.date)):
            return False
        return self.has_day(date)

    def has_day(self, date: DateKey) -> bool:
        """True when the date has been edited at least once."""
        parsed = parse_iso_date(date)
        return parsed is not None and parsed.isoformat() in self._days

    def dates(self) -> List[str]:
        """Stored date keys in ascending order."""
        with self._lock:
            return sorted(self._days)

    def get_day(self, date: DateKey) -> Optional[DayRecord]:
        """Snapshot of a stored day, or None when the date was never edited."""
        key = self._key(date)
        with self._lock:
            day = self._days.get(key)
            return day.model_copy(deep=True) if day is not None else None

    def get_or_default(self, date: DateKey) -> DayRecord:
        """Snapshot of a stored day, or the default record for an unseen date.

        The default is not persisted: has_day() stays False until an edit.
        Its job ids stay the same across views while the date is among the
        VIEWED_DEFAULTS_LIMIT most recently viewed unedited dates.
        """
        key = self._key(date)
        with self._lock:
            day = self._days.get(key)
            if day is None:
                day = self._remember_default(key)
            return day.model_copy(deep=True)

    def days_in_range(self, start_date: DateKey, end_date: DateKey) -> List[DayRecord]:
        """Stored days with start <= date <= end, sorted by date.

        Fixed-width ISO keys make string comparison equal date comparison.
        Dates never edited are not included.
        """
        start = as_date_text(start_date)
        end = as_date_text(end_date)
        with self._lock:
            return [
                self._days[key].model_copy(deep=True)
                for key in sorted(self._days)
                if start <= key <= end
            ]

    # ------------------------------------------------------------------
    # Header mutations
    # ------------------------------------------------------------------

    def set_employee_name(self, name: Optional[str]) -> None:
        with self._lock:
            self.header = TimesheetHeader(
                employee_name=name, truck_number=self.header.truck_number
            )
            self._revision += 1

    def set_truck_number(self, number: Optional[str]) -> None:
        with self._lock:
            self.header = TimesheetHeader(
                employee_name=self.header.employee_name, truck_number=number
            )
            self._revision += 1

    # ------------------------------------------------------------------
    # Day mutations
    # ------------------------------------------------------------------

    def set_on_call(self, date: DateKey, is_on_call: bool) -> DayRecord:
        """Flag or unflag a day as on-call and recompute its net hours."""

        def mutate(day: DayRecord) -> bool:
            day.is_on_call = is_on_call
            return True

        return self._apply(date, mutate)

    def set_job_field(
        self, date: DateKey, job_id: str, field: str, value: Optional[str]
    ) -> DayRecord:
        """Set one editable field of a job.

        Raises:
            ValueError: If the field is not one of the six editable fields
        """
        return self.update_job(date, job_id, **{field: value})

    def update_job(self, date: DateKey, job_id: str, **fields: Optional[str]) -> DayRecord:
        """Set several editable fields of a job in one atomic edit.

        An unknown job id leaves the store untouched.

        Raises:
            ValueError: If any field name is not editable
        """
        unknown = sorted(set(fields) - set(EDITABLE_FIELDS))
        if unknown:
            raise ValueError(
                f"Cannot edit job field(s) {unknown}; "
                f"editable fields are {list(EDITABLE_FIELDS)}"
            )

        def mutate(day: DayRecord) -> bool:
            job = day.find_job(job_id)
            if job is None:
                logger.warning(f"Job {job_id} not found on {day.date}, edit ignored")
                return False
            for name, value in fields.items():
                setattr(job, name, value)
            return True

        return self._apply(date, mutate)

    def add_job(self, date: DateKey) -> Optional[JobEntry]:
        """Append an empty job to a day.

        Returns:
            The new job, or None when the day is already at capacity
        """
        added: List[JobEntry] = []

        def mutate(day: DayRecord) -> bool:
            if len(day.jobs) >= self.max_jobs:
                logger.info(f"Maximum {self.max_jobs} jobs allowed per day")
                return False
            job = JobEntry.create()
            day.jobs = day.jobs + [job]
            added.append(job)
            return True

        self._apply(date, mutate)
        return added[0].model_copy() if added else None

    def remove_job(self, date: DateKey, job_id: str) -> bool:
        """Remove a job from a day.

        The last remaining job cannot be removed.

        Returns:
            True if a job was removed
        """
        removed: List[bool] = []

        def mutate(day: DayRecord) -> bool:
            if day.find_job(job_id) is None:
                logger.warning(f"Job {job_id} not found on {day.date}, nothing removed")
                return False
            if len(day.jobs) <= 1:
                logger.info(f"Cannot remove the only job of {day.date}")
                return False
            day.jobs = [job for job in day.jobs if job.id != job_id]
            removed.append(True)
            return True

        self._apply(date, mutate)
        return bool(removed)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _remember_default(self, key: str) -> DayRecord:
        day = self._viewed_defaults.get(key)
        if day is None:
            day = DayRecord.default(key, self.default_jobs)
            self._viewed_defaults[key] = day
            while len(self._viewed_defaults) > VIEWED_DEFAULTS_LIMIT:
                self._viewed_defaults.popitem(last=False)
        else:
            self._viewed_defaults.move_to_end(key)
        return day

    def _apply(self, date: DateKey, mutate: Callable[[DayRecord], bool]) -> DayRecord:
        key = self._key(date)
        with self._lock, LogContext(date=key):
            current = self._days.get(key)
            if current is None:
                current = self._viewed_defaults.get(key)
            if current is None:
                current = DayRecord.default(key, self.default_jobs)

            working = current.model_copy(deep=True)
            if not mutate(working):
                return current.model_copy(deep=True)

            recalculate_day(working, self.policy, self.rules)

            if key not in self._days:
                logger.debug(f"Materializing day {key} in store")
            self._days[key] = working
            self._viewed_defaults.pop(key, None)
            self._revision += 1

            return working.model_copy(deep=True)

    @staticmethod
    def _key(date: DateKey) -> str:
        parsed = parse_iso_date(date)
        if parsed is None:
            raise ValueError(f"Invalid date key: {date!r}. Expected YYYY-MM-DD")
        return parsed.isoformat()
