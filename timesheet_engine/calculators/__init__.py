"""Calculator modules for the timesheet engine."""

from timesheet_engine.calculators.deduction_calculator import (
    DEFAULT_RULES,
    DeductionRules,
    calculate_net_minutes,
)
from timesheet_engine.calculators.duration_calculator import (
    DurationPolicy,
    calculate_job_minutes,
    calculate_segment_minutes,
    calculate_span_minutes,
    segment_minutes,
)
from timesheet_engine.calculators.time_utils import (
    day_of_week,
    format_decimal_hours,
    is_valid_clock_time,
    parse_iso_date,
    time_to_minutes,
    week_bounds,
)

__all__ = [
    # deduction_calculator
    "DEFAULT_RULES",
    "DeductionRules",
    "calculate_net_minutes",
    # duration_calculator
    "DurationPolicy",
    "calculate_job_minutes",
    "calculate_segment_minutes",
    "calculate_span_minutes",
    "segment_minutes",
    # time_utils
    "day_of_week",
    "format_decimal_hours",
    "is_valid_clock_time",
    "parse_iso_date",
    "time_to_minutes",
    "week_bounds",
]
