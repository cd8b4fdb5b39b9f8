"""Net working hours deductions.

Net hours are the day's total job time minus:
- a travel deduction once the day exceeds the travel threshold, waived on
  on-call days
- a lunch deduction once the day exceeds the lunch threshold, regardless
  of on-call status

Thresholds are strict ("more than 6 hours"); the result never goes below 0.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class DeductionRules:
    """Thresholds and amounts for net-hours deductions.

    Attributes:
        travel_threshold_hours: Total hours that must be exceeded for travel deduction
        travel_deduction_minutes: Minutes deducted for travel
        lunch_threshold_hours: Total hours that must be exceeded for lunch deduction
        lunch_deduction_minutes: Minutes deducted for lunch
    """

    travel_threshold_hours: float = 6.0
    travel_deduction_minutes: int = 60
    lunch_threshold_hours: float = 4.0
    lunch_deduction_minutes: int = 30


DEFAULT_RULES = DeductionRules()


def _exceeds(total_minutes: int, threshold_hours: float) -> bool:
    return Decimal(total_minutes) / Decimal(60) > Decimal(str(threshold_hours))


def calculate_net_minutes(
    total_minutes: int, is_on_call: bool, rules: DeductionRules = DEFAULT_RULES
) -> int:
    """Apply travel and lunch deductions to a day's total minutes.

    Args:
        total_minutes: Sum of all job minutes for the day
        is_on_call: Whether the day is flagged on-call (waives travel deduction)
        rules: Deduction thresholds and amounts

    Returns:
        Net minutes, clamped at 0

    Example:
        >>> calculate_net_minutes(540, is_on_call=False)
        450
        >>> calculate_net_minutes(540, is_on_call=True)
        510
        >>> calculate_net_minutes(240, is_on_call=False)
        240
    """
    net_minutes = total_minutes

    if _exceeds(total_minutes, rules.travel_threshold_hours) and not is_on_call:
        net_minutes -= rules.travel_deduction_minutes

    if _exceeds(total_minutes, rules.lunch_threshold_hours):
        net_minutes -= rules.lunch_deduction_minutes

    return max(0, net_minutes)
