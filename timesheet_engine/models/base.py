"""Base model for all data models in the timesheet engine.

This module provides a base Pydantic model with the shared configuration
for job and day records.
"""

from pydantic import BaseModel, ConfigDict


class BaseDataModel(BaseModel):
    """Base class for all data models.

    Provides common configuration:
    - Validation on assignment, so in-place edits are checked too
    - Unknown fields rejected
    - Mutable instances (records are edited in place by the store)

    Example:
        >>> class Truck(BaseDataModel):
        ...     number: str
        >>> truck = Truck(number="TRK-7")
        >>> truck.model_dump()
        {'number': 'TRK-7'}
    """

    model_config = ConfigDict(
        validate_assignment=True,
        strict=False,
        extra="forbid",
        frozen=False,
    )
