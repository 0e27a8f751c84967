"""Per-day availability read models used by booking checks and calendar views."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from ..entities.assignment import ResourceAssignment
from ..value_objects.enums import UnavailabilityType


class AvailabilityStatus(BaseModel):
    """Hours picture for one resource on one date."""

    is_available: bool
    is_working_day: bool = True
    available_hours: float
    assigned_hours: float
    remaining_hours: float
    unavailability_type: UnavailabilityType | None = None
    unavailability_notes: str | None = None


class DayAvailability(BaseModel):
    """One row of an availability calendar."""

    date: date
    is_available: bool
    available_hours: float
    assigned_hours: float
    remaining_hours: float
    unavailability_type: UnavailabilityType | None = None
    assignments: list[ResourceAssignment] = Field(default_factory=list)


class CalendarCell(BaseModel):
    """Resource x date cell of the scheduling calendar."""

    resource_id: UUID
    date: date
    is_available: bool
    available_hours: float
    assigned_hours: float
    remaining_hours: float
    unavailability_type: UnavailabilityType | None = None
    assignments: list[ResourceAssignment] = Field(default_factory=list)


class OverAllocationResult(BaseModel):
    """Advisory over-allocation check for adding hours on a date."""

    is_over_allocated: bool
    date: date
    available_hours: float
    assigned_hours: float
    requested_hours: float
    excess_hours: float = 0.0
