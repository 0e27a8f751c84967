"""Per-date availability exceptions for a resource."""

from datetime import date
from uuid import UUID, uuid4

from pydantic import Field

from ...shared.base import DomainRecord
from ..value_objects.enums import UnavailabilityType


class ResourceAvailability(DomainRecord):
    """
    Explicit availability override for one resource on one date.

    The representation is sparse: a date without a record means the resource
    is available at its full daily capacity on working days. A record either
    blocks the date (``is_available=False``) or reduces the hours available.
    """

    id: UUID = Field(default_factory=uuid4)
    resource_id: UUID
    date: date
    is_available: bool = False
    available_hours: float = Field(default=0.0, ge=0)
    unavailability_type: UnavailabilityType | None = None
    notes: str | None = None

    @property
    def effective_hours(self) -> float:
        """Hours this record leaves available on its date."""
        return self.available_hours if self.is_available else 0.0
