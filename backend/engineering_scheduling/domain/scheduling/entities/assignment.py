"""Resource assignment: a claim on a resource for a closed date interval."""

from datetime import date, datetime
from uuid import UUID, uuid4

from pydantic import Field, field_validator, model_validator

from ...shared.base import DomainRecord, as_utc, utc_now
from ..value_objects.date_range import DateRange
from ..value_objects.enums import AssignmentStatus, AssignmentTargetType


class ResourceAssignment(DomainRecord):
    """
    Booking of one resource against a work item.

    Both ``start_date`` and ``end_date`` are included. Assignments are never
    deleted; cancelling one is a status change.
    """

    id: UUID = Field(default_factory=uuid4)
    resource_id: UUID
    target_type: AssignmentTargetType = AssignmentTargetType.PROJECT
    target_id: UUID
    task_description: str | None = None
    start_date: date
    end_date: date
    planned_hours: float | None = Field(default=None, ge=0)
    actual_hours: float | None = Field(default=None, ge=0)
    work_location: str | None = None
    notes: str | None = None
    status: AssignmentStatus = AssignmentStatus.SCHEDULED
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("created_at")
    @classmethod
    def created_at_in_utc(cls, v: datetime) -> datetime:
        return as_utc(v)

    @model_validator(mode="after")
    def check_dates(self) -> "ResourceAssignment":
        if self.end_date < self.start_date:
            raise ValueError("End date must be on or after start date")
        return self

    @property
    def is_active(self) -> bool:
        """Scheduled and in-progress assignments hold capacity."""
        return self.status.is_active

    @property
    def period(self) -> DateRange:
        return DateRange(start=self.start_date, end=self.end_date)

    def covers(self, value: date) -> bool:
        return self.start_date <= value <= self.end_date
