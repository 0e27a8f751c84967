"""Conflict detection results."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from ..entities.assignment import ResourceAssignment
from ..value_objects.enums import ConflictType, UnavailabilityType


class ConflictDetail(BaseModel):
    """One reason a candidate booking cannot be placed cleanly."""

    type: ConflictType
    date: date
    message: str
    assignment_id: UUID | None = None
    assignment: ResourceAssignment | None = None
    unavailability_type: UnavailabilityType | None = None


class ConflictResult(BaseModel):
    """Outcome of a conflict check for one resource and date range."""

    has_conflict: bool = False
    conflicts: list[ConflictDetail] = Field(default_factory=list)

    @property
    def assignment_conflicts(self) -> list[ConflictDetail]:
        return [c for c in self.conflicts if c.type == ConflictType.ASSIGNMENT]

    @property
    def unavailability_conflicts(self) -> list[ConflictDetail]:
        return [c for c in self.conflicts if c.type == ConflictType.UNAVAILABILITY]

    @property
    def conflicting_assignment_ids(self) -> set[UUID]:
        return {
            c.assignment_id for c in self.conflicts if c.assignment_id is not None
        }
