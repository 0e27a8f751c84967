"""
Request and response DTOs for the scheduling application service.

Request DTOs are deliberately loose: enum values arrive as strings and
identifiers and dates may be strings. The validators decide what is
acceptable and report every problem at once.
"""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ...domain.scheduling.entities import (
    EngineeringResource,
    ResourceAssignment,
    ResourceAvailability,
)
from ...domain.scheduling.read_models import CalendarCell


class RequestDTO(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)


class ResourceInput(RequestDTO):
    resource_type: str | None = None
    resource_name: str | None = None
    description: str | None = None
    capacity_unit: str | None = None
    daily_capacity: float | None = None
    skills: list[str] = Field(default_factory=list)
    hourly_rate: float | None = None
    daily_rate: float | None = None
    base_location: str | None = None


class AssignmentInput(RequestDTO):
    resource_id: UUID | str | None = None
    target_type: str | None = None
    target_id: UUID | str | None = None
    task_description: str | None = None
    start_date: date | str | None = None
    end_date: date | str | None = None
    planned_hours: float | None = None
    work_location: str | None = None
    notes: str | None = None


class UnavailabilityInput(RequestDTO):
    resource_id: UUID | str | None = None
    dates: list[date | str] = Field(default_factory=list)
    unavailability_type: str | None = None
    notes: str | None = None


class SkillInput(RequestDTO):
    skill_code: str | None = None
    skill_name: str | None = None
    skill_category: str | None = None


class UnavailabilityOutcome(BaseModel):
    """Result of recording unavailability for a resource."""

    records: list[ResourceAvailability] = Field(default_factory=list)
    replaced_dates: list[date] = Field(default_factory=list)
    affected_assignments: list[ResourceAssignment] = Field(default_factory=list)

    @property
    def created_count(self) -> int:
        return len(self.records)


class CalendarData(BaseModel):
    """Resource x date grid for the scheduling calendar."""

    start_date: date
    end_date: date
    resources: list[EngineeringResource] = Field(default_factory=list)
    cells: list[CalendarCell] = Field(default_factory=list)

    def cell(self, resource_id: UUID, day: date) -> CalendarCell | None:
        for cell in self.cells:
            if cell.resource_id == resource_id and cell.date == day:
                return cell
        return None
