"""Engineering resource record: a person, piece of equipment, tool, vehicle or facility."""

from datetime import datetime
from uuid import UUID, uuid4

from pydantic import Field, field_validator, model_validator

from ...shared.base import DomainRecord, as_utc, utc_now
from ..value_objects.certification import Certification
from ..value_objects.enums import CapacityUnit, ResourceType


class EngineeringResource(DomainRecord):
    """
    Schedulable resource snapshot.

    Retired resources keep ``is_active=False``; they stay visible to history
    and utilization reports but cannot take new assignments.
    """

    id: UUID = Field(default_factory=uuid4)
    resource_type: ResourceType
    resource_code: str = Field(min_length=1)
    resource_name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    capacity_unit: CapacityUnit = CapacityUnit.HOURS
    daily_capacity: float = Field(default=8.0, gt=0)
    skills: tuple[str, ...] = ()
    certifications: tuple[Certification, ...] = ()
    hourly_rate: float | None = Field(default=None, ge=0)
    daily_rate: float | None = Field(default=None, ge=0)
    base_location: str | None = None
    is_available: bool = True
    is_active: bool = True
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("created_at")
    @classmethod
    def created_at_in_utc(cls, v: datetime) -> datetime:
        return as_utc(v)

    @field_validator("resource_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Resource name cannot be blank")
        return v

    @model_validator(mode="after")
    def check_code_prefix(self) -> "EngineeringResource":
        if not self.resource_code.startswith(f"{self.resource_type.code_prefix}-"):
            raise ValueError(
                f"Resource code {self.resource_code!r} does not match "
                f"type {self.resource_type.value!r}"
            )
        return self

    def has_skills(self, required: list[str] | tuple[str, ...]) -> bool:
        """True if the resource holds every required skill tag."""
        return set(required).issubset(self.skills)
