"""
SQLModel database models for resource scheduling.

These models provide the ORM mapping between domain records and the SQL schema.
Domain records stay frozen pydantic models; mappers in ``mappers.py`` convert
between the two.
"""

import datetime as dt
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel

from ...domain.shared.base import utc_now
from ...domain.scheduling.value_objects.enums import (
    AssignmentStatus,
    AssignmentTargetType,
    CapacityUnit,
    ResourceType,
    UnavailabilityType,
)


class EngineeringResourceTable(SQLModel, table=True):
    __tablename__ = "engineering_resources"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    resource_type: ResourceType = Field(index=True)
    # Unique so concurrent code allocation fails instead of duplicating
    resource_code: str = Field(max_length=20, unique=True, index=True)
    resource_name: str = Field(max_length=200)
    description: str | None = None
    capacity_unit: CapacityUnit = CapacityUnit.HOURS
    daily_capacity: float = Field(default=8.0, gt=0)
    skills: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    certifications: list[dict] = Field(default_factory=list, sa_column=Column(JSON))
    hourly_rate: float | None = None
    daily_rate: float | None = None
    base_location: str | None = None
    is_available: bool = True
    is_active: bool = Field(default=True, index=True)
    created_at: dt.datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    updated_at: dt.datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False)
    )


class ResourceAssignmentTable(SQLModel, table=True):
    __tablename__ = "resource_assignments"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    resource_id: UUID = Field(foreign_key="engineering_resources.id", index=True)
    target_type: AssignmentTargetType = AssignmentTargetType.PROJECT
    target_id: UUID = Field(index=True)
    task_description: str | None = None
    start_date: dt.date = Field(index=True)
    end_date: dt.date = Field(index=True)
    planned_hours: float | None = None
    actual_hours: float | None = None
    work_location: str | None = None
    notes: str | None = None
    status: AssignmentStatus = Field(default=AssignmentStatus.SCHEDULED, index=True)
    created_at: dt.datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    updated_at: dt.datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime(timezone=True), nullable=False)
    )


class ResourceAvailabilityTable(SQLModel, table=True):
    __tablename__ = "resource_availability"
    __table_args__ = (
        UniqueConstraint("resource_id", "date", name="uq_resource_availability_date"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    resource_id: UUID = Field(foreign_key="engineering_resources.id", index=True)
    date: dt.date = Field(index=True)
    is_available: bool = False
    available_hours: float = 0.0
    unavailability_type: UnavailabilityType | None = None
    notes: str | None = None


class ResourceSkillTable(SQLModel, table=True):
    __tablename__ = "resource_skills"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    skill_code: str = Field(max_length=50, unique=True, index=True)
    skill_name: str = Field(max_length=200)
    skill_category: str | None = Field(default=None, max_length=100)
    is_active: bool = True
