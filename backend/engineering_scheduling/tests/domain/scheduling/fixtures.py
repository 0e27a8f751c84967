"""
Test factories for scheduling domain records.

Dates used across the suite: 2025-01-06 is a Monday, so 2025-01-06..10 is a
full working week and 2025-01-11/12 is the following weekend.
"""

from datetime import date
from uuid import UUID, uuid4

from engineering_scheduling.domain.scheduling.entities import (
    EngineeringResource,
    ResourceAssignment,
    ResourceAvailability,
)
from engineering_scheduling.domain.scheduling.value_objects import (
    AssignmentStatus,
    Certification,
    ResourceType,
    UnavailabilityType,
)

MONDAY = date(2025, 1, 6)
FRIDAY = date(2025, 1, 10)
SATURDAY = date(2025, 1, 11)
SUNDAY = date(2025, 1, 12)


class ResourceFactory:
    _counter = 0

    @classmethod
    def create(
        cls,
        resource_type: ResourceType = ResourceType.PERSONNEL,
        name: str | None = None,
        daily_capacity: float = 8.0,
        skills: tuple[str, ...] = (),
        certifications: tuple[Certification, ...] = (),
        **kwargs,
    ) -> EngineeringResource:
        cls._counter += 1
        code = f"{resource_type.code_prefix}-2025-{cls._counter:04d}"
        return EngineeringResource(
            resource_type=resource_type,
            resource_code=kwargs.pop("resource_code", code),
            resource_name=name or f"Resource {cls._counter}",
            daily_capacity=daily_capacity,
            skills=skills,
            certifications=certifications,
            **kwargs,
        )


class AssignmentFactory:
    @staticmethod
    def create(
        resource_id: UUID,
        start_date: date = MONDAY,
        end_date: date = FRIDAY,
        planned_hours: float | None = None,
        status: AssignmentStatus = AssignmentStatus.SCHEDULED,
        **kwargs,
    ) -> ResourceAssignment:
        return ResourceAssignment(
            resource_id=resource_id,
            target_id=kwargs.pop("target_id", uuid4()),
            start_date=start_date,
            end_date=end_date,
            planned_hours=planned_hours,
            status=status,
            **kwargs,
        )


def blocked(
    resource_id: UUID,
    day: date,
    unavailability_type: UnavailabilityType = UnavailabilityType.LEAVE,
    notes: str | None = None,
) -> ResourceAvailability:
    return ResourceAvailability(
        resource_id=resource_id,
        date=day,
        is_available=False,
        available_hours=0,
        unavailability_type=unavailability_type,
        notes=notes,
    )


def partial(resource_id: UUID, day: date, hours: float) -> ResourceAvailability:
    return ResourceAvailability(
        resource_id=resource_id, date=day, is_available=True, available_hours=hours
    )
