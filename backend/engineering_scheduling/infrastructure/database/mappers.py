"""
Mappers for converting between scheduling domain records and SQL rows.

Skills and certifications are stored as JSON columns; everything else maps
field for field.
"""

from ...domain.scheduling.entities import (
    EngineeringResource,
    ResourceAssignment,
    ResourceAvailability,
    ResourceSkill,
)
from ...domain.scheduling.value_objects.certification import Certification
from .models import (
    EngineeringResourceTable,
    ResourceAssignmentTable,
    ResourceAvailabilityTable,
    ResourceSkillTable,
)


class ResourceMapper:
    @staticmethod
    def domain_to_sql(resource: EngineeringResource) -> EngineeringResourceTable:
        return EngineeringResourceTable(
            id=resource.id,
            resource_type=resource.resource_type,
            resource_code=resource.resource_code,
            resource_name=resource.resource_name,
            description=resource.description,
            capacity_unit=resource.capacity_unit,
            daily_capacity=resource.daily_capacity,
            skills=list(resource.skills),
            certifications=[c.model_dump(mode="json") for c in resource.certifications],
            hourly_rate=resource.hourly_rate,
            daily_rate=resource.daily_rate,
            base_location=resource.base_location,
            is_available=resource.is_available,
            is_active=resource.is_active,
            created_at=resource.created_at,
        )

    @staticmethod
    def sql_to_domain(row: EngineeringResourceTable) -> EngineeringResource:
        return EngineeringResource(
            id=row.id,
            resource_type=row.resource_type,
            resource_code=row.resource_code,
            resource_name=row.resource_name,
            description=row.description,
            capacity_unit=row.capacity_unit,
            daily_capacity=row.daily_capacity,
            skills=tuple(row.skills or ()),
            certifications=tuple(
                Certification.model_validate(c) for c in row.certifications or ()
            ),
            hourly_rate=row.hourly_rate,
            daily_rate=row.daily_rate,
            base_location=row.base_location,
            is_available=row.is_available,
            is_active=row.is_active,
            created_at=row.created_at,
        )


class AssignmentMapper:
    @staticmethod
    def domain_to_sql(assignment: ResourceAssignment) -> ResourceAssignmentTable:
        return ResourceAssignmentTable(
            **assignment.model_dump(exclude={"created_at"}),
            created_at=assignment.created_at,
        )

    @staticmethod
    def sql_to_domain(row: ResourceAssignmentTable) -> ResourceAssignment:
        return ResourceAssignment(
            id=row.id,
            resource_id=row.resource_id,
            target_type=row.target_type,
            target_id=row.target_id,
            task_description=row.task_description,
            start_date=row.start_date,
            end_date=row.end_date,
            planned_hours=row.planned_hours,
            actual_hours=row.actual_hours,
            work_location=row.work_location,
            notes=row.notes,
            status=row.status,
            created_at=row.created_at,
        )


class AvailabilityMapper:
    @staticmethod
    def domain_to_sql(record: ResourceAvailability) -> ResourceAvailabilityTable:
        return ResourceAvailabilityTable(**record.model_dump())

    @staticmethod
    def sql_to_domain(row: ResourceAvailabilityTable) -> ResourceAvailability:
        return ResourceAvailability(
            id=row.id,
            resource_id=row.resource_id,
            date=row.date,
            is_available=row.is_available,
            available_hours=row.available_hours,
            unavailability_type=row.unavailability_type,
            notes=row.notes,
        )


class SkillMapper:
    @staticmethod
    def domain_to_sql(skill: ResourceSkill) -> ResourceSkillTable:
        return ResourceSkillTable(**skill.model_dump())

    @staticmethod
    def sql_to_domain(row: ResourceSkillTable) -> ResourceSkill:
        return ResourceSkill(
            id=row.id,
            skill_code=row.skill_code,
            skill_name=row.skill_name,
            skill_category=row.skill_category,
            is_active=row.is_active,
        )
