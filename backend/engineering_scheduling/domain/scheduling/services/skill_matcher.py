"""
SkillMatcher Domain Service

Selects resources by skill tags and list filters, sorts resource lists, and
reports certification expiry.
"""

from collections.abc import Iterable
from datetime import date

from ..entities.resource import EngineeringResource
from ..entities.skill import ResourceSkill
from ..value_objects.certification import Certification
from ..value_objects.enums import CertificationStatus
from ..value_objects.filters import CalendarFilters, ResourceFilters, ResourceSortField


class SkillMatcher:
    """Stateless resource selection helpers."""

    @staticmethod
    def filter_resources_by_skills(
        resources: Iterable[EngineeringResource],
        required_skills: Iterable[str],
    ) -> list[EngineeringResource]:
        """
        Resources holding every required skill.

        An empty requirement returns the input unchanged. Skill tags are
        compared exactly.
        """
        resources = list(resources)
        required = list(required_skills)
        if not required:
            return resources
        return [r for r in resources if r.has_skills(required)]

    @staticmethod
    def get_certification_status(
        certification: Certification, today: date | None = None
    ) -> CertificationStatus:
        return certification.status_on(today)

    @staticmethod
    def days_until_expiry(
        certification: Certification, today: date | None = None
    ) -> int | None:
        return certification.days_until_expiry(today)

    @staticmethod
    def expiring_certifications(
        resources: Iterable[EngineeringResource], today: date | None = None
    ) -> list[tuple[EngineeringResource, Certification, CertificationStatus]]:
        """
        Certifications that are expired or expiring soon, soonest expiry first.

        Inactive resources are skipped.
        """
        found = []
        for resource in resources:
            if not resource.is_active:
                continue
            for certification in resource.certifications:
                status = certification.status_on(today)
                if status != CertificationStatus.VALID:
                    found.append((resource, certification, status))
        found.sort(key=lambda item: (item[1].expiry_date, item[0].resource_code))
        return found

    @staticmethod
    def filter_resources(
        resources: Iterable[EngineeringResource], filters: ResourceFilters
    ) -> list[EngineeringResource]:
        search = (filters.search or "").strip().lower()
        selected = []
        for resource in resources:
            if filters.resource_type and resource.resource_type != filters.resource_type:
                continue
            if (
                filters.is_available is not None
                and resource.is_available != filters.is_available
            ):
                continue
            if filters.is_active is not None and resource.is_active != filters.is_active:
                continue
            if filters.skills and not resource.has_skills(filters.skills):
                continue
            if search:
                haystack = " ".join(
                    filter(
                        None,
                        (
                            resource.resource_name,
                            resource.resource_code,
                            resource.description,
                        ),
                    )
                ).lower()
                if search not in haystack:
                    continue
            selected.append(resource)
        return selected

    @staticmethod
    def filter_calendar_resources(
        resources: Iterable[EngineeringResource], filters: CalendarFilters
    ) -> list[EngineeringResource]:
        """Active resources matching the calendar filters."""
        wanted_ids = set(filters.resource_ids)
        wanted_types = set(filters.resource_types)
        return [
            r
            for r in resources
            if r.is_active
            and (not wanted_types or r.resource_type in wanted_types)
            and (not wanted_ids or r.id in wanted_ids)
            and (not filters.skills or r.has_skills(filters.skills))
        ]

    @staticmethod
    def sort_resources(
        resources: Iterable[EngineeringResource],
        sort_by: ResourceSortField | str = ResourceSortField.NAME,
        ascending: bool = True,
    ) -> list[EngineeringResource]:
        sort_field = ResourceSortField(sort_by)
        keys = {
            ResourceSortField.NAME: lambda r: r.resource_name.lower(),
            ResourceSortField.CODE: lambda r: r.resource_code,
            ResourceSortField.TYPE: lambda r: (r.resource_type.value, r.resource_name.lower()),
            ResourceSortField.CREATED_AT: lambda r: r.created_at,
        }
        return sorted(resources, key=keys[sort_field], reverse=not ascending)

    @staticmethod
    def validate_skill_structure(skill: ResourceSkill) -> bool:
        return skill.is_well_formed()
