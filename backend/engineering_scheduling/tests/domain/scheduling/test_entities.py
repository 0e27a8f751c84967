"""
Unit tests for scheduling domain records and their invariants.
"""

from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from engineering_scheduling.domain.scheduling.entities import (
    EngineeringResource,
    ResourceAssignment,
    ResourceAvailability,
    ResourceSkill,
)
from engineering_scheduling.domain.scheduling.value_objects import (
    AssignmentStatus,
    Certification,
    CertificationStatus,
    ResourceType,
    UnavailabilityType,
)

from .fixtures import FRIDAY, MONDAY, AssignmentFactory, ResourceFactory

TODAY = date(2025, 6, 1)


class TestEngineeringResource:
    def test_defaults(self):
        resource = ResourceFactory.create()

        assert resource.daily_capacity == 8.0
        assert resource.is_active
        assert resource.is_available

    def test_created_at_is_utc(self):
        fresh = ResourceFactory.create()
        imported = ResourceFactory.create(created_at=datetime(2025, 1, 6, 9, 30))
        local = ResourceFactory.create(
            created_at=datetime(2025, 1, 6, 16, 30, tzinfo=timezone(timedelta(hours=7)))
        )

        assert fresh.created_at.utcoffset() == timedelta(0)
        assert imported.created_at == datetime(2025, 1, 6, 9, 30, tzinfo=timezone.utc)
        assert local.created_at == imported.created_at

    def test_code_prefix_must_match_type(self):
        with pytest.raises(ValidationError, match="does not match"):
            EngineeringResource(
                resource_type=ResourceType.VEHICLE,
                resource_code="EQP-2025-0001",
                resource_name="Prime mover",
            )

    def test_capacity_must_be_positive(self):
        with pytest.raises(ValidationError):
            ResourceFactory.create(daily_capacity=0)

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            ResourceFactory.create(name="   ")

    def test_records_are_frozen(self):
        resource = ResourceFactory.create()

        with pytest.raises(ValidationError):
            resource.resource_name = "Changed"

    def test_has_skills_requires_all(self):
        resource = ResourceFactory.create(skills=("rigging", "welding"))

        assert resource.has_skills(["rigging"])
        assert resource.has_skills(["rigging", "welding"])
        assert not resource.has_skills(["rigging", "crane_operation"])
        assert resource.has_skills([])


class TestResourceAssignment:
    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError, match="End date"):
            AssignmentFactory.create(
                ResourceFactory.create().id, start_date=FRIDAY, end_date=MONDAY
            )

    def test_negative_planned_hours_rejected(self):
        with pytest.raises(ValidationError):
            AssignmentFactory.create(ResourceFactory.create().id, planned_hours=-1)

    def test_active_statuses(self):
        resource_id = ResourceFactory.create().id

        assert AssignmentFactory.create(resource_id).is_active
        assert AssignmentFactory.create(
            resource_id, status=AssignmentStatus.IN_PROGRESS
        ).is_active
        assert not AssignmentFactory.create(
            resource_id, status=AssignmentStatus.COMPLETED
        ).is_active
        assert not AssignmentFactory.create(
            resource_id, status=AssignmentStatus.CANCELLED
        ).is_active

    def test_covers_both_ends(self):
        assignment = AssignmentFactory.create(ResourceFactory.create().id)

        assert assignment.covers(MONDAY)
        assert assignment.covers(FRIDAY)
        assert not assignment.covers(date(2025, 1, 5))
        assert assignment.period.days == 5

    def test_single_day_assignment(self):
        assignment = ResourceAssignment(
            resource_id=ResourceFactory.create().id,
            target_id=ResourceFactory.create().id,
            start_date=MONDAY,
            end_date=MONDAY,
        )

        assert assignment.period.days == 1


class TestAssignmentStatusTransitions:
    @pytest.mark.parametrize(
        "current,target",
        [
            (AssignmentStatus.SCHEDULED, AssignmentStatus.IN_PROGRESS),
            (AssignmentStatus.SCHEDULED, AssignmentStatus.CANCELLED),
            (AssignmentStatus.IN_PROGRESS, AssignmentStatus.COMPLETED),
            (AssignmentStatus.IN_PROGRESS, AssignmentStatus.CANCELLED),
        ],
    )
    def test_allowed(self, current, target):
        assert current.can_transition_to(target)

    @pytest.mark.parametrize(
        "current,target",
        [
            (AssignmentStatus.SCHEDULED, AssignmentStatus.COMPLETED),
            (AssignmentStatus.COMPLETED, AssignmentStatus.SCHEDULED),
            (AssignmentStatus.CANCELLED, AssignmentStatus.IN_PROGRESS),
            (AssignmentStatus.IN_PROGRESS, AssignmentStatus.SCHEDULED),
        ],
    )
    def test_forbidden(self, current, target):
        assert not current.can_transition_to(target)

    def test_terminal_statuses(self):
        assert AssignmentStatus.COMPLETED.is_terminal
        assert AssignmentStatus.CANCELLED.is_terminal
        assert not AssignmentStatus.SCHEDULED.is_terminal


class TestResourceAvailability:
    def test_blocked_record_has_no_hours(self):
        record = ResourceAvailability(
            resource_id=ResourceFactory.create().id,
            date=MONDAY,
            is_available=False,
            available_hours=4,
            unavailability_type=UnavailabilityType.MAINTENANCE,
        )

        assert record.effective_hours == 0.0

    def test_partial_record_keeps_hours(self):
        record = ResourceAvailability(
            resource_id=ResourceFactory.create().id,
            date=MONDAY,
            is_available=True,
            available_hours=4,
        )

        assert record.effective_hours == 4


class TestCertification:
    def test_no_expiry_is_valid(self):
        cert = Certification(name="First Aid")

        assert cert.status_on(TODAY) == CertificationStatus.VALID
        assert cert.days_until_expiry(TODAY) is None

    def test_expired_yesterday(self):
        cert = Certification(name="Rigging", expiry_date=date(2025, 5, 31))

        assert cert.status_on(TODAY) == CertificationStatus.EXPIRED
        assert cert.days_until_expiry(TODAY) == -1

    def test_expiring_today_is_expiring_soon(self):
        cert = Certification(name="Rigging", expiry_date=TODAY)

        assert cert.status_on(TODAY) == CertificationStatus.EXPIRING_SOON

    def test_warning_horizon_is_inclusive(self):
        assert (
            Certification(name="A", expiry_date=date(2025, 7, 1)).status_on(TODAY)
            == CertificationStatus.EXPIRING_SOON
        )
        assert (
            Certification(name="A", expiry_date=date(2025, 7, 2)).status_on(TODAY)
            == CertificationStatus.VALID
        )

    def test_custom_warning_days(self):
        cert = Certification(name="A", expiry_date=date(2025, 6, 20))

        assert cert.status_on(TODAY, warning_days=7) == CertificationStatus.VALID


class TestResourceSkill:
    def test_well_formed(self):
        skill = ResourceSkill(
            skill_code="WLD-01", skill_name="Welding", skill_category="fabrication"
        )

        assert skill.is_well_formed()

    def test_missing_category(self):
        skill = ResourceSkill(skill_code="WLD-01", skill_name="Welding")

        assert not skill.is_well_formed()

    def test_blank_code(self):
        skill = ResourceSkill(skill_code=" ", skill_name="Welding", skill_category="x")

        assert not skill.is_well_formed()
