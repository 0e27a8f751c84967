"""
Tests for ConflictDetector: booking overlaps, unavailability blocks and
rescheduling exclusions.
"""

from datetime import date, timedelta
from uuid import uuid4

from hypothesis import given, strategies as st

from engineering_scheduling.domain.scheduling.services import ConflictDetector
from engineering_scheduling.domain.scheduling.value_objects import (
    AssignmentStatus,
    ConflictType,
    UnavailabilityType,
    date_ranges_overlap,
)

from ..fixtures import AssignmentFactory, ResourceFactory, blocked, partial

BASE = date(2025, 1, 1)


@st.composite
def date_ranges(draw, min_day=0, max_day=365):
    start = draw(st.integers(min_value=min_day, max_value=max_day))
    length = draw(st.integers(min_value=0, max_value=30))
    return BASE + timedelta(days=start), BASE + timedelta(days=start + length)


class TestBookingCollisionScenario:
    def setup_method(self):
        self.resource = ResourceFactory.create()
        self.existing = AssignmentFactory.create(
            self.resource.id,
            start_date=date(2025, 6, 1),
            end_date=date(2025, 6, 10),
            task_description="Route survey Jakarta-Surabaya",
        )

    def test_overlapping_candidate_conflicts(self):
        result = ConflictDetector.detect_conflicts(
            self.resource.id, date(2025, 6, 5), date(2025, 6, 7), [self.existing], []
        )

        assert result.has_conflict
        assert len(result.conflicts) == 1
        conflict = result.conflicts[0]
        assert conflict.type == ConflictType.ASSIGNMENT
        assert conflict.assignment_id == self.existing.id
        assert conflict.assignment == self.existing
        assert conflict.date == date(2025, 6, 5)
        assert "Route survey Jakarta-Surabaya" in conflict.message

    def test_later_month_is_free(self):
        result = ConflictDetector.detect_conflicts(
            self.resource.id, date(2025, 7, 1), date(2025, 7, 5), [self.existing], []
        )

        assert not result.has_conflict
        assert result.conflicts == []

    def test_identical_range_conflicts(self):
        result = ConflictDetector.detect_conflicts(
            self.resource.id, date(2025, 6, 1), date(2025, 6, 10), [self.existing], []
        )

        assert result.has_conflict

    def test_same_day_handoff_conflicts(self):
        result = ConflictDetector.detect_conflicts(
            self.resource.id, date(2025, 6, 10), date(2025, 6, 12), [self.existing], []
        )

        assert result.has_conflict
        assert result.conflicts[0].date == date(2025, 6, 10)

    def test_next_day_start_is_free(self):
        result = ConflictDetector.detect_conflicts(
            self.resource.id, date(2025, 6, 11), date(2025, 6, 12), [self.existing], []
        )

        assert not result.has_conflict

    def test_other_resources_ignored(self):
        result = ConflictDetector.detect_conflicts(
            uuid4(), date(2025, 6, 5), date(2025, 6, 7), [self.existing], []
        )

        assert not result.has_conflict

    def test_cancelled_and_completed_never_conflict(self):
        history = [
            self.existing.model_copy(update={"status": AssignmentStatus.CANCELLED}),
            self.existing.model_copy(
                update={"id": uuid4(), "status": AssignmentStatus.COMPLETED}
            ),
        ]

        result = ConflictDetector.detect_conflicts(
            self.resource.id, date(2025, 6, 5), date(2025, 6, 7), history, []
        )

        assert not result.has_conflict

    def test_in_progress_conflicts(self):
        running = self.existing.model_copy(
            update={"status": AssignmentStatus.IN_PROGRESS}
        )

        result = ConflictDetector.detect_conflicts(
            self.resource.id, date(2025, 6, 5), date(2025, 6, 7), [running], []
        )

        assert result.has_conflict

    def test_exclude_assignment_id(self):
        result = ConflictDetector.detect_conflicts(
            self.resource.id,
            date(2025, 6, 3),
            date(2025, 6, 12),
            [self.existing],
            [],
            exclude_assignment_id=self.existing.id,
        )

        assert not result.has_conflict


class TestLeaveBlocksAssignmentScenario:
    def setup_method(self):
        self.resource = ResourceFactory.create()
        self.leave = blocked(self.resource.id, date(2025, 6, 15), UnavailabilityType.LEAVE)

    def test_leave_day_conflicts(self):
        result = ConflictDetector.detect_conflicts(
            self.resource.id, date(2025, 6, 15), date(2025, 6, 15), [], [self.leave]
        )

        assert result.has_conflict
        conflict = result.conflicts[0]
        assert conflict.type == ConflictType.UNAVAILABILITY
        assert conflict.unavailability_type == UnavailabilityType.LEAVE
        assert conflict.date == date(2025, 6, 15)
        assert "leave" in conflict.message

    def test_next_day_is_free(self):
        result = ConflictDetector.detect_conflicts(
            self.resource.id, date(2025, 6, 16), date(2025, 6, 16), [], [self.leave]
        )

        assert not result.has_conflict

    def test_partial_availability_does_not_conflict(self):
        half_day = partial(self.resource.id, date(2025, 6, 16), 4)

        result = ConflictDetector.detect_conflicts(
            self.resource.id, date(2025, 6, 16), date(2025, 6, 16), [], [half_day]
        )

        assert not result.has_conflict


class TestConflictOrdering:
    def test_assignments_first_then_unavailability_by_date(self):
        resource = ResourceFactory.create()
        late = AssignmentFactory.create(
            resource.id, start_date=date(2025, 3, 10), end_date=date(2025, 3, 12)
        )
        early = AssignmentFactory.create(
            resource.id, start_date=date(2025, 3, 3), end_date=date(2025, 3, 4)
        )
        records = [
            blocked(resource.id, date(2025, 3, 20), UnavailabilityType.MAINTENANCE),
            blocked(resource.id, date(2025, 3, 5), UnavailabilityType.HOLIDAY),
        ]

        result = ConflictDetector.detect_conflicts(
            resource.id, date(2025, 3, 1), date(2025, 3, 31), [late, early], records
        )

        assert [c.type for c in result.conflicts] == [
            ConflictType.ASSIGNMENT,
            ConflictType.ASSIGNMENT,
            ConflictType.UNAVAILABILITY,
            ConflictType.UNAVAILABILITY,
        ]
        assert [c.assignment_id for c in result.assignment_conflicts] == [
            early.id,
            late.id,
        ]
        assert [c.date for c in result.unavailability_conflicts] == [
            date(2025, 3, 5),
            date(2025, 3, 20),
        ]
        assert result.conflicting_assignment_ids == {early.id, late.id}

    def test_no_data_means_no_conflict(self):
        result = ConflictDetector.detect_conflicts(
            uuid4(), date(2025, 1, 1), date(2025, 12, 31), [], []
        )

        assert not result.has_conflict


class TestUnavailabilityConflicts:
    def test_affected_assignments(self):
        resource = ResourceFactory.create()
        hit = AssignmentFactory.create(
            resource.id, start_date=date(2025, 4, 1), end_date=date(2025, 4, 4)
        )
        miss = AssignmentFactory.create(
            resource.id, start_date=date(2025, 4, 10), end_date=date(2025, 4, 11)
        )
        cancelled = AssignmentFactory.create(
            resource.id,
            start_date=date(2025, 4, 2),
            end_date=date(2025, 4, 2),
            status=AssignmentStatus.CANCELLED,
        )

        affected = ConflictDetector.detect_unavailability_conflicts(
            resource.id, [date(2025, 4, 2), date(2025, 4, 8)], [hit, miss, cancelled]
        )

        assert affected == [hit]


class TestConflictProperties:
    @given(first=date_ranges(), second=date_ranges())
    def test_overlap_is_symmetric(self, first, second):
        assert date_ranges_overlap(*first, *second) == date_ranges_overlap(
            *second, *first
        )

    @given(first=date_ranges(), second=date_ranges())
    def test_detection_is_symmetric(self, first, second):
        resource = ResourceFactory.create()
        a = AssignmentFactory.create(resource.id, start_date=first[0], end_date=first[1])
        b = AssignmentFactory.create(resource.id, start_date=second[0], end_date=second[1])

        a_vs_b = ConflictDetector.detect_conflicts(resource.id, *first, [b], [])
        b_vs_a = ConflictDetector.detect_conflicts(resource.id, *second, [a], [])

        assert a_vs_b.has_conflict == b_vs_a.has_conflict

    @given(
        month1=st.integers(min_value=1, max_value=12),
        month2=st.integers(min_value=1, max_value=12),
    )
    def test_disjoint_months_never_conflict(self, month1, month2):
        if month1 == month2:
            return
        resource = ResourceFactory.create()
        existing = AssignmentFactory.create(
            resource.id,
            start_date=date(2025, month1, 1),
            end_date=date(2025, month1, 28),
        )

        result = ConflictDetector.detect_conflicts(
            resource.id, date(2025, month2, 1), date(2025, month2, 28), [existing], []
        )

        assert not result.has_conflict

    @given(candidate=date_ranges(), offset=st.integers(min_value=0, max_value=30))
    def test_blocked_date_in_range_always_conflicts(self, candidate, offset):
        start, end = candidate
        day = min(start + timedelta(days=offset), end)
        resource = ResourceFactory.create()

        result = ConflictDetector.detect_conflicts(
            resource.id, start, end, [], [blocked(resource.id, day)]
        )

        assert result.has_conflict
        assert day in {c.date for c in result.unavailability_conflicts}
