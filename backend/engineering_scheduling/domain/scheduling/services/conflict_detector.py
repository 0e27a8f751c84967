"""
ConflictDetector Domain Service

Decides whether a resource can be booked for a candidate date range, given
the resource's existing assignments and per-date unavailability records.
"""

from collections.abc import Iterable
from datetime import date
from uuid import UUID

from ..entities.assignment import ResourceAssignment
from ..entities.availability import ResourceAvailability
from ..read_models.conflicts import ConflictDetail, ConflictResult
from ..value_objects.business_calendar import date_ranges_overlap, iter_dates
from ..value_objects.enums import ConflictType


class ConflictDetector:
    """
    Domain service for detecting booking conflicts.

    Ranges are closed on both ends: a booking that starts on the day another
    one ends collides with it. Only scheduled and in-progress assignments are
    considered; completed and cancelled ones are history.
    """

    @staticmethod
    def active_assignments_for(
        resource_id: UUID,
        assignments: Iterable[ResourceAssignment],
        exclude_assignment_id: UUID | None = None,
    ) -> list[ResourceAssignment]:
        """Active assignments of one resource, ordered by start date then id."""
        selected = [
            a
            for a in assignments
            if a.resource_id == resource_id
            and a.is_active
            and a.id != exclude_assignment_id
        ]
        selected.sort(key=lambda a: (a.start_date, str(a.id)))
        return selected

    @staticmethod
    def detect_conflicts(
        resource_id: UUID,
        start_date: date,
        end_date: date,
        existing_assignments: Iterable[ResourceAssignment],
        unavailability_records: Iterable[ResourceAvailability],
        exclude_assignment_id: UUID | None = None,
    ) -> ConflictResult:
        """
        Check a candidate range against existing bookings and unavailability.

        Args:
            resource_id: Resource to book
            start_date: First day of the candidate range
            end_date: Last day of the candidate range (inclusive)
            existing_assignments: Assignments loaded by the caller; other
                resources' assignments are ignored
            unavailability_records: Availability records loaded by the caller
            exclude_assignment_id: Assignment to ignore, used when moving an
                existing booking

        Returns:
            ConflictResult with assignment conflicts first, then
            unavailability conflicts in date order
        """
        conflicts: list[ConflictDetail] = []

        for assignment in ConflictDetector.active_assignments_for(
            resource_id, existing_assignments, exclude_assignment_id
        ):
            if not date_ranges_overlap(
                start_date, end_date, assignment.start_date, assignment.end_date
            ):
                continue
            first_overlap = max(start_date, assignment.start_date)
            what = assignment.task_description or "another task"
            conflicts.append(
                ConflictDetail(
                    type=ConflictType.ASSIGNMENT,
                    date=first_overlap,
                    assignment_id=assignment.id,
                    assignment=assignment,
                    message=(
                        f"Resource already assigned to {what} from "
                        f"{assignment.start_date.isoformat()} to "
                        f"{assignment.end_date.isoformat()}"
                    ),
                )
            )

        blocked = {
            record.date: record
            for record in unavailability_records
            if record.resource_id == resource_id and not record.is_available
        }
        if blocked:
            for day in iter_dates(start_date, end_date):
                record = blocked.get(day)
                if record is None:
                    continue
                reason = (
                    record.unavailability_type.value
                    if record.unavailability_type
                    else "unavailable"
                )
                conflicts.append(
                    ConflictDetail(
                        type=ConflictType.UNAVAILABILITY,
                        date=day,
                        unavailability_type=record.unavailability_type,
                        message=f"Resource unavailable on {day.isoformat()}: {reason}",
                    )
                )

        return ConflictResult(has_conflict=bool(conflicts), conflicts=conflicts)

    @staticmethod
    def detect_unavailability_conflicts(
        resource_id: UUID,
        dates: Iterable[date],
        assignments: Iterable[ResourceAssignment],
    ) -> list[ResourceAssignment]:
        """
        Active assignments that a new unavailability on ``dates`` would hit.

        Used to warn before recording leave or maintenance over existing bookings.
        """
        wanted = sorted(set(dates))
        return [
            a
            for a in ConflictDetector.active_assignments_for(resource_id, assignments)
            if any(a.covers(d) for d in wanted)
        ]
