"""
Availability Engine

Computes, for one resource and one date, how many hours are available, how
many are already assigned and how many remain. Everything else in this module
(calendar cells, availability calendars, over-allocation warnings) is built on
``check_availability``.

Availability is default-available: with no record for a date, a resource
offers its full daily capacity on working days and nothing on non-working
days. A record with ``is_available=False`` zeroes the date; a record with
``is_available=True`` replaces the capacity with its ``available_hours``.
"""

from collections.abc import Iterable
from datetime import date
from uuid import UUID

from ..entities.assignment import ResourceAssignment
from ..entities.availability import ResourceAvailability
from ..entities.resource import EngineeringResource
from ..read_models.availability import (
    AvailabilityStatus,
    CalendarCell,
    DayAvailability,
    OverAllocationResult,
)
from ..value_objects.business_calendar import (
    BusinessCalendar,
    default_calendar,
    iter_dates,
)
from ..value_objects.enums import UnavailabilityType


def calculate_utilization(assigned_hours: float, available_hours: float) -> float:
    """
    Assigned hours as a percentage of available hours.

    Returns 0 when nothing is available rather than failing on the division.
    """
    if available_hours <= 0:
        return 0.0
    return (assigned_hours / available_hours) * 100


def is_over_allocated(utilization_percentage: float) -> bool:
    """Over-allocated means strictly above 100%."""
    return utilization_percentage > 100


class AvailabilityEngine:
    """Per-day capacity arithmetic over immutable resource snapshots."""

    def __init__(self, calendar: BusinessCalendar | None = None) -> None:
        self.calendar = calendar or default_calendar()

    def calculate_planned_hours(
        self, start_date: date, end_date: date, daily_capacity: float
    ) -> float:
        """Working days in the range times the daily capacity."""
        if daily_capacity <= 0:
            return 0.0
        return self.calendar.count_working_days(start_date, end_date) * daily_capacity

    def daily_share(
        self,
        assignment: ResourceAssignment,
        target_date: date,
        daily_capacity: float,
    ) -> float:
        """
        Hours an assignment claims on one date.

        Planned hours are spread evenly across the assignment's working days;
        without planned hours the assignment claims the full daily capacity on
        each working day. Non-working days accrue nothing, unless the whole
        assignment lies on non-working days and carries its own planned hours,
        in which case those hours are spread across its calendar days.
        """
        if not assignment.covers(target_date):
            return 0.0

        working_days = self.calendar.count_working_days(
            assignment.start_date, assignment.end_date
        )
        if working_days > 0:
            if not self.calendar.is_working_day(target_date):
                return 0.0
            if assignment.planned_hours is None:
                return daily_capacity
            return assignment.planned_hours / working_days

        if assignment.planned_hours is None:
            return 0.0
        return assignment.planned_hours / assignment.period.days

    def assignments_on(
        self,
        resource_id: UUID,
        target_date: date,
        assignments: Iterable[ResourceAssignment],
    ) -> list[ResourceAssignment]:
        """Active assignments of the resource that cover the date."""
        return [
            a
            for a in assignments
            if a.resource_id == resource_id and a.is_active and a.covers(target_date)
        ]

    def assigned_hours(
        self,
        resource_id: UUID,
        target_date: date,
        daily_capacity: float,
        assignments: Iterable[ResourceAssignment],
    ) -> float:
        return sum(
            self.daily_share(a, target_date, daily_capacity)
            for a in self.assignments_on(resource_id, target_date, assignments)
        )

    @staticmethod
    def find_record(
        resource_id: UUID,
        target_date: date,
        unavailability_records: Iterable[ResourceAvailability],
    ) -> ResourceAvailability | None:
        for record in unavailability_records:
            if record.resource_id == resource_id and record.date == target_date:
                return record
        return None

    def check_availability(
        self,
        resource_id: UUID,
        target_date: date,
        resource: EngineeringResource,
        assignments: Iterable[ResourceAssignment],
        unavailability_records: Iterable[ResourceAvailability],
    ) -> AvailabilityStatus:
        """
        Hours picture for a resource on a date.

        Assigned hours are counted even on blocked dates, so a booking that
        overlaps leave shows up as negative remaining hours.
        ``remaining_hours`` is always ``available_hours - assigned_hours``.
        """
        assignments = list(assignments)
        working_day = self.calendar.is_working_day(target_date)
        record = self.find_record(resource_id, target_date, unavailability_records)

        unavailability_type: UnavailabilityType | None = None
        notes: str | None = None
        if record is not None:
            available_hours = record.effective_hours
            is_available = record.is_available
            if not record.is_available:
                unavailability_type = record.unavailability_type
                notes = record.notes
        elif working_day:
            available_hours = resource.daily_capacity
            is_available = True
        else:
            available_hours = 0.0
            is_available = False

        assigned = self.assigned_hours(
            resource_id, target_date, resource.daily_capacity, assignments
        )

        return AvailabilityStatus(
            is_available=is_available,
            is_working_day=working_day,
            available_hours=available_hours,
            assigned_hours=assigned,
            remaining_hours=available_hours - assigned,
            unavailability_type=unavailability_type,
            unavailability_notes=notes,
        )

    def get_remaining_hours(
        self,
        resource_id: UUID,
        target_date: date,
        resource: EngineeringResource,
        assignments: Iterable[ResourceAssignment],
        unavailability_records: Iterable[ResourceAvailability],
    ) -> float:
        return self.check_availability(
            resource_id, target_date, resource, assignments, unavailability_records
        ).remaining_hours

    def detect_over_allocation(
        self,
        resource_id: UUID,
        target_date: date,
        additional_hours: float,
        resource: EngineeringResource,
        assignments: Iterable[ResourceAssignment],
        unavailability_records: Iterable[ResourceAvailability],
    ) -> OverAllocationResult:
        """
        Would adding ``additional_hours`` on the date exceed what is available?

        Advisory only: the caller decides whether to warn or refuse.
        """
        status = self.check_availability(
            resource_id, target_date, resource, assignments, unavailability_records
        )
        total_assigned = status.assigned_hours + additional_hours
        over = total_assigned > status.available_hours

        return OverAllocationResult(
            is_over_allocated=over,
            date=target_date,
            available_hours=status.available_hours,
            assigned_hours=status.assigned_hours,
            requested_hours=additional_hours,
            excess_hours=total_assigned - status.available_hours if over else 0.0,
        )

    def generate_calendar_cell(
        self,
        resource: EngineeringResource,
        target_date: date,
        assignments: Iterable[ResourceAssignment],
        unavailability_records: Iterable[ResourceAvailability],
    ) -> CalendarCell:
        assignments = list(assignments)
        status = self.check_availability(
            resource.id, target_date, resource, assignments, unavailability_records
        )
        return CalendarCell(
            resource_id=resource.id,
            date=target_date,
            is_available=status.is_available,
            available_hours=status.available_hours,
            assigned_hours=status.assigned_hours,
            remaining_hours=status.remaining_hours,
            unavailability_type=status.unavailability_type,
            assignments=self.assignments_on(resource.id, target_date, assignments),
        )

    def generate_availability_calendar(
        self,
        resource: EngineeringResource,
        start_date: date,
        end_date: date,
        assignments: Iterable[ResourceAssignment],
        unavailability_records: Iterable[ResourceAvailability],
    ) -> list[DayAvailability]:
        """One DayAvailability per calendar date in the closed range."""
        assignments = list(assignments)
        records = list(unavailability_records)
        days = []
        for day in iter_dates(start_date, end_date):
            cell = self.generate_calendar_cell(resource, day, assignments, records)
            days.append(
                DayAvailability(
                    date=day,
                    is_available=cell.is_available,
                    available_hours=cell.available_hours,
                    assigned_hours=cell.assigned_hours,
                    remaining_hours=cell.remaining_hours,
                    unavailability_type=cell.unavailability_type,
                    assignments=cell.assignments,
                )
            )
        return days

    @staticmethod
    def create_unavailability_records(
        resource_id: UUID,
        dates: Iterable[date],
        unavailability_type: UnavailabilityType,
        notes: str | None = None,
    ) -> list[ResourceAvailability]:
        """Blocking records, one per distinct date, in date order."""
        return [
            ResourceAvailability(
                resource_id=resource_id,
                date=day,
                is_available=False,
                available_hours=0.0,
                unavailability_type=unavailability_type,
                notes=notes,
            )
            for day in sorted(set(dates))
        ]
