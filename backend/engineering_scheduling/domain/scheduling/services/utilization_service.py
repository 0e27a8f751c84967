"""
Utilization Service

Period-level capacity reporting: weekly utilization, per-resource utilization
reports with a weekly breakdown, and utilization aggregated by resource type.

Available hours for a period are the daily capacity of every working day that
is not blocked by an unavailability record (partial records contribute their
own hours). Planned and actual hours of each active assignment are pro-rated
by the share of its working days that fall inside the period.
"""

from collections.abc import Iterable
from datetime import date, timedelta

from ..entities.assignment import ResourceAssignment
from ..entities.availability import ResourceAvailability
from ..entities.resource import EngineeringResource
from ..read_models.utilization import (
    TypeUtilization,
    UtilizationReport,
    WeeklyUtilization,
)
from ..value_objects.business_calendar import (
    BusinessCalendar,
    date_ranges_overlap,
    default_calendar,
    iter_dates,
    week_start,
)
from ..value_objects.enums import ResourceType
from .availability_engine import calculate_utilization, is_over_allocated


class UtilizationService:
    """Aggregates assignment hours against available capacity over periods."""

    def __init__(self, calendar: BusinessCalendar | None = None) -> None:
        self.calendar = calendar or default_calendar()

    def available_hours_in_period(
        self,
        resource: EngineeringResource,
        start_date: date,
        end_date: date,
        unavailability_records: Iterable[ResourceAvailability],
    ) -> float:
        records = {
            r.date: r for r in unavailability_records if r.resource_id == resource.id
        }
        total = 0.0
        for day in iter_dates(start_date, end_date):
            if not self.calendar.is_working_day(day):
                continue
            record = records.get(day)
            total += resource.daily_capacity if record is None else record.effective_hours
        return total

    def prorated_hours(
        self,
        assignment: ResourceAssignment,
        start_date: date,
        end_date: date,
        daily_capacity: float,
    ) -> tuple[float, float]:
        """
        (planned, actual) hours of an assignment that fall inside the period.

        Assignments without planned hours claim the daily capacity on each
        working day inside the period.
        """
        if not date_ranges_overlap(
            start_date, end_date, assignment.start_date, assignment.end_date
        ):
            return 0.0, 0.0

        overlap_start = max(start_date, assignment.start_date)
        overlap_end = min(end_date, assignment.end_date)
        total_days = self.calendar.count_working_days(
            assignment.start_date, assignment.end_date
        )
        overlap_days = self.calendar.count_working_days(overlap_start, overlap_end)
        weekend_only = total_days == 0
        if weekend_only:
            # Entirely on non-working days: pro-rate by calendar days instead.
            total_days = assignment.period.days
            overlap_days = (overlap_end - overlap_start).days + 1

        ratio = overlap_days / total_days
        if assignment.planned_hours is None:
            planned = 0.0 if weekend_only else overlap_days * daily_capacity
        else:
            planned = assignment.planned_hours * ratio
        actual = (assignment.actual_hours or 0.0) * ratio
        return planned, actual

    def _period_totals(
        self,
        resource: EngineeringResource,
        start_date: date,
        end_date: date,
        assignments: list[ResourceAssignment],
        records: list[ResourceAvailability],
    ) -> tuple[float, float, float]:
        planned = actual = 0.0
        for assignment in assignments:
            if assignment.resource_id != resource.id or not assignment.is_active:
                continue
            p, a = self.prorated_hours(
                assignment, start_date, end_date, resource.daily_capacity
            )
            planned += p
            actual += a
        available = self.available_hours_in_period(
            resource, start_date, end_date, records
        )
        return planned, actual, available

    def calculate_weekly_utilization(
        self,
        resource: EngineeringResource,
        week_start_date: date,
        assignments: Iterable[ResourceAssignment],
        unavailability_records: Iterable[ResourceAvailability],
    ) -> WeeklyUtilization:
        """Utilization over the seven days starting at ``week_start_date``."""
        week_end = week_start_date + timedelta(days=6)
        planned, actual, available = self._period_totals(
            resource,
            week_start_date,
            week_end,
            list(assignments),
            list(unavailability_records),
        )
        return WeeklyUtilization(
            week_start=week_start_date,
            planned_hours=round(planned, 2),
            actual_hours=round(actual, 2),
            available_hours=available,
            utilization_percentage=round(calculate_utilization(planned, available), 1),
        )

    def build_utilization_report(
        self,
        resource: EngineeringResource,
        start_date: date,
        end_date: date,
        assignments: Iterable[ResourceAssignment],
        unavailability_records: Iterable[ResourceAvailability],
    ) -> UtilizationReport:
        """
        Utilization of one resource over [start_date, end_date].

        The weekly breakdown is keyed by Monday; the first and last weeks are
        clipped to the reporting period.
        """
        assignments = list(assignments)
        records = list(unavailability_records)
        planned, actual, available = self._period_totals(
            resource, start_date, end_date, assignments, records
        )

        weekly: list[WeeklyUtilization] = []
        current = week_start(start_date)
        while current <= end_date:
            clip_start = max(current, start_date)
            clip_end = min(current + timedelta(days=6), end_date)
            w_planned, w_actual, w_available = self._period_totals(
                resource, clip_start, clip_end, assignments, records
            )
            weekly.append(
                WeeklyUtilization(
                    week_start=current,
                    planned_hours=round(w_planned, 2),
                    actual_hours=round(w_actual, 2),
                    available_hours=w_available,
                    utilization_percentage=round(
                        calculate_utilization(w_planned, w_available), 1
                    ),
                )
            )
            current += timedelta(days=7)

        utilization = calculate_utilization(planned, available)
        return UtilizationReport(
            resource_id=resource.id,
            resource_code=resource.resource_code,
            resource_name=resource.resource_name,
            resource_type=resource.resource_type,
            total_planned_hours=round(planned, 2),
            total_actual_hours=round(actual, 2),
            total_available_hours=available,
            utilization_percentage=round(utilization, 1),
            is_over_allocated=is_over_allocated(utilization),
            weekly_breakdown=weekly,
        )

    def aggregate_utilization_by_type(
        self,
        resources: Iterable[EngineeringResource],
        assignments: Iterable[ResourceAssignment],
        unavailability_records: Iterable[ResourceAvailability],
        start_date: date,
        end_date: date,
    ) -> list[TypeUtilization]:
        """Totals per resource type over active resources, in first-seen type order."""
        assignments = list(assignments)
        records = list(unavailability_records)
        totals: dict[ResourceType, list[float]] = {}

        for resource in resources:
            if not resource.is_active:
                continue
            planned, _, available = self._period_totals(
                resource, start_date, end_date, assignments, records
            )
            entry = totals.setdefault(resource.resource_type, [0, 0.0, 0.0])
            entry[0] += 1
            entry[1] += planned
            entry[2] += available

        return [
            TypeUtilization(
                resource_type=resource_type,
                resource_count=int(count),
                total_planned_hours=round(planned, 2),
                total_available_hours=available,
                average_utilization=round(calculate_utilization(planned, available), 1),
            )
            for resource_type, (count, planned, available) in totals.items()
        ]
