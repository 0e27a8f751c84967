"""
Resource scheduling application service.

Coordinates the scheduling use cases over the domain services and the
persistence layer. Every check-then-act sequence runs inside one unit of
work:

- resource creation reads the codes already issued for the type and year,
  picks the next sequence and inserts; the unique ``resource_code`` column
  turns a lost race into a retryable BookingConflictError.
- booking detects conflicts, inserts, flushes and runs detection again
  against a fresh read. A conflict that the first check did not see means a
  concurrent writer got there first; the transaction is rolled back and a
  retryable BookingConflictError is raised.
"""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from datetime import date
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from ...core.config import settings
from ...core.observability import get_logger, scheduling_operation
from ...domain.scheduling.entities import (
    EngineeringResource,
    ResourceAssignment,
    ResourceAvailability,
    ResourceSkill,
)
from ...domain.scheduling.read_models import (
    ConflictResult,
    TypeUtilization,
    UtilizationReport,
)
from ...domain.scheduling.services import (
    AvailabilityEngine,
    ConflictDetector,
    SkillMatcher,
    UtilizationService,
    code_pattern,
    generate_code,
    next_sequence,
)
from ...domain.scheduling.value_objects import (
    AssignmentStatus,
    AssignmentTargetType,
    BusinessCalendar,
    CalendarFilters,
    CapacityUnit,
    ResourceFilters,
    ResourceSortField,
    ResourceType,
    UnavailabilityType,
    dates_in_range,
    default_calendar,
)
from ...domain.shared.exceptions import (
    AssignmentNotFoundError,
    BookingConflictError,
    BusinessRuleError,
    InactiveResourceError,
    InvalidStatusTransitionError,
    MultipleValidationError,
    ResourceConflictError,
    ResourceNotFoundError,
    ValidationError,
)
from ...domain.shared.validation import FieldError, ValidationResult
from ...infrastructure.database.unit_of_work import SqlModelUnitOfWork, UnitOfWorkManager
from ..dtos.scheduling_dtos import (
    AssignmentInput,
    CalendarData,
    ResourceInput,
    SkillInput,
    UnavailabilityInput,
    UnavailabilityOutcome,
)
from ..validation.validators import (
    coerce_date,
    coerce_uuid,
    is_valid_assignment_status,
    validate_assignment_input,
    validate_resource_input,
    validate_skill_input,
    validate_unavailability_input,
)

logger = get_logger(__name__)


class ResourceSchedulingService:
    """
    Application service for resource scheduling.

    Raises MultipleValidationError for invalid requests, ResourceConflictError
    when a booking collides with existing work (unless forced) and
    BookingConflictError when a concurrent writer wins a race.
    """

    def __init__(
        self,
        uow_manager: UnitOfWorkManager,
        calendar: BusinessCalendar | None = None,
    ):
        self._uow_manager = uow_manager
        self.calendar = calendar or default_calendar()
        self.engine = AvailabilityEngine(self.calendar)
        self.utilization = UtilizationService(self.calendar)

    @contextmanager
    def _operation(self, name: str, **context) -> Iterator[SqlModelUnitOfWork]:
        """A unit of work whose log lines are tagged with the operation."""
        with scheduling_operation(name, **context):
            with self._uow_manager.transaction() as uow:
                yield uow

    @staticmethod
    def _raise_if_invalid(result: ValidationResult) -> None:
        if not result.is_valid:
            raise MultipleValidationError(result.errors)

    @staticmethod
    def _load_resource(uow: SqlModelUnitOfWork, resource_id: UUID) -> EngineeringResource:
        resource = uow.resources.get(resource_id)
        if resource is None:
            raise ResourceNotFoundError(resource_id)
        return resource

    @staticmethod
    def _load_assignment(
        uow: SqlModelUnitOfWork, assignment_id: UUID
    ) -> ResourceAssignment:
        assignment = uow.assignments.get(assignment_id)
        if assignment is None:
            raise AssignmentNotFoundError(assignment_id)
        return assignment

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    def create_resource(
        self, data: ResourceInput, year: int | None = None
    ) -> EngineeringResource:
        """
        Create a resource with the next free code for its type and year.

        Raises:
            MultipleValidationError: If the request is invalid
            BookingConflictError: If another writer took the same code
        """
        self._raise_if_invalid(validate_resource_input(data))
        resource_type = ResourceType(data.resource_type)

        with self._operation("create_resource", resource_type=resource_type.value) as uow:
            existing = uow.resources.codes_with_prefix(code_pattern(resource_type, year))
            code = generate_code(
                resource_type, next_sequence(existing, resource_type, year), year
            )
            resource = EngineeringResource(
                resource_type=resource_type,
                resource_code=code,
                resource_name=data.resource_name,
                description=data.description,
                capacity_unit=CapacityUnit(data.capacity_unit or CapacityUnit.HOURS),
                daily_capacity=data.daily_capacity or settings.DEFAULT_DAILY_CAPACITY,
                skills=tuple(data.skills),
                hourly_rate=data.hourly_rate,
                daily_rate=data.daily_rate,
                base_location=data.base_location,
            )
            uow.resources.add(resource)
            try:
                uow.flush()
            except IntegrityError as e:
                logger.warning("resource_code_taken", resource_code=code)
                raise BookingConflictError(
                    f"Resource code {code} was allocated concurrently, retry"
                ) from e

        logger.info(
            "resource_created",
            resource_id=str(resource.id),
            resource_code=code,
            resource_type=resource_type.value,
        )
        return resource

    def get_resource(self, resource_id: UUID) -> EngineeringResource:
        with self._uow_manager.transaction() as uow:
            return self._load_resource(uow, resource_id)

    def list_resources(
        self,
        filters: ResourceFilters | None = None,
        sort_by: ResourceSortField | str = ResourceSortField.NAME,
        ascending: bool = True,
    ) -> list[EngineeringResource]:
        filters = filters or ResourceFilters()
        with self._uow_manager.transaction() as uow:
            resources = uow.resources.list_resources(resource_type=filters.resource_type)
        selected = SkillMatcher.filter_resources(resources, filters)
        return SkillMatcher.sort_resources(selected, sort_by, ascending)

    def update_resource(
        self, resource_id: UUID, data: ResourceInput
    ) -> EngineeringResource:
        """
        Update a resource's descriptive and capacity fields.

        The resource type and code never change after creation.
        """
        self._raise_if_invalid(validate_resource_input(data))
        with self._uow_manager.transaction() as uow:
            resource = self._load_resource(uow, resource_id)
            if ResourceType(data.resource_type) != resource.resource_type:
                raise BusinessRuleError(
                    "Resource type cannot change after creation",
                    {"resource_id": str(resource_id)},
                )
            updated = resource.model_copy(
                update={
                    "resource_name": data.resource_name,
                    "description": data.description,
                    "capacity_unit": CapacityUnit(
                        data.capacity_unit or resource.capacity_unit
                    ),
                    "daily_capacity": data.daily_capacity or resource.daily_capacity,
                    "skills": tuple(data.skills),
                    "hourly_rate": data.hourly_rate,
                    "daily_rate": data.daily_rate,
                    "base_location": data.base_location,
                }
            )
            uow.resources.update(updated)
        return updated

    def retire_resource(self, resource_id: UUID) -> EngineeringResource:
        """Deactivate a resource; its assignments stay as history."""
        with self._uow_manager.transaction() as uow:
            resource = self._load_resource(uow, resource_id)
            retired = resource.model_copy(update={"is_active": False})
            uow.resources.update(retired)
        logger.info("resource_retired", resource_id=str(resource_id))
        return retired

    # ------------------------------------------------------------------
    # Assignments
    # ------------------------------------------------------------------

    def _detect(
        self,
        uow: SqlModelUnitOfWork,
        resource_id: UUID,
        start_date: date,
        end_date: date,
        exclude_assignment_id: UUID | None = None,
    ) -> ConflictResult:
        assignments = uow.assignments.list_for_resource(resource_id, start_date, end_date)
        records = uow.availability.list_for_resource(resource_id, start_date, end_date)
        return ConflictDetector.detect_conflicts(
            resource_id,
            start_date,
            end_date,
            assignments,
            records,
            exclude_assignment_id=exclude_assignment_id,
        )

    def check_conflicts(
        self,
        resource_id: UUID,
        start_date: date,
        end_date: date,
        exclude_assignment_id: UUID | None = None,
    ) -> ConflictResult:
        with self._uow_manager.transaction() as uow:
            return self._detect(
                uow, resource_id, start_date, end_date, exclude_assignment_id
            )

    def _book(
        self,
        uow: SqlModelUnitOfWork,
        assignment: ResourceAssignment,
        force: bool,
        is_new: bool,
    ) -> ConflictResult:
        """
        Detect, write, then re-detect against a fresh read.

        Returns the conflicts accepted by a forced booking.
        """
        first = self._detect(
            uow,
            assignment.resource_id,
            assignment.start_date,
            assignment.end_date,
            exclude_assignment_id=assignment.id,
        )
        if first.has_conflict and not force:
            logger.info(
                "booking_refused",
                resource_id=str(assignment.resource_id),
                start_date=assignment.start_date.isoformat(),
                end_date=assignment.end_date.isoformat(),
                conflict_count=len(first.conflicts),
            )
            raise ResourceConflictError(
                f"Resource has {len(first.conflicts)} conflict(s) between "
                f"{assignment.start_date.isoformat()} and "
                f"{assignment.end_date.isoformat()}",
                first,
            )

        if is_new:
            uow.assignments.add(assignment)
        else:
            uow.assignments.update(assignment)
        uow.flush()

        second = self._detect(
            uow,
            assignment.resource_id,
            assignment.start_date,
            assignment.end_date,
            exclude_assignment_id=assignment.id,
        )
        new_ids = second.conflicting_assignment_ids - first.conflicting_assignment_ids
        new_blocked = {c.date for c in second.unavailability_conflicts} - {
            c.date for c in first.unavailability_conflicts
        }
        if new_ids or new_blocked:
            logger.warning(
                "booking_race_detected",
                resource_id=str(assignment.resource_id),
                assignment_id=str(assignment.id),
                new_assignment_conflicts=sorted(str(i) for i in new_ids),
                new_blocked_dates=sorted(d.isoformat() for d in new_blocked),
            )
            raise BookingConflictError(
                "Resource was booked or blocked concurrently, retry", second
            )
        return first

    def create_assignment(
        self, data: AssignmentInput, force: bool = False
    ) -> ResourceAssignment:
        """
        Book a resource for a date range.

        Without planned hours the booking claims the resource's daily capacity
        on every working day of the range.

        Args:
            data: Booking request
            force: Book even when the range collides with existing
                assignments or unavailability

        Raises:
            MultipleValidationError: If the request is invalid
            ResourceNotFoundError: If the resource does not exist
            InactiveResourceError: If the resource is retired
            ResourceConflictError: If conflicts exist and ``force`` is False
            BookingConflictError: If a concurrent booking appeared before commit
        """
        self._raise_if_invalid(validate_assignment_input(data))
        resource_id = coerce_uuid(data.resource_id)
        start_date = coerce_date(data.start_date)
        end_date = coerce_date(data.end_date)

        with self._operation("create_assignment", resource_id=resource_id) as uow:
            resource = self._load_resource(uow, resource_id)
            if not resource.is_active:
                raise InactiveResourceError(resource_id)

            planned_hours = data.planned_hours
            if planned_hours is None:
                planned_hours = self.engine.calculate_planned_hours(
                    start_date, end_date, resource.daily_capacity
                )

            assignment = ResourceAssignment(
                resource_id=resource_id,
                target_type=AssignmentTargetType(data.target_type),
                target_id=coerce_uuid(data.target_id),
                task_description=data.task_description,
                start_date=start_date,
                end_date=end_date,
                planned_hours=planned_hours,
                work_location=data.work_location,
                notes=data.notes,
            )
            accepted = self._book(uow, assignment, force=force, is_new=True)

        logger.info(
            "assignment_created",
            assignment_id=str(assignment.id),
            resource_id=str(resource_id),
            forced=accepted.has_conflict,
        )
        return assignment

    def reschedule_assignment(
        self,
        assignment_id: UUID,
        start_date: date,
        end_date: date,
        planned_hours: float | None = None,
        force: bool = False,
    ) -> ResourceAssignment:
        """
        Move an active assignment to a new date range.

        The assignment's own current dates never count as a conflict. Without
        new planned hours, hours that were derived from capacity at booking
        time are derived again for the new range; hours the caller set
        explicitly are kept.
        """
        errors = []
        if end_date < start_date:
            errors.append(
                FieldError(field="end_date", message="End date must be on or after start date")
            )
        if planned_hours is not None and planned_hours < 0:
            errors.append(
                FieldError(field="planned_hours", message="Planned hours cannot be negative")
            )
        if errors:
            raise MultipleValidationError(errors)

        with self._operation("reschedule_assignment", assignment_id=assignment_id) as uow:
            assignment = self._load_assignment(uow, assignment_id)
            if not assignment.is_active:
                raise BusinessRuleError(
                    f"Assignment {assignment_id} is {assignment.status.value} "
                    "and cannot be rescheduled",
                    {"assignment_id": str(assignment_id)},
                )
            if planned_hours is None:
                planned_hours = self._carried_planned_hours(
                    uow, assignment, start_date, end_date
                )
            moved = ResourceAssignment.model_validate(
                {
                    **assignment.model_dump(),
                    "start_date": start_date,
                    "end_date": end_date,
                    "planned_hours": planned_hours,
                }
            )
            self._book(uow, moved, force=force, is_new=False)

        logger.info(
            "assignment_rescheduled",
            assignment_id=str(assignment_id),
            start_date=start_date.isoformat(),
            end_date=end_date.isoformat(),
        )
        return moved

    def _carried_planned_hours(
        self,
        uow: SqlModelUnitOfWork,
        assignment: ResourceAssignment,
        start_date: date,
        end_date: date,
    ) -> float | None:
        if assignment.planned_hours is None:
            return None
        resource = self._load_resource(uow, assignment.resource_id)
        derived = self.engine.calculate_planned_hours(
            assignment.start_date, assignment.end_date, resource.daily_capacity
        )
        if assignment.planned_hours != derived:
            return assignment.planned_hours
        return self.engine.calculate_planned_hours(
            start_date, end_date, resource.daily_capacity
        )

    def get_assignment(self, assignment_id: UUID) -> ResourceAssignment:
        with self._uow_manager.transaction() as uow:
            return self._load_assignment(uow, assignment_id)

    def list_assignments(
        self,
        resource_id: UUID | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        active_only: bool = False,
    ) -> list[ResourceAssignment]:
        with self._uow_manager.transaction() as uow:
            return uow.assignments.list_in_window(
                start_date,
                end_date,
                resource_ids=[resource_id] if resource_id else None,
                active_only=active_only,
            )

    def update_assignment_status(
        self, assignment_id: UUID, status: AssignmentStatus | str
    ) -> ResourceAssignment:
        """
        Move an assignment through its lifecycle.

        Raises:
            MultipleValidationError: If the status is unknown
            InvalidStatusTransitionError: If the lifecycle forbids the move
        """
        if not is_valid_assignment_status(status):
            raise MultipleValidationError(
                [FieldError(field="status", message=f"Unknown assignment status: {status}")]
            )
        target = AssignmentStatus(status)

        with self._operation(
            "update_assignment_status", assignment_id=assignment_id, status=target.value
        ) as uow:
            assignment = self._load_assignment(uow, assignment_id)
            if not assignment.status.can_transition_to(target):
                raise InvalidStatusTransitionError(
                    assignment_id, assignment.status.value, target.value
                )
            updated = assignment.model_copy(update={"status": target})
            uow.assignments.update(updated)

        logger.info(
            "assignment_status_changed",
            assignment_id=str(assignment_id),
            from_status=assignment.status.value,
            to_status=target.value,
        )
        return updated

    def cancel_assignment(self, assignment_id: UUID) -> ResourceAssignment:
        return self.update_assignment_status(assignment_id, AssignmentStatus.CANCELLED)

    def record_actual_hours(
        self, assignment_id: UUID, actual_hours: float
    ) -> ResourceAssignment:
        if actual_hours < 0:
            raise ValidationError(
                "actual_hours", actual_hours, "Actual hours cannot be negative"
            )
        with self._uow_manager.transaction() as uow:
            assignment = self._load_assignment(uow, assignment_id)
            updated = assignment.model_copy(update={"actual_hours": actual_hours})
            uow.assignments.update(updated)
        return updated

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    def get_availability(
        self, resource_id: UUID, start_date: date, end_date: date
    ) -> list[ResourceAvailability]:
        with self._uow_manager.transaction() as uow:
            return uow.availability.list_for_resource(resource_id, start_date, end_date)

    def set_unavailability(self, data: UnavailabilityInput) -> UnavailabilityOutcome:
        """
        Block a resource on the given dates.

        Existing records on those dates are replaced. Active assignments that
        cover any of the dates are returned so the caller can warn about them;
        they are not changed.
        """
        self._raise_if_invalid(validate_unavailability_input(data))
        resource_id = coerce_uuid(data.resource_id)
        dates = sorted({coerce_date(d) for d in data.dates})
        unavailability_type = UnavailabilityType(data.unavailability_type)

        with self._operation("set_unavailability", resource_id=resource_id) as uow:
            self._load_resource(uow, resource_id)

            replaced = uow.availability.dates_recorded(resource_id, dates)
            if replaced:
                uow.availability.delete_for_dates(resource_id, replaced)
                uow.flush()

            records = AvailabilityEngine.create_unavailability_records(
                resource_id, dates, unavailability_type, data.notes
            )
            for record in records:
                uow.availability.add(record)
            try:
                uow.flush()
            except IntegrityError as e:
                logger.warning(
                    "unavailability_recorded_concurrently",
                    resource_id=str(resource_id),
                    dates=[d.isoformat() for d in dates],
                )
                raise BookingConflictError(
                    "Availability for these dates was recorded concurrently, retry"
                ) from e

            affected = ConflictDetector.detect_unavailability_conflicts(
                resource_id,
                dates,
                uow.assignments.list_for_resource(resource_id, dates[0], dates[-1]),
            )

        if affected:
            logger.warning(
                "unavailability_overlaps_assignments",
                resource_id=str(resource_id),
                assignment_ids=[str(a.id) for a in affected],
            )
        logger.info(
            "unavailability_recorded",
            resource_id=str(resource_id),
            unavailability_type=unavailability_type.value,
            date_count=len(records),
        )
        return UnavailabilityOutcome(
            records=records,
            replaced_dates=sorted(replaced),
            affected_assignments=affected,
        )

    def remove_unavailability(self, resource_id: UUID, dates: Iterable[date]) -> int:
        with self._uow_manager.transaction() as uow:
            removed = uow.availability.delete_for_dates(resource_id, list(dates))
        logger.info(
            "unavailability_removed", resource_id=str(resource_id), removed=removed
        )
        return removed

    # ------------------------------------------------------------------
    # Skills
    # ------------------------------------------------------------------

    def create_skill(self, data: SkillInput) -> ResourceSkill:
        self._raise_if_invalid(validate_skill_input(data))
        skill = ResourceSkill(
            skill_code=data.skill_code,
            skill_name=data.skill_name,
            skill_category=data.skill_category,
        )
        with self._uow_manager.transaction() as uow:
            uow.skills.add(skill)
            try:
                uow.flush()
            except IntegrityError as e:
                raise BusinessRuleError(
                    f"Skill code {skill.skill_code} already exists",
                    {"skill_code": skill.skill_code},
                ) from e
        return skill

    def list_skills(self) -> list[ResourceSkill]:
        with self._uow_manager.transaction() as uow:
            return uow.skills.list_skills()

    # ------------------------------------------------------------------
    # Calendar and utilization
    # ------------------------------------------------------------------

    def get_calendar_data(
        self,
        start_date: date,
        end_date: date,
        filters: CalendarFilters | None = None,
    ) -> CalendarData:
        """One cell per active resource and date, resources ordered by type then name."""
        filters = filters or CalendarFilters()
        with self._uow_manager.transaction() as uow:
            resources = SkillMatcher.filter_calendar_resources(
                uow.resources.list_resources(active_only=True), filters
            )
            resource_ids = [r.id for r in resources]
            assignments = uow.assignments.list_in_window(
                start_date, end_date, resource_ids=resource_ids
            )
            records = uow.availability.list_in_window(
                start_date, end_date, resource_ids=resource_ids
            )

        resources = SkillMatcher.sort_resources(resources, ResourceSortField.TYPE)
        days = dates_in_range(start_date, end_date)
        cells = [
            self.engine.generate_calendar_cell(resource, day, assignments, records)
            for resource in resources
            for day in days
        ]
        return CalendarData(
            start_date=start_date, end_date=end_date, resources=resources, cells=cells
        )

    def get_utilization_report(
        self,
        start_date: date,
        end_date: date,
        resource_type: ResourceType | None = None,
        resource_ids: Iterable[UUID] | None = None,
    ) -> list[UtilizationReport]:
        wanted = set(resource_ids or ())
        with self._uow_manager.transaction() as uow:
            resources = [
                r
                for r in uow.resources.list_resources(
                    resource_type=resource_type, active_only=True
                )
                if not wanted or r.id in wanted
            ]
            ids = [r.id for r in resources]
            assignments = uow.assignments.list_in_window(
                start_date, end_date, resource_ids=ids
            )
            records = uow.availability.list_in_window(start_date, end_date, resource_ids=ids)

        reports = [
            self.utilization.build_utilization_report(
                resource, start_date, end_date, assignments, records
            )
            for resource in resources
        ]
        over = [r.resource_code for r in reports if r.is_over_allocated]
        if over:
            logger.warning("resources_over_allocated", resource_codes=over)
        return reports

    def get_utilization_by_type(
        self, start_date: date, end_date: date
    ) -> list[TypeUtilization]:
        with self._uow_manager.transaction() as uow:
            resources = uow.resources.list_resources(active_only=True)
            assignments = uow.assignments.list_in_window(start_date, end_date)
            records = uow.availability.list_in_window(start_date, end_date)
        return self.utilization.aggregate_utilization_by_type(
            resources, assignments, records, start_date, end_date
        )
