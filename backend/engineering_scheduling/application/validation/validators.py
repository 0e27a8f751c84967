"""
Application layer validators for scheduling requests.

Each validator checks one request DTO and returns a ValidationResult with one
field-tagged error per violated rule. Validators never raise and never stop at
the first problem.
"""

from datetime import date
from typing import Any
from uuid import UUID

from ...domain.scheduling.value_objects.business_calendar import parse_date
from ...domain.scheduling.value_objects.enums import (
    AssignmentStatus,
    AssignmentTargetType,
    CapacityUnit,
    ResourceType,
    UnavailabilityType,
)
from ...domain.shared.validation import ValidationContext, ValidationResult
from ..dtos.scheduling_dtos import (
    AssignmentInput,
    ResourceInput,
    SkillInput,
    UnavailabilityInput,
)


def _is_member(enum_class: type, value: Any) -> bool:
    try:
        enum_class(value)
    except (TypeError, ValueError):
        return False
    return True


def is_valid_resource_type(value: Any) -> bool:
    return _is_member(ResourceType, value)


def is_valid_assignment_status(value: Any) -> bool:
    return _is_member(AssignmentStatus, value)


def is_valid_unavailability_type(value: Any) -> bool:
    return _is_member(UnavailabilityType, value)


def is_valid_target_type(value: Any) -> bool:
    return _is_member(AssignmentTargetType, value)


def coerce_uuid(value: UUID | str | None) -> UUID | None:
    """Parse an identifier, or None when it is missing or malformed."""
    if value is None or isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None


def coerce_date(value: date | str | None) -> date | None:
    """Parse a date, or None when it is missing or malformed."""
    if value is None:
        return None
    try:
        return parse_date(value)
    except (TypeError, ValueError):
        return None


def _check_required_uuid(
    ctx: ValidationContext, field: str, value: UUID | str | None
) -> None:
    if value is None or (isinstance(value, str) and not value):
        ctx.add_error(field, f"{field} is required")
    elif coerce_uuid(value) is None:
        ctx.add_error(field, f"{field} must be a valid identifier")


def _check_required_date(
    ctx: ValidationContext, field: str, value: date | str | None
) -> date | None:
    if value is None or (isinstance(value, str) and not value):
        ctx.add_error(field, f"{field} is required")
        return None
    parsed = coerce_date(value)
    if parsed is None:
        ctx.add_error(field, f"{field} must be a date in YYYY-MM-DD format")
    return parsed


def validate_resource_input(data: ResourceInput) -> ValidationResult:
    ctx = ValidationContext()

    if not data.resource_type:
        ctx.add_error("resource_type", "Resource type is required")
    elif not is_valid_resource_type(data.resource_type):
        allowed = ", ".join(t.value for t in ResourceType)
        ctx.add_error("resource_type", f"Resource type must be one of: {allowed}")

    if not data.resource_name:
        ctx.add_error("resource_name", "Resource name is required")
    elif len(data.resource_name) > 200:
        ctx.add_error("resource_name", "Resource name must not exceed 200 characters")

    if data.capacity_unit and not _is_member(CapacityUnit, data.capacity_unit):
        ctx.add_error("capacity_unit", "Capacity unit must be hours or days")

    if data.daily_capacity is not None and data.daily_capacity <= 0:
        ctx.add_error("daily_capacity", "Daily capacity must be greater than 0")

    for field in ("hourly_rate", "daily_rate"):
        rate = getattr(data, field)
        if rate is not None and rate < 0:
            ctx.add_error(field, f"{field.replace('_', ' ').capitalize()} cannot be negative")

    return ctx.result()


def validate_assignment_input(data: AssignmentInput) -> ValidationResult:
    """
    Validate a booking request.

    The date-order error is reported on ``end_date``; it is only checked when
    both dates parse.
    """
    ctx = ValidationContext()

    _check_required_uuid(ctx, "resource_id", data.resource_id)

    if not data.target_type:
        ctx.add_error("target_type", "Target type is required")
    elif not is_valid_target_type(data.target_type):
        allowed = ", ".join(t.value for t in AssignmentTargetType)
        ctx.add_error("target_type", f"Target type must be one of: {allowed}")

    _check_required_uuid(ctx, "target_id", data.target_id)

    start = _check_required_date(ctx, "start_date", data.start_date)
    end = _check_required_date(ctx, "end_date", data.end_date)
    if start and end and end < start:
        ctx.add_error("end_date", "End date must be on or after start date")

    if data.planned_hours is not None and data.planned_hours < 0:
        ctx.add_error("planned_hours", "Planned hours cannot be negative")

    return ctx.result()


def validate_unavailability_input(data: UnavailabilityInput) -> ValidationResult:
    ctx = ValidationContext()

    _check_required_uuid(ctx, "resource_id", data.resource_id)

    if not data.dates:
        ctx.add_error("dates", "At least one date is required")
    elif any(coerce_date(d) is None for d in data.dates):
        ctx.add_error("dates", "Dates must be in YYYY-MM-DD format")

    if not data.unavailability_type:
        ctx.add_error("unavailability_type", "Unavailability type is required")
    elif not is_valid_unavailability_type(data.unavailability_type):
        allowed = ", ".join(t.value for t in UnavailabilityType)
        ctx.add_error(
            "unavailability_type", f"Unavailability type must be one of: {allowed}"
        )

    return ctx.result()


def validate_skill_input(data: SkillInput) -> ValidationResult:
    ctx = ValidationContext()
    for field in ("skill_code", "skill_name"):
        if not getattr(data, field):
            ctx.add_error(field, f"{field} is required")
    return ctx.result()
