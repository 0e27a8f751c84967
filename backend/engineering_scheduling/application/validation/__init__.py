"""Request validation for the scheduling application service."""

from .validators import (
    coerce_date,
    coerce_uuid,
    is_valid_assignment_status,
    is_valid_resource_type,
    is_valid_target_type,
    is_valid_unavailability_type,
    validate_assignment_input,
    validate_resource_input,
    validate_skill_input,
    validate_unavailability_input,
)

__all__ = [
    "coerce_date",
    "coerce_uuid",
    "is_valid_assignment_status",
    "is_valid_resource_type",
    "is_valid_target_type",
    "is_valid_unavailability_type",
    "validate_assignment_input",
    "validate_resource_input",
    "validate_skill_input",
    "validate_unavailability_input",
]
