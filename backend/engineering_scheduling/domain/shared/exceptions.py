"""
Domain Exceptions

Defines custom exceptions for scheduling errors with discriminated error types.
Validation failures, booking conflicts and commit-time races each carry their
own ErrorType so callers can tell them apart.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from ..scheduling.read_models.conflicts import ConflictResult
    from .validation import FieldError


class ErrorType(str, Enum):
    """Error type enumeration for discriminated unions."""

    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_CONFLICT = "resource_conflict"
    NOT_FOUND = "not_found"
    REPOSITORY = "repository"
    CONCURRENCY = "concurrency"


class DomainError(Exception):
    """Base class for all domain errors with type discrimination."""

    retryable: bool = False

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> dict[str, object]:
        """Convert error to dictionary for API responses."""
        return {
            "type": self.error_type.value,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }


class ValidationError(DomainError):
    """Raised when domain validation rules are violated."""

    def __init__(
        self,
        field_name: str,
        value: str | int | float | bool | None,
        message: str,
        error_code: str | None = None,
    ) -> None:
        self.field_name = field_name
        self.value = value
        self.error_code = error_code or "VALIDATION_ERROR"

        details: dict[str, str | int | bool | None] = {
            "field": field_name,
            "value": str(value) if value is not None else None,
            "error_code": self.error_code,
        }
        super().__init__(
            f"Validation failed for field '{field_name}': {message}",
            ErrorType.VALIDATION,
            details,
        )


class MultipleValidationError(DomainError):
    """Raised by the application layer when an input fails validation."""

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = list(errors)
        combined = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(
            f"Multiple validation errors: {combined}",
            ErrorType.VALIDATION,
            {"error_count": len(self.errors)},
        )

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def to_dict(self) -> dict[str, object]:
        data = super().to_dict()
        data["errors"] = [e.model_dump() for e in self.errors]
        return data


class BusinessRuleError(DomainError):
    """Raised when business rules are violated."""

    def __init__(
        self, message: str, details: dict[str, str | int | bool | None] | None = None
    ) -> None:
        super().__init__(message, ErrorType.BUSINESS_RULE, details)


class InactiveResourceError(BusinessRuleError):
    """Raised when booking a retired resource."""

    def __init__(self, resource_id: UUID) -> None:
        super().__init__(
            f"Resource {resource_id} is inactive and cannot take new assignments",
            {"resource_id": str(resource_id)},
        )
        self.resource_id = resource_id


class InvalidStatusTransitionError(BusinessRuleError):
    """Raised when an assignment status change is not allowed."""

    def __init__(self, assignment_id: UUID, current: str, target: str) -> None:
        super().__init__(
            f"Assignment {assignment_id} cannot move from {current} to {target}",
            {
                "assignment_id": str(assignment_id),
                "current_status": current,
                "target_status": target,
            },
        )
        self.assignment_id = assignment_id


class ResourceConflictError(DomainError):
    """Raised when a booking collides with existing assignments or unavailability."""

    def __init__(
        self,
        message: str,
        conflicts: ConflictResult | None = None,
        error_type: ErrorType = ErrorType.RESOURCE_CONFLICT,
    ) -> None:
        details: dict[str, str | int | bool | None] = {}
        if conflicts is not None:
            details["conflict_count"] = len(conflicts.conflicts)
        super().__init__(message, error_type, details)
        self.conflicts = conflicts


class BookingConflictError(ResourceConflictError):
    """
    Raised when a conflict appears between the initial check and the commit.

    Another writer booked the same resource (or took the same resource code)
    concurrently. The transaction has been rolled back; the caller may retry.
    """

    retryable = True

    def __init__(
        self, message: str, conflicts: ConflictResult | None = None
    ) -> None:
        super().__init__(message, conflicts, ErrorType.CONCURRENCY)


class EntityNotFoundError(DomainError):
    """Base class for lookups that found nothing."""

    def __init__(self, entity_type: str, entity_id: UUID) -> None:
        super().__init__(
            f"{entity_type} not found: {entity_id}",
            ErrorType.NOT_FOUND,
            {"entity_type": entity_type, "entity_id": str(entity_id)},
        )
        self.entity_id = entity_id


class ResourceNotFoundError(EntityNotFoundError):
    def __init__(self, resource_id: UUID) -> None:
        super().__init__("resource", resource_id)


class AssignmentNotFoundError(EntityNotFoundError):
    def __init__(self, assignment_id: UUID) -> None:
        super().__init__("assignment", assignment_id)


class DatabaseError(DomainError):
    """Raised when a persistence operation fails."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorType.REPOSITORY)
