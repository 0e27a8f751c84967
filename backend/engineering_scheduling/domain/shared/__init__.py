"""Shared domain building blocks: base models, validation results, errors."""

from .base import DomainRecord, ValueObject, as_utc, utc_now
from .exceptions import (
    AssignmentNotFoundError,
    BookingConflictError,
    BusinessRuleError,
    DatabaseError,
    DomainError,
    EntityNotFoundError,
    ErrorType,
    InactiveResourceError,
    InvalidStatusTransitionError,
    MultipleValidationError,
    ResourceConflictError,
    ResourceNotFoundError,
    ValidationError,
)
from .validation import FieldError, ValidationContext, ValidationResult

__all__ = [
    "AssignmentNotFoundError",
    "BookingConflictError",
    "BusinessRuleError",
    "DatabaseError",
    "DomainError",
    "DomainRecord",
    "EntityNotFoundError",
    "ErrorType",
    "FieldError",
    "InactiveResourceError",
    "InvalidStatusTransitionError",
    "MultipleValidationError",
    "ResourceConflictError",
    "ResourceNotFoundError",
    "ValidationContext",
    "ValidationError",
    "ValidationResult",
    "ValueObject",
    "as_utc",
    "utc_now",
]
