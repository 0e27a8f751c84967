"""
Validation result types shared by the input validators.

Validators collect every violated field instead of stopping at the first one,
so a form can show all problems at once.
"""

from pydantic import BaseModel, ConfigDict, Field


class FieldError(BaseModel):
    """A single field-tagged validation failure."""

    model_config = ConfigDict(frozen=True)

    field: str
    message: str


class ValidationResult(BaseModel):
    """Outcome of validating one input."""

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    errors: list[FieldError] = Field(default_factory=list)

    def errors_for(self, field: str) -> list[FieldError]:
        """Errors tagged on the given field."""
        return [error for error in self.errors if error.field == field]

    @property
    def fields(self) -> set[str]:
        return {error.field for error in self.errors}


class ValidationContext:
    """Accumulates field errors for a single validation call."""

    def __init__(self) -> None:
        self.errors: list[FieldError] = []

    def add_error(self, field: str, message: str) -> None:
        self.errors.append(FieldError(field=field, message=message))

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def result(self) -> ValidationResult:
        return ValidationResult(is_valid=not self.has_errors, errors=list(self.errors))
