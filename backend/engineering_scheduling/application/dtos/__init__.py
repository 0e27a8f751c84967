from .scheduling_dtos import (
    AssignmentInput,
    CalendarData,
    ResourceInput,
    SkillInput,
    UnavailabilityInput,
    UnavailabilityOutcome,
)

__all__ = [
    "AssignmentInput",
    "CalendarData",
    "ResourceInput",
    "SkillInput",
    "UnavailabilityInput",
    "UnavailabilityOutcome",
]
