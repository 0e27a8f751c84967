"""Read models returned by the scheduling services."""

from .availability import (
    AvailabilityStatus,
    CalendarCell,
    DayAvailability,
    OverAllocationResult,
)
from .conflicts import ConflictDetail, ConflictResult
from .utilization import TypeUtilization, UtilizationReport, WeeklyUtilization

__all__ = [
    "AvailabilityStatus",
    "CalendarCell",
    "ConflictDetail",
    "ConflictResult",
    "DayAvailability",
    "OverAllocationResult",
    "TypeUtilization",
    "UtilizationReport",
    "WeeklyUtilization",
]
