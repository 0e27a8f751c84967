"""Value objects for the resource scheduling domain."""

from .business_calendar import (
    BusinessCalendar,
    count_working_days,
    date_ranges_overlap,
    dates_in_range,
    default_calendar,
    format_date,
    is_weekend,
    parse_date,
    week_start,
)
from .certification import Certification
from .date_range import DateRange
from .enums import (
    ACTIVE_ASSIGNMENT_STATUSES,
    RESOURCE_TYPE_PREFIXES,
    AssignmentStatus,
    AssignmentTargetType,
    CapacityUnit,
    CertificationStatus,
    ConflictType,
    ResourceType,
    UnavailabilityType,
)
from .filters import CalendarFilters, ResourceFilters, ResourceSortField

__all__ = [
    "ACTIVE_ASSIGNMENT_STATUSES",
    "RESOURCE_TYPE_PREFIXES",
    "AssignmentStatus",
    "AssignmentTargetType",
    "BusinessCalendar",
    "CalendarFilters",
    "CapacityUnit",
    "Certification",
    "CertificationStatus",
    "ConflictType",
    "DateRange",
    "ResourceFilters",
    "ResourceSortField",
    "ResourceType",
    "UnavailabilityType",
    "count_working_days",
    "date_ranges_overlap",
    "dates_in_range",
    "default_calendar",
    "format_date",
    "is_weekend",
    "parse_date",
    "week_start",
]
