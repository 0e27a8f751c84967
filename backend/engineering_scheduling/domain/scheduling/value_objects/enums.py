"""Domain enums for resource scheduling."""

from enum import Enum


class ResourceType(str, Enum):
    """Kinds of schedulable engineering resources."""

    PERSONNEL = "personnel"
    EQUIPMENT = "equipment"
    TOOL = "tool"
    VEHICLE = "vehicle"
    FACILITY = "facility"

    @property
    def code_prefix(self) -> str:
        """Alphabetic prefix used in resource codes of this type."""
        return RESOURCE_TYPE_PREFIXES[self]


RESOURCE_TYPE_PREFIXES: dict[ResourceType, str] = {
    ResourceType.PERSONNEL: "PER",
    ResourceType.EQUIPMENT: "EQP",
    ResourceType.TOOL: "TOL",
    ResourceType.VEHICLE: "VEH",
    ResourceType.FACILITY: "FAC",
}


class AssignmentStatus(str, Enum):
    """Assignment lifecycle status."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_active(self) -> bool:
        """Active assignments hold capacity and take part in conflict checks."""
        return self in {AssignmentStatus.SCHEDULED, AssignmentStatus.IN_PROGRESS}

    @property
    def is_terminal(self) -> bool:
        return self in {AssignmentStatus.COMPLETED, AssignmentStatus.CANCELLED}

    def can_transition_to(self, target_status: "AssignmentStatus") -> bool:
        """Check if assignment can transition from current status to target status."""
        valid_transitions = {
            AssignmentStatus.SCHEDULED: {
                AssignmentStatus.IN_PROGRESS,
                AssignmentStatus.CANCELLED,
            },
            AssignmentStatus.IN_PROGRESS: {
                AssignmentStatus.COMPLETED,
                AssignmentStatus.CANCELLED,
            },
            AssignmentStatus.COMPLETED: set(),  # Terminal state
            AssignmentStatus.CANCELLED: set(),  # Terminal state
        }
        return target_status in valid_transitions.get(self, set())


ACTIVE_ASSIGNMENT_STATUSES = frozenset(
    {AssignmentStatus.SCHEDULED, AssignmentStatus.IN_PROGRESS}
)


class UnavailabilityType(str, Enum):
    """Reason a resource is blocked on a date."""

    LEAVE = "leave"
    MAINTENANCE = "maintenance"
    HOLIDAY = "holiday"
    OTHER = "other"


class AssignmentTargetType(str, Enum):
    """Work items a resource can be booked against."""

    PROJECT = "project"
    JOB_ORDER = "job_order"
    ASSESSMENT = "assessment"
    ROUTE_SURVEY = "route_survey"
    JMP = "jmp"


class CertificationStatus(str, Enum):
    VALID = "valid"
    EXPIRING_SOON = "expiring_soon"
    EXPIRED = "expired"


class CapacityUnit(str, Enum):
    HOURS = "hours"
    DAYS = "days"


class ConflictType(str, Enum):
    ASSIGNMENT = "assignment"
    UNAVAILABILITY = "unavailability"
