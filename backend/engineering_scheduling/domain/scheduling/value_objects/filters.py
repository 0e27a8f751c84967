"""Filter criteria for resource lists and the scheduling calendar."""

from enum import Enum
from uuid import UUID

from ...shared.base import ValueObject
from .enums import ResourceType


class ResourceSortField(str, Enum):
    NAME = "name"
    CODE = "code"
    TYPE = "type"
    CREATED_AT = "created_at"


class ResourceFilters(ValueObject):
    """
    Criteria for the resource list.

    Unset criteria match everything. ``search`` is matched case-insensitively
    against name, code and description.
    """

    resource_type: ResourceType | None = None
    is_available: bool | None = None
    is_active: bool | None = None
    skills: tuple[str, ...] = ()
    search: str | None = None


class CalendarFilters(ValueObject):
    """Criteria for the resource rows shown on the scheduling calendar."""

    resource_types: tuple[ResourceType, ...] = ()
    skills: tuple[str, ...] = ()
    resource_ids: tuple[UUID, ...] = ()
