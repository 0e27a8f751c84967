"""Resource scheduling domain records."""

from .assignment import ResourceAssignment
from .availability import ResourceAvailability
from .resource import EngineeringResource
from .skill import ResourceSkill

__all__ = [
    "EngineeringResource",
    "ResourceAssignment",
    "ResourceAvailability",
    "ResourceSkill",
]
