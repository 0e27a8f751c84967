from .assignment_repository import AssignmentRepository
from .availability_repository import AvailabilityRepository
from .base import BaseRepository
from .resource_repository import ResourceRepository
from .skill_repository import SkillRepository

__all__ = [
    "AssignmentRepository",
    "AvailabilityRepository",
    "BaseRepository",
    "ResourceRepository",
    "SkillRepository",
]
