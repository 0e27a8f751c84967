"""
Domain Services

Stateless services that work across resources, assignments and availability
records: code generation, conflict detection, per-day availability, period
utilization and skill matching.
"""

from .availability_engine import (
    AvailabilityEngine,
    calculate_utilization,
    is_over_allocated,
)
from .conflict_detector import ConflictDetector
from .resource_code_generator import (
    code_pattern,
    extract_sequence,
    generate_code,
    next_sequence,
)
from .skill_matcher import SkillMatcher
from .utilization_service import UtilizationService

__all__ = [
    "AvailabilityEngine",
    "ConflictDetector",
    "SkillMatcher",
    "UtilizationService",
    "calculate_utilization",
    "code_pattern",
    "extract_sequence",
    "generate_code",
    "is_over_allocated",
    "next_sequence",
]
