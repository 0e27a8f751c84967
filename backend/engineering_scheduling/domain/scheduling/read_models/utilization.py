"""
Utilization read models.

Aggregated planned/actual/available hours per resource, per week and per
resource type over a reporting period.
"""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from ..value_objects.enums import ResourceType


class WeeklyUtilization(BaseModel):
    """Utilization for one Monday-to-Sunday week."""

    week_start: date
    planned_hours: float = Field(ge=0)
    actual_hours: float = Field(ge=0)
    available_hours: float = Field(ge=0)
    utilization_percentage: float


class UtilizationReport(BaseModel):
    """Utilization of one resource over a reporting period."""

    resource_id: UUID
    resource_code: str
    resource_name: str
    resource_type: ResourceType
    total_planned_hours: float
    total_actual_hours: float
    total_available_hours: float
    utilization_percentage: float
    is_over_allocated: bool
    weekly_breakdown: list[WeeklyUtilization] = Field(default_factory=list)


class TypeUtilization(BaseModel):
    """Utilization aggregated over all active resources of one type."""

    resource_type: ResourceType
    resource_count: int
    total_planned_hours: float
    total_available_hours: float
    average_utilization: float
