"""Repository for resource assignments."""

from collections.abc import Iterable
from datetime import date
from uuid import UUID

from sqlmodel import col, select

from ....domain.scheduling.entities import ResourceAssignment
from ....domain.scheduling.value_objects.enums import ACTIVE_ASSIGNMENT_STATUSES
from ..mappers import AssignmentMapper
from ..models import ResourceAssignmentTable
from .base import BaseRepository


class AssignmentRepository(BaseRepository[ResourceAssignmentTable, ResourceAssignment]):
    """
    Assignment queries pre-filtered by resource and date window.

    Window filters use the same closed-interval rule as the conflict detector,
    so an assignment ending on the window's first day is included.
    """

    model = ResourceAssignmentTable
    to_domain = staticmethod(AssignmentMapper.sql_to_domain)
    to_row = staticmethod(AssignmentMapper.domain_to_sql)

    def list_for_resource(
        self,
        resource_id: UUID,
        start_date: date | None = None,
        end_date: date | None = None,
        active_only: bool = True,
    ) -> list[ResourceAssignment]:
        return self.list_in_window(
            start_date, end_date, resource_ids=[resource_id], active_only=active_only
        )

    def list_in_window(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        resource_ids: Iterable[UUID] | None = None,
        active_only: bool = True,
    ) -> list[ResourceAssignment]:
        statement = select(ResourceAssignmentTable)
        if resource_ids is not None:
            statement = statement.where(
                col(ResourceAssignmentTable.resource_id).in_(list(resource_ids))
            )
        if end_date is not None:
            statement = statement.where(ResourceAssignmentTable.start_date <= end_date)
        if start_date is not None:
            statement = statement.where(ResourceAssignmentTable.end_date >= start_date)
        if active_only:
            statement = statement.where(
                col(ResourceAssignmentTable.status).in_(list(ACTIVE_ASSIGNMENT_STATUSES))
            )
        return self._list(
            statement.order_by(
                ResourceAssignmentTable.start_date, ResourceAssignmentTable.id
            )
        )
