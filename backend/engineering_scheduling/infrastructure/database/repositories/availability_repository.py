"""Repository for per-date availability records."""

from collections.abc import Iterable
from datetime import date
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import col, select

from ....domain.scheduling.entities import ResourceAvailability
from ....domain.shared.exceptions import DatabaseError
from ..mappers import AvailabilityMapper
from ..models import ResourceAvailabilityTable
from .base import BaseRepository


class AvailabilityRepository(
    BaseRepository[ResourceAvailabilityTable, ResourceAvailability]
):
    model = ResourceAvailabilityTable
    to_domain = staticmethod(AvailabilityMapper.sql_to_domain)
    to_row = staticmethod(AvailabilityMapper.domain_to_sql)

    def list_in_window(
        self,
        start_date: date,
        end_date: date,
        resource_ids: Iterable[UUID] | None = None,
    ) -> list[ResourceAvailability]:
        statement = select(ResourceAvailabilityTable).where(
            ResourceAvailabilityTable.date >= start_date,
            ResourceAvailabilityTable.date <= end_date,
        )
        if resource_ids is not None:
            statement = statement.where(
                col(ResourceAvailabilityTable.resource_id).in_(list(resource_ids))
            )
        return self._list(statement.order_by(ResourceAvailabilityTable.date))

    def list_for_resource(
        self, resource_id: UUID, start_date: date, end_date: date
    ) -> list[ResourceAvailability]:
        return self.list_in_window(start_date, end_date, resource_ids=[resource_id])

    def dates_recorded(self, resource_id: UUID, dates: Iterable[date]) -> set[date]:
        """Which of ``dates`` already have a record for the resource."""
        statement = select(ResourceAvailabilityTable.date).where(
            ResourceAvailabilityTable.resource_id == resource_id,
            col(ResourceAvailabilityTable.date).in_(list(dates)),
        )
        return set(self.session.exec(statement).all())

    def delete_for_dates(self, resource_id: UUID, dates: Iterable[date]) -> int:
        """Remove the resource's records on the given dates; returns rows removed."""
        statement = select(ResourceAvailabilityTable).where(
            ResourceAvailabilityTable.resource_id == resource_id,
            col(ResourceAvailabilityTable.date).in_(list(dates)),
        )
        try:
            rows = self.session.exec(statement).all()
            for row in rows:
                self.session.delete(row)
            return len(rows)
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Error removing availability for resource {resource_id}: {str(e)}"
            ) from e
