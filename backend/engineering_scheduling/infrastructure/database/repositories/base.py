"""
Base repository for scheduling persistence.

Repositories speak domain records on the outside and SQLModel rows on the
inside. They never commit; the unit of work owns the transaction.
"""

from collections.abc import Callable
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel

from ....domain.shared.exceptions import DatabaseError
from ....domain.shared.base import DomainRecord, utc_now

RowT = TypeVar("RowT", bound=SQLModel)
DomainT = TypeVar("DomainT", bound=DomainRecord)


class BaseRepository(Generic[RowT, DomainT]):
    """Base repository class for data access."""

    model: type[RowT]
    to_domain: Callable[[RowT], DomainT]
    to_row: Callable[[DomainT], RowT]

    def __init__(self, session: Session):
        self.session = session

    def _get_row(self, entity_id: UUID) -> RowT | None:
        try:
            return self.session.get(self.model, entity_id)
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Error loading {self.model.__tablename__} {entity_id}: {str(e)}"
            ) from e

    def _list(self, statement: Any) -> list[DomainT]:
        try:
            return [self.to_domain(row) for row in self.session.exec(statement).all()]
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Error querying {self.model.__tablename__}: {str(e)}"
            ) from e

    def get(self, entity_id: UUID) -> DomainT | None:
        """Get an entity by ID."""
        row = self._get_row(entity_id)
        return self.to_domain(row) if row is not None else None

    def add(self, entity: DomainT) -> DomainT:
        """Stage a new entity; it is written on the next flush or commit."""
        self.session.add(self.to_row(entity))
        return entity

    def update(self, entity: DomainT) -> DomainT:
        """
        Copy the entity's fields onto its stored row.

        Raises:
            DatabaseError: If the row does not exist
        """
        row = self._get_row(entity.id)
        if row is None:
            raise DatabaseError(
                f"Cannot update missing {self.model.__tablename__} {entity.id}"
            )
        fresh = self.to_row(entity)
        for field_name in self.model.model_fields:
            if field_name in ("id", "created_at", "updated_at"):
                continue
            setattr(row, field_name, getattr(fresh, field_name))
        if "updated_at" in self.model.model_fields:
            row.updated_at = utc_now()
        self.session.add(row)
        return entity
