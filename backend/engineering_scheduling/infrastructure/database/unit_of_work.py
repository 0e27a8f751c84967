"""
Unit of Work implementation for managing transactions across repositories.

Every check-then-act sequence of the scheduling service (conflict check then
insert, read codes then insert) runs inside one unit of work so that it
commits or rolls back as a whole.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from ...core.observability import get_logger
from ...domain.shared.exceptions import DatabaseError
from .repositories import (
    AssignmentRepository,
    AvailabilityRepository,
    ResourceRepository,
    SkillRepository,
)

logger = get_logger(__name__)


class SqlModelUnitOfWork:
    """
    SQLModel-based Unit of Work.

    Commits on a clean exit and rolls back when the block raises. Integrity
    violations propagate unchanged so the application layer can turn them
    into domain conflicts; other SQLAlchemy failures become DatabaseError.
    """

    resources: ResourceRepository
    assignments: AssignmentRepository
    availability: AvailabilityRepository
    skills: SkillRepository

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> "SqlModelUnitOfWork":
        if self._session is not None:
            raise RuntimeError("UnitOfWork is already active")
        self._session = self._session_factory()
        self.resources = ResourceRepository(self._session)
        self.assignments = AssignmentRepository(self._session)
        self.availability = AvailabilityRepository(self._session)
        self.skills = SkillRepository(self._session)
        logger.debug("transaction_started", session_id=id(self._session))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is not None:
                self.rollback()
                logger.debug(
                    "transaction_rolled_back",
                    session_id=id(self._session),
                    reason=exc_type.__name__,
                )
            else:
                try:
                    self.commit()
                except Exception:
                    self.rollback()
                    raise
        finally:
            if self._session is not None:
                self._session.close()
                self._session = None

    @property
    def session(self) -> Session:
        if self._session is None:
            raise DatabaseError("No active database session")
        return self._session

    def commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to commit transaction: {str(e)}") from e

    def rollback(self) -> None:
        if self._session is None:
            return
        try:
            self._session.rollback()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to rollback transaction: {str(e)}") from e

    def flush(self) -> None:
        """Write pending changes without committing."""
        try:
            self.session.flush()
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to flush session: {str(e)}") from e


class UnitOfWorkManager:
    """Creates units of work bound to one engine."""

    def __init__(self, engine: Engine):
        self._engine = engine

    def session_factory(self) -> Session:
        # Rows stay readable after commit for mapping back to domain records
        return Session(self._engine, expire_on_commit=False)

    def create_unit_of_work(self) -> SqlModelUnitOfWork:
        return SqlModelUnitOfWork(self.session_factory)

    @contextmanager
    def transaction(self) -> Iterator[SqlModelUnitOfWork]:
        with self.create_unit_of_work() as uow:
            yield uow
