"""
Test Configuration and Fixtures

Each test that touches persistence gets its own in-memory SQLite database.
StaticPool keeps the single connection alive so every session of the test
sees the same tables.
"""

from collections.abc import Generator

import pytest
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

from engineering_scheduling.application.services import ResourceSchedulingService
from engineering_scheduling.core.db import build_engine, create_db_and_tables
from engineering_scheduling.domain.scheduling.value_objects import BusinessCalendar
from engineering_scheduling.infrastructure.database.unit_of_work import (
    UnitOfWorkManager,
)


@pytest.fixture
def test_engine() -> Generator[Engine, None, None]:
    engine = build_engine("sqlite://", echo=False)
    create_db_and_tables(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def uow_manager(test_engine: Engine) -> UnitOfWorkManager:
    return UnitOfWorkManager(test_engine)


@pytest.fixture
def calendar() -> BusinessCalendar:
    return BusinessCalendar.standard_calendar()


@pytest.fixture
def scheduling_service(
    uow_manager: UnitOfWorkManager, calendar: BusinessCalendar
) -> ResourceSchedulingService:
    return ResourceSchedulingService(uow_manager, calendar)
