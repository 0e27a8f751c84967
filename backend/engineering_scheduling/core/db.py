from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from .config import settings


def build_engine(database_url: str | None = None, echo: bool | None = None) -> Engine:
    """
    Create an engine for the configured database.

    In-memory SQLite shares one connection across threads so that every
    session sees the same database.
    """
    url = database_url or settings.DATABASE_URL
    engine_kwargs: dict = {"echo": settings.DATABASE_ECHO if echo is None else echo}

    if url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            engine_kwargs["poolclass"] = StaticPool
    else:
        engine_kwargs.update(
            pool_pre_ping=True,  # Verify connections before use
            pool_recycle=3600,
        )

    return create_engine(url, **engine_kwargs)


engine = build_engine()


def create_db_and_tables(target: Engine | None = None) -> None:
    # Tables must be registered on SQLModel.metadata before create_all
    from ..infrastructure.database import models  # noqa: F401

    SQLModel.metadata.create_all(target or engine)
