"""Base classes for domain records and value objects."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC; SQLite hands stored timestamps back naive."""
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


class ValueObject(BaseModel):
    """Base class for value objects (immutable, defined by their values)."""

    model_config = ConfigDict(frozen=True)


class DomainRecord(BaseModel):
    """
    Base class for snapshots handed to the scheduling core.

    Records are loaded by the persistence layer and passed in read-only;
    the core never mutates them. Changes go through ``model_copy(update=...)``.
    """

    model_config = ConfigDict(frozen=True)
