"""
Business Calendar Value Objects

Working-day calendar and date arithmetic for day-granular resource bookings.
Weekends are non-working by default; holidays can be configured on top.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from ....core.config import settings

WEEKEND_DAYS = frozenset({5, 6})  # Saturday, Sunday


def format_date(value: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return value.isoformat()


def parse_date(value: str | date | datetime) -> date:
    """
    Parse an ISO date string (or datetime) into a date.

    Raises:
        ValueError: If the string is not a valid ISO date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def iter_dates(start_date: date, end_date: date) -> Iterator[date]:
    """Yield every calendar date in the closed range [start_date, end_date]."""
    current = start_date
    one_day = timedelta(days=1)
    while current <= end_date:
        yield current
        current += one_day


def dates_in_range(start_date: date, end_date: date) -> list[date]:
    """All calendar dates in the closed range; empty when end precedes start."""
    return list(iter_dates(start_date, end_date))


def is_weekend(value: date) -> bool:
    return value.weekday() in WEEKEND_DAYS


def week_start(value: date) -> date:
    """Monday of the week containing ``value``."""
    return value - timedelta(days=value.weekday())


def date_ranges_overlap(
    start1: date, end1: date, start2: date, end2: date
) -> bool:
    """
    Closed-interval overlap test.

    [a, b] and [c, d] overlap iff a <= d and c <= b, so ranges that share a
    single boundary day overlap.
    """
    return start1 <= end2 and start2 <= end1


@dataclass(frozen=True)
class BusinessCalendar:
    """
    Working-day calendar.

    Immutable value object: a set of working weekdays (0=Monday, 6=Sunday)
    plus explicit holidays.
    """

    working_weekdays: frozenset[int] = frozenset({0, 1, 2, 3, 4})
    holidays: frozenset[date] = field(default_factory=frozenset)

    def __post_init__(self):
        """Validate business calendar constraints."""
        for weekday in self.working_weekdays:
            if not 0 <= weekday <= 6:
                raise ValueError(
                    f"Invalid weekday: {weekday}. Must be 0-6 (Monday=0, Sunday=6)"
                )

    @classmethod
    def standard_calendar(cls) -> BusinessCalendar:
        """Mon-Fri calendar with no holidays."""
        return cls()

    @classmethod
    def from_settings(cls) -> BusinessCalendar:
        """Calendar built from the configured working weekdays and holidays."""
        return cls.create_custom(settings.WORKING_WEEKDAYS, settings.holiday_set)

    @classmethod
    def create_custom(
        cls, working_weekdays: Iterable[int], holidays: Iterable[date] = ()
    ) -> BusinessCalendar:
        return cls(working_weekdays=frozenset(working_weekdays), holidays=frozenset(holidays))

    def is_working_day(self, target_date: date) -> bool:
        """
        Check if a date is a working day.

        Args:
            target_date: Date to check

        Returns:
            True if the weekday is worked and the date is not a holiday
        """
        if target_date in self.holidays:
            return False
        return target_date.weekday() in self.working_weekdays

    def working_days_in_range(self, start_date: date, end_date: date) -> list[date]:
        return [d for d in iter_dates(start_date, end_date) if self.is_working_day(d)]

    def count_working_days(self, start_date: date, end_date: date) -> int:
        """Number of working days in the closed range."""
        return len(self.working_days_in_range(start_date, end_date))


def default_calendar() -> BusinessCalendar:
    """Calendar used when a caller does not pass one explicitly."""
    return BusinessCalendar.from_settings()


def count_working_days(
    start_date: date, end_date: date, calendar: BusinessCalendar | None = None
) -> int:
    """Counts working days between two dates (inclusive)."""
    return (calendar or default_calendar()).count_working_days(start_date, end_date)
