"""
Date Range Value Object

A closed interval of calendar days used for assignment windows and report periods.
"""

from __future__ import annotations

from datetime import date

from pydantic import model_validator

from ...shared.base import ValueObject
from .business_calendar import BusinessCalendar, date_ranges_overlap, dates_in_range


class DateRange(ValueObject):
    """Closed date interval [start, end]; both ends are included."""

    start: date
    end: date

    @model_validator(mode="after")
    def _check_order(self) -> DateRange:
        if self.end < self.start:
            raise ValueError("End date must be on or after start date")
        return self

    def overlaps(self, other: DateRange) -> bool:
        return date_ranges_overlap(self.start, self.end, other.start, other.end)

    def contains(self, value: date) -> bool:
        return self.start <= value <= self.end

    def intersection(self, other: DateRange) -> DateRange | None:
        """Overlapping part of two ranges, or None when they are disjoint."""
        if not self.overlaps(other):
            return None
        return DateRange(start=max(self.start, other.start), end=min(self.end, other.end))

    def dates(self) -> list[date]:
        return dates_in_range(self.start, self.end)

    def working_days(self, calendar: BusinessCalendar) -> int:
        return calendar.count_working_days(self.start, self.end)

    @property
    def days(self) -> int:
        """Number of calendar days in the range."""
        return (self.end - self.start).days + 1

    def __str__(self) -> str:
        return f"{self.start.isoformat()}..{self.end.isoformat()}"
