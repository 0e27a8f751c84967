"""
Unit tests for the working-day calendar and date helpers.
"""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from engineering_scheduling.core.config import settings
from engineering_scheduling.domain.scheduling.value_objects import (
    BusinessCalendar,
    DateRange,
    count_working_days,
    date_ranges_overlap,
    dates_in_range,
    default_calendar,
    format_date,
    is_weekend,
    parse_date,
    week_start,
)

from .fixtures import FRIDAY, MONDAY, SATURDAY, SUNDAY


class TestDateHelpers:
    def test_dates_in_range_inclusive(self):
        days = dates_in_range(date(2025, 1, 30), date(2025, 2, 2))

        assert days == [
            date(2025, 1, 30),
            date(2025, 1, 31),
            date(2025, 2, 1),
            date(2025, 2, 2),
        ]

    def test_dates_in_range_single_day(self):
        assert dates_in_range(MONDAY, MONDAY) == [MONDAY]

    def test_dates_in_range_empty_when_reversed(self):
        assert dates_in_range(FRIDAY, MONDAY) == []

    def test_is_weekend(self):
        assert is_weekend(SATURDAY)
        assert is_weekend(SUNDAY)
        assert not is_weekend(MONDAY)
        assert not is_weekend(FRIDAY)

    def test_week_start_is_monday(self):
        assert week_start(MONDAY) == MONDAY
        assert week_start(FRIDAY) == MONDAY
        assert week_start(SUNDAY) == MONDAY
        assert week_start(date(2025, 1, 13)) == date(2025, 1, 13)

    def test_format_and_parse(self):
        assert format_date(date(2025, 3, 7)) == "2025-03-07"
        assert parse_date("2025-03-07") == date(2025, 3, 7)
        assert parse_date(datetime(2025, 3, 7, 14, 30)) == date(2025, 3, 7)
        assert parse_date(date(2025, 3, 7)) == date(2025, 3, 7)

    def test_parse_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_date("07/03/2025")

    def test_overlap_shared_boundary_day(self):
        assert date_ranges_overlap(MONDAY, date(2025, 1, 8), date(2025, 1, 8), FRIDAY)

    def test_overlap_disjoint(self):
        assert not date_ranges_overlap(
            MONDAY, date(2025, 1, 7), date(2025, 1, 8), FRIDAY
        )

    def test_overlap_containment(self):
        assert date_ranges_overlap(MONDAY, SUNDAY, date(2025, 1, 8), date(2025, 1, 8))


class TestBusinessCalendar:
    def test_standard_calendar_weekdays(self):
        calendar = BusinessCalendar.standard_calendar()

        assert calendar.is_working_day(MONDAY)
        assert calendar.is_working_day(FRIDAY)
        assert not calendar.is_working_day(SATURDAY)
        assert not calendar.is_working_day(SUNDAY)

    def test_count_working_days_full_week(self):
        calendar = BusinessCalendar.standard_calendar()

        assert calendar.count_working_days(MONDAY, SUNDAY) == 5
        assert calendar.count_working_days(SATURDAY, SUNDAY) == 0
        assert calendar.count_working_days(FRIDAY, MONDAY) == 0

    def test_module_count_working_days_uses_calendar(self):
        calendar = BusinessCalendar.standard_calendar()

        assert count_working_days(MONDAY, date(2025, 1, 17), calendar) == 10

    def test_holiday_is_not_working(self):
        calendar = BusinessCalendar.create_custom(range(5), [date(2025, 1, 8)])

        assert not calendar.is_working_day(date(2025, 1, 8))
        assert calendar.count_working_days(MONDAY, FRIDAY) == 4

    def test_custom_six_day_week(self):
        calendar = BusinessCalendar.create_custom(range(6))

        assert calendar.is_working_day(SATURDAY)
        assert calendar.count_working_days(MONDAY, SUNDAY) == 6

    def test_invalid_weekday_rejected(self):
        with pytest.raises(ValueError, match="Invalid weekday"):
            BusinessCalendar.create_custom([7])

    def test_default_calendar_reads_configured_holidays(self, monkeypatch):
        monkeypatch.setattr(settings, "HOLIDAYS", [date(2025, 1, 8)])

        calendar = default_calendar()

        assert not calendar.is_working_day(date(2025, 1, 8))
        assert calendar.count_working_days(MONDAY, FRIDAY) == 4


class TestDateRange:
    def test_end_before_start_rejected(self):
        with pytest.raises(ValidationError):
            DateRange(start=FRIDAY, end=MONDAY)

    def test_days_and_dates(self):
        week = DateRange(start=MONDAY, end=SUNDAY)

        assert week.days == 7
        assert week.dates()[0] == MONDAY
        assert week.dates()[-1] == SUNDAY
        assert week.working_days(BusinessCalendar.standard_calendar()) == 5

    def test_intersection(self):
        first = DateRange(start=MONDAY, end=date(2025, 1, 8))
        second = DateRange(start=date(2025, 1, 8), end=SUNDAY)

        overlap = first.intersection(second)

        assert overlap == DateRange(start=date(2025, 1, 8), end=date(2025, 1, 8))
        assert first.contains(date(2025, 1, 8))
        assert DateRange(start=MONDAY, end=MONDAY).intersection(
            DateRange(start=FRIDAY, end=FRIDAY)
        ) is None

    def test_str(self):
        assert str(DateRange(start=MONDAY, end=FRIDAY)) == "2025-01-06..2025-01-10"
