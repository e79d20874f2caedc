"""Tests for date utility functions."""

from datetime import date, datetime, timedelta, timezone

import pytest
import pytz

from teampulse.config.schema import WeekStart
from teampulse.utils.date_utils import (
    day_of_week_index,
    get_week_end,
    get_week_start,
    inclusive_day_span,
    normalize_to_utc,
    to_iso_date,
    total_weeks,
)

MONDAY = date(2024, 3, 4)
SUNDAY = date(2024, 3, 10)


class TestWeekBoundaries:
    def test_sunday_start(self):
        assert get_week_start(MONDAY, WeekStart.SUNDAY) == date(2024, 3, 3)
        assert get_week_start(SUNDAY, WeekStart.SUNDAY) == SUNDAY
        assert get_week_end(MONDAY, WeekStart.SUNDAY) == date(2024, 3, 9)

    def test_monday_start(self):
        assert get_week_start(SUNDAY, WeekStart.MONDAY) == MONDAY
        assert get_week_end(MONDAY, WeekStart.MONDAY) == SUNDAY

    def test_datetime_input(self):
        assert get_week_start(datetime(2024, 3, 6, 23, 59), WeekStart.MONDAY) == MONDAY

    @pytest.mark.parametrize(
        "day, week_start, expected",
        [
            (SUNDAY, WeekStart.SUNDAY, 0),
            (MONDAY, WeekStart.SUNDAY, 1),
            (MONDAY, WeekStart.MONDAY, 0),
            (SUNDAY, WeekStart.MONDAY, 6),
        ],
    )
    def test_day_of_week_index(self, day, week_start, expected):
        assert day_of_week_index(day, week_start) == expected


class TestSpans:
    def test_inclusive_day_span(self):
        assert inclusive_day_span(MONDAY, MONDAY) == 1
        assert inclusive_day_span(MONDAY, SUNDAY) == 7
        assert inclusive_day_span(SUNDAY, MONDAY) == 0

    def test_total_weeks_rounds_up(self):
        assert total_weeks(MONDAY, MONDAY) == 1
        assert total_weeks(MONDAY, SUNDAY) == 1
        assert total_weeks(MONDAY, SUNDAY + timedelta(days=1)) == 2
        assert total_weeks(SUNDAY, MONDAY) == 1


class TestNormalizeToUtc:
    def test_naive_is_assumed_utc(self):
        result = normalize_to_utc(datetime(2024, 1, 1, 12))
        assert result.tzinfo is not None
        assert result.hour == 12

    def test_aware_is_converted(self):
        aware = datetime(2024, 1, 1, 12, tzinfo=timezone(timedelta(hours=2)))
        assert normalize_to_utc(aware) == datetime(2024, 1, 1, 10, tzinfo=pytz.UTC)

    def test_none(self):
        assert normalize_to_utc(None) is None


def test_to_iso_date():
    assert to_iso_date(datetime(2024, 3, 4, 8)) == "2024-03-04"
    assert to_iso_date(MONDAY) == "2024-03-04"
