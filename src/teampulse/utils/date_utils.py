"""Date utility functions for week boundary and window calculations.

These are pure date math functions shared by the contributor metrics, the
time-series analyzer and the weekly velocity series so that all of them use
the same configured first day of the week.
"""

import math
from datetime import date, datetime, timedelta
from typing import Optional, Union

import pytz

from ..config.schema import WeekStart


def normalize_to_utc(timestamp: Optional[datetime]) -> Optional[datetime]:
    """Normalize any timestamp to a timezone-aware UTC datetime.

    Args:
        timestamp: DateTime object that may be timezone-naive, timezone-aware, or None

    Returns:
        Timezone-aware datetime in UTC, or None if input is None
    """
    if timestamp is None:
        return None

    if timestamp.tzinfo is None:
        # Assume naive timestamps are UTC
        return timestamp.replace(tzinfo=pytz.UTC)
    return timestamp.astimezone(pytz.UTC)


def day_of_week_index(day: date, week_start: WeekStart = WeekStart.SUNDAY) -> int:
    """Position of ``day`` within its week, 0 being the configured first day.

    Sunday-start weeks give Sunday=0 ... Saturday=6; Monday-start weeks give
    Monday=0 ... Sunday=6.
    """
    # date.weekday(): Monday=0 ... Sunday=6
    if WeekStart(week_start) is WeekStart.MONDAY:
        return day.weekday()
    return (day.weekday() + 1) % 7


def get_week_start(day: Union[date, datetime], week_start: WeekStart = WeekStart.SUNDAY) -> date:
    """Get the first calendar day of the week containing ``day``.

    Args:
        day: Input date or datetime (datetimes use their own calendar date)
        week_start: Which weekday opens a week

    Returns:
        Date of the Sunday or Monday starting that week
    """
    if isinstance(day, datetime):
        day = day.date()
    return day - timedelta(days=day_of_week_index(day, week_start))


def get_week_end(day: Union[date, datetime], week_start: WeekStart = WeekStart.SUNDAY) -> date:
    """Get the last calendar day of the week containing ``day``."""
    return get_week_start(day, week_start) + timedelta(days=6)


def inclusive_day_span(start: date, end: date) -> int:
    """Number of calendar days in ``[start, end]``; 0 when end precedes start."""
    return max(0, (end - start).days + 1)


def total_weeks(start: date, end: date) -> int:
    """Calendar weeks covered by ``[start, end]``, at least 1."""
    return max(1, math.ceil(inclusive_day_span(start, end) / 7))


def to_iso_date(value: Union[date, datetime]) -> str:
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()
