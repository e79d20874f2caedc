"""Densify sparse per-day activity into a contiguous calendar series."""

import logging
from datetime import date
from typing import Optional

import pandas as pd

from ..models import DailyActivity

logger = logging.getLogger(__name__)


def fill_gaps(
    daily: dict[date, DailyActivity],
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> list[DailyActivity]:
    """Return one DailyActivity per calendar day in ``[start, end]``, ascending.

    ``start`` and ``end`` default to the first and last commit days. Days
    without commits are zero-filled. An empty map with no explicit bounds
    yields an empty series.
    """
    if start is None:
        start = min(daily) if daily else None
    if end is None:
        end = max(daily) if daily else None
    if start is None or end is None or end < start:
        return []

    series = []
    for timestamp in pd.date_range(start=start, end=end, freq="D"):
        day = timestamp.date()
        existing = daily.get(day)
        if existing is None:
            series.append(DailyActivity(day=day))
        else:
            series.append(
                DailyActivity(
                    day=day,
                    commit_count=existing.commit_count,
                    lines_added=existing.lines_added,
                    lines_deleted=existing.lines_deleted,
                    contributors=set(existing.contributors),
                )
            )

    logger.debug(f"Gap-filled {len(daily)} active days into {len(series)} calendar days")
    return series
