"""Utility modules for TeamPulse Analytics."""

from .date_utils import (
    day_of_week_index,
    get_week_end,
    get_week_start,
    inclusive_day_span,
    normalize_to_utc,
    to_iso_date,
    total_weeks,
)

__all__ = [
    "day_of_week_index",
    "get_week_end",
    "get_week_start",
    "inclusive_day_span",
    "normalize_to_utc",
    "to_iso_date",
    "total_weeks",
]
