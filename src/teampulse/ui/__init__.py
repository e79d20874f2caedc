"""UI components for TeamPulse Analytics."""

from .display import AnalyticsDisplay

__all__ = ["AnalyticsDisplay"]
