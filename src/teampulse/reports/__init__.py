"""Presentation-side views built from computed metrics."""

from .activity import commit_frequency_distribution
from .insights import InsightGenerator
from .json_exporter import AnalyticsJSONExporter
from .team_health import TeamHealthMonitor

__all__ = [
    "AnalyticsJSONExporter",
    "InsightGenerator",
    "TeamHealthMonitor",
    "commit_frequency_distribution",
]
