"""Metrics computed from aggregated commit activity."""

from .benchmarks import BenchmarkCalculator
from .contributors import ContributorMetricsEngine
from .health import ProjectHealthScorer
from .issues import IssueDetector
from .time_series import TimeSeriesAnalyzer, weekly_velocity

__all__ = [
    "BenchmarkCalculator",
    "ContributorMetricsEngine",
    "IssueDetector",
    "ProjectHealthScorer",
    "TimeSeriesAnalyzer",
    "weekly_velocity",
]
