"""TeamPulse Analytics - team and project health analytics from commit history."""

from ._version import __version__
from .config.schema import AuthorGroup, GlobalConfig, ProjectConfig, WeekStart
from .models import AnalysisWindow, AnalyticsResult, CommitRecord, FileChange
from .pipeline import AnalysisInputError, analyze, analyze_repository

__all__ = [
    "__version__",
    "AnalysisInputError",
    "AnalysisWindow",
    "AnalyticsResult",
    "AuthorGroup",
    "CommitRecord",
    "FileChange",
    "GlobalConfig",
    "ProjectConfig",
    "WeekStart",
    "analyze",
    "analyze_repository",
]
