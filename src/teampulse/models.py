"""Domain models for commit analytics.

Commit records come in from a history provider and are never mutated.
Everything else is derived, recomputed on each analysis run.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from .config.schema import WeekStart


class ActivityPattern(str, Enum):
    REGULAR = "regular"
    BURST = "burst"
    IRREGULAR = "irregular"


class ContributorTrend(str, Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class PerformanceRating(str, Enum):
    BELOW_AVERAGE = "below_average"
    AVERAGE = "average"
    ABOVE_AVERAGE = "above_average"
    EXCEPTIONAL = "exceptional"


class TrendDirection(str, Enum):
    """Direction of project velocity or of the daily commit regression."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class IssueType(str, Enum):
    LOW_ACTIVITY = "low_activity"
    SINGLE_CONTRIBUTOR_DEPENDENCY = "single_contributor_dependency"
    IRREGULAR_COMMITS = "irregular_commits"
    LARGE_COMMITS = "large_commits"
    TEAM_SHRINKING = "team_shrinking"
    KNOWLEDGE_HOARDING = "knowledge_hoarding"


class AnomalyType(str, Enum):
    HIGH = "high"
    LOW = "low"


class KnowledgeDistribution(str, Enum):
    CENTRALIZED = "centralized"
    DISTRIBUTED = "distributed"
    FRAGMENTED = "fragmented"


class AlertSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass(frozen=True)
class FileChange:
    """Line counts for one touched path; counts are None for binary files."""

    path: str
    insertions: Optional[int] = None
    deletions: Optional[int] = None

    @property
    def has_line_counts(self) -> bool:
        return isinstance(self.insertions, int) and isinstance(self.deletions, int)


@dataclass(frozen=True)
class CommitRecord:
    """A commit as delivered by the history provider.

    ``summary`` carries a textual numstat block (``added<TAB>deleted<TAB>path``
    per line) for providers that could not supply structured file changes.
    """

    identifier: str
    author: str
    timestamp: datetime
    file_changes: tuple[FileChange, ...] = ()
    summary: Optional[str] = None
    author_email: Optional[str] = None
    message: str = ""

    @property
    def day(self) -> date:
        """Calendar day in the commit's own timezone."""
        return self.timestamp.date()


@dataclass(frozen=True)
class AnalysisWindow:
    """Inclusive date bounds for an analysis request; None means open."""

    since: Optional[date] = None
    until: Optional[date] = None


@dataclass(frozen=True)
class NormalizedCommit:
    """A commit attributed to its canonical contributor with resolved line counts."""

    identifier: str
    contributor: str
    timestamp: datetime
    lines_added: int
    lines_deleted: int
    files: frozenset[str]

    @property
    def day(self) -> date:
        return self.timestamp.date()

    @property
    def lines_changed(self) -> int:
        return self.lines_added + self.lines_deleted


@dataclass
class ContributorAggregate:
    name: str
    commit_count: int = 0
    lines_added: int = 0
    lines_deleted: int = 0
    files: set[str] = field(default_factory=set)

    @property
    def distinct_files_changed(self) -> int:
        return len(self.files)

    @property
    def lines_changed(self) -> int:
        return self.lines_added + self.lines_deleted


@dataclass
class DailyActivity:
    day: date
    commit_count: int = 0
    lines_added: int = 0
    lines_deleted: int = 0
    contributors: set[str] = field(default_factory=set)

    @property
    def distinct_contributor_count(self) -> int:
        return len(self.contributors)


@dataclass
class AggregationResult:
    """Output of folding normalized commits into contributor and day buckets."""

    contributors: dict[str, ContributorAggregate] = field(default_factory=dict)
    daily: dict[date, DailyActivity] = field(default_factory=dict)
    commits: list[NormalizedCommit] = field(default_factory=list)
    excluded_commits: int = 0

    @property
    def total_commits(self) -> int:
        return len(self.commits)

    @property
    def first_day(self) -> Optional[date]:
        return min(self.daily) if self.daily else None

    @property
    def last_day(self) -> Optional[date]:
        return max(self.daily) if self.daily else None


@dataclass
class PeriodWindow:
    start: date
    end: date
    commits: int = 0
    days_silent: Optional[int] = None


@dataclass
class ContributorPerformance:
    """Read-only view over a contributor aggregate with derived metrics."""

    name: str
    aggregate: ContributorAggregate
    commits_per_week: float
    lines_per_commit: float
    files_per_commit: float
    consistency_score: float
    activity_pattern: ActivityPattern
    trend_last_30_days: ContributorTrend
    performance_rating: PerformanceRating = PerformanceRating.AVERAGE
    peak_period: Optional[PeriodWindow] = None
    low_period: Optional[PeriodWindow] = None
    commit_rank: int = 0
    productivity_rank: int = 0
    consistency_rank: int = 0


@dataclass
class VelocityMetrics:
    current: float = 0.0
    trend: TrendDirection = TrendDirection.STABLE
    change_percent: float = 0.0


@dataclass
class CollaborationMetrics:
    score: int = 0
    active_developers: int = 0
    bus_factor: int = 0
    new_contributors: int = 0


@dataclass
class CodeQualityMetrics:
    average_commit_size: float = 0.0
    refactoring_ratio: float = 0.0
    large_commit_frequency: float = 0.0


@dataclass
class ProjectHealth:
    overall_score: int
    velocity: VelocityMetrics = field(default_factory=VelocityMetrics)
    collaboration: CollaborationMetrics = field(default_factory=CollaborationMetrics)
    code_quality: CodeQualityMetrics = field(default_factory=CodeQualityMetrics)
    # (reason, points) pairs; negative points are deductions
    adjustments: list[tuple[str, int]] = field(default_factory=list)


@dataclass
class DetectedIssue:
    type: IssueType
    severity: Severity
    title: str
    description: str
    affected_start: Optional[date]
    affected_end: Optional[date]
    affected_contributors: list[str] = field(default_factory=list)
    impact: str = ""
    suggestions: list[str] = field(default_factory=list)
    metrics: dict[str, Any] = field(default_factory=dict)


@dataclass
class Insights:
    key_findings: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    risk_factors: list[str] = field(default_factory=list)


@dataclass
class Benchmarks:
    average_commits_per_week: float = 0.0
    average_lines_per_commit: float = 0.0
    average_files_per_commit: float = 0.0
    team_productivity_score: int = 0


@dataclass
class Anomaly:
    day: date
    value: int
    type: AnomalyType


@dataclass
class ForecastPoint:
    day: date
    value: float


@dataclass
class TrendAnalysis:
    slope: float = 0.0
    intercept: float = 0.0
    trend: TrendDirection = TrendDirection.STABLE
    volatility: float = 0.0
    anomalies: list[Anomaly] = field(default_factory=list)
    forecast: list[ForecastPoint] = field(default_factory=list)
    # Keys: 0..6 relative to the configured first day of week
    day_of_week: dict[int, float] = field(default_factory=dict)
    # Keys: 1..12
    month_of_year: dict[int, float] = field(default_factory=dict)
    week_start: WeekStart = WeekStart.SUNDAY


@dataclass
class WeeklyVelocity:
    week_start: date
    commits: int
    contributors: int


@dataclass
class CommitFrequencyBuckets:
    zero_commits: int = 0
    one_to_two_commits: int = 0
    three_to_five_commits: int = 0
    six_plus_commits: int = 0


@dataclass
class ActivityDistribution:
    overall: CommitFrequencyBuckets = field(default_factory=CommitFrequencyBuckets)
    weekdays: CommitFrequencyBuckets = field(default_factory=CommitFrequencyBuckets)


@dataclass
class TeamHealthAlert:
    id: str
    type: str
    severity: AlertSeverity
    title: str
    message: str
    suggested_actions: list[str] = field(default_factory=list)
    metric: Optional[float] = None
    threshold: Optional[float] = None


@dataclass
class TeamHealthReport:
    overall_health: int
    risk_level: Severity
    alerts: list[TeamHealthAlert] = field(default_factory=list)
    knowledge_distribution: KnowledgeDistribution = KnowledgeDistribution.DISTRIBUTED
    team_size: int = 0
    recommendations: list[dict[str, str]] = field(default_factory=list)


@dataclass
class RepositorySummary:
    total_commits: int = 0
    total_commits_with_config: int = 0
    all_contributors: list[str] = field(default_factory=list)
    first_commit_date: Optional[date] = None
    last_commit_date: Optional[date] = None


@dataclass
class AnalyticsResult:
    """Everything one analysis run produces."""

    summary: RepositorySummary
    daily_activity: list[DailyActivity]
    contributors: list[ContributorPerformance]
    project_health: ProjectHealth
    detected_issues: list[DetectedIssue]
    insights: Insights
    benchmarks: Benchmarks
    trend_analysis: TrendAnalysis
    weekly_velocity: list[WeeklyVelocity]
    activity_distribution: ActivityDistribution
    team_health: TeamHealthReport
    window_start: Optional[date] = None
    window_end: Optional[date] = None
    week_start: WeekStart = WeekStart.SUNDAY
    repository: Optional[str] = None
    generated_at: Optional[datetime] = None
