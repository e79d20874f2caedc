"""Analysis pipeline: from raw commit records to a complete AnalyticsResult.

``analyze`` is a pure function of its inputs. ``analyze_repository``
resolves the I/O collaborators (history provider, configuration store)
first, validates what they return and then delegates to ``analyze``.
"""

import logging
from collections.abc import Iterable
from datetime import date, datetime
from typing import Callable, Optional

import pytz

from .config.schema import GlobalConfig, ProjectConfig, WeekStart
from .core.aggregator import CommitAggregator
from .core.gap_filler import fill_gaps
from .core.history import HistoryProvider, filter_commits
from .metrics.benchmarks import BenchmarkCalculator
from .metrics.contributors import ContributorMetricsEngine
from .metrics.health import ProjectHealthScorer
from .metrics.issues import IssueDetector
from .metrics.time_series import TimeSeriesAnalyzer, weekly_velocity
from .models import AnalysisWindow, AnalyticsResult, CommitRecord, RepositorySummary
from .reports.activity import commit_frequency_distribution
from .reports.insights import InsightGenerator
from .reports.team_health import TeamHealthMonitor
from .utils.date_utils import normalize_to_utc

logger = logging.getLogger(__name__)


class AnalysisInputError(ValueError):
    """Required input is missing; raised before any computation starts."""


def analyze(
    commits: Iterable[CommitRecord],
    config: Optional[ProjectConfig] = None,
    window: Optional[AnalysisWindow] = None,
    week_start: WeekStart = WeekStart.SUNDAY,
    now: Optional[datetime] = None,
    repository: Optional[str] = None,
) -> AnalyticsResult:
    """Run the full analytics pipeline over ``commits``.

    Args:
        commits: Commit records in any order
        config: Author grouping and exclusions; defaults to an empty config
        window: Inclusive date bounds; open bounds fall back to the first and
            last commit days
        week_start: First day of week for weekly buckets and seasonality
        now: Anchor for time-relative rules such as the 30-day trend;
            read once from the wall clock when omitted
        repository: Repository name recorded in the result

    Returns:
        AnalyticsResult with every metric, issue and insight
    """
    config = config or ProjectConfig()
    window = window or AnalysisWindow()
    week_start = WeekStart(week_start)
    now = normalize_to_utc(now) if now is not None else datetime.now(pytz.UTC)

    commits = filter_commits(commits, since=window.since, until=window.until)
    aggregation = CommitAggregator(config).aggregate(commits)
    window_start, window_end = _resolve_window(window, aggregation.first_day, aggregation.last_day, now)

    logger.info(
        f"Analyzing {aggregation.total_commits} commits "
        f"({aggregation.excluded_commits} excluded) from {window_start} to {window_end}"
    )

    daily_series = fill_gaps(aggregation.daily)

    contributors = ContributorMetricsEngine(week_start=week_start, now=now).calculate(
        aggregation, window_start, window_end
    )
    health = ProjectHealthScorer().score(aggregation, window_start, window_end)
    issues = IssueDetector(now=now).detect(
        aggregation, contributors, health, window_start, window_end
    )

    return AnalyticsResult(
        summary=RepositorySummary(
            total_commits=len(commits),
            total_commits_with_config=aggregation.total_commits,
            all_contributors=sorted(aggregation.contributors),
            first_commit_date=aggregation.first_day,
            last_commit_date=aggregation.last_day,
        ),
        daily_activity=daily_series,
        contributors=contributors,
        project_health=health,
        detected_issues=issues,
        insights=InsightGenerator().generate(contributors, health, issues),
        benchmarks=BenchmarkCalculator().calculate(aggregation, window_start, window_end),
        trend_analysis=TimeSeriesAnalyzer(week_start=week_start).analyze(daily_series),
        weekly_velocity=weekly_velocity(daily_series, week_start),
        activity_distribution=commit_frequency_distribution(daily_series),
        team_health=TeamHealthMonitor().assess(health, contributors, issues),
        window_start=window_start,
        window_end=window_end,
        week_start=week_start,
        repository=repository,
        generated_at=now,
    )


def analyze_repository(
    repository: str,
    provider: HistoryProvider,
    config_loader: Optional[Callable[[str], Optional[ProjectConfig]]] = None,
    window: Optional[AnalysisWindow] = None,
    author: Optional[str] = None,
    global_config: Optional[GlobalConfig] = None,
    now: Optional[datetime] = None,
) -> AnalyticsResult:
    """Fetch history and configuration for ``repository``, then analyze it.

    Args:
        repository: Repository identity passed to the provider and config store
        provider: Source of commit records
        config_loader: Returns the ProjectConfig for a repository; defaults to
            an empty configuration
        window: Inclusive date bounds passed to the provider
        author: Restrict history to one raw author identity
        global_config: Supplies the first day of week
        now: Anchor for time-relative rules

    Raises:
        AnalysisInputError: Repository identity, provider, commit log or
            configuration is missing
    """
    if repository is None or not str(repository).strip():
        raise AnalysisInputError("A repository identity is required")
    if provider is None:
        raise AnalysisInputError(f"No history provider configured for {repository!r}")

    window = window or AnalysisWindow()
    commits = provider.get_commits(repository, since=window.since, until=window.until, author=author)
    if commits is None:
        raise AnalysisInputError(f"No commit log available for {repository!r}")

    config = config_loader(repository) if config_loader is not None else ProjectConfig()
    if config is None:
        raise AnalysisInputError(f"No project configuration available for {repository!r}")

    global_config = global_config or GlobalConfig()
    return analyze(
        commits,
        config=config,
        window=window,
        week_start=global_config.first_day_of_week,
        now=now,
        repository=repository,
    )


def _resolve_window(
    window: AnalysisWindow,
    first_day: Optional[date],
    last_day: Optional[date],
    now: datetime,
) -> tuple[date, date]:
    """Fill open window bounds from the commit span, or from ``now`` when there are no commits."""
    today = now.date()
    start = window.since or first_day or window.until or today
    end = window.until or last_day or window.since or today
    if end < start:
        start, end = end, start
    return start, end
