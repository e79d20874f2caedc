"""Project health scoring.

The overall score starts from a perfect baseline and applies independent
additive adjustments, each recorded with its reason so the final figure can
be audited term by term.
"""

import logging
from datetime import date, timedelta

from ..constants import HealthThresholds
from ..models import (
    AggregationResult,
    CodeQualityMetrics,
    CollaborationMetrics,
    ProjectHealth,
    TrendDirection,
    VelocityMetrics,
)
from ..utils.date_utils import inclusive_day_span, total_weeks

logger = logging.getLogger(__name__)


class ProjectHealthScorer:
    """Combine velocity, team, bus-factor and commit-size signals into a 0-100 score."""

    def __init__(self, thresholds: type[HealthThresholds] = HealthThresholds) -> None:
        self.thresholds = thresholds

    def score(
        self, aggregation: AggregationResult, window_start: date, window_end: date
    ) -> ProjectHealth:
        """Score the project over ``[window_start, window_end]``.

        Args:
            aggregation: Normalized commits with contributor and day buckets
            window_start: First day of the analysis window
            window_end: Last day of the analysis window

        Returns:
            ProjectHealth with sub-metrics and the list of applied adjustments
        """
        if aggregation.total_commits == 0:
            logger.debug("No commits in window, returning neutral health score")
            return ProjectHealth(overall_score=self.thresholds.NEUTRAL_SCORE)

        velocity = self.velocity_metrics(aggregation, window_start, window_end)
        collaboration = self.collaboration_metrics(aggregation, window_start, window_end)
        code_quality = self.code_quality_metrics(aggregation)

        adjustments = self._adjustments(velocity, collaboration, code_quality)
        raw = self.thresholds.BASELINE + sum(points for _, points in adjustments)
        overall = max(0, min(100, raw))

        logger.debug(f"Health score {overall} from {len(adjustments)} adjustments (raw {raw})")
        return ProjectHealth(
            overall_score=overall,
            velocity=velocity,
            collaboration=collaboration,
            code_quality=code_quality,
            adjustments=adjustments,
        )

    def _adjustments(
        self,
        velocity: VelocityMetrics,
        collaboration: CollaborationMetrics,
        code_quality: CodeQualityMetrics,
    ) -> list[tuple[str, int]]:
        t = self.thresholds
        adjustments: list[tuple[str, int]] = []

        if velocity.current < t.VELOCITY_CRITICAL:
            adjustments.append(("velocity below 1 commit/week", -t.VELOCITY_CRITICAL_PENALTY))
        elif velocity.current < t.VELOCITY_LOW:
            adjustments.append(("velocity below 2 commits/week", -t.VELOCITY_LOW_PENALTY))

        if collaboration.active_developers <= t.SOLO_TEAM_SIZE:
            adjustments.append(("single active contributor", -t.SOLO_TEAM_PENALTY))
        elif collaboration.active_developers <= t.SMALL_TEAM_SIZE:
            adjustments.append(("two active contributors", -t.SMALL_TEAM_PENALTY))

        if collaboration.bus_factor <= t.BUS_FACTOR_CRITICAL:
            adjustments.append(("bus factor of 1 or less", -t.BUS_FACTOR_CRITICAL_PENALTY))
        elif collaboration.bus_factor <= t.BUS_FACTOR_LOW:
            adjustments.append(("bus factor of 2", -t.BUS_FACTOR_LOW_PENALTY))

        if velocity.trend is TrendDirection.DECREASING:
            if velocity.change_percent < t.SEVERE_DECLINE_PERCENT:
                adjustments.append(("velocity dropped by more than half", -t.SEVERE_DECLINE_PENALTY))
            else:
                adjustments.append(("velocity decreasing", -t.DECLINE_PENALTY))
        elif velocity.trend is TrendDirection.INCREASING and velocity.change_percent > t.GROWTH_PERCENT:
            adjustments.append(("velocity growing", t.GROWTH_BONUS))

        if code_quality.average_commit_size > t.LARGE_AVERAGE_COMMIT:
            adjustments.append(("average commit over 500 lines", -t.LARGE_AVERAGE_COMMIT_PENALTY))
        elif code_quality.average_commit_size > t.MEDIUM_AVERAGE_COMMIT:
            adjustments.append(("average commit over 200 lines", -t.MEDIUM_AVERAGE_COMMIT_PENALTY))

        return adjustments

    def velocity_metrics(
        self, aggregation: AggregationResult, window_start: date, window_end: date
    ) -> VelocityMetrics:
        """Commits per calendar week and the change between the window's halves.

        A window shorter than two days cannot be halved, and an empty earlier
        half gives no base to compare against: both report a stable trend
        with no change.
        """
        current = aggregation.total_commits / total_weeks(window_start, window_end)
        if inclusive_day_span(window_start, window_end) < 2:
            return VelocityMetrics(current=current)

        midpoint = _midpoint(window_start, window_end)
        earlier = sum(1 for commit in aggregation.commits if commit.day < midpoint)
        later = aggregation.total_commits - earlier

        if earlier == 0:
            logger.debug("No commits in the earlier half of the window, velocity trend is stable")
            return VelocityMetrics(current=current)
        change_percent = (later - earlier) / earlier * 100

        if change_percent > self.thresholds.VELOCITY_TREND_PERCENT:
            trend = TrendDirection.INCREASING
        elif change_percent < -self.thresholds.VELOCITY_TREND_PERCENT:
            trend = TrendDirection.DECREASING
        else:
            trend = TrendDirection.STABLE

        return VelocityMetrics(current=current, trend=trend, change_percent=change_percent)

    def collaboration_metrics(
        self, aggregation: AggregationResult, window_start: date, window_end: date
    ) -> CollaborationMetrics:
        t = self.thresholds
        active = len(aggregation.contributors)
        bus = self.bus_factor(aggregation)

        team_term = active / (active + t.TEAM_SIZE_HALF_SATURATION)
        bus_term = bus / (bus + t.BUS_FACTOR_HALF_SATURATION)
        score = round(100 * (t.TEAM_SIZE_WEIGHT * team_term + t.BUS_FACTOR_WEIGHT * bus_term))

        midpoint = _midpoint(window_start, window_end)
        first_days: dict[str, date] = {}
        for commit in aggregation.commits:
            first_days.setdefault(commit.contributor, commit.day)
        new_contributors = sum(1 for day in first_days.values() if day >= midpoint)

        return CollaborationMetrics(
            score=min(100, score),
            active_developers=active,
            bus_factor=bus,
            new_contributors=new_contributors,
        )

    def bus_factor(self, aggregation: AggregationResult) -> int:
        """Number of contributors each responsible for more than 20% of commits."""
        total = aggregation.total_commits
        if total == 0:
            return 0
        return sum(
            1
            for aggregate in aggregation.contributors.values()
            if aggregate.commit_count / total > self.thresholds.MAJOR_CONTRIBUTOR_SHARE
        )

    def code_quality_metrics(self, aggregation: AggregationResult) -> CodeQualityMetrics:
        total = aggregation.total_commits
        if total == 0:
            return CodeQualityMetrics()

        added = sum(commit.lines_added for commit in aggregation.commits)
        deleted = sum(commit.lines_deleted for commit in aggregation.commits)
        large = sum(
            1
            for commit in aggregation.commits
            if commit.lines_changed > self.thresholds.LARGE_COMMIT_LINES
        )

        return CodeQualityMetrics(
            average_commit_size=(added + deleted) / total,
            refactoring_ratio=deleted / added if added else 0.0,
            large_commit_frequency=large / total,
        )


def _midpoint(window_start: date, window_end: date) -> date:
    """First day of the later half of the window; the earlier half keeps at least one day."""
    half = max(1, inclusive_day_span(window_start, window_end) // 2)
    return window_start + timedelta(days=half)
