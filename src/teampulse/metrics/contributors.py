"""Per-contributor productivity, consistency and trend metrics."""

import logging
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Optional

import numpy as np

from ..config.schema import WeekStart
from ..constants import ActivityThresholds
from ..models import (
    ActivityPattern,
    AggregationResult,
    ContributorAggregate,
    ContributorPerformance,
    ContributorTrend,
    NormalizedCommit,
    PerformanceRating,
    PeriodWindow,
)
from ..utils.date_utils import get_week_start, normalize_to_utc, total_weeks

logger = logging.getLogger(__name__)


class ContributorMetricsEngine:
    """Rate, volume and consistency statistics per contributor, ranked against peers.

    Weekly rates divide by the calendar weeks of the whole analysis window,
    not by each contributor's own active span. Weekly buckets start on the
    configured first day of week.
    """

    def __init__(
        self,
        week_start: WeekStart = WeekStart.SUNDAY,
        now: Optional[datetime] = None,
        thresholds: type[ActivityThresholds] = ActivityThresholds,
    ) -> None:
        self.week_start = WeekStart(week_start)
        self.now = normalize_to_utc(now)
        self.thresholds = thresholds

    def calculate(
        self, aggregation: AggregationResult, window_start: date, window_end: date
    ) -> list[ContributorPerformance]:
        """Compute performance views for every contributor in ``aggregation``.

        Returns:
            Contributors ordered by commit-rate rank (1 first)
        """
        if not aggregation.contributors:
            return []

        weeks = total_weeks(window_start, window_end)

        commits_by_contributor: dict[str, list[NormalizedCommit]] = defaultdict(list)
        for commit in aggregation.commits:
            commits_by_contributor[commit.contributor].append(commit)

        performances = []
        for name, aggregate in aggregation.contributors.items():
            commits = commits_by_contributor[name]
            performances.append(self._build_performance(aggregate, commits, weeks))

        self._assign_ratings(performances)
        self._assign_ranks(performances)

        logger.debug(f"Computed metrics for {len(performances)} contributors over {weeks} weeks")
        return sorted(performances, key=lambda p: p.commit_rank)

    def _build_performance(
        self,
        aggregate: ContributorAggregate,
        commits: list[NormalizedCommit],
        weeks: int,
    ) -> ContributorPerformance:
        count = aggregate.commit_count
        weekly_counts = self.weekly_commit_counts(commits)
        consistency = self.consistency_score(weekly_counts)

        return ContributorPerformance(
            name=aggregate.name,
            aggregate=aggregate,
            commits_per_week=count / weeks,
            lines_per_commit=aggregate.lines_changed / count if count else 0.0,
            files_per_commit=aggregate.distinct_files_changed / count if count else 0.0,
            consistency_score=consistency,
            activity_pattern=self.classify_activity_pattern(consistency, weekly_counts),
            trend_last_30_days=self.classify_trend(commits),
            peak_period=self.find_peak_period(commits),
            low_period=self.find_low_period(commits),
        )

    def weekly_commit_counts(self, commits: list[NormalizedCommit]) -> list[int]:
        """Commit counts of the weeks that have commits, in calendar order.

        Weeks without commits are not represented, so silent weeks between
        two active ones do not lower the consistency score.
        """
        counts: dict[date, int] = defaultdict(int)
        for commit in commits:
            counts[get_week_start(commit.day, self.week_start)] += 1
        return [counts[key] for key in sorted(counts)]

    @staticmethod
    def consistency_score(weekly_counts: list[int]) -> float:
        """Map the coefficient of variation of active-week counts onto [0, 1].

        ``1 - min(1, CV)``: perfectly even weeks score 1, a CV of 1 or more
        scores 0. No commits at all scores 0.
        """
        if not weekly_counts:
            return 0.0
        values = np.asarray(weekly_counts, dtype=float)
        mean = values.mean()
        if mean <= 0:
            return 0.0
        cv = float(values.std()) / float(mean)
        return max(0.0, 1.0 - min(1.0, cv))

    def classify_activity_pattern(
        self, consistency: float, weekly_counts: list[int]
    ) -> ActivityPattern:
        """Irregular below the consistency floor, burst when one week dwarfs the rest."""
        if consistency < self.thresholds.IRREGULAR_CONSISTENCY:
            return ActivityPattern.IRREGULAR

        active = [count for count in weekly_counts if count > 0]
        if len(active) > 1:
            own_mean = sum(active) / len(active)
            if max(active) >= own_mean * self.thresholds.BURST_MULTIPLIER:
                return ActivityPattern.BURST
        return ActivityPattern.REGULAR

    def classify_trend(self, commits: list[NormalizedCommit]) -> ContributorTrend:
        """Compare the last 30 days with the 30 days before them."""
        if len(commits) < self.thresholds.TREND_MIN_COMMITS:
            return ContributorTrend.STABLE

        now = self.now or normalize_to_utc(datetime.now())
        window = timedelta(days=self.thresholds.TREND_WINDOW_DAYS)
        recent_start = now - window
        previous_start = now - 2 * window

        recent = previous = 0
        for commit in commits:
            timestamp = normalize_to_utc(commit.timestamp)
            if recent_start <= timestamp <= now:
                recent += 1
            elif previous_start <= timestamp < recent_start:
                previous += 1

        if recent > previous * self.thresholds.TREND_IMPROVING_RATIO:
            return ContributorTrend.IMPROVING
        if recent < previous * self.thresholds.TREND_DECLINING_RATIO:
            return ContributorTrend.DECLINING
        return ContributorTrend.STABLE

    def find_peak_period(self, commits: list[NormalizedCommit]) -> Optional[PeriodWindow]:
        """Densest 7-day window starting on one of the contributor's commit days."""
        if len(commits) < self.thresholds.PERIOD_MIN_COMMITS:
            return None

        first, daily, cumulative = _daily_cumulative(commits)
        span = self.thresholds.PERIOD_WINDOW_DAYS

        best_start, best_count = None, 0
        for offset in np.flatnonzero(daily):
            count = _window_sum(cumulative, int(offset), span)
            if count > best_count:
                best_start, best_count = int(offset), count

        if best_start is None:
            return None
        start = first + timedelta(days=best_start)
        return PeriodWindow(start=start, end=start + timedelta(days=span - 1), commits=best_count)

    def find_low_period(self, commits: list[NormalizedCommit]) -> Optional[PeriodWindow]:
        """Longest silence over a week, else the sparsest 7-day window in the active span."""
        if len(commits) < self.thresholds.PERIOD_MIN_COMMITS:
            return None

        days = sorted({commit.day for commit in commits})
        gap_start, gap_days = days[0], 0
        for previous, current in zip(days, days[1:]):
            gap = (current - previous).days
            if gap > gap_days:
                gap_start, gap_days = previous, gap

        if gap_days > self.thresholds.SILENT_GAP_DAYS:
            return PeriodWindow(
                start=gap_start,
                end=gap_start + timedelta(days=gap_days),
                commits=0,
                days_silent=gap_days,
            )

        first, daily, cumulative = _daily_cumulative(commits)
        span = min(self.thresholds.PERIOD_WINDOW_DAYS, len(daily))
        best_offset, best_count = 0, None
        for offset in range(len(daily) - span + 1):
            count = _window_sum(cumulative, offset, span)
            if best_count is None or count < best_count:
                best_offset, best_count = offset, count

        start = first + timedelta(days=best_offset)
        return PeriodWindow(start=start, end=start + timedelta(days=span - 1), commits=best_count)

    def _assign_ratings(self, performances: list[ContributorPerformance]) -> None:
        """Rate each contributor against the team means of rate, size and consistency."""
        count = len(performances)
        avg_rate = sum(p.commits_per_week for p in performances) / count
        avg_lines = sum(p.lines_per_commit for p in performances) / count
        avg_consistency = sum(p.consistency_score for p in performances) / count

        for performance in performances:
            ratios = (
                _ratio(performance.commits_per_week, avg_rate),
                _ratio(performance.lines_per_commit, avg_lines),
                _ratio(performance.consistency_score, avg_consistency),
            )
            overall = sum(ratios) / len(ratios)

            if overall >= self.thresholds.RATING_EXCEPTIONAL:
                performance.performance_rating = PerformanceRating.EXCEPTIONAL
            elif overall >= self.thresholds.RATING_ABOVE_AVERAGE:
                performance.performance_rating = PerformanceRating.ABOVE_AVERAGE
            elif overall >= self.thresholds.RATING_AVERAGE:
                performance.performance_rating = PerformanceRating.AVERAGE
            else:
                performance.performance_rating = PerformanceRating.BELOW_AVERAGE

    @staticmethod
    def _assign_ranks(performances: list[ContributorPerformance]) -> None:
        # sorted() is stable, so ties keep input order
        by_rate = sorted(performances, key=lambda p: -p.commits_per_week)
        by_productivity = sorted(performances, key=lambda p: -p.lines_per_commit)
        by_consistency = sorted(performances, key=lambda p: -p.consistency_score)

        for rank, performance in enumerate(by_rate, start=1):
            performance.commit_rank = rank
        for rank, performance in enumerate(by_productivity, start=1):
            performance.productivity_rank = rank
        for rank, performance in enumerate(by_consistency, start=1):
            performance.consistency_rank = rank


def _ratio(value: float, mean: float) -> float:
    return value / mean if mean > 0 else 1.0


def _daily_cumulative(commits: list[NormalizedCommit]):
    """Daily commit counts over the contributor's active span and their prefix sums."""
    days = [commit.day for commit in commits]
    first, last = min(days), max(days)
    daily = np.zeros((last - first).days + 1, dtype=int)
    for day in days:
        daily[(day - first).days] += 1
    cumulative = np.concatenate(([0], np.cumsum(daily)))
    return first, daily, cumulative


def _window_sum(cumulative: np.ndarray, offset: int, span: int) -> int:
    end = min(offset + span, len(cumulative) - 1)
    return int(cumulative[end] - cumulative[offset])
