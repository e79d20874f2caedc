"""Fold normalized commits into per-contributor and per-day totals."""

import logging
from collections.abc import Iterable
from typing import Optional

from ..config.schema import ProjectConfig
from ..models import (
    AggregationResult,
    CommitRecord,
    ContributorAggregate,
    DailyActivity,
    NormalizedCommit,
)
from ..utils.date_utils import normalize_to_utc
from .diffstats import resolve_diff_stats
from .normalizer import AuthorNormalizer

logger = logging.getLogger(__name__)


class CommitAggregator:
    """Build contributor and daily activity buckets from raw commit records.

    Commits are attributed through an AuthorNormalizer before anything is
    counted, so excluded identities never reach either accumulator.
    """

    def __init__(self, config: Optional[ProjectConfig] = None) -> None:
        self.normalizer = AuthorNormalizer(config)

    def aggregate(self, commits: Iterable[CommitRecord]) -> AggregationResult:
        """Fold ``commits`` (any order) into an AggregationResult.

        Commits are processed chronologically, so contributor order in the
        result is the order of each contributor's first commit.
        """
        result = AggregationResult()

        for commit in sorted(commits, key=_chronological_key):
            contributor = self.normalizer.normalize(commit.author)
            if contributor is None:
                result.excluded_commits += 1
                continue

            normalized = self._normalize_commit(commit, contributor)
            result.commits.append(normalized)
            self._add_to_contributor(result, normalized)
            self._add_to_day(result, normalized)

        logger.debug(
            f"Aggregated {result.total_commits} commits from {len(result.contributors)} "
            f"contributors over {len(result.daily)} active days "
            f"({result.excluded_commits} excluded)"
        )
        return result

    @staticmethod
    def _normalize_commit(commit: CommitRecord, contributor: str) -> NormalizedCommit:
        stats = resolve_diff_stats(commit)
        return NormalizedCommit(
            identifier=commit.identifier,
            contributor=contributor,
            timestamp=commit.timestamp,
            lines_added=stats.lines_added,
            lines_deleted=stats.lines_deleted,
            files=stats.files,
        )

    @staticmethod
    def _add_to_contributor(result: AggregationResult, commit: NormalizedCommit) -> None:
        aggregate = result.contributors.get(commit.contributor)
        if aggregate is None:
            aggregate = result.contributors[commit.contributor] = ContributorAggregate(
                name=commit.contributor
            )
        aggregate.commit_count += 1
        aggregate.lines_added += commit.lines_added
        aggregate.lines_deleted += commit.lines_deleted
        aggregate.files.update(commit.files)

    @staticmethod
    def _add_to_day(result: AggregationResult, commit: NormalizedCommit) -> None:
        day = commit.day
        activity = result.daily.get(day)
        if activity is None:
            activity = result.daily[day] = DailyActivity(day=day)
        activity.commit_count += 1
        activity.lines_added += commit.lines_added
        activity.lines_deleted += commit.lines_deleted
        activity.contributors.add(commit.contributor)


def _chronological_key(commit: CommitRecord):
    return (normalize_to_utc(commit.timestamp), commit.identifier)


def aggregate_commits(
    commits: Iterable[CommitRecord], config: Optional[ProjectConfig] = None
) -> AggregationResult:
    return CommitAggregator(config).aggregate(commits)
