"""Tests for commit aggregation."""

from datetime import date, datetime

import pytz

from teampulse.config.schema import AuthorGroup, ProjectConfig
from teampulse.core.aggregator import CommitAggregator, aggregate_commits
from teampulse.models import CommitRecord


class TestCommitAggregator:
    """Per-contributor and per-day accumulators."""

    def test_commit_counts_sum_to_surviving_commits(self, make_commit):
        config = ProjectConfig(excluded_users=["bot"])
        commits = [
            make_commit("alice", day_offset=0),
            make_commit("bob", day_offset=0),
            make_commit("bot", day_offset=1),
            make_commit("alice", day_offset=2),
        ]

        result = CommitAggregator(config).aggregate(commits)

        assert sum(a.commit_count for a in result.contributors.values()) == 3
        assert result.total_commits == 3
        assert result.excluded_commits == 1
        assert "bot" not in result.contributors

    def test_aliases_fold_into_one_contributor(self, make_commit):
        config = ProjectConfig(
            grouped_authors=[AuthorGroup(primary_name="Alice", aliases=["alice", "a.smith"])]
        )
        result = aggregate_commits(
            [make_commit("alice"), make_commit("a.smith", day_offset=1)], config
        )

        assert list(result.contributors) == ["Alice"]
        assert result.contributors["Alice"].commit_count == 2

    def test_distinct_contributor_count_is_set_cardinality(self, make_commit):
        """Three commits by two people on one day count two contributors."""
        commits = [
            make_commit("alice", identifier="1"),
            make_commit("alice", identifier="2"),
            make_commit("bob", identifier="3"),
        ]
        result = aggregate_commits(commits)
        day = result.daily[date(2024, 3, 4)]

        assert day.commit_count == 3
        assert day.distinct_contributor_count == 2

    def test_line_and_file_totals(self, make_commit):
        commits = [
            make_commit("alice", files={"a.py": (10, 5), "b.py": (1, 0)}),
            make_commit("alice", day_offset=1, files={"a.py": (3, 3)}),
        ]
        aggregate = aggregate_commits(commits).contributors["alice"]

        assert aggregate.lines_added == 14
        assert aggregate.lines_deleted == 8
        assert aggregate.distinct_files_changed == 2

    def test_commit_without_diff_data_still_counts(self):
        commit = CommitRecord(
            identifier="x1",
            author="carol",
            timestamp=datetime(2024, 3, 4, 9, tzinfo=pytz.UTC),
        )
        aggregate = aggregate_commits([commit]).contributors["carol"]

        assert aggregate.commit_count == 1
        assert aggregate.lines_changed == 0
        assert aggregate.distinct_files_changed == 0

    def test_input_order_does_not_matter(self, make_commit):
        commits = [make_commit("bob", day_offset=3), make_commit("alice", day_offset=0)]
        result = aggregate_commits(commits)

        assert list(result.contributors) == ["alice", "bob"]
        assert [c.contributor for c in result.commits] == ["alice", "bob"]
        assert result.first_day == date(2024, 3, 4)
        assert result.last_day == date(2024, 3, 7)

    def test_empty_input(self):
        result = aggregate_commits([])

        assert result.total_commits == 0
        assert result.contributors == {}
        assert result.first_day is None
