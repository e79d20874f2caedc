"""Tests for the end-to-end analysis pipeline."""

from datetime import date
from unittest.mock import Mock

import pytest

from teampulse.config.schema import AuthorGroup, GlobalConfig, ProjectConfig, WeekStart
from teampulse.models import AnalysisWindow, IssueType, Severity
from teampulse.pipeline import AnalysisInputError, analyze, analyze_repository
from teampulse.reports.json_exporter import AnalyticsJSONExporter


@pytest.fixture
def commits(make_commit):
    return [
        make_commit("alice", day_offset=0, identifier="1"),
        make_commit("alice", day_offset=2, identifier="2"),
        make_commit("a.smith", day_offset=5, identifier="3"),
        make_commit("bob", day_offset=6, identifier="4"),
        make_commit("ci-bot", day_offset=6, identifier="5"),
    ]


class TestAnalyze:
    def test_summary_counts_raw_and_configured_commits(self, commits, now):
        config = ProjectConfig(
            grouped_authors=[AuthorGroup(primary_name="Alice", aliases=["alice", "a.smith"])],
            excluded_users=["ci-bot"],
        )
        result = analyze(commits, config=config, now=now)

        assert result.summary.total_commits == 5
        assert result.summary.total_commits_with_config == 4
        assert result.summary.all_contributors == ["Alice", "bob"]
        assert [p.name for p in result.contributors] == ["Alice", "bob"]
        assert result.window_start == date(2024, 3, 4)
        assert result.window_end == date(2024, 3, 10)

    def test_window_filters_commits(self, commits, now):
        window = AnalysisWindow(since=date(2024, 3, 6), until=date(2024, 3, 10))
        result = analyze(commits, window=window, now=now)

        assert result.summary.total_commits == 4
        assert result.summary.first_commit_date == date(2024, 3, 6)
        assert result.window_start == date(2024, 3, 6)

    def test_no_commits(self, now):
        result = analyze([], now=now)

        assert result.project_health.overall_score == 50
        assert result.contributors == []
        assert result.daily_activity == []
        assert [issue.type for issue in result.detected_issues] == [IssueType.LOW_ACTIVITY]
        assert result.detected_issues[0].severity is Severity.CRITICAL
        assert result.window_start == result.window_end == now.date()

    def test_week_start_reaches_weekly_buckets(self, commits, now):
        monday = analyze(commits, week_start=WeekStart.MONDAY, now=now)
        sunday = analyze(commits, week_start="sunday", now=now)

        assert monday.weekly_velocity[0].week_start == date(2024, 3, 4)
        assert sunday.weekly_velocity[0].week_start == date(2024, 3, 3)
        assert sunday.trend_analysis.week_start is WeekStart.SUNDAY

    def test_same_input_same_output(self, commits, now):
        exporter = AnalyticsJSONExporter()
        first = exporter.to_json(analyze(commits, now=now))
        second = exporter.to_json(analyze(list(reversed(commits)), now=now))

        assert first == second


class TestAnalyzeRepository:
    def test_fetches_history_and_config(self, commits, now):
        provider = Mock()
        provider.get_commits.return_value = commits
        loader = Mock(return_value=ProjectConfig(excluded_users=["ci-bot"]))
        window = AnalysisWindow(since=date(2024, 3, 1))

        result = analyze_repository(
            "acme/api",
            provider,
            config_loader=loader,
            window=window,
            author="alice",
            global_config=GlobalConfig(first_day_of_week=WeekStart.MONDAY),
            now=now,
        )

        provider.get_commits.assert_called_once_with(
            "acme/api", since=date(2024, 3, 1), until=None, author="alice"
        )
        loader.assert_called_once_with("acme/api")
        assert result.repository == "acme/api"
        assert result.week_start is WeekStart.MONDAY
        assert result.summary.total_commits_with_config == 4

    def test_default_config(self, commits, now):
        provider = Mock()
        provider.get_commits.return_value = commits

        result = analyze_repository("acme/api", provider, now=now)
        assert result.summary.total_commits_with_config == 5

    @pytest.mark.parametrize("repository", [None, "", "   "])
    def test_repository_required(self, repository):
        with pytest.raises(AnalysisInputError):
            analyze_repository(repository, Mock())

    def test_provider_required(self):
        with pytest.raises(AnalysisInputError, match="No history provider"):
            analyze_repository("acme/api", None)

    def test_missing_commit_log(self):
        provider = Mock()
        provider.get_commits.return_value = None

        with pytest.raises(AnalysisInputError, match="No commit log"):
            analyze_repository("acme/api", provider)

    def test_missing_configuration(self, commits):
        provider = Mock()
        provider.get_commits.return_value = commits

        with pytest.raises(AnalysisInputError, match="No project configuration"):
            analyze_repository("acme/api", provider, config_loader=lambda name: None)
