"""Tests for the team health monitor."""

from datetime import date

import pytest

from teampulse.constants import TeamHealthThresholds
from teampulse.models import (
    ActivityPattern,
    AlertSeverity,
    CollaborationMetrics,
    ContributorAggregate,
    ContributorPerformance,
    ContributorTrend,
    DetectedIssue,
    IssueType,
    KnowledgeDistribution,
    ProjectHealth,
    Severity,
    TeamHealthAlert,
    TrendDirection,
    VelocityMetrics,
)
from teampulse.reports.team_health import TeamHealthMonitor


def _performance(name, rate):
    return ContributorPerformance(
        name=name,
        aggregate=ContributorAggregate(name=name),
        commits_per_week=rate,
        lines_per_commit=0.0,
        files_per_commit=0.0,
        consistency_score=1.0,
        activity_pattern=ActivityPattern.REGULAR,
        trend_last_30_days=ContributorTrend.STABLE,
    )


def _health(score=90, active=4, bus_factor=3, trend=TrendDirection.STABLE, change=0.0):
    return ProjectHealth(
        overall_score=score,
        velocity=VelocityMetrics(current=4.0, trend=trend, change_percent=change),
        collaboration=CollaborationMetrics(active_developers=active, bus_factor=bus_factor),
    )


def _alert(severity):
    return TeamHealthAlert(id="x", type="risk", severity=severity, title="t", message="m")


class TestAssess:
    def test_quiet_team_is_low_risk(self):
        team = [_performance(n, 3.0) for n in "abcd"]
        report = TeamHealthMonitor().assess(_health(), team, [])

        assert report.alerts == []
        assert report.risk_level is Severity.LOW
        assert report.recommendations == []
        assert report.team_size == 4

    def test_issues_become_alerts(self):
        issue = DetectedIssue(
            type=IssueType.LARGE_COMMITS,
            severity=Severity.HIGH,
            title="Large Commits Detected",
            description="d",
            affected_start=date(2024, 1, 1),
            affected_end=date(2024, 1, 2),
            suggestions=["split"],
        )
        report = TeamHealthMonitor().assess(_health(), [], [issue])

        alert = report.alerts[0]
        assert alert.id == "issue-0"
        assert alert.severity is AlertSeverity.ERROR
        assert alert.suggested_actions == ["split"]
        assert report.risk_level is Severity.HIGH

    def test_solo_team_alerts(self):
        report = TeamHealthMonitor().assess(
            _health(score=40, active=1, bus_factor=1), [_performance("a", 2.0)], []
        )
        ids = [alert.id for alert in report.alerts]

        assert ids == ["bus-factor-critical", "team-size-risk"]
        assert report.risk_level is Severity.CRITICAL
        assert [rec["id"] for rec in report.recommendations] == [
            "bus-factor-mitigation",
            "general-health-improvement",
        ]

    def test_velocity_decline_alert(self):
        report = TeamHealthMonitor().assess(
            _health(trend=TrendDirection.DECREASING, change=-35.0), [], []
        )

        alert = report.alerts[0]
        assert alert.id == "velocity-declining"
        assert "35.0%" in alert.message
        assert alert.threshold == pytest.approx(4.8)
        assert report.risk_level is Severity.MEDIUM

    def test_velocity_recovery_target_uses_threshold(self):
        class AmbitiousThresholds(TeamHealthThresholds):
            VELOCITY_RECOVERY_MULTIPLIER = 1.5

        report = TeamHealthMonitor(thresholds=AmbitiousThresholds).assess(
            _health(trend=TrendDirection.DECREASING, change=-35.0), [], []
        )
        assert report.alerts[0].threshold == pytest.approx(6.0)

    def test_mild_decline_is_not_alerted(self):
        report = TeamHealthMonitor().assess(
            _health(trend=TrendDirection.DECREASING, change=-20.0), [], []
        )
        assert report.alerts == []


class TestRiskLevel:
    @pytest.mark.parametrize(
        "severities, expected",
        [
            ([], Severity.LOW),
            ([AlertSeverity.INFO], Severity.LOW),
            ([AlertSeverity.INFO, AlertSeverity.WARNING], Severity.MEDIUM),
            ([AlertSeverity.WARNING, AlertSeverity.ERROR], Severity.HIGH),
            ([AlertSeverity.ERROR, AlertSeverity.CRITICAL], Severity.CRITICAL),
        ],
    )
    def test_most_severe_alert_wins(self, severities, expected):
        alerts = [_alert(severity) for severity in severities]
        assert TeamHealthMonitor.risk_level(alerts) is expected


class TestKnowledgeDistribution:
    def test_centralized(self):
        team = [_performance("a", 8.0), _performance("b", 1.0), _performance("c", 1.0)]
        assert TeamHealthMonitor().knowledge_distribution(team) is KnowledgeDistribution.CENTRALIZED

    def test_fragmented(self):
        team = [_performance(str(i), 1.0) for i in range(6)]
        assert TeamHealthMonitor().knowledge_distribution(team) is KnowledgeDistribution.FRAGMENTED

    def test_distributed(self):
        team = [_performance("a", 2.0), _performance("b", 2.0)]
        assert TeamHealthMonitor().knowledge_distribution(team) is KnowledgeDistribution.DISTRIBUTED
        assert TeamHealthMonitor().knowledge_distribution([]) is KnowledgeDistribution.DISTRIBUTED
