"""Team health monitor: alerts, overall risk level and knowledge distribution."""

import logging

from ..constants import HealthThresholds, TeamHealthThresholds
from ..models import (
    AlertSeverity,
    ContributorPerformance,
    DetectedIssue,
    KnowledgeDistribution,
    ProjectHealth,
    Severity,
    TeamHealthAlert,
    TeamHealthReport,
    TrendDirection,
)

logger = logging.getLogger(__name__)

ISSUE_ALERT_SEVERITY = {
    Severity.CRITICAL: AlertSeverity.CRITICAL,
    Severity.HIGH: AlertSeverity.ERROR,
    Severity.MEDIUM: AlertSeverity.WARNING,
    Severity.LOW: AlertSeverity.INFO,
}


class TeamHealthMonitor:
    """Fold detected issues and health signals into alerts and a single risk level."""

    def __init__(self, thresholds: type[TeamHealthThresholds] = TeamHealthThresholds) -> None:
        self.thresholds = thresholds

    def assess(
        self,
        health: ProjectHealth,
        performances: list[ContributorPerformance],
        issues: list[DetectedIssue],
    ) -> TeamHealthReport:
        alerts = [
            TeamHealthAlert(
                id=f"issue-{index}",
                type="risk",
                severity=ISSUE_ALERT_SEVERITY[issue.severity],
                title=issue.title,
                message=issue.description,
                suggested_actions=list(issue.suggestions),
            )
            for index, issue in enumerate(issues)
        ]
        recommendations: list[dict[str, str]] = []

        collaboration = health.collaboration
        if collaboration.bus_factor <= HealthThresholds.BUS_FACTOR_CRITICAL:
            alerts.append(
                TeamHealthAlert(
                    id="bus-factor-critical",
                    type="risk",
                    severity=AlertSeverity.CRITICAL,
                    title="Critical Bus Factor Risk",
                    message="Project depends heavily on a single developer. Immediate action required.",
                    suggested_actions=[
                        "Implement pair programming sessions",
                        "Document critical processes and code",
                        "Cross-train team members",
                        "Distribute code ownership",
                    ],
                    metric=collaboration.bus_factor,
                    threshold=HealthThresholds.BUS_FACTOR_LOW,
                )
            )
            recommendations.append(
                {
                    "id": "bus-factor-mitigation",
                    "category": "risk",
                    "priority": "high",
                    "title": "Implement Knowledge Sharing Program",
                    "description": (
                        "Establish systematic knowledge transfer to reduce dependency "
                        "on key individuals."
                    ),
                    "effort": "medium",
                    "timeline": "2-4 weeks",
                }
            )

        velocity = health.velocity
        if (
            velocity.trend is TrendDirection.DECREASING
            and velocity.change_percent < self.thresholds.VELOCITY_DECLINE_ALERT_PERCENT
        ):
            alerts.append(
                TeamHealthAlert(
                    id="velocity-declining",
                    type="performance",
                    severity=AlertSeverity.WARNING,
                    title="Declining Development Velocity",
                    message=(
                        f"Development speed has decreased by "
                        f"{abs(velocity.change_percent):.1f}% recently."
                    ),
                    suggested_actions=[
                        "Review sprint planning effectiveness",
                        "Identify and remove blockers",
                        "Consider team capacity adjustments",
                        "Implement process improvements",
                    ],
                    metric=velocity.current,
                    threshold=velocity.current * self.thresholds.VELOCITY_RECOVERY_MULTIPLIER,
                )
            )

        if collaboration.active_developers < self.thresholds.MIN_TEAM_SIZE:
            alerts.append(
                TeamHealthAlert(
                    id="team-size-risk",
                    type="team",
                    severity=AlertSeverity.ERROR,
                    title="Insufficient Team Size",
                    message="Single-person team creates significant project risk.",
                    suggested_actions=[
                        "Consider hiring additional developers",
                        "Engage contractors for additional capacity",
                        "Prioritize knowledge documentation",
                        "Implement code backup strategies",
                    ],
                    metric=collaboration.active_developers,
                    threshold=self.thresholds.MIN_TEAM_SIZE + 1,
                )
            )

        if health.overall_score < self.thresholds.IMPROVEMENT_SCORE:
            recommendations.append(
                {
                    "id": "general-health-improvement",
                    "category": "productivity",
                    "priority": "medium",
                    "title": "Improve Overall Project Health",
                    "description": "Focus on key metrics to boost overall project health score.",
                    "effort": "medium",
                    "timeline": "4-6 weeks",
                }
            )

        report = TeamHealthReport(
            overall_health=health.overall_score,
            risk_level=self.risk_level(alerts),
            alerts=alerts,
            knowledge_distribution=self.knowledge_distribution(performances),
            team_size=len(performances),
            recommendations=recommendations,
        )
        logger.debug(f"Team health: risk {report.risk_level.value}, {len(alerts)} alerts")
        return report

    @staticmethod
    def risk_level(alerts: list[TeamHealthAlert]) -> Severity:
        """The most severe alert decides: critical, error -> high, warning -> medium."""
        severities = {alert.severity for alert in alerts}
        if AlertSeverity.CRITICAL in severities:
            return Severity.CRITICAL
        if AlertSeverity.ERROR in severities:
            return Severity.HIGH
        if AlertSeverity.WARNING in severities:
            return Severity.MEDIUM
        return Severity.LOW

    def knowledge_distribution(
        self, performances: list[ContributorPerformance]
    ) -> KnowledgeDistribution:
        """Classify how concentrated the weekly commit rate is in the top contributor."""
        total = sum(p.commits_per_week for p in performances)
        if total <= 0:
            return KnowledgeDistribution.DISTRIBUTED

        top_share = max(p.commits_per_week for p in performances) / total
        if top_share > self.thresholds.CENTRALIZED_SHARE:
            return KnowledgeDistribution.CENTRALIZED
        if (
            len(performances) > self.thresholds.FRAGMENTED_TEAM_SIZE
            and top_share < self.thresholds.FRAGMENTED_SHARE
        ):
            return KnowledgeDistribution.FRAGMENTED
        return KnowledgeDistribution.DISTRIBUTED
