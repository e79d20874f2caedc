"""Narrative insights derived from contributor metrics, health and issues."""

import logging

from ..constants import InsightThresholds
from ..models import (
    ContributorPerformance,
    ContributorTrend,
    DetectedIssue,
    Insights,
    PerformanceRating,
    ProjectHealth,
    Severity,
    TrendDirection,
)

logger = logging.getLogger(__name__)


class InsightGenerator:
    """Turn computed facts into short key findings, recommendations and risk factors."""

    def __init__(self, thresholds: type[InsightThresholds] = InsightThresholds) -> None:
        self.thresholds = thresholds

    def generate(
        self,
        performances: list[ContributorPerformance],
        health: ProjectHealth,
        issues: list[DetectedIssue],
    ) -> Insights:
        insights = Insights()
        self._write_key_findings(insights, performances, health)
        self._write_recommendations(insights, health)
        self._write_risk_factors(insights, performances, health, issues)

        logger.debug(
            f"Generated {len(insights.key_findings)} findings, "
            f"{len(insights.recommendations)} recommendations, "
            f"{len(insights.risk_factors)} risk factors"
        )
        return insights

    @staticmethod
    def _write_key_findings(
        insights: Insights, performances: list[ContributorPerformance], health: ProjectHealth
    ) -> None:
        top = next(
            (p for p in performances if p.performance_rating is PerformanceRating.EXCEPTIONAL),
            None,
        )
        if top is not None:
            insights.key_findings.append(
                f"{top.name} is the top performer with exceptional productivity "
                f"({top.commits_per_week:.2f} commits/week)"
            )

        below_average = sum(
            1 for p in performances if p.performance_rating is PerformanceRating.BELOW_AVERAGE
        )
        if below_average:
            insights.key_findings.append(
                f"{below_average} contributors performing below average may need additional support"
            )

        if health.collaboration.new_contributors:
            insights.key_findings.append(
                f"{health.collaboration.new_contributors} new contributors joined "
                "in the second half of the period"
            )

        insights.key_findings.append(
            f"Project health score: {health.overall_score}/100 with "
            f"{health.velocity.trend.value} velocity trend"
        )

    def _write_recommendations(self, insights: Insights, health: ProjectHealth) -> None:
        if health.overall_score < self.thresholds.HEALTH_RECOMMENDATION_SCORE:
            insights.recommendations.append(
                "Focus on improving overall project health through better resource "
                "allocation and process optimization"
            )

        if health.collaboration.bus_factor <= self.thresholds.LOW_BUS_FACTOR:
            insights.recommendations.append(
                "Implement knowledge sharing practices to reduce dependency on key contributors"
            )

        if health.velocity.trend is TrendDirection.DECREASING:
            insights.recommendations.append(
                "Investigate causes of declining velocity and implement corrective measures"
            )

    def _write_risk_factors(
        self,
        insights: Insights,
        performances: list[ContributorPerformance],
        health: ProjectHealth,
        issues: list[DetectedIssue],
    ) -> None:
        if any(issue.severity in (Severity.HIGH, Severity.CRITICAL) for issue in issues):
            insights.risk_factors.append(
                "Critical issues detected that may significantly impact project delivery"
            )

        if health.collaboration.bus_factor == self.thresholds.SINGLE_POINT_BUS_FACTOR:
            insights.risk_factors.append(
                "Single point of failure: project depends heavily on one developer"
            )

        declining = sum(
            1 for p in performances if p.trend_last_30_days is ContributorTrend.DECLINING
        )
        limit = len(performances) * self.thresholds.DECLINING_RISK_FRACTION
        if performances and declining > limit:
            insights.risk_factors.append(
                "Team capacity declining: multiple developers showing reduced activity"
            )
