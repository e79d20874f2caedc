"""JSON export of a complete analysis run.

Builds the nested record structure dashboards consume, keyed with camelCase
field names (``overallScore``, ``keyFindings`` ...). Dates are ISO strings,
enum tags their string values.
"""

import json
import logging
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

import numpy as np

from ..models import (
    ActivityDistribution,
    AnalyticsResult,
    CommitFrequencyBuckets,
    ContributorPerformance,
    DailyActivity,
    DetectedIssue,
    PeriodWindow,
    ProjectHealth,
    TeamHealthReport,
    TrendAnalysis,
)

logger = logging.getLogger(__name__)


class AnalyticsJSONExporter:
    """Serialize an AnalyticsResult for web consumption."""

    def build(self, result: AnalyticsResult) -> dict[str, Any]:
        """Build the JSON-ready dictionary for ``result``."""
        data = {
            "metadata": self._build_metadata(result),
            "stats": self._build_stats(result),
            "commitActivity": [self._build_day(day) for day in result.daily_activity],
            "contributors": [self._build_contributor(p) for p in result.contributors],
            "projectHealth": self._build_project_health(result.project_health),
            "detectedIssues": [self._build_issue(issue) for issue in result.detected_issues],
            "insights": {
                "keyFindings": list(result.insights.key_findings),
                "recommendations": list(result.insights.recommendations),
                "riskFactors": list(result.insights.risk_factors),
            },
            "benchmarks": {
                "averageCommitsPerWeek": round(result.benchmarks.average_commits_per_week, 2),
                "averageLinesPerCommit": round(result.benchmarks.average_lines_per_commit),
                "averageFilesPerCommit": round(result.benchmarks.average_files_per_commit, 2),
                "teamProductivityScore": result.benchmarks.team_productivity_score,
            },
            "trendAnalysis": self._build_trend_analysis(result.trend_analysis),
            "weeklyVelocity": [
                {"week": week.week_start, "commits": week.commits, "contributors": week.contributors}
                for week in result.weekly_velocity
            ],
            "activityDistribution": self._build_distribution(result.activity_distribution),
            "teamHealth": self._build_team_health(result.team_health),
        }
        return self._serialize_for_json(data)

    def to_json(self, result: AnalyticsResult, indent: Optional[int] = 2) -> str:
        return json.dumps(self.build(result), indent=indent, ensure_ascii=False)

    def export(self, result: AnalyticsResult, output_path: Union[str, Path]) -> Path:
        """Write ``result`` as JSON to ``output_path`` and return the path."""
        output_path = Path(output_path)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(self.build(result), f, indent=2, ensure_ascii=False)

        logger.info(f"Analytics JSON export written to {output_path}")
        return output_path

    def _build_metadata(self, result: AnalyticsResult) -> dict[str, Any]:
        return {
            "repository": result.repository,
            "generatedAt": result.generated_at,
            "dateRange": {"start": result.window_start, "end": result.window_end},
            "firstDayOfWeek": result.week_start,
        }

    def _build_stats(self, result: AnalyticsResult) -> dict[str, Any]:
        summary = result.summary
        return {
            "totalCommits": summary.total_commits,
            "totalCommitsWithConfig": summary.total_commits_with_config,
            "allContributors": list(summary.all_contributors),
            "firstCommitDate": summary.first_commit_date,
            "lastCommitDate": summary.last_commit_date,
        }

    @staticmethod
    def _build_day(activity: DailyActivity) -> dict[str, Any]:
        return {
            "date": activity.day,
            "commitCount": activity.commit_count,
            "linesAdded": activity.lines_added,
            "linesDeleted": activity.lines_deleted,
            "distinctContributorCount": activity.distinct_contributor_count,
        }

    def _build_contributor(self, performance: ContributorPerformance) -> dict[str, Any]:
        aggregate = performance.aggregate
        return {
            "name": performance.name,
            "performanceRating": performance.performance_rating,
            "totals": {
                "commitCount": aggregate.commit_count,
                "linesAdded": aggregate.lines_added,
                "linesDeleted": aggregate.lines_deleted,
                "distinctFilesChanged": aggregate.distinct_files_changed,
            },
            "productivity": {
                "commitsPerWeek": round(performance.commits_per_week, 2),
                "linesPerCommit": round(performance.lines_per_commit, 1),
                "filesPerCommit": round(performance.files_per_commit, 2),
                "consistencyScore": round(performance.consistency_score, 2),
                "activityPattern": performance.activity_pattern,
            },
            "trends": {
                "last30Days": performance.trend_last_30_days,
                "peakPeriod": self._build_period(performance.peak_period),
                "lowPeriod": self._build_period(performance.low_period),
            },
            "relativeToPeers": {
                "commitRank": performance.commit_rank,
                "productivityRank": performance.productivity_rank,
                "consistencyRank": performance.consistency_rank,
            },
        }

    @staticmethod
    def _build_period(period: Optional[PeriodWindow]) -> Optional[dict[str, Any]]:
        if period is None:
            return None
        data = {"start": period.start, "end": period.end, "commits": period.commits}
        if period.days_silent is not None:
            data["daysSilent"] = period.days_silent
        return data

    @staticmethod
    def _build_project_health(health: ProjectHealth) -> dict[str, Any]:
        return {
            "overallScore": health.overall_score,
            "developmentVelocity": {
                "current": round(health.velocity.current, 2),
                "trend": health.velocity.trend,
                "changePercent": round(health.velocity.change_percent, 1),
            },
            "teamCollaboration": {
                "score": health.collaboration.score,
                "activeDevelopers": health.collaboration.active_developers,
                "busFactor": health.collaboration.bus_factor,
                "newContributors": health.collaboration.new_contributors,
            },
            "codeQuality": {
                "averageCommitSize": round(health.code_quality.average_commit_size, 1),
                "refactoringRatio": round(health.code_quality.refactoring_ratio, 2),
                "largeCommitFrequency": round(health.code_quality.large_commit_frequency, 3),
            },
            "adjustments": [
                {"reason": reason, "points": points} for reason, points in health.adjustments
            ],
        }

    @staticmethod
    def _build_issue(issue: DetectedIssue) -> dict[str, Any]:
        return {
            "type": issue.type,
            "severity": issue.severity,
            "title": issue.title,
            "description": issue.description,
            "affectedPeriod": {"start": issue.affected_start, "end": issue.affected_end},
            "affectedContributors": list(issue.affected_contributors),
            "impact": issue.impact,
            "suggestions": list(issue.suggestions),
            "metrics": dict(issue.metrics),
        }

    @staticmethod
    def _build_trend_analysis(analysis: TrendAnalysis) -> dict[str, Any]:
        return {
            "slope": round(analysis.slope, 3),
            "intercept": round(analysis.intercept, 3),
            "trend": analysis.trend,
            "volatility": round(analysis.volatility, 2),
            "anomalies": [
                {"date": a.day, "value": a.value, "type": a.type} for a in analysis.anomalies
            ],
            "prediction": [{"date": p.day, "value": p.value} for p in analysis.forecast],
            "seasonality": {
                # JSON object keys are strings
                "dayOfWeek": {str(k): v for k, v in sorted(analysis.day_of_week.items())},
                "monthOfYear": {str(k): v for k, v in sorted(analysis.month_of_year.items())},
            },
        }

    @staticmethod
    def _build_buckets(buckets: CommitFrequencyBuckets) -> dict[str, int]:
        return {
            "zeroCommits": buckets.zero_commits,
            "oneToTwoCommits": buckets.one_to_two_commits,
            "threeToFiveCommits": buckets.three_to_five_commits,
            "sixPlusCommits": buckets.six_plus_commits,
        }

    def _build_distribution(self, distribution: ActivityDistribution) -> dict[str, Any]:
        return {
            "overall": self._build_buckets(distribution.overall),
            "weekdays": self._build_buckets(distribution.weekdays),
        }

    @staticmethod
    def _build_team_health(report: TeamHealthReport) -> dict[str, Any]:
        return {
            "overallHealth": report.overall_health,
            "riskLevel": report.risk_level,
            "teamSize": report.team_size,
            "knowledgeDistribution": report.knowledge_distribution,
            "alerts": [
                {
                    "id": alert.id,
                    "type": alert.type,
                    "severity": alert.severity,
                    "title": alert.title,
                    "message": alert.message,
                    "metric": alert.metric,
                    "threshold": alert.threshold,
                    "suggestedActions": list(alert.suggested_actions),
                }
                for alert in report.alerts
            ],
            "recommendations": [dict(rec) for rec in report.recommendations],
        }

    def _serialize_for_json(self, data: Any) -> Any:
        """Serialize data for JSON output, handling dates, enums and numpy scalars."""
        if isinstance(data, (datetime, date)):
            return data.isoformat()
        elif isinstance(data, Enum):
            return data.value
        elif isinstance(data, dict):
            return {k: self._serialize_for_json(v) for k, v in data.items()}
        elif isinstance(data, (list, tuple)):
            return [self._serialize_for_json(item) for item in data]
        elif isinstance(data, set):
            return sorted(data)
        elif isinstance(data, np.integer):
            return int(data)
        elif isinstance(data, np.floating):
            return float(data)
        else:
            return data
