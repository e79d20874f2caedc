"""Rule-based detection of structural project risks."""

import logging
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Optional

from ..constants import SEVERITY_ORDER, ActivityThresholds, HealthThresholds, IssueThresholds
from ..models import (
    ActivityPattern,
    AggregationResult,
    ContributorPerformance,
    ContributorTrend,
    DetectedIssue,
    IssueType,
    ProjectHealth,
    Severity,
)
from ..utils.date_utils import normalize_to_utc, total_weeks

logger = logging.getLogger(__name__)


class IssueDetector:
    """Scan analysis results with independent rules, each adding at most one issue.

    Rules never read each other's output, so the order they run in only
    matters as the tie-breaker within a severity level.
    """

    def __init__(
        self,
        now: Optional[datetime] = None,
        thresholds: type[IssueThresholds] = IssueThresholds,
    ) -> None:
        self.now = normalize_to_utc(now)
        self.thresholds = thresholds

    def detect(
        self,
        aggregation: AggregationResult,
        performances: list[ContributorPerformance],
        health: ProjectHealth,
        window_start: date,
        window_end: date,
    ) -> list[DetectedIssue]:
        """Run every rule and return issues ordered critical first."""
        rules = (
            lambda: self._low_activity(aggregation, performances, window_start, window_end),
            lambda: self._single_contributor_dependency(aggregation, window_start, window_end),
            lambda: self._irregular_commits(performances, window_start, window_end),
            lambda: self._large_commits(aggregation, health, window_start, window_end),
            lambda: self._team_shrinking(performances),
            lambda: self._knowledge_hoarding(aggregation, window_start, window_end),
        )

        issues = [issue for issue in (rule() for rule in rules) if issue is not None]
        issues.sort(key=lambda issue: SEVERITY_ORDER[issue.severity.value])

        logger.debug(f"Detected {len(issues)} issues: {[issue.type.value for issue in issues]}")
        return issues

    def _low_activity(
        self,
        aggregation: AggregationResult,
        performances: list[ContributorPerformance],
        window_start: date,
        window_end: date,
    ) -> Optional[DetectedIssue]:
        weeks = total_weeks(window_start, window_end)
        per_week = aggregation.total_commits / weeks
        if per_week >= self.thresholds.LOW_ACTIVITY_HIGH:
            return None

        severity = (
            Severity.CRITICAL if per_week < self.thresholds.LOW_ACTIVITY_CRITICAL else Severity.HIGH
        )
        return DetectedIssue(
            type=IssueType.LOW_ACTIVITY,
            severity=severity,
            title="Low Development Activity Detected",
            description=(
                f"Average of only {per_week:.2f} commits per week. This may indicate "
                "project stagnation or resource constraints."
            ),
            affected_start=window_start,
            affected_end=window_end,
            affected_contributors=[p.name for p in performances],
            impact="Project velocity is significantly below typical development standards",
            suggestions=[
                "Review project priorities and resource allocation",
                "Consider breaking down large tasks into smaller, manageable pieces",
                "Implement daily standups to identify blockers",
                "Analyze if the team needs additional resources or training",
            ],
            metrics={
                "commitsPerWeek": round(per_week, 2),
                "totalCommits": aggregation.total_commits,
                "totalWeeks": weeks,
            },
        )

    def _single_contributor_dependency(
        self, aggregation: AggregationResult, window_start: date, window_end: date
    ) -> Optional[DetectedIssue]:
        total = aggregation.total_commits
        if total == 0:
            return None

        # First contributor wins ties on commit count
        top = max(aggregation.contributors.values(), key=lambda a: a.commit_count)
        share = top.commit_count / total
        solo = len(aggregation.contributors) == 1

        if solo or share > self.thresholds.DOMINANT_CRITICAL_SHARE:
            severity = Severity.CRITICAL
        elif share > self.thresholds.DOMINANT_SHARE:
            severity = Severity.HIGH
        else:
            return None

        if solo:
            description = (
                f"{top.name} is the only active contributor. This creates a "
                "significant bus factor risk."
            )
        else:
            description = (
                f"{top.name} is responsible for {round(share * 100)}% of all commits. "
                "This creates a significant bus factor risk."
            )

        return DetectedIssue(
            type=IssueType.SINGLE_CONTRIBUTOR_DEPENDENCY,
            severity=severity,
            title="High Dependency on Single Developer",
            description=description,
            affected_start=window_start,
            affected_end=window_end,
            affected_contributors=[top.name],
            impact="Critical knowledge and development capacity concentrated in one person",
            suggestions=[
                "Implement pair programming sessions",
                "Create comprehensive documentation",
                "Cross-train team members on critical components",
                "Encourage code reviews and knowledge sharing",
                "Consider distributing responsibilities more evenly",
            ],
            metrics={"dominantContributorPercentage": round(share, 4)},
        )

    def _irregular_commits(
        self, performances: list[ContributorPerformance], window_start: date, window_end: date
    ) -> Optional[DetectedIssue]:
        irregular = [
            p.name for p in performances if p.activity_pattern is ActivityPattern.IRREGULAR
        ]
        count = len(performances)
        if not irregular or len(irregular) <= count * self.thresholds.IRREGULAR_FRACTION:
            return None

        return DetectedIssue(
            type=IssueType.IRREGULAR_COMMITS,
            severity=Severity.MEDIUM,
            title="Irregular Development Patterns",
            description=(
                f"{len(irregular)} out of {count} contributors show irregular commit patterns, "
                "which may indicate workflow issues or lack of consistent development practices."
            ),
            affected_start=window_start,
            affected_end=window_end,
            affected_contributors=irregular,
            impact="Unpredictable development flow may affect project planning and delivery",
            suggestions=[
                "Establish regular development schedules",
                "Implement sprint planning and retrospectives",
                "Provide guidance on optimal commit frequency",
                "Consider workflow automation tools",
                "Address potential blockers or distractions",
            ],
            metrics={"irregularContributorCount": len(irregular), "totalContributors": count},
        )

    def _large_commits(
        self,
        aggregation: AggregationResult,
        health: ProjectHealth,
        window_start: date,
        window_end: date,
    ) -> Optional[DetectedIssue]:
        quality = health.code_quality
        frequent = quality.large_commit_frequency > self.thresholds.LARGE_COMMIT_FREQUENCY
        oversized = quality.average_commit_size > self.thresholds.LARGE_COMMIT_HIGH_AVERAGE
        if not (frequent or oversized):
            return None

        authors: list[str] = []
        for commit in aggregation.commits:
            if (
                commit.lines_changed > HealthThresholds.LARGE_COMMIT_LINES
                and commit.contributor not in authors
            ):
                authors.append(commit.contributor)

        return DetectedIssue(
            type=IssueType.LARGE_COMMITS,
            severity=Severity.HIGH if oversized else Severity.MEDIUM,
            title="Large Commits Detected",
            description=(
                f"{round(quality.large_commit_frequency * 100)}% of commits change more than "
                f"{HealthThresholds.LARGE_COMMIT_LINES} lines, averaging "
                f"{round(quality.average_commit_size)} lines per commit. Large changes are "
                "harder to review and riskier to deploy."
            ),
            affected_start=window_start,
            affected_end=window_end,
            affected_contributors=authors,
            impact="Review quality drops and regressions become harder to isolate",
            suggestions=[
                "Break features into smaller, independently reviewable commits",
                "Separate refactoring from behavior changes",
                "Keep generated files and vendored code out of feature commits",
                "Set team guidelines for maximum change size per review",
            ],
            metrics={
                "largeCommitFrequency": round(quality.large_commit_frequency, 3),
                "averageCommitSize": round(quality.average_commit_size, 1),
            },
        )

    def _team_shrinking(
        self, performances: list[ContributorPerformance]
    ) -> Optional[DetectedIssue]:
        declining = [
            p.name for p in performances if p.trend_last_30_days is ContributorTrend.DECLINING
        ]
        if not declining:
            return None

        fraction = len(declining) / len(performances)
        if fraction > self.thresholds.SHRINKING_HIGH_FRACTION:
            severity = Severity.HIGH
        elif fraction > self.thresholds.SHRINKING_MEDIUM_FRACTION:
            severity = Severity.MEDIUM
        else:
            severity = Severity.LOW

        now = self.now or normalize_to_utc(datetime.now())
        return DetectedIssue(
            type=IssueType.TEAM_SHRINKING,
            severity=severity,
            title="Declining Developer Activity",
            description=(
                f"{len(declining)} contributors show declining activity in the last 30 days, "
                "which may indicate burnout, changing priorities, or other issues."
            ),
            affected_start=(now - timedelta(days=ActivityThresholds.TREND_WINDOW_DAYS)).date(),
            affected_end=now.date(),
            affected_contributors=declining,
            impact="Reduced team capacity may affect project delivery timelines",
            suggestions=[
                "Conduct one-on-one meetings with affected developers",
                "Review workload distribution and priorities",
                "Address potential burnout or motivation issues",
                "Consider temporary resource reallocation",
                "Investigate external factors affecting productivity",
            ],
            metrics={
                "decliningContributorCount": len(declining),
                "decliningFraction": round(fraction, 4),
            },
        )

    def _knowledge_hoarding(
        self, aggregation: AggregationResult, window_start: date, window_end: date
    ) -> Optional[DetectedIssue]:
        if len(aggregation.contributors) < self.thresholds.HOARDING_MIN_CONTRIBUTORS:
            return None

        authors_by_file: dict[str, set[str]] = defaultdict(set)
        for commit in aggregation.commits:
            for path in commit.files:
                authors_by_file[path].add(commit.contributor)
        if not authors_by_file:
            return None

        sole_owned: dict[str, int] = defaultdict(int)
        for authors in authors_by_file.values():
            if len(authors) == 1:
                sole_owned[next(iter(authors))] += 1
        if not sole_owned:
            return None

        # Contributor order breaks ties
        owner = max(aggregation.contributors, key=lambda name: sole_owned.get(name, 0))
        share = sole_owned[owner] / len(authors_by_file)
        if share <= self.thresholds.HOARDING_FILE_SHARE:
            return None

        return DetectedIssue(
            type=IssueType.KNOWLEDGE_HOARDING,
            severity=Severity.MEDIUM,
            title="Knowledge Concentrated in One Developer",
            description=(
                f"{owner} is the only author of {round(share * 100)}% of the files changed "
                "in this period. Nobody else has worked on that code."
            ),
            affected_start=window_start,
            affected_end=window_end,
            affected_contributors=[owner],
            impact="Changes to much of the codebase depend on one person being available",
            suggestions=[
                "Rotate code review assignments across the team",
                "Pair on changes to files with a single author",
                "Document ownership and design decisions for those areas",
            ],
            metrics={
                "soleOwnedFiles": sole_owned[owner],
                "totalFiles": len(authors_by_file),
                "soleOwnedShare": round(share, 4),
            },
        )
