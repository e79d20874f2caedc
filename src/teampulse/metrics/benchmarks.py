"""Team-wide benchmark averages."""

from datetime import date

from ..constants import BenchmarkThresholds
from ..models import AggregationResult, Benchmarks
from ..utils.date_utils import total_weeks


class BenchmarkCalculator:
    """Team averages with a capped productivity score."""

    PER_WEEKLY_COMMIT = BenchmarkThresholds.PRODUCTIVITY_PER_WEEKLY_COMMIT
    SCORE_CAP = BenchmarkThresholds.PRODUCTIVITY_CAP

    def calculate(
        self, aggregation: AggregationResult, window_start: date, window_end: date
    ) -> Benchmarks:
        """Average weekly rate, lines and files per commit across the whole team.

        Files per commit sums each contributor's distinct files, so a file
        touched by two contributors counts twice.
        """
        contributors = aggregation.contributors.values()
        commits = sum(c.commit_count for c in contributors)
        lines = sum(c.lines_changed for c in contributors)
        files = sum(c.distinct_files_changed for c in contributors)
        per_week = commits / total_weeks(window_start, window_end)

        return Benchmarks(
            average_commits_per_week=per_week,
            average_lines_per_commit=lines / commits if commits else 0.0,
            average_files_per_commit=files / commits if commits else 0.0,
            team_productivity_score=self._normalize_score(per_week),
        )

    def _normalize_score(self, commits_per_week: float) -> int:
        """Scale the weekly commit rate to 0-100."""
        return min(self.SCORE_CAP, round(commits_per_week * self.PER_WEEKLY_COMMIT))
