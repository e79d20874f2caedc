"""Commit-frequency distribution over the gap-filled daily series."""

from ..models import ActivityDistribution, CommitFrequencyBuckets, DailyActivity

# date.weekday(): Saturday=5, Sunday=6
WEEKEND_DAYS = {5, 6}


def bucket_day(buckets: CommitFrequencyBuckets, commit_count: int) -> None:
    if commit_count == 0:
        buckets.zero_commits += 1
    elif commit_count <= 2:
        buckets.one_to_two_commits += 1
    elif commit_count <= 5:
        buckets.three_to_five_commits += 1
    else:
        buckets.six_plus_commits += 1


def commit_frequency_distribution(series: list[DailyActivity]) -> ActivityDistribution:
    """Count days with 0, 1-2, 3-5 and 6+ commits, overall and Monday to Friday only."""
    distribution = ActivityDistribution()
    for activity in series:
        bucket_day(distribution.overall, activity.commit_count)
        if activity.day.weekday() not in WEEKEND_DAYS:
            bucket_day(distribution.weekdays, activity.commit_count)
    return distribution
