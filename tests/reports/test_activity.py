"""Tests for the commit-frequency distribution."""

from datetime import date, timedelta

from teampulse.models import CommitFrequencyBuckets, DailyActivity
from teampulse.reports.activity import bucket_day, commit_frequency_distribution


def test_bucket_boundaries():
    buckets = CommitFrequencyBuckets()
    for count in (0, 1, 2, 3, 5, 6, 40):
        bucket_day(buckets, count)

    assert buckets == CommitFrequencyBuckets(
        zero_commits=1, one_to_two_commits=2, three_to_five_commits=2, six_plus_commits=2
    )


def test_weekdays_exclude_weekend():
    # Monday 2024-03-04 through Sunday 2024-03-10
    counts = [0, 1, 3, 6, 2, 7, 0]
    series = [
        DailyActivity(day=date(2024, 3, 4) + timedelta(days=i), commit_count=c)
        for i, c in enumerate(counts)
    ]
    distribution = commit_frequency_distribution(series)

    assert distribution.overall == CommitFrequencyBuckets(2, 2, 1, 2)
    assert distribution.weekdays == CommitFrequencyBuckets(1, 2, 1, 1)
