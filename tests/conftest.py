"""Shared fixtures for TeamPulse tests."""

from datetime import datetime, timedelta

import pytest
import pytz

from teampulse.models import CommitRecord, FileChange

BASE_TIME = datetime(2024, 3, 4, 10, 0, tzinfo=pytz.UTC)  # a Monday


def build_commit(
    author="alice",
    when=None,
    day_offset=0,
    files=None,
    identifier=None,
    summary=None,
):
    """Build a CommitRecord; ``files`` maps path -> (insertions, deletions)."""
    if when is None:
        when = BASE_TIME + timedelta(days=day_offset)
    changes = tuple(
        FileChange(path=path, insertions=counts[0], deletions=counts[1])
        for path, counts in (files or {"src/app.py": (10, 2)}).items()
    )
    return CommitRecord(
        identifier=identifier or f"{author}-{when.isoformat()}",
        author=author,
        timestamp=when,
        file_changes=changes,
        summary=summary,
    )


@pytest.fixture
def make_commit():
    return build_commit


@pytest.fixture
def now():
    return BASE_TIME
