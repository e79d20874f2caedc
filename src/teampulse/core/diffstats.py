"""Resolve per-commit line and file counts from whatever diff data exists.

Structured per-file counts are preferred. When a commit carries none, its
textual numstat summary (``added<TAB>deleted<TAB>path``) is parsed. A commit
with neither still counts as a commit, with zero lines and files.
"""

import logging
from typing import NamedTuple, Optional

from ..models import CommitRecord, FileChange

logger = logging.getLogger(__name__)


class DiffStats(NamedTuple):
    lines_added: int
    lines_deleted: int
    files: frozenset


EMPTY_STATS = DiffStats(0, 0, frozenset())


def parse_numstat_line(line: str) -> Optional[FileChange]:
    """Parse one ``git log --numstat`` line.

    Binary entries (``-<TAB>-<TAB>path``) come back with None counts; lines
    that are not numstat at all return None.
    """
    parts = line.rstrip("\r\n").split("\t")
    if len(parts) != 3 or not parts[2].strip():
        return None

    added, deleted, path = parts
    if added == "-" and deleted == "-":
        return FileChange(path=path)
    try:
        return FileChange(path=path, insertions=int(added), deletions=int(deleted))
    except ValueError:
        return None


def parse_numstat_summary(summary: Optional[str]) -> list[FileChange]:
    """Parse a multi-line numstat block, skipping lines that do not fit."""
    if not summary:
        return []

    changes = []
    for line in summary.strip().splitlines():
        if not line.strip():
            continue
        change = parse_numstat_line(line)
        if change is None:
            logger.debug(f"Ignoring non-numstat summary line: {line!r}")
            continue
        changes.append(change)
    return changes


def resolve_diff_stats(commit: CommitRecord) -> DiffStats:
    """Total the usable line counts and distinct counted paths of a commit.

    Files without numeric counts (binary) are left out of both the line totals
    and the distinct-file set.
    """
    changes = list(commit.file_changes)
    if not changes:
        changes = parse_numstat_summary(commit.summary)
        if changes:
            logger.debug(f"Commit {commit.identifier[:8]}: using textual diff summary")

    if not changes:
        return EMPTY_STATS

    added = deleted = 0
    files = set()
    for change in changes:
        if not change.has_line_counts:
            continue
        added += change.insertions
        deleted += change.deletions
        files.add(change.path)

    return DiffStats(added, deleted, frozenset(files))
