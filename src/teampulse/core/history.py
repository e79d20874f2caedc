"""History providers: where commit records come from.

The analytics engine never talks to version control itself. It receives
``CommitRecord`` sequences from an object satisfying ``HistoryProvider``.
The providers here read exported history files: the text printed by
``git log --numstat --date=iso-strict`` or a JSON/YAML list of commit
mappings.
"""

import logging
import re
from collections.abc import Iterable
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional, Protocol, Union

import yaml

from ..models import CommitRecord, FileChange
from .diffstats import parse_numstat_line

logger = logging.getLogger(__name__)

_COMMIT_LINE = re.compile(r"^commit\s+([0-9a-fA-F]+)")
_AUTHOR_LINE = re.compile(r"^Author:\s*(.*?)\s*(?:<([^>]*)>)?\s*$")
_DATE_LINE = re.compile(r"^(?:Author)?Date:\s*(.+?)\s*$")


class HistoryError(Exception):
    """Base class for history retrieval failures."""


class HistoryNotFoundError(HistoryError):
    """The commit log for a repository does not exist."""


class HistoryFormatError(HistoryError):
    """A commit log exists but cannot be read as commit records."""


class HistoryProvider(Protocol):
    """Supplies the commit records of one repository."""

    def get_commits(
        self,
        repository: str,
        since: Optional[date] = None,
        until: Optional[date] = None,
        author: Optional[str] = None,
    ) -> list[CommitRecord]: ...


def parse_timestamp(value: Union[str, datetime, date]) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing ``Z``."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise HistoryFormatError(f"Unrecognized commit timestamp: {value!r}") from e


def parse_git_log(text: str) -> list[CommitRecord]:
    """Parse ``git log --numstat --date=iso-strict`` output into commit records.

    Indented lines are the commit message; tab-separated lines are numstat
    entries. Commits without a Date line are rejected.
    """
    commits: list[CommitRecord] = []
    current: Optional[dict[str, Any]] = None

    def flush() -> None:
        if current is None:
            return
        if current["timestamp"] is None:
            raise HistoryFormatError(f"Commit {current['identifier']} has no Date line")
        commits.append(
            CommitRecord(
                identifier=current["identifier"],
                author=current["author"],
                author_email=current["email"],
                timestamp=current["timestamp"],
                file_changes=tuple(current["changes"]),
                message="\n".join(current["message"]).strip(),
            )
        )

    for line in text.splitlines():
        commit_match = _COMMIT_LINE.match(line)
        if commit_match:
            flush()
            current = {
                "identifier": commit_match.group(1),
                "author": "",
                "email": None,
                "timestamp": None,
                "changes": [],
                "message": [],
            }
            continue

        if current is None or not line.strip():
            continue

        if line.startswith("    "):
            current["message"].append(line[4:])
            continue

        author_match = _AUTHOR_LINE.match(line)
        if author_match:
            current["author"] = author_match.group(1)
            current["email"] = author_match.group(2)
            continue

        date_match = _DATE_LINE.match(line)
        if date_match:
            current["timestamp"] = parse_timestamp(date_match.group(1))
            continue

        change = parse_numstat_line(line)
        if change is not None:
            current["changes"].append(change)
        elif not line.startswith("Merge:"):
            logger.debug(f"Skipping unrecognized log line: {line!r}")

    flush()
    return commits


def commit_from_mapping(data: dict[str, Any]) -> CommitRecord:
    """Build a CommitRecord from one entry of a JSON/YAML commit dump.

    Recognized keys: ``hash``/``identifier``, ``author``/``author_name``,
    ``author_email``, ``date``/``timestamp``, ``files`` (entries with
    ``path``/``file``, ``insertions``, ``deletions``), ``body``/``summary``
    and ``message``.
    """
    if not isinstance(data, dict):
        raise HistoryFormatError(f"Commit entry must be a mapping, got {type(data).__name__}")

    raw_timestamp = data.get("timestamp", data.get("date"))
    if raw_timestamp is None:
        raise HistoryFormatError(f"Commit {data.get('hash', '?')} has no timestamp")

    changes = []
    for entry in data.get("files") or []:
        path = entry.get("path", entry.get("file"))
        if not path:
            continue
        insertions = entry.get("insertions")
        deletions = entry.get("deletions")
        if entry.get("binary"):
            insertions = deletions = None
        changes.append(
            FileChange(
                path=str(path),
                insertions=insertions if isinstance(insertions, int) else None,
                deletions=deletions if isinstance(deletions, int) else None,
            )
        )

    return CommitRecord(
        identifier=str(data.get("hash", data.get("identifier", ""))),
        author=str(data.get("author_name", data.get("author", ""))),
        author_email=data.get("author_email"),
        timestamp=parse_timestamp(raw_timestamp),
        file_changes=tuple(changes),
        summary=data.get("summary", data.get("body")),
        message=str(data.get("message", "")),
    )


def load_commit_dump(path: Union[str, Path]) -> list[CommitRecord]:
    """Read a JSON or YAML list of commit mappings."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise HistoryFormatError(f"Cannot parse commit dump {path}: {e}") from e

    if data is None:
        return []
    if isinstance(data, dict) and "commits" in data:
        data = data["commits"]
    if not isinstance(data, list):
        raise HistoryFormatError(f"Commit dump {path} must contain a list of commits")
    return [commit_from_mapping(entry) for entry in data]


def filter_commits(
    commits: Iterable[CommitRecord],
    since: Optional[date] = None,
    until: Optional[date] = None,
    author: Optional[str] = None,
) -> list[CommitRecord]:
    """Restrict commits to an inclusive day window and/or one raw author identity."""
    selected = []
    for commit in commits:
        if since is not None and commit.day < since:
            continue
        if until is not None and commit.day > until:
            continue
        if author is not None and commit.author != author:
            continue
        selected.append(commit)
    return selected


class FileHistoryProvider:
    """HistoryProvider backed by an exported history file.

    ``.json``, ``.yaml`` and ``.yml`` files are read as commit dumps; any
    other suffix is read as ``git log --numstat`` text.
    """

    DUMP_SUFFIXES = {".json", ".yaml", ".yml"}

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def get_commits(
        self,
        repository: str,
        since: Optional[date] = None,
        until: Optional[date] = None,
        author: Optional[str] = None,
    ) -> list[CommitRecord]:
        if not self.path.exists():
            raise HistoryNotFoundError(f"No commit history for {repository!r} at {self.path}")

        if self.path.suffix.lower() in self.DUMP_SUFFIXES:
            commits = load_commit_dump(self.path)
        else:
            commits = parse_git_log(self.path.read_text(encoding="utf-8", errors="replace"))

        logger.info(f"Loaded {len(commits)} commits for {repository} from {self.path}")
        return filter_commits(commits, since=since, until=until, author=author)
