"""Commit normalization, aggregation and history retrieval."""

from .aggregator import CommitAggregator, aggregate_commits
from .gap_filler import fill_gaps
from .history import FileHistoryProvider, HistoryProvider, filter_commits, parse_git_log
from .normalizer import AuthorNormalizer, normalize_author

__all__ = [
    "AuthorNormalizer",
    "CommitAggregator",
    "FileHistoryProvider",
    "HistoryProvider",
    "aggregate_commits",
    "fill_gaps",
    "filter_commits",
    "normalize_author",
    "parse_git_log",
]
