"""Configuration dataclasses for TeamPulse Analytics."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class WeekStart(str, Enum):
    """First day of the week used for weekly buckets and seasonality."""

    SUNDAY = "sunday"
    MONDAY = "monday"


@dataclass
class AuthorGroup:
    """A canonical contributor name and the raw identities folded into it."""

    primary_name: str
    aliases: list[str] = field(default_factory=list)


@dataclass
class ProjectConfig:
    """Per-repository author grouping and exclusion settings.

    An identity is either excluded, mapped to exactly one primary name, or
    passed through unchanged. Exclusion takes precedence over grouping.
    """

    grouped_authors: list[AuthorGroup] = field(default_factory=list)
    excluded_users: list[str] = field(default_factory=list)

    def alias_map(self) -> dict[str, str]:
        """Return alias -> primary name, first group wins on repeats."""
        mapping: dict[str, str] = {}
        for group in self.grouped_authors:
            for alias in group.aliases:
                mapping.setdefault(alias, group.primary_name)
        return mapping

    def find_group(self, identity: str) -> Optional[AuthorGroup]:
        for group in self.grouped_authors:
            if identity in group.aliases:
                return group
        return None


@dataclass
class GlobalConfig:
    """Settings shared by every repository."""

    first_day_of_week: WeekStart = WeekStart.SUNDAY

    def __post_init__(self) -> None:
        self.first_day_of_week = WeekStart(self.first_day_of_week)
