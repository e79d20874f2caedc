"""Author identity normalization.

Maps raw author identities to canonical contributor names using the
project's alias groups and exclusion list. Matching is exact and
case-sensitive.
"""

import logging
from typing import Optional

from ..config.schema import ProjectConfig

logger = logging.getLogger(__name__)


class AuthorNormalizer:
    """Resolve raw identities against a ProjectConfig snapshot."""

    def __init__(self, config: Optional[ProjectConfig] = None) -> None:
        config = config or ProjectConfig()
        self.excluded = frozenset(config.excluded_users)
        self.aliases = config.alias_map()

    def normalize(self, identity: str) -> Optional[str]:
        """Return the canonical name for ``identity``, or None to drop the commit.

        Exclusion is checked before grouping, so an identity listed both as
        excluded and as an alias is always dropped.
        """
        if identity in self.excluded:
            return None
        return self.aliases.get(identity, identity)

    def is_excluded(self, identity: str) -> bool:
        return identity in self.excluded


def normalize_author(identity: str, config: ProjectConfig) -> Optional[str]:
    """One-off normalization without keeping an AuthorNormalizer around."""
    return AuthorNormalizer(config).normalize(identity)
