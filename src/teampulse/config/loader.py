"""YAML/JSON configuration store.

Project configuration files hold author groups and exclusions for one
repository; the global configuration holds settings shared by every
repository. JSON files are read through the YAML parser.
"""

import logging
import re
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .errors import ConfigurationError, DuplicateAliasError, InvalidValueError, handle_yaml_error
from .schema import AuthorGroup, GlobalConfig, ProjectConfig, WeekStart

logger = logging.getLogger(__name__)

_UNSAFE_NAME_CHARS = re.compile(r"[^a-zA-Z0-9\-]")

CONFIG_SUFFIXES = (".yaml", ".yml", ".json")


def safe_config_name(repository: str) -> str:
    """Turn a repository identity into a file-name stem.

    ``owner/repo-name`` becomes ``owner_repo-name``; hyphens are kept, every
    other non-alphanumeric character becomes an underscore.
    """
    return _UNSAFE_NAME_CHARS.sub("_", repository)


class ConfigLoader:
    """Load and validate project and global configuration files."""

    @classmethod
    def load_project_config(cls, config_path: Union[str, Path]) -> ProjectConfig:
        """Load a project configuration, defaulting when the file is absent.

        Args:
            config_path: Path to a YAML or JSON file

        Returns:
            ProjectConfig instance (empty groups and exclusions if missing)

        Raises:
            ConfigurationError: If the file is not valid YAML/JSON or malformed
            DuplicateAliasError: If an alias belongs to two groups
        """
        config_path = Path(config_path)
        if not config_path.exists():
            logger.debug(f"No project configuration at {config_path}, using defaults")
            return ProjectConfig()

        data = cls._read_mapping(config_path)
        return cls.parse_project_config(data, config_path)

    @classmethod
    def find_project_config(cls, config_dir: Union[str, Path], repository: str) -> Optional[Path]:
        """Locate ``<config_dir>/<safe_name>_config.<ext>`` for a repository."""
        config_dir = Path(config_dir)
        stem = f"{safe_config_name(repository)}_config"
        for suffix in CONFIG_SUFFIXES:
            candidate = config_dir / f"{stem}{suffix}"
            if candidate.exists():
                return candidate
        return None

    @classmethod
    def load_for_repository(cls, config_dir: Union[str, Path], repository: str) -> ProjectConfig:
        """Load the project configuration stored for ``repository``."""
        path = cls.find_project_config(config_dir, repository)
        if path is None:
            logger.debug(f"No stored configuration for {repository!r} in {config_dir}")
            return ProjectConfig()
        return cls.load_project_config(path)

    @classmethod
    def parse_project_config(
        cls, data: dict[str, Any], config_path: Optional[Union[str, Path]] = None
    ) -> ProjectConfig:
        """Build a ProjectConfig from a raw mapping.

        Both the camelCase keys written by the dashboard (``groupedAuthors``,
        ``primaryName``, ``excludedUsers``) and snake_case keys are accepted.
        Blank names are dropped and surrounding whitespace is trimmed.
        """
        if not isinstance(data, dict):
            raise ConfigurationError("Project configuration must be a mapping", config_path)

        raw_groups = cls._first_present(data, "groupedAuthors", "grouped_authors") or []
        raw_excluded = cls._first_present(data, "excludedUsers", "excluded_users") or []

        if not isinstance(raw_groups, list) or not isinstance(raw_excluded, list):
            raise ConfigurationError(
                "'groupedAuthors' and 'excludedUsers' must both be lists", config_path
            )

        groups: list[AuthorGroup] = []
        for raw_group in raw_groups:
            if not isinstance(raw_group, dict):
                raise ConfigurationError("Each author group must be a mapping", config_path)
            primary = str(cls._first_present(raw_group, "primaryName", "primary_name") or "").strip()
            if not primary:
                logger.warning("Skipping author group without a primary name")
                continue
            aliases = [
                str(alias).strip()
                for alias in raw_group.get("aliases") or []
                if str(alias).strip()
            ]
            groups.append(AuthorGroup(primary_name=primary, aliases=aliases))

        excluded = [str(user).strip() for user in raw_excluded if str(user).strip()]

        cls._validate_unique_aliases(groups, config_path)

        unknown = set(data) - {"groupedAuthors", "grouped_authors", "excludedUsers", "excluded_users"}
        if unknown:
            logger.warning(f"Ignoring unknown project configuration keys: {sorted(unknown)}")

        return ProjectConfig(grouped_authors=groups, excluded_users=excluded)

    @classmethod
    def load_global_config(cls, config_path: Optional[Union[str, Path]]) -> GlobalConfig:
        """Load the global configuration; absent file means Sunday-start weeks."""
        if config_path is None or not Path(config_path).exists():
            return GlobalConfig()

        data = cls._read_mapping(Path(config_path))
        return cls.parse_global_config(data, config_path)

    @classmethod
    def parse_global_config(
        cls, data: dict[str, Any], config_path: Optional[Union[str, Path]] = None
    ) -> GlobalConfig:
        raw_day = cls._first_present(data, "firstDayOfWeek", "first_day_of_week")
        if raw_day is None:
            return GlobalConfig()

        allowed = [member.value for member in WeekStart]
        day = str(raw_day).strip().lower()
        if day not in allowed:
            raise InvalidValueError("firstDayOfWeek", raw_day, allowed, config_path)
        return GlobalConfig(first_day_of_week=WeekStart(day))

    @staticmethod
    def _first_present(data: dict[str, Any], *keys: str) -> Any:
        for key in keys:
            if key in data:
                return data[key]
        return None

    @staticmethod
    def _validate_unique_aliases(
        groups: list[AuthorGroup], config_path: Optional[Union[str, Path]]
    ) -> None:
        owners: dict[str, str] = {}
        for group in groups:
            for alias in group.aliases:
                owner = owners.get(alias)
                if owner is not None and owner != group.primary_name:
                    raise DuplicateAliasError(alias, [owner, group.primary_name], config_path)
                owners[alias] = group.primary_name

    @staticmethod
    def _read_mapping(config_path: Path) -> dict[str, Any]:
        try:
            with open(config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            handle_yaml_error(e, config_path)
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration: {e}", config_path) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration file must contain a mapping", config_path)
        return data
