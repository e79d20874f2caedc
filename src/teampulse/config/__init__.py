"""Configuration management for TeamPulse Analytics."""

from .errors import ConfigurationError, DuplicateAliasError, InvalidValueError
from .loader import ConfigLoader, safe_config_name
from .schema import AuthorGroup, GlobalConfig, ProjectConfig, WeekStart

__all__ = [
    "AuthorGroup",
    "ConfigLoader",
    "ConfigurationError",
    "DuplicateAliasError",
    "GlobalConfig",
    "InvalidValueError",
    "ProjectConfig",
    "WeekStart",
    "safe_config_name",
]
