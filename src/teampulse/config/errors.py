"""Configuration error taxonomy."""

from pathlib import Path
from typing import Optional, Union

import yaml


class ConfigurationError(Exception):
    """Base class for configuration problems."""

    def __init__(self, message: str, config_path: Optional[Union[str, Path]] = None) -> None:
        self.config_path = config_path
        if config_path:
            message = f"{message} (in {config_path})"
        super().__init__(message)


class InvalidValueError(ConfigurationError):
    """A configuration field holds a value outside its allowed set."""

    def __init__(
        self,
        field_name: str,
        value: object,
        allowed: list[str],
        config_path: Optional[Union[str, Path]] = None,
    ) -> None:
        self.field_name = field_name
        self.value = value
        self.allowed = allowed
        super().__init__(
            f"Invalid value {value!r} for '{field_name}'; expected one of: {', '.join(allowed)}",
            config_path,
        )


class DuplicateAliasError(ConfigurationError):
    """An alias is listed under more than one primary name."""

    def __init__(
        self,
        alias: str,
        primary_names: list[str],
        config_path: Optional[Union[str, Path]] = None,
    ) -> None:
        self.alias = alias
        self.primary_names = primary_names
        super().__init__(
            f"Alias {alias!r} is assigned to multiple contributors: {', '.join(primary_names)}",
            config_path,
        )


def handle_yaml_error(error: yaml.YAMLError, config_path: Union[str, Path]) -> None:
    """Re-raise a YAML parse failure as a ConfigurationError with position info."""
    mark = getattr(error, "problem_mark", None)
    if mark is not None:
        location = f"line {mark.line + 1}, column {mark.column + 1}"
        problem = getattr(error, "problem", None) or "syntax error"
        raise ConfigurationError(f"Invalid YAML at {location}: {problem}", config_path) from error
    raise ConfigurationError(f"Invalid YAML: {error}", config_path) from error
