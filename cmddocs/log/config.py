"""
Configuration for the logging system.

LogConfig is immutable so a logger's settings cannot drift once it has
been created.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..exceptions import ConfigError


@dataclass(frozen=True)
class LogConfig:
    """
    Immutable configuration for root loggers.

    Derived loggers share their root's handler, so only the root's
    display settings (colors, micros) matter.
    """

    level: int | bool = logging.INFO  # int for normal levels, False to disable logging
    micros: bool = False
    colors: bool = True

    @staticmethod
    def _resolve_level(level: str | int | bool) -> int | bool:
        """Resolve level parameter to int or False."""
        from .constants import LogConstants
        from .exceptions import InvalidLogLevelError

        if isinstance(level, bool):
            return False if not level else logging.INFO
        if isinstance(level, str):
            if level.isnumeric():
                return int(level)
            if level.lower() in LogConstants.LEVEL_NAMES:
                return LogConstants.LEVEL_NAMES[level.lower()]
            raise InvalidLogLevelError(level)
        return level

    @classmethod
    def from_params(
        cls,
        level: str | int | bool,
        micros: bool = False,
        colors: bool = True,
    ) -> LogConfig:
        """
        Create LogConfig from individual parameters.

        Args:
            level: Log level (string name, numeric value, or False to disable logging)
            micros: Whether to show microsecond precision
            colors: Whether to enable colored output

        Returns:
            LogConfig instance
        """
        return cls(level=cls._resolve_level(level), micros=micros, colors=colors)

    @classmethod
    def from_config(cls, config_dict: dict[str, Any], section: str = "logging") -> LogConfig:
        """
        Create LogConfig from a configuration dictionary.

        Args:
            config_dict: Parsed configuration (e.g. the YAML config file)
            section: Dotted path of the logging section (default: "logging")

        Returns:
            LogConfig instance; missing keys fall back to defaults

        Raises:
            ConfigError: If the section is not a mapping or a flag is not a bool
        """
        current: Any = config_dict
        for part in section.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                current = {}
                break
        if current is None:
            current = {}
        if not isinstance(current, dict):
            raise ConfigError(
                "logging section must be a mapping", got=type(current).__name__
            )
        for key in ("micros", "colors"):
            if key in current and not isinstance(current[key], bool):
                raise ConfigError("invalid logging setting", key=key, value=current[key])

        level = current.get("level", "info")
        if level == "false":
            level = False

        return cls.from_params(
            level=level,
            micros=current.get("micros", False),
            colors=current.get("colors", True),
        )
