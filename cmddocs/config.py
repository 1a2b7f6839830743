"""
Configuration loading for cmddocs.

Settings live in an optional YAML file with a "logging" section (read by
LogConfig.from_config) and a "docs" section mapped onto DocsConfig:

    logging:
      level: info
      colors: true
    docs:
      url_prefix: /commands/
      product_token: myapp
      regenerate_command: make commanddocs
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from .exceptions import ConfigError

# Maximum configuration file size (10 MB)
MAX_CONFIG_SIZE_BYTES = 10 * 1024 * 1024

DOCS_SECTION = "docs"


@dataclass(frozen=True)
class DocsConfig:
    """Settings controlling the layout and text of the generated pages."""

    commands_dir: str = "commands"
    flags_file: str = "flags.md"
    url_prefix: str = "/commands/"
    flags_url: str = "/flags/"
    # Replaced by source_token in the front matter's source hint; the root
    # command's name when unset
    product_token: str | None = None
    source_token: str = "cmd"
    regenerate_command: str = "make commanddocs"
    frontmatter_date: bool = False
    autogen_tag: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> DocsConfig:
        """
        Build a DocsConfig from the "docs" section of a config file.

        Raises:
            ConfigError: On unknown keys or values of the wrong type
        """
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("docs section must be a mapping", got=type(data).__name__)

        fields = {f.name: f for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - set(fields))
        if unknown:
            raise ConfigError("unknown docs settings", keys=",".join(unknown))

        defaults = cls()
        for key, value in data.items():
            expected = type(getattr(defaults, key))
            if key == "product_token":
                if value is not None and not isinstance(value, str):
                    raise ConfigError("invalid docs setting", key=key, value=value)
            elif not isinstance(value, expected):
                raise ConfigError("invalid docs setting", key=key, value=value)
        return cls(**data)


def _check_file_size(path: Path) -> None:
    """Refuse configuration files larger than MAX_CONFIG_SIZE_BYTES."""
    file_size = os.path.getsize(path)
    if file_size > MAX_CONFIG_SIZE_BYTES:
        raise ConfigError(
            f"Configuration file '{path}' exceeds maximum size",
            size=file_size,
            limit=MAX_CONFIG_SIZE_BYTES,
        )


def read_config(path: str | Path | None) -> dict[str, Any]:
    """
    Read a YAML configuration file into a dictionary.

    Args:
        path: Config file path, or None for an empty configuration

    Returns:
        dict: Parsed configuration (empty for an empty file)

    Raises:
        ConfigError: If the file cannot be read or is not a YAML mapping
    """
    if path is None:
        return {}

    path = Path(path)
    try:
        _check_file_size(path)
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError("cannot read config file", path=path, error=e.strerror) from e
    except yaml.YAMLError as e:
        raise ConfigError("invalid YAML in config file", path=path) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("config file must contain a mapping", path=path)
    return data


def load_config(path: str | Path | None) -> DocsConfig:
    """Load the docs settings from a YAML file, defaults when path is None."""
    return DocsConfig.from_dict(read_config(path).get(DOCS_SECTION))
