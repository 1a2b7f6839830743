from importlib.metadata import PackageNotFoundError, version

from .command import Command, CommandConfig, CommandNode, Flag, FlagGroup, FlagGroups
from .config import DocsConfig, load_config, read_config
from .docs import DocBuilder
from .exceptions import (
    AppLoadError,
    CmdDocsError,
    CommandError,
    ConfigError,
    ConsistencyError,
    DupCommandError,
    FlagGroupError,
    LoggingError,
    MarkerNotFoundError,
)

# Version is read from package metadata (pyproject.toml)
try:
    __version__ = version("cmddocs")
except PackageNotFoundError:
    # Package not installed, use fallback (development mode)
    __version__ = "0.1.0-dev"

# Explicit public API
__all__ = [
    # Version
    "__version__",
    # Command tree
    "Command",
    "CommandConfig",
    "CommandNode",
    "Flag",
    "FlagGroup",
    "FlagGroups",
    # Docs
    "DocBuilder",
    "DocsConfig",
    "load_config",
    "read_config",
    # Exceptions
    "AppLoadError",
    "CmdDocsError",
    "CommandError",
    "ConfigError",
    "ConsistencyError",
    "DupCommandError",
    "FlagGroupError",
    "LoggingError",
    "MarkerNotFoundError",
]
