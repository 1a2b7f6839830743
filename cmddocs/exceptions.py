"""
Unified exception hierarchy for cmddocs.

Every error raised on purpose by the package derives from CmdDocsError, so
callers can catch all of them with a single except clause.
"""

from typing import Any


class CmdDocsError(Exception):
    """
    Base exception for all cmddocs errors.

    Example:
        try:
            DocBuilder(root, config, lg).build(Path("docs"))
        except CmdDocsError as e:
            lg.error(f"generation failed: {e}")
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigError(CmdDocsError):
    """
    Configuration-related errors.

    Examples:
        - Config file not found or unreadable
        - Invalid YAML syntax
        - Unknown configuration key
        - Invalid configuration value type
    """

    pass


class LoggingError(CmdDocsError):
    """Logging configuration errors, such as an invalid log level."""

    pass


class CommandError(CmdDocsError):
    """Errors in the construction or use of a command tree."""

    pass


class DupCommandError(CommandError):
    """Raised when a command name or alias is registered twice under one parent."""

    def __init__(self, parent: str, name: str) -> None:
        super().__init__(f"Command '{name}' is already registered", parent=parent)


class AppLoadError(CommandError):
    """Raised when a command tree cannot be loaded from a module reference."""

    pass


class FlagGroupError(CmdDocsError):
    """
    Flag group errors.

    Examples:
        - Duplicate group name in a registry
        - Unknown group named in a "groups" annotation
    """

    pass


class ConsistencyError(CmdDocsError):
    """
    Internal inconsistencies found while post-processing generated pages.

    Examples:
        - A generated file has no matching command metadata
        - A non-root page lacks the markers delimiting its options section
    """

    pass


class MarkerNotFoundError(ConsistencyError):
    """Raised when the markers delimiting a section cannot be found in order."""

    def __init__(self, start_cut: int, end_cut: int) -> None:
        self.start_cut = start_cut
        self.end_cut = end_cut
        super().__init__(
            "internal error: failed to find cut points",
            start_cut=start_cut,
            end_cut=end_cut,
        )
