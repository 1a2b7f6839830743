"""
Logger class for the logging system.

Adds structured extra fields and the TRACE/TRACE2 levels on top of the
standard Python logger.
"""

import logging
import sys
from typing import Any

from .config import LogConfig
from .constants import LogConstants


class Logger(logging.Logger):
    """
    Enhanced logger with structured extra field handling.

    Extends the standard Python logger with:
    - Pre-populated extra fields merged into every record
    - Custom trace and trace2 methods
    - Derived "view" loggers that share the root logger's handlers
    - Completely disabled logging via level False
    """

    def __init__(
        self,
        name: str,
        config: LogConfig | None = None,
        extra: dict[str, Any] | None = None,
    ):
        """
        Initialize the logger.

        Args:
            name: Logger name
            config: Logger configuration, default LogConfig if None
            extra: Pre-populated extra fields to include in all log records
        """
        if config is None:
            config = LogConfig()

        if config.level is False:
            super().__init__(name, logging.CRITICAL + 1)
            self._logging_disabled = True
        else:
            super().__init__(name, config.level)
            self._logging_disabled = False

        self._config = config
        self._extra = extra or {}
        self._root_logger: Logger | None = None  # Set for derived "view" loggers

    @property
    def config(self) -> LogConfig:
        """Get logger configuration."""
        return self._config

    @property
    def disabled(self) -> bool:
        """Check if logging is disabled."""
        return self._logging_disabled

    @disabled.setter
    def disabled(self, value: bool) -> None:
        """Set the disabled state."""
        self._logging_disabled = value

    def get_level(self) -> int | bool:
        """Get configured log level."""
        return self._config.level

    def makeRecord(  # type: ignore[override]
        self,
        name: str,
        level: int,
        fn: str,
        lno: int,
        msg: object,
        args: Any,
        exc_info: Any,
        func: str | None = None,
        extra: dict[str, Any] | None = None,
        sinfo: str | None = None,
    ) -> logging.LogRecord:
        """Create log record carrying the merged extra fields."""
        merged = self._extra.copy()
        if extra:
            merged.update(extra)
        record = super().makeRecord(
            name, level, fn, lno, msg, args, exc_info, func=func, extra=None, sinfo=sinfo
        )
        # Use setattr to avoid name mangling with the __ prefix
        setattr(record, "__cmddocs__extra", merged)
        return record

    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a TRACE level message."""
        if self.isEnabledFor(LogConstants.CUSTOM_LEVELS["TRACE"]):
            self._log(LogConstants.CUSTOM_LEVELS["TRACE"], msg, args, **kwargs)

    def trace2(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a TRACE2 level message (most verbose level)."""
        if self.isEnabledFor(LogConstants.CUSTOM_LEVELS["TRACE2"]):
            self._log(LogConstants.CUSTOM_LEVELS["TRACE2"], msg, args, **kwargs)

    def isEnabledFor(self, level: int) -> bool:
        """Check if enabled, honouring disabled logging and the root's level."""
        if self._logging_disabled:
            return False
        if self._root_logger is not None and not self._root_logger.isEnabledFor(level):
            return False
        return super().isEnabledFor(level)

    def _log(self, level: int, msg: object, args: Any, **kwargs: Any) -> None:  # type: ignore[override]
        """Log, reporting format errors to stderr instead of raising."""
        try:
            super()._log(level, msg, args, **kwargs)
        except (TypeError, ValueError) as e:
            text = str(msg)
            preview = text[:80] + "..." if len(text) > 80 else text
            sys.stderr.write(
                f"LOG_FORMAT_ERROR [{self.name}]: {e.__class__.__name__}: {e} "
                f"| msg={preview!r} args={args!r}\n"
            )

    def callHandlers(self, record: logging.LogRecord) -> None:
        """
        Pass a record to all relevant handlers.

        Derived "view" loggers delegate to the root logger's handlers
        instead of holding their own.
        """
        if self._root_logger is not None:
            for handler in self._root_logger.handlers:
                if record.levelno >= handler.level:
                    handler.handle(record)
        else:
            super().callHandlers(record)
