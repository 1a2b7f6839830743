"""
Log formatters for the logging system.

Renders records as "[time] [L] message" followed by the structured extra
fields as "[key:value]" and the logger name, with optional ANSI colors.
"""

import logging
import re
from typing import Any

from .colors import ColorManager
from .config import LogConfig
from .constants import LogConstants

# Pattern to match ANSI escape sequences
_ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m")


def _visual_len(text: str) -> int:
    """Calculate visual width of text, excluding ANSI escape codes."""
    if "\x1b" not in text:
        return len(text)
    return len(_ANSI_PATTERN.sub("", text))


def _get_extra(record: logging.LogRecord) -> dict[str, Any]:
    return getattr(record, "__cmddocs__extra", None) or {}


def _render_value(value: Any) -> str:
    if isinstance(value, BaseException):
        return value.__class__.__name__ + ": " + str(value)
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


class PreFormatter(logging.Formatter):
    """Standard formatter with optional microsecond precision timestamps."""

    def __init__(self, fmt: str, micros: bool) -> None:
        self._micros = micros
        super().__init__(fmt)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        s = super().formatTime(record, "%H:%M:%S") + f",{int(record.msecs):03d}"
        if self._micros:
            micros = int((record.created % 1) * 1000000) % 1000
            s += f".{micros:03d}"
        return s


class LogFormatter(logging.Formatter):
    """
    Log formatter with colored output and structured field formatting.

    Provides console output with:
    - ANSI color codes for different log levels
    - Structured "[key:value]" fields aligned to a rule column
    - Logger name information
    """

    def __init__(self, config: LogConfig):
        super().__init__()
        self._config = config

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record."""
        width = self._calculate_width(record)
        if self._config.colors:
            fmt = self._format_colored(record, width)
        else:
            fmt = self._format_plain(record, width)
        return PreFormatter(fmt, self._config.micros).format(record)

    def _calculate_width(self, record: logging.LogRecord) -> int:
        """Display width of "[HH:MM:SS,mmm] [L] message"."""
        timestamp_len = 16 if self._config.micros else 12
        return 1 + timestamp_len + 4 + 1 + 2 + _visual_len(record.getMessage())

    def _padding(self, width: int) -> str:
        rule = (
            LogConstants.MICRO_RULE_WIDTH
            if self._config.micros
            else LogConstants.DEFAULT_RULE_WIDTH
        )
        return " " * max(1, rule - width)

    def _format_plain(self, record: logging.LogRecord, width: int) -> str:
        fmt = LogConstants.DEFAULT_FORMAT + self._padding(width)
        fields = [
            f"[{key}:{_render_value(value)}]".replace("%", "%%")
            for key, value in sorted(_get_extra(record).items())
        ]
        if fields:
            fmt += " ".join(fields) + " "
        return fmt + "[%(name)s]"

    def _format_colored(self, record: logging.LogRecord, width: int) -> str:
        col = ColorManager.get_color_for_level(record.levelno) or ColorManager.DEFAULT
        bold = ColorManager.create_bold_color(col)
        col += "m"
        reset = ColorManager.RESET

        fmt = col + "[%(asctime)s] [" + bold + "%(levelname).1s" + reset + col + "] "
        fmt += bold + "%(message)s" + reset + col + self._padding(width)
        for key, value in sorted(_get_extra(record).items()):
            rendered = _render_value(value).replace("%", "%%")
            fmt += f"{key}[{bold}{rendered}{reset}{col}] "
        gray = ColorManager.create_gray_level(9) + "m"
        return fmt + reset + gray + "[%(name)s]" + reset
