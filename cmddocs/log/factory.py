"""
Factory for creating and configuring loggers.

Root loggers own a single stream handler; derived loggers are "views"
that share it.
"""

import logging
import sys
from typing import Any, TextIO, cast

from .config import LogConfig
from .formatters import LogFormatter
from .logger import Logger


class LoggerFactory:
    """Factory for creating and configuring loggers."""

    @staticmethod
    def create_root(
        config: LogConfig,
        name: str = "/",
        stream: TextIO | None = None,
        extra: dict[str, Any] | None = None,
    ) -> Logger:
        """
        Create a root logger with the specified configuration.

        Args:
            config: Logger configuration
            name: Logger name (default "/")
            stream: Output stream, sys.stderr by default
            extra: Pre-populated extra fields to include in all log records

        Returns:
            Configured root logger

        Example:
            >>> config = LogConfig.from_params(level="info", colors=False)
            >>> lg = LoggerFactory.create_root(config, "/cmddocs")
            >>> lg.info("wrote page", extra={"file": "app.md"})
            [12:34:56,789] [I] wrote page          [file:app.md] [/cmddocs]
        """
        lg = Logger(name, config, extra)
        handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        handler.setFormatter(LogFormatter(config))
        lg.addHandler(handler)
        lg.propagate = False
        lg.parent = logging.root

        logging.root.manager.loggerDict[name] = lg
        lg.trace2(
            "created logger",
            extra={"level": logging.getLevelName(lg.level), "micros": config.micros},
        )
        return lg

    @staticmethod
    def _check_existing_logger(name: str) -> Logger | None:
        """Return an already registered logger of ours with this name."""
        existing = logging.root.manager.loggerDict.get(name)
        if isinstance(existing, Logger):
            return cast(Logger, existing)
        return None

    @staticmethod
    def derive(parent: Logger, tags: str | list[str]) -> Logger:
        """
        Derive a "view" logger that delegates to the root's handlers.

        Examples:
            >>> derived = LoggerFactory.derive(root, "gendocs")
            >>> derived.name
            '/cmddocs/gendocs'

            >>> derived = LoggerFactory.derive(root, ["docs", "postprocess"])
            >>> derived.name
            '/cmddocs/docs/postprocess'

        Args:
            parent: Parent logger instance
            tags: Single tag string or list of tags forming the hierarchy

        Returns:
            Derived logger sharing the root's handlers and level
        """
        if isinstance(tags, str):
            tags = [tags]

        prefix = parent.name if parent.name.endswith("/") else parent.name + "/"
        name = prefix + "/".join(tags)

        existing = LoggerFactory._check_existing_logger(name)
        if existing is not None:
            return existing

        root = parent._root_logger if parent._root_logger is not None else parent
        lg = parent.__class__(name, parent.config)
        lg.setLevel(logging.NOTSET)
        lg._root_logger = root
        lg.parent = parent
        lg.propagate = False

        logging.root.manager.loggerDict[name] = lg
        lg.trace2("derived logger", extra={"root": root.name})
        return lg
