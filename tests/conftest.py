"""
Pytest configuration and shared fixtures.

This module provides central pytest configuration, custom markers,
and shared fixtures for the cmddocs test suite.
"""

import argparse
import logging
import shutil
import tempfile
from collections.abc import Generator
from io import StringIO
from pathlib import Path

import pytest

from cmddocs.command import Command, CommandConfig, FlagGroups
from cmddocs.log import LogConfig, Logger, LoggerFactory

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, isolated, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (may use the filesystem)"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests (full console script runs)"
    )
    config.addinivalue_line("markers", "property: Property-based tests (hypothesis)")


def pytest_collection_modifyitems(config, items):
    """Add 'unit' marker to tests without other markers."""
    for item in items:
        if not any(
            mark.name in ["integration", "e2e"] for mark in item.iter_markers()
        ):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Shared Fixtures
# =============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Provide a temporary directory that is cleaned up after the test.

    Yields:
        Path: Temporary directory path
    """
    temp_path = Path(tempfile.mkdtemp(prefix="cmddocs-test-"))
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None, None, None]:
    """
    Reset Python logging global state after each test.

    Derived loggers are looked up by name, so loggers left behind by a
    previous test would keep writing to that test's stream.
    """
    original_handlers = logging.root.handlers[:]
    original_level = logging.root.level

    yield

    for name in list(logging.root.manager.loggerDict.keys()):
        if name.startswith("/"):
            del logging.root.manager.loggerDict[name]

    logging.root.handlers = original_handlers
    logging.root.setLevel(original_level)


@pytest.fixture
def log_stream() -> StringIO:
    """Stream receiving the output of the lg fixture."""
    return StringIO()


@pytest.fixture
def lg(log_stream: StringIO) -> Logger:
    """Root logger at debug level writing uncolored lines to log_stream."""
    config = LogConfig.from_params(level="debug", colors=False)
    return LoggerFactory.create_root(config, "/test", stream=log_stream)


class _RunnableCommand(Command):
    """Command doing work of its own, so its pages carry a use line."""

    def run(self, args: argparse.Namespace) -> int:
        return 0


@pytest.fixture
def sample_groups() -> FlagGroups:
    """
    Global flag groups: Copy and Sync with one option each, Empty with none.

    Returns:
        FlagGroups: Registry in the order Copy, Sync, Empty
    """
    groups = FlagGroups()
    copy = groups.new_group("Copy", "Flags for anything which can copy a file.")
    copy.add(
        "-n", "--dry-run", action="store_true", help="Do a trial run with no permanent changes"
    )
    sync = groups.new_group("Sync", "Flags used for sync commands.")
    sync.add(
        "--delete-after", action="store_true", help="Delete files on destination after transfer"
    )
    groups.new_group("Empty", "Group without flags.")
    return groups


@pytest.fixture
def sample_tree(sample_groups: FlagGroups) -> Command:
    """
    Two-level tree: root "app", runnable "app sub" (alias "s") and a hidden
    "app secret".

    Returns:
        Command: The root command
    """
    root = Command(CommandConfig("app", short="Application root", long="The app."))
    root.set_flag_groups(sample_groups)
    sub = root.add_command(
        _RunnableCommand(
            CommandConfig(
                "sub",
                aliases=["s"],
                short="Sub command",
                usage="source dest",
                annotations={"groups": "Copy", "versionIntroduced": "v1.2"},
            )
        )
    )
    sub.add_flag("--fast", action="store_true", help="Go fast")
    root.add_command(Command(CommandConfig("secret", short="Hidden", hidden=True)))
    return root
