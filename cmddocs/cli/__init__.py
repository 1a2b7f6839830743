"""Command-line interface of cmddocs."""

from .cli import build_root, main
from .output import BufferedOutput, ConsoleOutput, OutputWriter

__all__ = [
    "BufferedOutput",
    "ConsoleOutput",
    "OutputWriter",
    "build_root",
    "main",
]
