"""
Output abstraction for CLI commands.

Commands write through an OutputWriter so they can be tested without
capturing stdout.
"""

import sys
from typing import Protocol, TextIO


class OutputWriter(Protocol):
    """Protocol for CLI output writing."""

    def write(self, text: str = "") -> None:
        """Write text with trailing newline."""
        ...

    def write_raw(self, text: str) -> None:
        """Write text without trailing newline."""
        ...

    def flush(self) -> None:
        """Flush any buffered output."""
        ...


class ConsoleOutput:
    """
    Default output writer that writes to a stream (stdout by default).

    Example:
        out = ConsoleOutput()
        out.write("Hello world")
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout

    def write(self, text: str = "") -> None:
        """Write text with trailing newline."""
        print(text, file=self._stream)

    def write_raw(self, text: str) -> None:
        """Write text without trailing newline."""
        print(text, end="", file=self._stream)

    def flush(self) -> None:
        """Flush the underlying stream."""
        self._stream.flush()


class BufferedOutput:
    """
    Output writer that captures output in memory.

    Example:
        out = BufferedOutput()
        out.write("Line 1")
        out.write_raw("Line 2\\n")
        assert out.text == "Line 1\\nLine 2\\n"
    """

    def __init__(self) -> None:
        self._parts: list[str] = []

    def write(self, text: str = "") -> None:
        """Write text with trailing newline."""
        self._parts.append(text + "\n")

    def write_raw(self, text: str) -> None:
        """Write text without trailing newline."""
        self._parts.append(text)

    def flush(self) -> None:
        """No-op for buffered output."""
        pass

    @property
    def text(self) -> str:
        """Get all output as a single string."""
        return "".join(self._parts)
