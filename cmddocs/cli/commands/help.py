"""
The help command and its flags topic.
"""

import argparse

from ...command import Command, CommandConfig
from ..output import ConsoleOutput, OutputWriter


class HelpCommand(Command):
    """Show help for the application."""

    def _create_config(self) -> CommandConfig:
        return CommandConfig(
            name="help",
            short="Show help for cmddocs commands and flags.",
            long=(
                "Without a topic this shows the main help. Use \"cmddocs help flags\"\n"
                "to show the global flags."
            ),
        )

    def run(self, args: argparse.Namespace) -> int:
        root = self.root
        assert isinstance(root, Command)
        root.print_help()
        return 0


class HelpFlagsCommand(Command):
    """Show the global flags, grouped."""

    def __init__(self, output: OutputWriter | None = None) -> None:
        super().__init__()
        self.output = output or ConsoleOutput()

    def _create_config(self) -> CommandConfig:
        return CommandConfig(
            name="flags",
            short="Show the global flags for cmddocs",
            long="Show the global flags available to every cmddocs command, split into groups.",
        )

    def run(self, args: argparse.Namespace) -> int:
        self.output.write_raw(self.flags_help())
        return 0
