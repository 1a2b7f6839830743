"""
Base command class for command-line applications.

A Command is one node of an argparse-backed command tree. Subcommands are
registered as subparsers carrying their aliases, persistent flags are
inherited by every descendant, and the root may hold a registry of named
global flag groups.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import IO, TYPE_CHECKING, Any

from ..exceptions import CommandError, DupCommandError
from ..log import Logger, LoggerFactory
from .flags import Flag, FlagGroups, format_usages, render_flags_help
from .protocol import CommandNode

if TYPE_CHECKING:
    from ..config import DocsConfig

# Namespace attribute naming the command selected on the command line
COMMAND_DEST = "_cmddocs_command"


@dataclass
class CommandConfig:
    """Configuration for a command."""

    name: str
    aliases: list[str] = field(default_factory=list)
    short: str = ""
    long: str = ""
    # Positional argument synopsis shown in the use line, e.g. "source dest"
    usage: str = ""
    example: str = ""
    annotations: dict[str, str] = field(default_factory=dict)
    hidden: bool = False


class Command(CommandNode):
    """
    Node of a command tree.

    Subclasses override run() to do work; a command that only groups
    subcommands prints its help when invoked.

    Example:
        root = Command(CommandConfig("app", short="Example application"))
        remote = root.add_command(Command(CommandConfig("remote", aliases=["r"])))
        remote.add_flag("--verbose", "-v", action="store_true", help="Be chatty")
        exit(root.execute(sys.argv[1:]))
    """

    def __init__(self, config: CommandConfig | None = None):
        """
        Initialize the command.

        Args:
            config: Command configuration, or None to use _create_config()
        """
        self.config = config or self._create_config()
        if not self.config.name:
            raise CommandError("command name is not defined", cls=type(self).__name__)
        self._parent: Command | None = None
        self._children: list[Command] = []
        self._flags: list[Flag] = []
        self._persistent_flags: list[Flag] = []
        self._flag_groups: FlagGroups | None = None
        self._logger: Logger | None = None
        self._docs_config: DocsConfig | None = None
        self._arg_prs: argparse.ArgumentParser | None = None

    def _create_config(self) -> CommandConfig:
        """Create default configuration. Override in subclasses."""
        raise CommandError("command config is not defined", cls=type(self).__name__)

    # CommandNode interface

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def command_path(self) -> str:
        if self._parent is None:
            return self.name
        return self._parent.command_path + " " + self.name

    @property
    def short(self) -> str:
        return self.config.short

    @property
    def long(self) -> str:
        return self.config.long

    @property
    def example(self) -> str:
        return self.config.example

    @property
    def aliases(self) -> Sequence[str]:
        return list(self.config.aliases)

    @property
    def parent(self) -> Command | None:
        return self._parent

    @property
    def children(self) -> Sequence[Command]:
        return list(self._children)

    @property
    def annotations(self) -> Mapping[str, str]:
        return self.config.annotations

    @property
    def hidden(self) -> bool:
        return self.config.hidden

    @property
    def runnable(self) -> bool:
        return type(self).run is not Command.run

    @property
    def use_line(self) -> str:
        line = self.command_path
        if self.config.usage:
            line += " " + self.config.usage
        return line + " [flags]"

    @property
    def flag_groups(self) -> FlagGroups | None:
        return self._flag_groups

    def flags_help(self, generating_docs: bool = False) -> str:
        return render_flags_help(self.root, generating_docs)

    # Tree construction

    def add_command(self, command: Command) -> Command:
        """
        Attach a subcommand.

        Returns:
            Command: The added command

        Raises:
            DupCommandError: If its name or an alias is already used by a sibling
        """
        taken = {n for child in self._children for n in [child.name, *child.aliases]}
        for n in [command.name, *command.aliases]:
            if n in taken:
                raise DupCommandError(self.command_path, n)
        command._parent = self
        self._children.append(command)
        return command

    def add_flag(self, *args: str, **kwargs: Any) -> Flag:
        """Declare a local option or positional argument (add_argument() arguments)."""
        flag = Flag(args, kwargs)
        self._flags.append(flag)
        return flag

    def add_persistent_flag(self, *args: str, **kwargs: Any) -> Flag:
        """Declare an option accepted by this command and all its descendants."""
        flag = Flag(args, kwargs)
        self._persistent_flags.append(flag)
        return flag

    def set_flag_groups(self, groups: FlagGroups) -> None:
        """Attach the global flag groups; their flags become persistent flags."""
        self._flag_groups = groups

    def help_flag(self) -> Flag:
        return Flag(("-h", "--help"), {"action": "help", "help": f"help for {self.name}"})

    def persistent_flags(self) -> list[Flag]:
        """Persistent flags declared here, flag group flags first."""
        group_flags = self._flag_groups.all_flags() if self._flag_groups else []
        return group_flags + self._persistent_flags

    def local_flags(self) -> list[Flag]:
        """Flags declared on this command, including its help flag."""
        return self._flags + self.persistent_flags() + [self.help_flag()]

    def inherited_flags(self) -> list[Flag]:
        """Persistent flags of every ancestor, nearest ancestor last."""
        chain: list[Command] = []
        node = self._parent
        while node is not None:
            chain.append(node)
            node = node._parent
        return [flag for cmd in reversed(chain) for flag in cmd.persistent_flags()]

    def non_inherited_usages(self) -> str:
        return format_usages(self.local_flags())

    def inherited_usages(self) -> str:
        return format_usages(self.inherited_flags())

    # Runtime

    @property
    def lg(self) -> Logger:
        """
        Get the logger, derived from the parent's and named after the command.

        Raises:
            CommandError: If the root has not been set up with a logger
        """
        if self._logger is None:
            if self._parent is None:
                raise CommandError(
                    f"Logger not initialized for command '{self.name}'. "
                    "Ensure setup() has been called on the root command."
                )
            self._logger = LoggerFactory.derive(self._parent.lg, self.name)
        return self._logger

    @property
    def docs_config(self) -> DocsConfig:
        """The documentation settings attached to the root."""
        root = self.root
        assert isinstance(root, Command)
        if root._docs_config is None:
            from ..config import DocsConfig

            root._docs_config = DocsConfig()
        return root._docs_config

    @property
    def arg_prs(self) -> argparse.ArgumentParser | None:
        """The argument parser built for this command, if any."""
        return self._arg_prs

    def setup(self, lg: Logger, config: DocsConfig | None = None) -> None:
        """
        Attach the logger and documentation settings to this (root) command.

        Args:
            lg: Root logger; descendants derive theirs from it
            config: Documentation settings, defaults when None
        """
        self._logger = lg
        self._docs_config = config

    def set_args(self, parser: argparse.ArgumentParser) -> None:
        """
        Set up the argument parser for this command and its subtree.

        Args:
            parser: Parser created for this command by its parent
        """
        self._arg_prs = parser
        parser.set_defaults(**{COMMAND_DEST: self})

        for flag in self._flags:
            flag.add_to(parser)
        if self._flag_groups is not None:
            for group in self._flag_groups:
                arg_group = parser.add_argument_group(f"{group.name} Options", group.help)
                for flag in group.flags:
                    flag.add_to(arg_group)
        for flag in self._persistent_flags:
            flag.add_to(parser)
        # Accept inherited options after the subcommand without resetting
        # values given before it
        for flag in self.inherited_flags():
            flag.add_to(parser, suppress_default=True)
        self.help_flag().add_to(parser)

        if not self._children:
            return
        subs = parser.add_subparsers(
            title="commands", metavar="command", dest=f"{self.name}_cmd"
        )
        for child in self._children:
            kwargs: dict[str, Any] = {
                "aliases": child.aliases,
                "description": child.long or child.short,
                "add_help": False,
                "formatter_class": parser.formatter_class,
            }
            if not child.hidden:
                kwargs["help"] = child.short
            child.set_args(subs.add_parser(child.name, **kwargs))

    def build_parser(self) -> argparse.ArgumentParser:
        """Build the argument parser for the tree rooted at this command."""
        parser = argparse.ArgumentParser(
            prog=self.command_path,
            description=self.long or self.short,
            add_help=False,
        )
        self.set_args(parser)
        return parser

    def print_help(self, file: IO[str] | None = None) -> None:
        """Print this command's help."""
        if self._arg_prs is None:
            self.build_parser()
        assert self._arg_prs is not None
        self._arg_prs.print_help(file=file or sys.stdout)

    def run(self, args: argparse.Namespace) -> int:
        """
        Run the command.

        Override in subclasses; the default prints the help.

        Returns:
            int: Exit code
        """
        self.print_help()
        return 0

    def execute(self, argv: Sequence[str] | None = None) -> int:
        """
        Parse argv and run the selected command.

        Returns:
            int: Exit code of the selected command
        """
        args = self.build_parser().parse_args(argv)
        command: Command = getattr(args, COMMAND_DEST)
        return command.run(args)
