"""
Metadata collection over a command tree.

Walks the tree once, before any page is written, recording what the
front matter and the post-processor need about each command under the
name of the page generated for it.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from ..command.protocol import CommandNode

MARKDOWN_EXTENSION = ".md"


def _frozen(annotations: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(annotations))


@dataclass(frozen=True)
class CommandDetails:
    """Per-command metadata keyed by output filename."""

    short: str = ""
    aliases: tuple[str, ...] = ()
    # Copied from the command, never shared with it
    annotations: Mapping[str, str] = field(default_factory=lambda: _frozen({}))


def command_filename(node: CommandNode) -> str:
    """Page filename for a command, e.g. "app remote add" -> "app_remote_add.md"."""
    return node.command_path.replace(" ", "_") + MARKDOWN_EXTENSION


def alias_paths(node: CommandNode, parent_aliases: Sequence[str]) -> list[str]:
    """
    Every alternative command path under which a command can be invoked.

    Each alias path the parent can be reached by is combined with this
    command's name and with each of its aliases; this command's own aliases
    are then added under the parent's real path (bare for the root).
    Duplicates are kept.

    Args:
        node: Command to compute the alias paths of
        parent_aliases: The parent's alias paths

    Returns:
        list: Alias paths, space separated
    """
    aliases = []
    for p in parent_aliases:
        aliases.append(p + " " + node.name)
        for a in node.aliases:
            aliases.append(p + " " + a)

    parent = node.parent
    for a in node.aliases:
        if parent is not None:
            aliases.append(parent.command_path + " " + a)
        else:
            aliases.append(a)
    return aliases


def collect_details(root: CommandNode) -> dict[str, CommandDetails]:
    """
    Collect the details of every command in the tree, root included.

    Args:
        root: Root of the command tree

    Returns:
        dict: Output filename -> CommandDetails, one entry per command
    """
    commands: dict[str, CommandDetails] = {}

    def add_command_details(node: CommandNode, parent_aliases: Sequence[str]) -> None:
        aliases = alias_paths(node, parent_aliases)
        commands[command_filename(node)] = CommandDetails(
            short=node.short,
            aliases=tuple(aliases),
            annotations=_frozen(node.annotations),
        )
        for child in node.children:
            add_command_details(child, aliases)

    add_command_details(root, [])
    return commands
