"""
Flag definitions and named flag groups.

A Flag records the arguments of one argparse add_argument() call so the
same option can be added to several parsers and rendered into help text.
FlagGroups is the registry of named global flag groups attached to the
root command; commands point at the groups relevant to them through their
"groups" annotation.
"""

from __future__ import annotations

import argparse
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import jinja2

from ..exceptions import FlagGroupError

if TYPE_CHECKING:
    from .protocol import CommandNode

# Fixed width so rendered usages do not depend on the terminal size
USAGE_WIDTH = 100
USAGE_HELP_POSITION = 40


@dataclass
class Flag:
    """Definition of a single command-line option or positional argument."""

    args: tuple[str, ...]
    kwargs: dict[str, Any] = field(default_factory=dict)

    @property
    def is_positional(self) -> bool:
        """Check whether this is a positional argument rather than an option."""
        return not self.args or not self.args[0].startswith("-")

    @property
    def name(self) -> str:
        """Long option name without dashes, or the positional's name."""
        if self.is_positional:
            return self.args[0] if self.args else str(self.kwargs.get("dest", ""))
        longest = max(self.args, key=len)
        return longest.lstrip("-")

    def add_to(self, target: Any, suppress_default: bool = False) -> argparse.Action:
        """
        Add this flag to a parser or argument group.

        Args:
            target: ArgumentParser or argument group
            suppress_default: Leave the destination unset unless the option is
                given, so an earlier parser's value is not overwritten

        Returns:
            argparse.Action: The created action
        """
        kwargs = dict(self.kwargs)
        if suppress_default and not self.is_positional:
            kwargs["default"] = argparse.SUPPRESS
        return target.add_argument(*self.args, **kwargs)


def _usage_formatter(prog: str) -> argparse.HelpFormatter:
    return argparse.HelpFormatter(
        prog, width=USAGE_WIDTH, max_help_position=USAGE_HELP_POSITION
    )


def format_usages(flags: Iterable[Flag]) -> str:
    """
    Render the help lines of a set of options.

    Positional arguments are skipped.

    Returns:
        str: One entry per option ending in a newline, or "" if there are none
    """
    options = [f for f in flags if not f.is_positional]
    if not options:
        return ""

    parser = argparse.ArgumentParser(prog="", add_help=False)
    actions = [flag.add_to(parser) for flag in options]
    # Built directly so the parser never adds terminal styling
    formatter = _usage_formatter(parser.prog)
    formatter.add_arguments(actions)
    return formatter.format_help()


@dataclass
class FlagGroup:
    """A named set of related global options."""

    name: str
    help: str = ""
    flags: list[Flag] = field(default_factory=list)

    def add(self, *args: str, **kwargs: Any) -> Flag:
        """Declare an option in this group, with add_argument() arguments."""
        flag = Flag(args, kwargs)
        self.flags.append(flag)
        return flag

    def has_flags(self) -> bool:
        return bool(self.flags)

    def usages(self) -> str:
        """Formatted help lines of the group's options."""
        return format_usages(self.flags)


class FlagGroups:
    """
    Ordered registry of flag groups.

    Example:
        groups = FlagGroups()
        logging = groups.new_group("Logging", "Control the log output")
        logging.add("--log-level", default="info", help="Log level")

        shown = groups.include("Logging")  # groups named in an annotation
    """

    def __init__(self) -> None:
        self._groups: list[FlagGroup] = []
        self.by_name: dict[str, FlagGroup] = {}

    def __iter__(self) -> Iterator[FlagGroup]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    @property
    def groups(self) -> list[FlagGroup]:
        """Groups in registration order."""
        return list(self._groups)

    def add_group(self, group: FlagGroup) -> FlagGroup:
        """
        Register an existing group.

        Raises:
            FlagGroupError: If a group with the same name is registered
        """
        if group.name in self.by_name:
            raise FlagGroupError("flag group already registered", group=group.name)
        self._groups.append(group)
        self.by_name[group.name] = group
        return group

    def new_group(self, name: str, help: str = "") -> FlagGroup:
        """Create and register an empty group."""
        return self.add_group(FlagGroup(name, help))

    def get(self, name: str) -> FlagGroup:
        """
        Look up a group by name.

        Raises:
            FlagGroupError: If no such group is registered
        """
        if name not in self.by_name:
            raise FlagGroupError(f"couldn't find flag group {name!r}")
        return self.by_name[name]

    def all_flags(self) -> list[Flag]:
        """Every flag of every group, in registration order."""
        return [flag for group in self._groups for flag in group.flags]

    def include(self, groups_string: str) -> FlagGroups:
        """
        Select the groups named in a comma-separated list.

        Args:
            groups_string: e.g. "Copy,Sync"; "" selects every group

        Returns:
            FlagGroups: Registry with the named groups, in registration order

        Raises:
            FlagGroupError: If a named group does not exist
        """
        if groups_string == "":
            return self

        wanted = set()
        for name in groups_string.split(","):
            name = name.strip()
            self.get(name)
            wanted.add(name)

        selected = FlagGroups()
        for group in self._groups:
            if group.name in wanted:
                selected.add_group(group)
        return selected


_ENV = jinja2.Environment(
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    undefined=jinja2.StrictUndefined,
    autoescape=False,
)

FLAGS_HELP_TEMPLATE = _ENV.from_string(
    """\
{% if generating_docs %}
---
title: "Global Flags"
description: "{{ app | capitalize }} Global Flags"
# autogenerated - DO NOT EDIT
---

# Global Flags

This describes the global flags available to every {{ app }} command
split into groups.
{% else %}
Global Flags

Flags available to every {{ app }} command, split into groups.
{% endif %}
{% for group in groups if group.has_flags() %}

{% if generating_docs %}
## {{ group.name }}
{% else %}
{{ group.name }} Options
{% endif %}

{{ group.help }}

{% if generating_docs %}
```
{{ group.usages() }}```
{% else %}
{{ group.usages() }}{% endif %}
{% endfor %}
"""
)


def render_flags_help(root: CommandNode, generating_docs: bool = False) -> str:
    """
    Render the help text describing every global flag group.

    The terminal help and the Markdown flags page come from the same
    template; generating_docs selects the Markdown form.

    Args:
        root: Root command holding the flag groups
        generating_docs: Produce the Markdown page

    Returns:
        str: Rendered help text
    """
    groups = root.flag_groups or FlagGroups()
    return FLAGS_HELP_TEMPLATE.render(
        app=root.name, groups=list(groups), generating_docs=generating_docs
    )
