"""
Command node interface definition.

This module provides an abstract base class describing the read-only view
of a command tree that the documentation builder consumes, so the builder
does not depend on a concrete command framework.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .flags import FlagGroups


class CommandNode(ABC):
    """
    Abstract base class for a node of a command tree.

    The abstract members are what the metadata collector needs. The
    remaining members have neutral defaults and are used by the Markdown
    renderer and the flags page; implementations override what they
    support.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The command's own name, as typed on the command line."""
        pass

    @property
    @abstractmethod
    def command_path(self) -> str:
        """Full space-separated path from the root, e.g. "app remote add"."""
        pass

    @property
    @abstractmethod
    def short(self) -> str:
        """One-line description."""
        pass

    @property
    @abstractmethod
    def aliases(self) -> Sequence[str]:
        """Alternative names for the command."""
        pass

    @property
    @abstractmethod
    def parent(self) -> CommandNode | None:
        """Parent node, None for the root."""
        pass

    @property
    @abstractmethod
    def children(self) -> Sequence[CommandNode]:
        """Direct subcommands in registration order."""
        pass

    @property
    @abstractmethod
    def annotations(self) -> Mapping[str, str]:
        """Free-form string annotations attached to the command."""
        pass

    def has_parent(self) -> bool:
        """Check whether this node is below the root."""
        return self.parent is not None

    @property
    def root(self) -> CommandNode:
        """The root of the tree this node belongs to."""
        node: CommandNode = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def long(self) -> str:
        """Multi-paragraph description."""
        return ""

    @property
    def example(self) -> str:
        """Usage examples, rendered verbatim."""
        return ""

    @property
    def hidden(self) -> bool:
        """Hidden commands are left out of the generated pages."""
        return False

    @property
    def runnable(self) -> bool:
        """Whether the command does work itself rather than only grouping others."""
        return False

    @property
    def use_line(self) -> str:
        """Invocation synopsis, e.g. "app sub <arg> [flags]"."""
        return self.command_path

    def non_inherited_usages(self) -> str:
        """Formatted help lines of the options declared on this command."""
        return ""

    def inherited_usages(self) -> str:
        """Formatted help lines of the options inherited from ancestors."""
        return ""

    @property
    def flag_groups(self) -> FlagGroups | None:
        """Registry of named global flag groups, normally held by the root."""
        return None

    def flags_help(self, generating_docs: bool = False) -> str:
        """
        Render the global flags help.

        Args:
            generating_docs: Produce the Markdown page instead of terminal text

        Returns:
            str: Rendered help, empty when the tree has no flag groups
        """
        return ""
