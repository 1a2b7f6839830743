"""
Argparse-backed command trees.

Example:
    from cmddocs.command import Command, CommandConfig, FlagGroups
"""

from .base import Command, CommandConfig
from .flags import Flag, FlagGroup, FlagGroups, format_usages, render_flags_help
from .protocol import CommandNode

__all__ = [
    "Command",
    "CommandConfig",
    "CommandNode",
    "Flag",
    "FlagGroup",
    "FlagGroups",
    "format_usages",
    "render_flags_help",
]
