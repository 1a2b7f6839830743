#!/usr/bin/env python3
"""
cmddocs CLI - generate Markdown docs for command trees.

Usage:
    cmddocs gendocs docs/content
    cmddocs gendocs --app myapp.cli:build_root docs/content
    cmddocs help flags
"""

import argparse
import sys
from collections.abc import Sequence

import cmddocs
from cmddocs.cli.commands import GendocsCommand, HelpCommand, HelpFlagsCommand
from cmddocs.command import Command, CommandConfig, FlagGroups
from cmddocs.command.base import COMMAND_DEST
from cmddocs.config import DOCS_SECTION, DocsConfig, read_config
from cmddocs.exceptions import CmdDocsError
from cmddocs.log import InvalidLogLevelError, LogConfig, LoggerFactory, resolve_level


def _log_level(value: str) -> str:
    """argparse type validating a log level name or number."""
    try:
        resolve_level(value)
    except InvalidLogLevelError as e:
        raise argparse.ArgumentTypeError(str(e)) from e
    return value


def _global_flags() -> FlagGroups:
    groups = FlagGroups()
    logging_group = groups.new_group("Logging", "Flags to control the log output.")
    logging_group.add(
        "--log-level",
        metavar="LEVEL",
        type=_log_level,
        help="Log level: trace2, trace, debug, info, warning, error, critical or false "
        "(default: info)",
    )
    logging_group.add(
        "-q", "--quiet", action="store_true", help="Only log errors"
    )
    config_group = groups.new_group("Config", "Flags to control the docs settings.")
    config_group.add(
        "--config", metavar="PATH", help="YAML file with logging and docs sections"
    )
    return groups


def build_root() -> Command:
    """Build the cmddocs command tree."""
    root = Command(
        CommandConfig(
            name="cmddocs",
            short="Generate Markdown docs for command trees",
            long="Generate Markdown documentation pages for a command-line\n"
            "application, one page per command plus a global flags page.",
        )
    )
    root.set_flag_groups(_global_flags())
    root.add_flag(
        "--version", action="version", version=f"cmddocs {cmddocs.__version__}"
    )
    root.add_command(GendocsCommand())
    help_cmd = root.add_command(HelpCommand())
    help_cmd.add_command(HelpFlagsCommand())
    return root


def _log_config(args: argparse.Namespace, config_dict: dict) -> LogConfig:
    log_config = LogConfig.from_config(config_dict)
    level = log_config.level
    if args.log_level is not None:
        level = args.log_level
    if args.quiet:
        level = "error"
    return LogConfig.from_params(level, micros=log_config.micros, colors=log_config.colors)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the cmddocs CLI."""
    root = build_root()
    args = root.build_parser().parse_args(argv)
    try:
        config_dict = read_config(args.config)
        lg = LoggerFactory.create_root(_log_config(args, config_dict), "/cmddocs")
        root.setup(lg, DocsConfig.from_dict(config_dict.get(DOCS_SECTION)))
        command: Command = getattr(args, COMMAND_DEST)
        return command.run(args)
    except (CmdDocsError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    exit(main())
