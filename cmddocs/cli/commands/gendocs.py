"""
The gendocs command: write Markdown docs for a command tree.
"""

import argparse
import importlib
from pathlib import Path

from ...command import Command, CommandConfig, CommandNode
from ...docs import DocBuilder
from ...exceptions import AppLoadError


def load_app(ref: str) -> CommandNode:
    """
    Load a command tree from a "module:attribute" reference.

    The attribute is either the root command or a zero-argument callable
    returning it.

    Raises:
        AppLoadError: If the reference cannot be resolved to a command tree
    """
    module_name, sep, attribute = ref.partition(":")
    if not sep or not module_name or not attribute:
        raise AppLoadError("app reference must look like module:attribute", app=ref)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise AppLoadError("cannot import app module", app=ref, error=e) from e

    try:
        obj = getattr(module, attribute)
    except AttributeError as e:
        raise AppLoadError("app module has no such attribute", app=ref) from e

    if callable(obj) and not isinstance(obj, CommandNode):
        obj = obj()
    if not isinstance(obj, CommandNode):
        raise AppLoadError(
            "app reference is not a command tree", app=ref, type=type(obj).__name__
        )
    return obj


class GendocsCommand(Command):
    """Output Markdown docs for every command of a tree."""

    def __init__(self) -> None:
        super().__init__()
        self.add_flag("output_directory", help="Directory the docs are written to")
        self.add_flag(
            "--app",
            metavar="MODULE:ATTR",
            help="Document the command tree at MODULE:ATTR instead of this one",
        )

    def _create_config(self) -> CommandConfig:
        return CommandConfig(
            name="gendocs",
            short="Output markdown docs for the commands to the directory supplied.",
            long=(
                "This produces markdown docs for the commands to the directory\n"
                "supplied. These are in a format suitable for hugo to render into\n"
                "a documentation website."
            ),
            usage="output_directory",
            example="cmddocs gendocs docs/content\n"
            "cmddocs gendocs --app myapp.cli:build_root docs/content",
            annotations={"versionIntroduced": "v0.1.0", "groups": "Config"},
        )

    def run(self, args: argparse.Namespace) -> int:
        root = load_app(args.app) if args.app else self.root
        self.lg.info(
            "generating docs",
            extra={"app": root.name, "dir": args.output_directory},
        )
        DocBuilder(root, self.docs_config, self.lg).build(Path(args.output_directory))
        return 0
