#!/usr/bin/env python3
"""
Example: Markdown docs for a command tree

Builds a small "myapp" command tree with global flag groups and writes
its documentation: one page per command under <dir>/commands/ plus
<dir>/flags.md.

Usage:
    ./docs_generation.py docs/content                  # Build the docs directly
    ./docs_generation.py deploy --env prod             # Run the documented app
    cmddocs gendocs --app docs_generation:build_root docs/content
"""

import argparse
import sys
from pathlib import Path

# Allow running without package installation
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from cmddocs.command import Command, CommandConfig, FlagGroups
from cmddocs.config import DocsConfig
from cmddocs.docs import DocBuilder
from cmddocs.log import LogConfig, LoggerFactory


class DeployCommand(Command):
    """Deploy application to target environment."""

    def __init__(self) -> None:
        super().__init__()
        self.add_flag(
            "--env",
            "-e",
            required=True,
            choices=["dev", "staging", "prod"],
            help="Target environment",
        )
        self.add_flag(
            "--strategy",
            choices=["rolling", "blue-green", "canary"],
            default="rolling",
            help="Deployment strategy (default: rolling)",
        )

    def _create_config(self) -> CommandConfig:
        return CommandConfig(
            name="deploy",
            aliases=["d"],
            short="Deploy application to an environment",
            long="Handles the full deployment lifecycle including validation,\n"
            "building, and rollout with configurable strategies.",
            example="myapp deploy --env prod\nmyapp deploy --env staging --dry-run",
            annotations={"versionIntroduced": "v1.0", "groups": "Run"},
        )

    def run(self, args: argparse.Namespace) -> int:
        action = "Would deploy" if args.dry_run else "Deploying"
        print(f"{action} to {args.env} ({args.strategy})")
        return 0


class StatusCommand(Command):
    """Show deployment status."""

    def _create_config(self) -> CommandConfig:
        return CommandConfig(name="status", aliases=["st"], short="Show deployment status")

    def run(self, args: argparse.Namespace) -> int:
        print("all services healthy")
        return 0


def build_root() -> Command:
    """Build the myapp command tree."""
    groups = FlagGroups()
    run = groups.new_group("Run", "Flags controlling how changes are applied.")
    run.add("-n", "--dry-run", action="store_true", help="Show what would change")
    output = groups.new_group("Output", "Flags controlling the output.")
    output.add("--json", action="store_true", help="Print results as JSON")

    root = Command(CommandConfig("myapp", short="Deploy and inspect myapp"))
    root.set_flag_groups(groups)
    root.add_command(DeployCommand())
    root.add_command(StatusCommand())
    return root


def main() -> int:
    """Build the docs if given a directory, otherwise run the app."""
    if len(sys.argv) == 2 and not sys.argv[1].startswith("-") and sys.argv[1] not in (
        "deploy",
        "d",
        "status",
        "st",
    ):
        lg = LoggerFactory.create_root(LogConfig.from_params("info"), "/myapp")
        DocBuilder(build_root(), DocsConfig(), lg).build(Path(sys.argv[1]))
        return 0
    return build_root().execute(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(main())
