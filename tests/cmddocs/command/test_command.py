"""
Tests for the Command tree: construction, flags, parsing and runtime.
"""

import argparse

import pytest

from cmddocs.command import Command, CommandConfig, CommandNode
from cmddocs.command.base import COMMAND_DEST
from cmddocs.config import DocsConfig
from cmddocs.exceptions import CommandError, DupCommandError


class RecordingCommand(Command):
    """Command remembering the namespace it was run with."""

    def __init__(self, config=None):
        super().__init__(config)
        self.ran_with: argparse.Namespace | None = None

    def run(self, args):
        self.ran_with = args
        return 3


class ConfiglessCommand(Command):
    """Command relying on the default _create_config()."""


class NamedCommand(Command):
    """Command providing its config through _create_config()."""

    def _create_config(self):
        return CommandConfig(name="named", short="From _create_config")


@pytest.mark.unit
class TestConstruction:
    """Test tree construction."""

    def test_is_command_node(self, sample_tree):
        """Test Command implements the node interface."""
        assert isinstance(sample_tree, CommandNode)

    def test_config_from_create_config(self):
        """Test subclasses may supply their config."""
        assert NamedCommand().name == "named"

    def test_missing_config(self):
        """Test a command without config cannot be created."""
        with pytest.raises(CommandError, match="command config is not defined"):
            ConfiglessCommand()

    def test_empty_name(self):
        """Test a command needs a name."""
        with pytest.raises(CommandError, match="command name is not defined"):
            Command(CommandConfig(""))

    def test_paths_and_parents(self, sample_tree):
        """Test command_path, parent, root and has_parent."""
        sub = sample_tree.children[0]
        assert sub.command_path == "app sub"
        assert sub.parent is sample_tree
        assert sub.root is sample_tree
        assert sub.has_parent() is True
        assert sample_tree.has_parent() is False
        assert sample_tree.command_path == "app"

    def test_children_in_registration_order(self, sample_tree):
        """Test children keep their registration order."""
        assert [c.name for c in sample_tree.children] == ["sub", "secret"]

    @pytest.mark.parametrize("name,aliases", [("sub", []), ("other", ["s"]), ("s", [])])
    def test_duplicate_sibling(self, sample_tree, name, aliases):
        """Test names and aliases are unique among siblings."""
        with pytest.raises(DupCommandError):
            sample_tree.add_command(Command(CommandConfig(name, aliases=aliases)))

    def test_same_name_under_other_parent(self, sample_tree):
        """Test names only clash among siblings."""
        sub = sample_tree.children[0]
        leaf = sub.add_command(Command(CommandConfig("sub")))
        assert leaf.command_path == "app sub sub"

    def test_annotations(self, sample_tree):
        """Test annotations come from the config."""
        sub = sample_tree.children[0]
        assert sub.annotations == {"groups": "Copy", "versionIntroduced": "v1.2"}


@pytest.mark.unit
class TestRendering:
    """Test the members used by the Markdown renderer."""

    def test_runnable(self, sample_tree):
        """Test only commands overriding run() are runnable."""
        assert sample_tree.runnable is False
        assert sample_tree.children[0].runnable is True

    def test_use_line(self, sample_tree):
        """Test the use line includes the positional synopsis."""
        assert sample_tree.use_line == "app [flags]"
        assert sample_tree.children[0].use_line == "app sub source dest [flags]"

    def test_help_flag(self, sample_tree):
        """Test every command has its own help flag."""
        flag = sample_tree.children[0].help_flag()
        assert flag.args == ("-h", "--help")
        assert flag.kwargs["help"] == "help for sub"

    def test_flag_sets(self, sample_tree):
        """Test local, persistent and inherited flags."""
        sub = sample_tree.children[0]
        assert [f.name for f in sample_tree.persistent_flags()] == [
            "dry-run",
            "delete-after",
        ]
        assert [f.name for f in sub.local_flags()] == ["fast", "help"]
        assert [f.name for f in sub.inherited_flags()] == ["dry-run", "delete-after"]
        assert sample_tree.inherited_flags() == []

    def test_persistent_flags_reach_grandchildren(self, sample_tree):
        """Test persistent flags are inherited at every depth, root's first."""
        sub = sample_tree.children[0]
        sub.add_persistent_flag("--region", help="Region to use")
        leaf = sub.add_command(Command(CommandConfig("leaf")))
        assert [f.name for f in leaf.inherited_flags()] == [
            "dry-run",
            "delete-after",
            "region",
        ]

    def test_usages(self, sample_tree):
        """Test formatted usages of local and inherited options."""
        sub = sample_tree.children[0]
        local = sub.non_inherited_usages()
        assert "--fast" in local
        assert "help for sub" in local
        assert "--dry-run" not in local
        inherited = sub.inherited_usages()
        assert "-n, --dry-run" in inherited
        assert "--delete-after" in inherited
        assert sample_tree.inherited_usages() == ""

    def test_flags_help_uses_root(self, sample_tree):
        """Test any node renders the root's flag groups."""
        text = sample_tree.children[0].flags_help()
        assert "Copy Options" in text


@pytest.mark.unit
class TestParsing:
    """Test the argparse parser built for the tree."""

    def test_subcommand_selected(self, sample_tree):
        """Test the selected command is stored in the namespace."""
        args = sample_tree.build_parser().parse_args(["sub", "--fast"])
        assert getattr(args, COMMAND_DEST) is sample_tree.children[0]
        assert args.fast is True

    def test_alias(self, sample_tree):
        """Test aliases select the same command."""
        args = sample_tree.build_parser().parse_args(["s"])
        assert getattr(args, COMMAND_DEST) is sample_tree.children[0]

    def test_root_selected_without_subcommand(self, sample_tree):
        """Test the root is selected when no subcommand is given."""
        args = sample_tree.build_parser().parse_args([])
        assert getattr(args, COMMAND_DEST) is sample_tree

    @pytest.mark.parametrize(
        "argv", [["--dry-run", "sub"], ["sub", "--dry-run"], ["sub", "-n"]]
    )
    def test_inherited_flag_before_or_after(self, sample_tree, argv):
        """Test inherited options work on either side of the subcommand."""
        args = sample_tree.build_parser().parse_args(argv)
        assert args.dry_run is True
        assert args.delete_after is False

    def test_unknown_subcommand(self, sample_tree, capsys):
        """Test argparse rejects unknown commands with exit code 2."""
        with pytest.raises(SystemExit) as exc_info:
            sample_tree.build_parser().parse_args(["nope"])
        assert exc_info.value.code == 2

    def test_hidden_command_still_parses(self, sample_tree):
        """Test hidden commands are callable, only left out of help."""
        args = sample_tree.build_parser().parse_args(["secret"])
        assert getattr(args, COMMAND_DEST).name == "secret"

    def test_help_lists_visible_commands(self, sample_tree, capsys):
        """Test the root help lists visible subcommands."""
        sample_tree.print_help()
        out = capsys.readouterr().out
        assert "Sub command" in out
        assert "Copy Options" in out


@pytest.mark.unit
class TestRuntime:
    """Test logger, config and dispatch."""

    def test_logger_requires_setup(self, sample_tree):
        """Test the root has no logger until setup() is called."""
        with pytest.raises(CommandError, match="Logger not initialized"):
            _ = sample_tree.children[0].lg

    def test_derived_loggers(self, sample_tree, lg):
        """Test descendants derive loggers named after their path."""
        sample_tree.setup(lg)
        assert sample_tree.lg is lg
        assert sample_tree.children[0].lg.name == "/test/sub"

    def test_docs_config_from_root(self, sample_tree, lg):
        """Test descendants read the root's docs settings."""
        sub = sample_tree.children[0]
        assert sub.docs_config == DocsConfig()
        sample_tree.setup(lg, DocsConfig(url_prefix="/docs/"))
        assert sub.docs_config.url_prefix == "/docs/"

    def test_execute_dispatches(self):
        """Test execute() runs the selected command and returns its code."""
        root = Command(CommandConfig("app"))
        cmd = root.add_command(RecordingCommand(CommandConfig("go", aliases=["g"])))
        cmd.add_flag("target", help="Where to go")
        assert root.execute(["g", "home"]) == 3
        assert cmd.ran_with is not None
        assert cmd.ran_with.target == "home"

    def test_default_run_prints_help(self, capsys):
        """Test a grouping command prints its help and succeeds."""
        root = Command(CommandConfig("app", short="Grouping only"))
        assert root.execute([]) == 0
        assert "Grouping only" in capsys.readouterr().out
