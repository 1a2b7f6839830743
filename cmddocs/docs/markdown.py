"""
Markdown page generator for command trees.

Writes one Markdown page per visible command: name and description,
synopsis, usage, examples, options, inherited options and a "see also"
list linking the parent and children.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from io import StringIO
from pathlib import Path

from ..command.protocol import CommandNode
from ..log import Logger
from .collector import MARKDOWN_EXTENSION, command_filename

OPTIONS_HEADING = "### Options"
INHERITED_OPTIONS_HEADING = "### Options inherited from parent commands"
SEE_ALSO_HEADING = "### SEE ALSO"

# Called with the path of the page being written, returns text placed before it
Prepender = Callable[[str], str]
# Called with a page filename, returns the URL to link it with
LinkHandler = Callable[[str], str]


def _visible_children(node: CommandNode) -> list[CommandNode]:
    return sorted((c for c in node.children if not c.hidden), key=lambda c: c.name)


class MarkdownTreeGenerator:
    """
    Generate Markdown pages for a command tree.

    Example:
        generator = MarkdownTreeGenerator(renderer.render, link_handler)
        generator.generate_tree(root, Path("docs/commands"))
    """

    def __init__(
        self,
        prepender: Prepender,
        link_handler: LinkHandler,
        *,
        autogen_tag: bool = False,
        now: datetime | None = None,
        lg: Logger | None = None,
    ):
        """
        Initialize the generator.

        Args:
            prepender: Produces the front matter of each page
            link_handler: Maps page filenames to link targets
            autogen_tag: End each page with an "Auto generated" line
            now: Date for the autogen tag, the current time when None
            lg: Logger for progress messages
        """
        self.prepender = prepender
        self.link_handler = link_handler
        self.autogen_tag = autogen_tag
        self.now = now or datetime.now()
        self._lg = lg

    def _link(self, path: str) -> str:
        return self.link_handler(path.replace(" ", "_") + MARKDOWN_EXTENSION)

    def _write_header(self, output: StringIO, node: CommandNode) -> None:
        """Write command path, short description, synopsis and usage."""
        output.write(f"## {node.command_path}\n\n")
        output.write(f"{node.short}\n\n")
        if node.long:
            output.write("### Synopsis\n\n")
            output.write(f"{node.long}\n\n")
        if node.runnable:
            output.write(f"```\n{node.use_line}\n```\n\n")

    def _write_examples(self, output: StringIO, node: CommandNode) -> None:
        if node.example:
            output.write("### Examples\n\n")
            output.write(f"```\n{node.example}\n```\n\n")

    def _write_options(self, output: StringIO, node: CommandNode) -> None:
        """Write the options section and, if any, the inherited options section."""
        usages = node.non_inherited_usages()
        if usages:
            output.write(f"{OPTIONS_HEADING}\n\n```\n{usages}```\n\n")
        inherited = node.inherited_usages()
        if inherited:
            output.write(f"{INHERITED_OPTIONS_HEADING}\n\n```\n{inherited}```\n\n")

    def _write_see_also(self, output: StringIO, node: CommandNode) -> None:
        """Write links to the parent and the visible children."""
        parent = node.parent
        children = _visible_children(node)
        if parent is None and not children:
            return

        output.write(f"{SEE_ALSO_HEADING}\n\n")
        if parent is not None:
            pname = parent.command_path
            output.write(f"* [{pname}]({self._link(pname)})\t - {parent.short}\n")
        for child in children:
            cname = node.command_path + " " + child.name
            output.write(f"* [{cname}]({self._link(cname)})\t - {child.short}\n")
        output.write("\n")

    def generate(self, node: CommandNode) -> str:
        """Generate the Markdown body of a single command's page."""
        output = StringIO()
        self._write_header(output, node)
        self._write_examples(output, node)
        self._write_options(output, node)
        self._write_see_also(output, node)
        if self.autogen_tag:
            output.write(
                f"###### Auto generated by cmddocs on {self.now.day}-{self.now:%b-%Y}\n"
            )
        return output.getvalue()

    def generate_tree(self, node: CommandNode, out_dir: Path) -> list[Path]:
        """
        Write the pages of a command and its visible descendants.

        Hidden commands and everything below them are skipped.

        Args:
            node: Command at the top of the subtree
            out_dir: Directory the pages are written to

        Returns:
            list: Paths written, children before their parent
        """
        written: list[Path] = []
        for child in _visible_children(node):
            written.extend(self.generate_tree(child, out_dir))

        path = Path(out_dir) / command_filename(node)
        with open(path, "w") as f:
            f.write(self.prepender(str(path)))
            f.write(self.generate(node))
        if self._lg is not None:
            self._lg.trace("wrote page", extra={"file": path.name})
        written.append(path)
        return written
