"""
Post-processing of the generated command pages.

Each page's inherited options section is replaced with a summary of the
command's shared flag groups (or a pointer to the global flags page), the
"see also" heading is normalized, and every heading below level one is
outdented so the page sits under the site's own page title.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from io import StringIO
from pathlib import Path

from ..command.flags import FlagGroups
from ..config import DocsConfig
from ..exceptions import ConsistencyError, MarkerNotFoundError
from ..log import Logger
from .collector import CommandDetails
from .frontmatter import GROUPS_ANNOTATION
from .markdown import INHERITED_OPTIONS_HEADING, SEE_ALSO_HEADING

OPTIONS_MARKER = INHERITED_OPTIONS_HEADING
SEE_ALSO_MARKER = SEE_ALSO_HEADING
SEE_ALSO_NORMALIZED = "### See Also"

_OUTDENT_TITLE = re.compile(r"^#(#+)", re.MULTILINE)


def splice_section(
    doc: str,
    start_marker: str,
    end_marker: str,
    replacement: str,
    end_heading: str | None = None,
) -> str:
    """
    Replace the text from start_marker up to end_marker.

    Args:
        doc: Document text
        start_marker: First text replaced
        end_marker: Text ending the replaced section
        replacement: Text put in place of the section
        end_heading: Text written in place of end_marker (end_marker itself
            when None); everything after it is kept verbatim

    Returns:
        str: The new document

    Raises:
        MarkerNotFoundError: If a marker is missing or they are out of order
    """
    start_cut = doc.find(start_marker)
    end_cut = doc.find(end_marker)
    if start_cut < 0 or end_cut < 0 or start_cut > end_cut:
        raise MarkerNotFoundError(start_cut, end_cut)
    if end_heading is None:
        end_heading = end_marker
    return doc[:start_cut] + replacement + end_heading + doc[end_cut + len(end_marker) :]


def normalize_see_also(doc: str) -> str:
    """Rewrite the first "### SEE ALSO" heading as "### See Also"."""
    return doc.replace(SEE_ALSO_MARKER, SEE_ALSO_NORMALIZED, 1)


def outdent_headings(doc: str) -> str:
    """Remove one "#" from every heading of level two or deeper."""
    return _OUTDENT_TITLE.sub(r"\1", doc)


def options_summary(
    groups_annotation: str, flag_groups: FlagGroups | None, flags_url: str = "/flags/"
) -> str:
    """
    Text replacing a page's inherited options section.

    Args:
        groups_annotation: Comma-separated group names from the command's
            "groups" annotation, "" for none
        flag_groups: The tree's global flag groups
        flags_url: URL of the global flags page

    Returns:
        str: Per-group option summaries, or a pointer to the flags page

    Raises:
        FlagGroupError: If the annotation names an unknown group
    """
    pointer = (
        f"See the [global flags page]({flags_url}) for global options not listed here.\n\n"
    )
    if not groups_annotation:
        return pointer

    out = StringIO()
    out.write("Options shared with other commands are described next.\n")
    out.write(pointer)
    groups = (flag_groups or FlagGroups()).include(groups_annotation)
    for group in groups:
        if group.has_flags():
            out.write(f"#### {group.name} Options\n\n")
            out.write(f"{group.help}\n\n")
            out.write("```\n")
            out.write(group.usages())
            out.write("```\n\n")
    return out.getvalue()


class PostProcessor:
    """
    Rewrite generated pages in place.

    Example:
        processor = PostProcessor(commands, "app.md", root.flag_groups, config, lg)
        processor.process_dir(Path("docs/commands"))
    """

    def __init__(
        self,
        commands: Mapping[str, CommandDetails],
        root_filename: str,
        flag_groups: FlagGroups | None,
        config: DocsConfig,
        lg: Logger,
    ):
        """
        Initialize the post-processor.

        Args:
            commands: Output filename -> details, from collect_details()
            root_filename: Page name of the root command, the only page allowed
                to lack an inherited options section
            flag_groups: The tree's global flag groups
            config: Documentation settings
            lg: Logger
        """
        self._commands = commands
        self._root_filename = root_filename
        self._flag_groups = flag_groups
        self._config = config
        self._lg = lg

    def process_document(self, name: str, doc: str) -> str:
        """
        Rewrite the text of one page.

        Args:
            name: Page filename
            doc: Page text

        Returns:
            str: The rewritten text

        Raises:
            ConsistencyError: If a page other than the root's lacks the markers
        """
        details = self._commands.get(name, CommandDetails())
        try:
            doc = splice_section(
                doc,
                OPTIONS_MARKER,
                SEE_ALSO_MARKER,
                options_summary(
                    details.annotations.get(GROUPS_ANNOTATION, ""),
                    self._flag_groups,
                    self._config.flags_url,
                ),
                SEE_ALSO_NORMALIZED,
            )
        except MarkerNotFoundError:
            if name != self._root_filename:
                raise
            doc = normalize_see_also(doc)
        return outdent_headings(doc)

    def process_file(self, path: Path) -> None:
        """
        Rewrite one generated page in place.

        Raises:
            ConsistencyError: If the page belongs to no known command
        """
        name = path.name
        if name not in self._commands:
            raise ConsistencyError(f"didn't find command for {name!r}", path=path)
        doc = path.read_text()
        path.write_text(self.process_document(name, doc))
        self._lg.trace("post-processed page", extra={"file": name})

    def process_dir(self, out_dir: Path) -> int:
        """
        Rewrite every file below out_dir, in sorted path order.

        The first error aborts the walk; files already rewritten stay so.

        Returns:
            int: Number of files processed
        """
        count = 0
        for path in sorted(Path(out_dir).rglob("*")):
            if path.is_dir():
                continue
            self.process_file(path)
            count += 1
        return count
