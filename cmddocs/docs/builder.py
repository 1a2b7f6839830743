"""
Documentation builder.

Runs the generation phases in order: output directory and flags page,
metadata collection, page generation and post-processing. Each phase
finishes before the next starts and the first error aborts the run,
leaving the files already written in place.
"""

from __future__ import annotations

import functools
from datetime import datetime, timezone
from pathlib import Path

from ..command.protocol import CommandNode
from ..config import DocsConfig
from ..log import Logger, LoggerFactory
from .collector import CommandDetails, collect_details, command_filename
from .flags_page import write_flags_page
from .frontmatter import FrontMatterRenderer, link_handler
from .markdown import MarkdownTreeGenerator
from .postprocess import PostProcessor


class DocBuilder:
    """
    Build the Markdown documentation of a command tree.

    Example:
        builder = DocBuilder(root, load_config("cmddocs.yaml"), lg)
        builder.build(Path("docs/content"))
    """

    def __init__(
        self,
        root: CommandNode,
        config: DocsConfig,
        lg: Logger,
        now: datetime | None = None,
    ):
        """
        Initialize the builder.

        Args:
            root: Root of the command tree to document
            config: Documentation settings
            lg: Logger
            now: Generation time, the current time when None
        """
        self.root = root
        self.config = config
        self._lg = LoggerFactory.derive(lg, "docs")
        self.now = now or datetime.now(timezone.utc).astimezone()
        self.commands: dict[str, CommandDetails] = {}

    def build(self, output_root: Path) -> None:
        """
        Generate the documentation below output_root.

        Creates <output_root>/<commands_dir>/ with one page per command and
        <output_root>/<flags_file>.

        Raises:
            OSError: On filesystem errors
            CmdDocsError: On inconsistencies found while post-processing
        """
        output_root = Path(output_root)
        out = output_root / self.config.commands_dir
        out.mkdir(mode=0o777, parents=True, exist_ok=True)

        flags_page = write_flags_page(self.root, output_root, self.config)
        self._lg.debug("wrote flags page", extra={"file": flags_page})

        self.commands = collect_details(self.root)
        self._lg.debug("collected commands", extra={"commands": len(self.commands)})

        renderer = FrontMatterRenderer(
            self.commands,
            self.config,
            self._lg,
            product_token=self.root.name,
            now=self.now,
        )
        generator = MarkdownTreeGenerator(
            renderer.render,
            functools.partial(link_handler, url_prefix=self.config.url_prefix),
            autogen_tag=self.config.autogen_tag,
            now=self.now,
            lg=self._lg,
        )
        pages = generator.generate_tree(self.root, out)
        self._lg.debug("generated pages", extra={"pages": len(pages), "dir": out})

        processor = PostProcessor(
            self.commands,
            command_filename(self.root),
            self.root.flag_groups,
            self.config,
            self._lg,
        )
        count = processor.process_dir(out)
        self._lg.info("generated docs", extra={"pages": count, "dir": output_root})
