"""
Markdown documentation generation for command trees.

Example:
    from cmddocs.docs import DocBuilder

    DocBuilder(root, DocsConfig(), lg).build(Path("docs"))
"""

from .builder import DocBuilder
from .collector import CommandDetails, collect_details, command_filename
from .frontmatter import FrontMatter, FrontMatterRenderer, link_handler
from .markdown import MarkdownTreeGenerator
from .postprocess import (
    PostProcessor,
    options_summary,
    outdent_headings,
    splice_section,
)

__all__ = [
    "CommandDetails",
    "DocBuilder",
    "FrontMatter",
    "FrontMatterRenderer",
    "MarkdownTreeGenerator",
    "PostProcessor",
    "collect_details",
    "command_filename",
    "link_handler",
    "options_summary",
    "outdent_headings",
    "splice_section",
]
