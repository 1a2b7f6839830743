"""Global flags page written next to the command pages."""

from pathlib import Path

from ..command.protocol import CommandNode
from ..config import DocsConfig


def write_flags_page(root: CommandNode, output_root: Path, config: DocsConfig) -> Path:
    """
    Write the application's flags help, rendered for docs, to the flags page.

    Args:
        root: Root of the command tree
        output_root: Documentation output directory
        config: Documentation settings naming the flags page

    Returns:
        Path: The page written
    """
    path = Path(output_root) / config.flags_file
    path.write_text(root.flags_help(generating_docs=True))
    return path
