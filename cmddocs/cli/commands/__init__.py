"""Commands of the cmddocs console script."""

from .gendocs import GendocsCommand, load_app
from .help import HelpCommand, HelpFlagsCommand

__all__ = [
    "GendocsCommand",
    "HelpCommand",
    "HelpFlagsCommand",
    "load_app",
]
