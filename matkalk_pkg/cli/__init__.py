"""Console front end: argparse entry point, interactive session and self test."""

from ..utils.formatting import print_result_pretty
from .app import _health_check
from .app import main_entry
from .app import print_help_text
from .app import repl_loop
from .context import ReplContext
from .repl_core import REPL

__all__ = [
    "main_entry",
    "repl_loop",
    "print_help_text",
    "_health_check",
    "print_result_pretty",
    "REPL",
    "ReplContext",
]
