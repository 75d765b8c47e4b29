"""CLI entry point for semcommit.

This module assembles the typer application from the main command and its
subcommands, and provides the console-script entry point.
"""

import re
import sys
from typing import Optional

import typer

from semcommit.cli.config import config_app
from semcommit.cli.explain import explain_command
from semcommit.cli.main import main_command

# Main application
app = typer.Typer(
    name="semcommit",
    help="semcommit: split uncommitted changes into semantic conventional commits",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(config_app, name="config")

# Add individual commands
app.command("explain")(explain_command)

# Set the main callback for default behavior
app.callback(invoke_without_command=True)(main_command)

_COUNT_RE = re.compile(r"^\d+$")


def normalize_reverse_args(argv: list[str]) -> list[str]:
    """Give a bare --reverse its implicit count of 1.

    `--reverse 3` and `--reverse=3` pass through unchanged.
    """
    result = []
    for i, arg in enumerate(argv):
        if arg == "--reverse":
            following = argv[i + 1] if i + 1 < len(argv) else ""
            if not _COUNT_RE.match(following):
                arg = "--reverse=1"
        result.append(arg)
    return result


def main(argv: Optional[list[str]] = None) -> None:
    """Console-script entry point."""
    args = sys.argv[1:] if argv is None else argv
    app(args=normalize_reverse_args(args), prog_name="semcommit")


__all__ = [
    "app",
    "config_app",
    "explain_command",
    "main",
    "main_command",
    "normalize_reverse_args",
]
