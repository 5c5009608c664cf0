"""CLI entry point - registers the attribution command."""

import typer

app = typer.Typer(
    name="git-author-stats",
    help="Track how much code is being authored by each developer over time",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import the command to register it
from .main import main as _main  # noqa: F401, E402
