"""Main attribution command."""

from pathlib import Path
from typing import Optional

import typer

from ..exceptions import AuthorStatsError, InvalidDateError
from ..formatters import TableFormatter, build_matrix
from ..identity import normalize_performance
from ..logging_config import setup_logging
from ..models import AttributionRun
from ..periods import parse_date
from ..pipeline import AuthorshipPipeline
from ..progress import ProgressReporter, SilentReporter
from ..vcs import GitRepository
from . import app
from ._common import console, err_console, resolve_config, scope_within


def _version_callback(value: bool) -> None:
    if value:
        from .. import __version__

        console.print(f"[bold cyan]git-author-stats[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


def _date_callback(value: Optional[str]):
    if value is None:
        return None
    try:
        return parse_date(value)
    except InvalidDateError as e:
        raise typer.BadParameter(str(e))


@app.command()
def main(
    path: Path = typer.Argument(
        Path("."),
        help="Path of folder within the git repo to analyze",
    ),
    alphabetical: bool = typer.Option(
        False,
        "--alphabetical",
        "-a",
        help="Sort alphabetically by author name, instead of by number of lines",
    ),
    percent: bool = typer.Option(
        False,
        "--percent",
        "-p",
        help="Display counts as percentages of each month's total",
    ),
    show_excluded: bool = typer.Option(
        False,
        "--show-excluded",
        help="List files left out of attribution and why",
    ),
    branch: Optional[str] = typer.Option(
        None,
        "--branch",
        "-b",
        help="Branch to analyze (default: checked-out HEAD)",
    ),
    date: Optional[str] = typer.Option(
        None,
        "--date",
        "-d",
        help="Only look at commits on or before this date: YYYY-MM-DD",
        callback=_date_callback,
    ),
    start_year: Optional[int] = typer.Option(
        None,
        "--start-year",
        help="First year to sample (default: 2016)",
        min=1970,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Parallel blame workers per month (default: 16)",
        min=1,
        max=64,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only show errors"),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """
    Count lines of code credited to each author, month by month.

    Every month from the start year through today is sampled at its last
    commit; each file in that snapshot is blamed and the lines are summed
    per author.

    [bold cyan]Examples:[/bold cyan]

      git-author-stats

      git-author-stats --percent --alphabetical

      git-author-stats path/to/repo --branch main --date 2023-06-30
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(
            config=config,
            start_year=start_year,
            workers=workers,
            verbose=verbose,
            quiet=quiet,
        )
        verbose = settings.verbosity == "verbose"
        quiet = settings.verbosity == "quiet"
        # Config files and the environment may set a different verbosity
        logger = setup_logging(verbose=verbose, quiet=quiet)

        repo = GitRepository.discover(path, timeout_seconds=settings.git_timeout_seconds)
        pipeline = AuthorshipPipeline(
            repo,
            settings,
            branch=branch,
            until=date,
            scope=scope_within(repo.root, path),
        )

        if quiet or not err_console.is_terminal:
            reporter = SilentReporter()
        else:
            reporter = ProgressReporter(err_console)
        run = reporter.run(lambda on_period: pipeline.run(on_period=on_period))

        if show_excluded:
            _output_excluded(run)

        matrix = build_matrix(
            normalize_performance(run.performance), sort_by_volume=not alphabetical
        )
        TableFormatter(as_percent=percent).render(matrix)

        if run.errors:
            _output_errors(run)

    except typer.Exit:
        raise

    except AuthorStatsError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        err_console.print(f"[red]Error:[/red] {e}", markup=True, highlight=False)
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        err_console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)

    except Exception as e:
        logger.exception("Unexpected error during analysis")
        err_console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            err_console.print_exception()
        raise typer.Exit(1)


def _output_excluded(run: AttributionRun) -> None:
    """Excluded files across all sampled months, with the reason."""
    from rich.table import Table

    excluded = run.excluded_files()
    if not excluded:
        err_console.print("[dim]No files excluded.[/dim]")
        return

    table = Table(title="Excluded Files", show_lines=False, pad_edge=True)
    table.add_column("Reason", style="yellow")
    table.add_column("Path", style="cyan")
    for item in excluded.values():
        table.add_row(str(item.reason), item.path)

    err_console.print(table)
    err_console.print()


def _output_errors(run: AttributionRun) -> None:
    paths = sorted({error.path for error in run.errors})
    err_console.print(
        f"[yellow]Warning:[/yellow] {len(run.errors)} blame(s) failed across "
        f"{len(paths)} file(s); their lines are missing from the table."
    )
    for p in paths[:10]:
        err_console.print(f"  [dim]{p}[/dim]", highlight=False)
    if len(paths) > 10:
        err_console.print(f"  [dim]... and {len(paths) - 10} more[/dim]")
