"""Progress reporting - wraps Rich or runs silently."""

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)


class ProgressReporter:
    """Rich progress bar over the periods of a run."""

    def __init__(self, console: Console):
        self.console = console

    def run(self, callback):
        """Call ``callback(on_period)`` while showing a progress bar.

        ``on_period(period, index, total)`` advances the bar.
        """
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        ) as progress:
            task = progress.add_task("Blaming snapshots", total=None)

            def on_period(period, index, total):
                progress.update(
                    task,
                    description=f"Blaming {period.label}",
                    completed=index,
                    total=total,
                )

            return callback(on_period)


class SilentReporter:
    """No-op reporter for tests and --quiet mode."""

    def run(self, callback):
        return callback(None)
