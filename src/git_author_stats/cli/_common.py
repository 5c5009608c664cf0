"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import AuthorStatsConfig, load_config

console = Console()
err_console = Console(stderr=True)


def resolve_config(
    config: Optional[Path] = None,
    start_year: Optional[int] = None,
    workers: Optional[int] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> AuthorStatsConfig:
    """Build configuration from CLI options."""
    overrides = {}
    if start_year is not None:
        overrides["start_year"] = start_year
    if workers is not None:
        overrides["worker_limit"] = workers
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    return load_config(config_file=config, **overrides)


def scope_within(root: Path, target: Path) -> str:
    """Path of ``target`` relative to the repository ``root`` ('' for the root)."""
    try:
        rel = target.resolve().relative_to(root.resolve())
    except ValueError:
        return ""
    scope = rel.as_posix()
    return "" if scope == "." else scope
