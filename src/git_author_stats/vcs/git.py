"""Git backend via subprocess."""

from __future__ import annotations

import datetime as dt
import os
import subprocess
from collections import Counter
from pathlib import Path
from typing import Optional, Sequence

from ..exceptions import (
    AttributionError,
    GitCommandError,
    GitUnavailableError,
    NotARepositoryError,
)
from ..logging_config import get_logger
from .base import VersionControl

logger = get_logger(__name__)

# stderr fragments meaning "no such commit" rather than a broken repository
_NOT_FOUND_MARKERS = (
    "unknown revision",
    "bad revision",
    "bad default revision",
    "does not have any commits",
    "ambiguous argument",
)


def find_repo_root(path: Path, timeout: int = 10) -> Path:
    """Top level of the work tree containing ``path``.

    Raises:
        NotARepositoryError: ``path`` is missing or outside a git work tree
        GitUnavailableError: git cannot be started
    """
    path = Path(path)
    if not path.is_dir():
        raise NotARepositoryError(path, "not a directory")
    try:
        result = subprocess.run(
            ["git", "-C", str(path), "rev-parse", "--show-toplevel"],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        raise GitUnavailableError()
    except subprocess.TimeoutExpired:
        raise NotARepositoryError(path, "git rev-parse timed out")

    top = result.stdout.strip()
    if result.returncode != 0 or not top:
        raise NotARepositoryError(path, result.stderr.strip())
    return Path(top)


def parse_line_porcelain(output: str) -> Counter:
    """Count ``author`` headers in ``git blame --line-porcelain`` output.

    Line porcelain repeats the full header for every source line, so each
    ``author <name>`` header stands for exactly one line. Content lines are
    tab-prefixed and never match.
    """
    authors: Counter = Counter()
    for line in output.splitlines():
        if line.startswith("author "):
            authors[line[7:]] += 1
    return authors


class GitRepository(VersionControl):
    """Run git plumbing commands against one work tree."""

    def __init__(self, root: Path, timeout_seconds: int = 120):
        self.root = Path(root)
        self.timeout_seconds = timeout_seconds

    @classmethod
    def discover(cls, path: Path, timeout_seconds: int = 120) -> "GitRepository":
        """Open the repository containing ``path``."""
        return cls(find_repo_root(path), timeout_seconds=timeout_seconds)

    def resolve_snapshot(
        self, branch: Optional[str] = None, at_or_before: Optional[dt.datetime] = None
    ) -> Optional[str]:
        args = ["log", "-n1", "--format=%H"]
        if at_or_before is not None:
            args.append(f"--before={at_or_before:%Y-%m-%d %H:%M:%S}")
        if branch:
            args.append(branch)
        args.append("--")

        result = self._run(args)
        if result.returncode != 0:
            stderr = _decode(result.stderr)
            if any(marker in stderr for marker in _NOT_FOUND_MARKERS):
                logger.debug("No commit for %s: %s", " ".join(args), stderr.strip())
                return None
            raise GitCommandError(["git", *args], result.returncode, stderr)

        sha = _decode(result.stdout).strip()
        return sha or None

    def list_files(self, snapshot: str) -> list[str]:
        args = ["ls-tree", "-r", "--name-only", "-z", snapshot]
        result = self._run(args)
        if result.returncode != 0:
            raise GitCommandError(["git", *args], result.returncode, _decode(result.stderr))
        # Paths must survive the round trip back into a blame argument
        return [p for p in os.fsdecode(result.stdout).split("\0") if p]

    def blame_authors(self, snapshot: str, path: str) -> Counter:
        args = ["blame", "--line-porcelain", snapshot, "--", path]
        try:
            result = self._run(args)
        except GitCommandError as e:
            raise AttributionError(path, snapshot, e.stderr)
        if result.returncode != 0:
            raise AttributionError(path, snapshot, _decode(result.stderr).strip())
        return parse_line_porcelain(_decode(result.stdout))

    def _run(self, args: Sequence[str]) -> subprocess.CompletedProcess:
        cmd = ["git", "-C", str(self.root), *args]
        try:
            return subprocess.run(cmd, capture_output=True, timeout=self.timeout_seconds)
        except FileNotFoundError:
            raise GitUnavailableError()
        except subprocess.TimeoutExpired:
            raise GitCommandError(cmd, -1, f"timed out after {self.timeout_seconds}s")


def _decode(raw: bytes) -> str:
    # Author names and file contents are not guaranteed to be valid UTF-8
    return raw.decode("utf-8", errors="replace")
