"""Repository errors: missing git, paths outside a work tree, failed git calls.

All of these are fatal for a run.
"""

from pathlib import Path
from typing import Sequence

from .base import AuthorStatsError


class RepositoryError(AuthorStatsError):
    """Base class for errors talking to the repository."""

    pass


class NotARepositoryError(RepositoryError):
    """Raised when the target path is not inside a git work tree."""

    def __init__(self, path: Path, reason: str = ""):
        details = {"path": str(path)}
        if reason:
            details["reason"] = reason
        super().__init__("Not a git repository", details=details)
        self.path = path
        self.reason = reason


class GitUnavailableError(RepositoryError):
    """Raised when the git executable cannot be started."""

    def __init__(self, executable: str = "git"):
        super().__init__(
            "git executable not found", details={"executable": executable}
        )
        self.executable = executable


class GitCommandError(RepositoryError):
    """Raised when a git command exits unsuccessfully."""

    def __init__(self, command: Sequence[str], returncode: int, stderr: str = ""):
        cmd = " ".join(command)
        details = {"returncode": str(returncode)}
        if stderr:
            details["stderr"] = stderr.strip()
        super().__init__(f"git command failed: {cmd}", details=details)
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
