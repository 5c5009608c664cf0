"""Version-control access: snapshot resolution, file listing and blame."""

from .base import VersionControl
from .git import GitRepository, find_repo_root, parse_line_porcelain

__all__ = [
    "VersionControl",
    "GitRepository",
    "find_repo_root",
    "parse_line_porcelain",
]
