"""Exception hierarchy for git-author-stats."""

from .attribution import AttributionError
from .base import AuthorStatsError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidDateError,
)
from .repository import (
    GitCommandError,
    GitUnavailableError,
    NotARepositoryError,
    RepositoryError,
)

__all__ = [
    "AuthorStatsError",
    "AttributionError",
    "RepositoryError",
    "NotARepositoryError",
    "GitUnavailableError",
    "GitCommandError",
    "ConfigurationError",
    "InvalidConfigError",
    "InvalidDateError",
]
