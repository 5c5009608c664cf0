"""Base formatter interface for git-author-stats output rendering."""

from abc import ABC, abstractmethod

from .matrix import AuthorMatrix


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, matrix: AuthorMatrix) -> None:
        """Write the formatted matrix to stdout."""

    @abstractmethod
    def format(self, matrix: AuthorMatrix) -> str:
        """Return formatted string representation of the matrix."""
