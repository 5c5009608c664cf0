"""Output formatters for git-author-stats."""

from .base import BaseFormatter
from .matrix import AuthorMatrix, build_matrix
from .table_formatter import TableFormatter

__all__ = [
    "BaseFormatter",
    "AuthorMatrix",
    "build_matrix",
    "TableFormatter",
]
