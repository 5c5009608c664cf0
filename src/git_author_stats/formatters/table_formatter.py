"""Plain-text table formatter.

    author    , 2016-01, 2016-02,
    Jane Doe  ,       8,       8,
    John Smith,       0,       3,
"""

from __future__ import annotations

from .base import BaseFormatter
from .matrix import AuthorMatrix

HEADER_LABEL = "author"


class TableFormatter(BaseFormatter):
    """Render the matrix as comma-separated, column-aligned text."""

    def __init__(self, as_percent: bool = False):
        self.as_percent = as_percent

    def render(self, matrix: AuthorMatrix) -> None:
        print(self.format(matrix), end="")

    def format(self, matrix: AuthorMatrix) -> str:
        rows = [
            (author, [self._cell(matrix, author, p) for p in matrix.periods])
            for author in matrix.authors
        ]
        header = [p.label for p in matrix.periods]

        label_width = max([len(HEADER_LABEL)] + [len(author) for author, _ in rows])
        col_widths = [len(label) for label in header]
        for _, cells in rows:
            col_widths = [max(w, len(c)) for w, c in zip(col_widths, cells)]

        lines = [self._line(HEADER_LABEL, header, label_width, col_widths)]
        for author, cells in rows:
            lines.append(self._line(author, cells, label_width, col_widths))
        return "\n".join(lines) + "\n"

    def _cell(self, matrix: AuthorMatrix, author: str, period) -> str:
        if self.as_percent:
            return f"{matrix.percent(author, period):.1f}%"
        return str(matrix.count(author, period))

    @staticmethod
    def _line(label: str, cells: list[str], label_width: int, col_widths: list[int]) -> str:
        parts = [f"{label:<{label_width}}"]
        parts.extend(f"{cell:>{width}}" for cell, width in zip(cells, col_widths))
        return ", ".join(parts) + ","
