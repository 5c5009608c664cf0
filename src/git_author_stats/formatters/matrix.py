"""Period x author matrix built from normalized performance data."""

from __future__ import annotations

from dataclasses import dataclass

from ..models import AuthorPerformance
from ..periods import Period


@dataclass(frozen=True)
class AuthorMatrix:
    """Rows are authors, columns are periods in chronological order."""

    periods: tuple[Period, ...]
    authors: tuple[str, ...]
    cells: dict[tuple[str, Period], int]

    def count(self, author: str, period: Period) -> int:
        """Lines credited to ``author`` in ``period``; 0 if none."""
        return self.cells.get((author, period), 0)

    def row(self, author: str) -> list[int]:
        return [self.count(author, p) for p in self.periods]

    def column_total(self, period: Period) -> int:
        return sum(self.count(a, period) for a in self.authors)

    def author_total(self, author: str) -> int:
        return sum(self.row(author))

    def percent(self, author: str, period: Period) -> float:
        total = self.column_total(period)
        if total == 0:
            return 0.0
        return 100.0 * self.count(author, period) / total


def build_matrix(performance: AuthorPerformance, sort_by_volume: bool = True) -> AuthorMatrix:
    """Arrange per-period author counts as a table.

    Authors are ordered by total lines across all periods, largest first with
    ties broken by name, or purely by name when ``sort_by_volume`` is False.
    """
    periods = tuple(sorted(performance))
    cells: dict[tuple[str, Period], int] = {}
    totals: dict[str, int] = {}
    for period in periods:
        for author, count in performance[period].items():
            cells[(author, period)] = cells.get((author, period), 0) + count
            totals[author] = totals.get(author, 0) + count

    if sort_by_volume:
        authors = sorted(totals, key=lambda a: (-totals[a], a))
    else:
        authors = sorted(totals)

    return AuthorMatrix(periods=periods, authors=tuple(authors), cells=cells)
