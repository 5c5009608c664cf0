"""Data models for authorship attribution."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict

from .exclusions import ExcludedFile
from .periods import Period

# Raw author identity -> attributed line count
AuthorCount = Counter
AuthorPerformance = Dict[Period, Counter]


@dataclass(frozen=True)
class FileError:
    """A file whose attribution failed; its lines are missing from the total."""

    path: str
    reason: str
    period: Period | None = None


@dataclass
class PeriodAttribution:
    """Result of attributing every eligible file at one snapshot."""

    counts: Counter = field(default_factory=Counter)
    attributed_files: int = 0
    errors: list[FileError] = field(default_factory=list)

    @property
    def total_lines(self) -> int:
        return sum(self.counts.values())


@dataclass
class AttributionRun:
    """Accumulated result across all periods of a run."""

    performance: AuthorPerformance = field(default_factory=dict)
    snapshots: dict[Period, str] = field(default_factory=dict)
    excluded: dict[Period, list[ExcludedFile]] = field(default_factory=dict)
    errors: list[FileError] = field(default_factory=list)
    skipped_periods: list[Period] = field(default_factory=list)

    @property
    def periods(self) -> list[Period]:
        return sorted(self.performance)

    def excluded_files(self) -> dict[str, ExcludedFile]:
        """Distinct excluded paths across all periods, keyed by path."""
        seen: dict[str, ExcludedFile] = {}
        for period in sorted(self.excluded):
            for item in self.excluded[period]:
                seen.setdefault(item.path, item)
        return dict(sorted(seen.items()))
