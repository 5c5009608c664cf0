"""Drive attribution across all periods of a run.

For each period, in chronological order:

    resolve snapshot -> list files -> scope filter -> classify
        -> aggregate (parallel blame) -> store counts

Periods run one after another so only one worker pool exists at a time.
A period without a snapshot, or without eligible files, leaves no entry in
the result. Repository failures propagate and end the run.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import replace
from typing import Callable, Optional

from .attribution import aggregate_period
from .config import AuthorStatsConfig
from .exclusions import ExcludedFile, partition_files
from .logging_config import get_logger
from .models import AttributionRun, PeriodAttribution
from .periods import Period, generate_periods, snapshot_cutoff
from .vcs import VersionControl

logger = get_logger(__name__)

PeriodCallback = Callable[[Period, int, int], None]


class AuthorshipPipeline:
    """Compute per-period, per-author line counts for one repository.

    Args:
        vcs: Repository backend
        config: Run configuration (start year, worker limit, exclusion policy)
        branch: Branch to sample; None means the checked-out HEAD
        until: Upper date bound; no snapshot after the end of this day is used
        scope: Repo-relative directory; only files below it are attributed
        today: Reference date for the last period (defaults to today)
    """

    def __init__(
        self,
        vcs: VersionControl,
        config: Optional[AuthorStatsConfig] = None,
        branch: Optional[str] = None,
        until: Optional[dt.date] = None,
        scope: Optional[str] = None,
        today: Optional[dt.date] = None,
    ):
        self.vcs = vcs
        self.config = config or AuthorStatsConfig()
        self.branch = branch
        self.until = until
        self.scope = _normalize_scope(scope)
        self.today = today

    def periods(self) -> list[Period]:
        return generate_periods(self.config.start_year, today=self.today)

    def run(self, on_period: Optional[PeriodCallback] = None) -> AttributionRun:
        """Process every period and return the accumulated result.

        ``on_period(period, index, total)`` is called after each period.
        """
        run = AttributionRun()
        periods = self.periods()
        policy = self.config.exclusion_policy

        last_snapshot: Optional[str] = None
        last_result: Optional[PeriodAttribution] = None
        last_excluded: list[ExcludedFile] = []

        for index, period in enumerate(periods, start=1):
            cutoff = snapshot_cutoff(period, self.until)
            snapshot = self.vcs.resolve_snapshot(self.branch, cutoff)

            if snapshot is None:
                logger.debug("%s: no commit at or before %s", period, cutoff)
                run.skipped_periods.append(period)
            elif snapshot == last_snapshot and last_result is not None:
                # Same tree as the previous period; blame output cannot differ
                logger.debug("%s: unchanged snapshot %s", period, snapshot[:12])
                self._store(run, period, snapshot, last_result, last_excluded)
            else:
                files = self._in_scope(self.vcs.list_files(snapshot))
                eligible, excluded = partition_files(files, policy)
                logger.info(
                    "%s: %s, %d eligible, %d excluded",
                    period,
                    snapshot[:12],
                    len(eligible),
                    len(excluded),
                )
                result = aggregate_period(
                    self.vcs,
                    snapshot,
                    eligible,
                    worker_limit=self.config.worker_limit,
                    period=period,
                )
                last_snapshot, last_result, last_excluded = snapshot, result, excluded
                self._store(run, period, snapshot, result, excluded, eligible=len(eligible))

            if on_period is not None:
                on_period(period, index, len(periods))

        return run

    def _store(
        self,
        run: AttributionRun,
        period: Period,
        snapshot: str,
        result: PeriodAttribution,
        excluded: list[ExcludedFile],
        eligible: Optional[int] = None,
    ) -> None:
        if eligible is None:
            eligible = result.attributed_files + len(result.errors)
        run.excluded[period] = excluded
        if eligible == 0:
            run.skipped_periods.append(period)
            return
        run.snapshots[period] = snapshot
        run.performance[period] = result.counts.copy()
        run.errors.extend(replace(error, period=period) for error in result.errors)

    def _in_scope(self, files: list[str]) -> list[str]:
        if not self.scope:
            return files
        prefix = self.scope + "/"
        return [f for f in files if f.startswith(prefix)]


def _normalize_scope(scope: Optional[str]) -> str:
    if not scope:
        return ""
    scope = scope.replace("\\", "/").strip("/")
    return "" if scope == "." else scope
