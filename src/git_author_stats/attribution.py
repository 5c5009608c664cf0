"""Per-file line attribution and the per-period fan-out over files."""

from __future__ import annotations

from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Optional, Sequence

from .exceptions import AttributionError
from .logging_config import get_logger
from .models import FileError, PeriodAttribution
from .periods import Period
from .vcs import VersionControl

logger = get_logger(__name__)

DEFAULT_WORKER_LIMIT = 16


def attribute_file(vcs: VersionControl, snapshot: str, path: str) -> Counter:
    """Count the lines of ``path`` at ``snapshot`` credited to each author.

    Touches nothing but its own arguments, so any number of calls may run
    concurrently.
    """
    counts = vcs.blame_authors(snapshot, path)
    if any(count < 0 for count in counts.values()):
        raise AttributionError(path, snapshot, "negative line count")
    return Counter(counts)


def aggregate_period(
    vcs: VersionControl,
    snapshot: str,
    files: Sequence[str],
    worker_limit: int = DEFAULT_WORKER_LIMIT,
    period: Optional[Period] = None,
) -> PeriodAttribution:
    """Attribute every file in ``files`` and sum the counts per author.

    Files are blamed on a pool of ``min(len(files), worker_limit)`` threads.
    Results are merged as they complete, on this thread only, and the call
    returns after every file has either reported counts or failed. A failed
    file is recorded in ``errors`` and contributes nothing to ``counts``.
    """
    result = PeriodAttribution()
    if not files:
        return result

    max_workers = max(1, min(len(files), worker_limit))
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {executor.submit(attribute_file, vcs, snapshot, fp): fp for fp in files}
        for future in as_completed(futures):
            fp = futures[future]
            try:
                counts = future.result()
            except (AttributionError, OSError) as e:
                reason = e.reason if isinstance(e, AttributionError) else str(e)
                logger.warning("Skipping %s: %s", fp, reason)
                result.errors.append(FileError(path=fp, reason=reason, period=period))
                continue
            result.counts.update(counts)
            result.attributed_files += 1

    logger.debug(
        "Attributed %d/%d files at %s (%d lines)",
        result.attributed_files,
        len(files),
        snapshot[:12],
        result.total_lines,
    )
    return result
