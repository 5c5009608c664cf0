"""Per-file attribution failures.

These never abort a period: the aggregator records them and moves on.
"""

from .base import AuthorStatsError


class AttributionError(AuthorStatsError):
    """Raised when line authorship for a single file cannot be computed."""

    def __init__(self, path: str, snapshot: str, reason: str):
        super().__init__(
            f"Cannot attribute lines of {path}",
            details={"snapshot": snapshot[:12], "reason": reason},
        )
        self.path = path
        self.snapshot = snapshot
        self.reason = reason
