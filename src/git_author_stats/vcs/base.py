"""Interface the attribution pipeline needs from a version-control system."""

import datetime as dt
from abc import ABC, abstractmethod
from collections import Counter
from typing import List, Optional


class VersionControl(ABC):
    """Abstract base class for repository backends.

    Implementations must be safe to call ``blame_authors`` from several
    threads at once.
    """

    @abstractmethod
    def resolve_snapshot(
        self, branch: Optional[str] = None, at_or_before: Optional[dt.datetime] = None
    ) -> Optional[str]:
        """Most recent commit on ``branch`` at or before ``at_or_before``.

        Returns None when no such commit exists. Raises
        ``RepositoryError`` for any other failure.
        """

    @abstractmethod
    def list_files(self, snapshot: str) -> List[str]:
        """Every file path in the tree of ``snapshot``."""

    @abstractmethod
    def blame_authors(self, snapshot: str, path: str) -> Counter:
        """Line count per raw author name for ``path`` at ``snapshot``.

        Raises ``AttributionError`` if the file cannot be blamed.
        """
