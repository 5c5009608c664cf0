"""
git-author-stats - Authorship Over Time

Tracks how many lines of a git repository each author is credited with,
sampled at monthly snapshots, and renders the result as a plain-text table.
"""

__version__ = "0.1.0"
__author__ = "Naman Agarwal"

from .identity import normalize_author
from .models import AttributionRun, AuthorCount, AuthorPerformance
from .periods import Period
from .pipeline import AuthorshipPipeline

__all__ = [
    "AuthorshipPipeline",  # Main entry point
    "AttributionRun",
    "AuthorCount",
    "AuthorPerformance",
    "Period",
    "normalize_author",
]
