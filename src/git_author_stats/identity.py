"""Canonical display names for raw author identities.

``jane-doe``, ``Jane_Doe`` and ``JANE.DOE`` all become ``Jane Doe``. The
mapping depends only on the input string, so counts can be merged on the
canonical form no matter which period or file produced them.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Mapping

from .models import AuthorPerformance

_SEPARATOR_RUN = re.compile(r"[-_.]+")
_WORD_START = re.compile(r"\b[a-z]")


def normalize_author(raw: str) -> str:
    """Return the display form of a raw author name.

    Runs of ``-``, ``_`` and ``.`` become a single space, the result is
    lower-cased, and the first letter of every word is capitalized.
    """
    name = _SEPARATOR_RUN.sub(" ", raw).lower()
    return _WORD_START.sub(lambda m: m.group(0).upper(), name)


def merge_counts(counts: Mapping[str, int]) -> Counter:
    """Re-key a raw author count by display name, summing collisions."""
    merged: Counter = Counter()
    for author, count in counts.items():
        merged[normalize_author(author)] += count
    return merged


def normalize_performance(performance: AuthorPerformance) -> AuthorPerformance:
    """Apply ``merge_counts`` to every period."""
    return {period: merge_counts(counts) for period, counts in performance.items()}
