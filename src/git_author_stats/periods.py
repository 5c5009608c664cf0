"""Monthly sampling periods."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional

from .exceptions import InvalidDateError

DEFAULT_START_YEAR = 2016


@dataclass(frozen=True, order=True)
class Period:
    """A calendar month. Ordering is chronological."""

    year: int
    month: int

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def start(self) -> dt.datetime:
        return dt.datetime(self.year, self.month, 1)

    @property
    def cutoff(self) -> dt.datetime:
        """Last second of the month; the snapshot for the period is taken here."""
        return self.next().start - dt.timedelta(seconds=1)

    def next(self) -> "Period":
        if self.month == 12:
            return Period(self.year + 1, 1)
        return Period(self.year, self.month + 1)

    def __str__(self) -> str:
        return self.label


def generate_periods(
    start_year: int = DEFAULT_START_YEAR,
    today: Optional[dt.date] = None,
) -> list[Period]:
    """Months from January of ``start_year`` through the current month.

    Returns an empty list when ``start_year`` is in the future.
    """
    if today is None:
        today = dt.date.today()
    last = Period(today.year, today.month)

    periods: list[Period] = []
    cur = Period(start_year, 1)
    while cur <= last:
        periods.append(cur)
        cur = cur.next()
    return periods


def snapshot_cutoff(period: Period, until: Optional[dt.date] = None) -> dt.datetime:
    """Point in time a period's snapshot is resolved at.

    The period's own cutoff, pulled back to the end of ``until`` when that is
    earlier.
    """
    if until is None:
        return period.cutoff
    bound = dt.datetime.combine(until, dt.time(23, 59, 59))
    return min(period.cutoff, bound)


def parse_date(value: str) -> dt.date:
    """Parse a ``YYYY-MM-DD`` date bound."""
    try:
        # strptime alone accepts single-digit months and days
        if len(value) != 10:
            raise ValueError(value)
        return dt.datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise InvalidDateError(value)
