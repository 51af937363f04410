"""Data models for ganttline."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Any

from dateutil import parser as date_parser

MILLISECONDS_PER_SECOND = 1000


def parse_date(value: Any) -> date | None:
    """Parse a host cell value into a date.

    Accepts date and datetime objects, ISO strings, other human-readable date
    strings, and numbers (interpreted as epoch milliseconds, the way the host
    serializes timestamps).

    Args:
        value: Raw cell value from a host column

    Returns:
        The parsed date, or None when the value is missing or unparseable
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if isinstance(value, int | float):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value / MILLISECONDS_PER_SECOND, tz=UTC).date()
        except (OverflowError, OSError, ValueError):
            return None

    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    # ISO format first (YYYY-MM-DD, with or without a time part)
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError):
        return None


def parse_progress(value: Any) -> float | None:
    """Parse a progress cell into a finite number, or None."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        text = value.strip().rstrip("%").strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    elif isinstance(value, int | float):
        try:
            number = float(value)
        except OverflowError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return number


@dataclass(slots=True, frozen=True)
class Column:
    """One column of the host's tabular data view.

    ``values`` may be shorter than the number of tasks; missing cells read as
    absent. ``role`` optionally names the column's purpose explicitly.
    """

    display_name: str
    values: Sequence[Any] = ()
    role: str | None = None

    def __len__(self) -> int:
        return len(self.values)

    def get(self, index: int) -> Any:
        """Return the cell at ``index``, or None past the end of the column."""
        if 0 <= index < len(self.values):
            return self.values[index]
        return None


@dataclass(slots=True)
class DataView:
    """Categorical data view supplied by the host on every update.

    ``categories`` hold label and date columns, ``values`` hold numeric
    measures (progress).
    """

    categories: list[Column] = field(default_factory=list[Column])
    values: list[Column] = field(default_factory=list[Column])


@dataclass(slots=True, frozen=True)
class ViewportSize:
    """Host viewport dimensions in pixels."""

    width: float
    height: float


@dataclass(slots=True, frozen=True)
class Task:
    """One normalized input row.

    Dates that were missing or unparseable are None. ``index`` is the row's
    position in the host data and is the only key used to join columns.
    """

    index: int
    label: str
    category: str = ""
    actual_start: date | None = None
    actual_end: date | None = None
    planned_start: date | None = None
    planned_end: date | None = None
    progress_percent: float | None = None
    milestone: date | None = None

    @property
    def has_planned(self) -> bool:
        """True only when both planned dates are valid."""
        return self.planned_start is not None and self.planned_end is not None

    def valid_dates(self) -> Iterator[date]:
        """Yield every valid date carried by this task."""
        for value in (
            self.actual_start,
            self.actual_end,
            self.planned_start,
            self.planned_end,
            self.milestone,
        ):
            if value is not None:
                yield value


@dataclass(slots=True, frozen=True)
class TemporalDomain:
    """Year-aligned date range the whole chart is scaled against."""

    start: date
    end: date

    @classmethod
    def from_years(cls, first_year: int, last_year: int) -> TemporalDomain:
        """Build the domain [Jan 1 of first_year, Dec 31 of last_year]."""
        return cls(start=date(first_year, 1, 1), end=date(last_year, 12, 31))

    @classmethod
    def from_tasks(cls, tasks: Iterable[Task], today: date) -> TemporalDomain:
        """Compute the domain from every valid date across all tasks.

        Falls back to the year containing ``today`` when no task carries a
        valid date.
        """
        years = [d.year for task in tasks for d in task.valid_dates()]
        if not years:
            return cls.from_years(today.year, today.year)
        return cls.from_years(min(years), max(years))

    @property
    def years(self) -> range:
        """Calendar years spanned by the domain."""
        return range(self.start.year, self.end.year + 1)
