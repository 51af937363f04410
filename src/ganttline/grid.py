"""Month/year grid and today marker anchored to the temporal scale."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from .scale import TemporalScale

MONTHS_PER_YEAR = 12


@dataclass(slots=True, frozen=True)
class MonthTick:
    """Gridline and abbreviation at the first day of a month."""

    month_start: date
    x: float

    @property
    def label(self) -> str:
        return self.month_start.strftime("%b")


@dataclass(slots=True, frozen=True)
class YearBand:
    """Header band covering ``[Jan 1, next Jan 1)`` of one year."""

    year: int
    x: float
    width: float

    @property
    def label(self) -> str:
        return str(self.year)

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2


@dataclass(slots=True, frozen=True)
class GridGeometry:
    """All grid elements for one update, independent of task count."""

    months: list[MonthTick] = field(default_factory=list[MonthTick])
    years: list[YearBand] = field(default_factory=list[YearBand])
    today: date | None = None
    today_x: float = 0.0

    @property
    def year_dividers(self) -> list[float]:
        """x of each year boundary: the start of every band plus the end of the last."""
        if not self.years:
            return []
        last = self.years[-1]
        return [band.x for band in self.years] + [last.x + last.width]


def build_grid(scale: TemporalScale, today: date) -> GridGeometry:
    """Build month ticks, year bands and the today marker for ``scale``'s domain.

    The today marker is always emitted, even when ``today`` falls outside the
    domain; it then simply lies beyond the scrollable extent.
    """
    months: list[MonthTick] = []
    years: list[YearBand] = []

    for year in scale.domain.years:
        for month in range(1, MONTHS_PER_YEAR + 1):
            month_start = date(year, month, 1)
            months.append(MonthTick(month_start=month_start, x=scale(month_start)))

        start_x = scale(date(year, 1, 1))
        if year < date.max.year:
            end_x = scale(date(year + 1, 1, 1))
        else:
            end_x = scale(date.max) + scale.width / scale.span_days
        years.append(YearBand(year=year, x=start_x, width=end_x - start_x))

    return GridGeometry(months=months, years=years, today=today, today_x=scale(today))
