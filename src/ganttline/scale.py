"""Linear mapping from calendar dates to plot x coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from .models import TemporalDomain


@dataclass(slots=True, frozen=True)
class TemporalScale:
    """Map dates to pixels linearly over a fixed output range ``[0, width]``.

    ``width`` is the full timeline width, not the viewport width. Dates outside
    the domain map outside the range; no clamping is applied.
    """

    domain: TemporalDomain
    width: float

    @property
    def span_days(self) -> int:
        """Number of days between the domain endpoints (never zero)."""
        return max(1, (self.domain.end - self.domain.start).days)

    def __call__(self, value: date) -> float:
        """Return the x coordinate of ``value``."""
        offset = (value - self.domain.start).days
        return offset * self.width / self.span_days

    def optional(self, value: date | None) -> float | None:
        """Scale ``value`` or pass None through."""
        if value is None:
            return None
        return self(value)
