"""Row layout: vertical order and per-task bar geometry.

Rows are ordered by actual start date for presentation only; every geometry
record keeps the task's ``index`` so host columns stay joined correctly.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from .logger import get_logger
from .models import Task
from .scale import TemporalScale
from .scene import Box
from .unified_config import LayoutConfig

MIN_BAR_WIDTH = 1.0
MAX_PROGRESS_PERCENT = 100.0


@dataclass(slots=True, frozen=True)
class MilestoneMarker:
    """Right-pointing triangle centred on ``(x, y)``."""

    x: float
    y: float
    size: float

    @property
    def path(self) -> str:
        """SVG path data for the triangle."""
        height = self.size * math.sqrt(3) / 2
        back = self.x - height / 3
        tip = self.x + 2 * height / 3
        half = self.size / 2
        return (
            f"M{tip:.2f},{self.y:.2f}"
            f"L{back:.2f},{self.y - half:.2f}"
            f"L{back:.2f},{self.y + half:.2f}Z"
        )


@dataclass(slots=True, frozen=True)
class RowGeometry:
    """Everything drawn for one task, in plot content coordinates."""

    task: Task
    row: int
    band: Box
    actual_bar: Box | None
    planned_bar: Box | None
    progress_overlay: Box | None
    milestone_marker: MilestoneMarker | None
    hit_region: Box | None

    @property
    def index(self) -> int:
        return self.task.index

    @property
    def label_baseline(self) -> float:
        """Text baseline for the row's labels."""
        return self.band.center_y + 5


def sort_tasks_by_start(tasks: Sequence[Task]) -> list[Task]:
    """Sort a copy of ``tasks`` by actual start ascending.

    Ties keep input order; tasks without a valid start date go last.
    """

    def get_start(task: Task) -> tuple[date, int]:
        return (task.actual_start or date.max, task.index)

    return sorted(tasks, key=get_start)


def _extent(
    scale: TemporalScale, start: date | None, end: date | None
) -> tuple[float, float] | None:
    """Horizontal extent ``(x, width)`` of a bar, at least 1px wide.

    With only one valid endpoint the bar collapses to a 1px sliver at that
    endpoint; with none there is no extent.
    """
    x_start = scale.optional(start)
    x_end = scale.optional(end)
    if x_start is None and x_end is None:
        return None
    if x_start is None or x_end is None:
        anchor = x_start if x_start is not None else x_end
        assert anchor is not None
        return anchor, MIN_BAR_WIDTH
    return x_start, max(MIN_BAR_WIDTH, x_end - x_start)


def _progress_width(bar_width: float, percent: float, policy: str) -> float:
    if policy == "none":
        return 0.0
    clamped = min(max(percent, 0.0), MAX_PROGRESS_PERCENT)
    return bar_width * clamped / MAX_PROGRESS_PERCENT


def layout_row(task: Task, row: int, scale: TemporalScale, config: LayoutConfig) -> RowGeometry:
    """Compute the geometry of one task placed in row ``row``.

    When both planned dates are valid the planned bar sits above the actual
    bar, the pair centred in the row with ``bar_gap`` between them. Otherwise
    the actual bar is centred alone. Row height never depends on either case.
    """
    band = Box(0.0, row * config.row_height, scale.width, config.row_height)
    bar_height = config.bar_height

    planned_extent = None
    if task.has_planned:
        planned_extent = _extent(scale, task.planned_start, task.planned_end)
    actual_extent = _extent(scale, task.actual_start, task.actual_end)

    planned_bar: Box | None = None
    if planned_extent is not None:
        stacked_height = 2 * bar_height + config.bar_gap
        planned_y = band.y + (config.row_height - stacked_height) / 2
        actual_y = planned_y + bar_height + config.bar_gap
        planned_bar = Box(planned_extent[0], planned_y, planned_extent[1], bar_height)
    else:
        actual_y = band.y + (config.row_height - bar_height) / 2

    actual_bar: Box | None = None
    if actual_extent is not None:
        actual_bar = Box(actual_extent[0], actual_y, actual_extent[1], bar_height)
    else:
        get_logger().degraded(task.index, f"{task.label!r} has no valid actual dates, bar omitted")

    progress_overlay: Box | None = None
    if actual_bar is not None and task.progress_percent is not None:
        width = _progress_width(actual_bar.width, task.progress_percent, config.progress_policy)
        progress_overlay = Box(actual_bar.x, actual_bar.y, width, bar_height)

    milestone_marker: MilestoneMarker | None = None
    if task.milestone is not None:
        milestone_marker = MilestoneMarker(
            x=scale(task.milestone), y=actual_y + bar_height / 2, size=config.milestone_size
        )

    hit_region: Box | None = None
    bars = [bar for bar in (actual_bar, planned_bar) if bar is not None]
    if bars:
        left = min(bar.x for bar in bars)
        right = max(bar.right for bar in bars)
        hit_region = Box(left, band.y, max(MIN_BAR_WIDTH, right - left), config.row_height)

    return RowGeometry(
        task=task,
        row=row,
        band=band,
        actual_bar=actual_bar,
        planned_bar=planned_bar,
        progress_overlay=progress_overlay,
        milestone_marker=milestone_marker,
        hit_region=hit_region,
    )


def layout_rows(
    tasks: Sequence[Task], scale: TemporalScale, config: LayoutConfig
) -> list[RowGeometry]:
    """Order all tasks into rows and compute their geometry.

    Args:
        tasks: Normalized tasks in input order
        scale: Scale shared by every row and the header
        config: Layout constants

    Returns:
        One RowGeometry per task, in row order
    """
    return [
        layout_row(task, row, scale, config)
        for row, task in enumerate(sort_tasks_by_start(tasks))
    ]
