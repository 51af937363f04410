"""Pane composition and one-directional scroll synchronization.

The chart is four panes::

    +---------------+-------------------------------+
    | FIXED_HEADER  | SCROLL_HEADER   (x follows)   |
    +---------------+-------------------------------+
    | FIXED_COLUMN  | PLOT            (driver)      |
    | (y follows)   |                               |
    +---------------+-------------------------------+

Only PLOT is scrolled by the user. Its offsets are pushed to the followers
along explicit edges; followers never write back.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .grid import GridGeometry
from .layout import RowGeometry
from .logger import get_logger
from .models import ViewportSize
from .normalizer import ColumnSchema
from .scene import (
    Box,
    HitRegion,
    Line,
    Path,
    Primitive,
    Rect,
    Region,
    RegionName,
    SceneGraph,
    Text,
)
from .unified_config import LayoutConfig

# Palette
HEADER_COLOR = "#03045e"
HEADER_TEXT_COLOR = "white"
AXIS_BACKGROUND = "#f9f9f9"
PLANNED_COLOR = "#094780"
ACTUAL_COLOR = "steelblue"
PROGRESS_COLOR = "limegreen"
MILESTONE_COLOR = "gold"
SEPARATOR_COLOR = "#e0e0e0"
YEAR_DIVIDER_COLOR = "blue"
GRIDLINE_COLOR = "#c8c8c8"
TODAY_COLOR = "black"

CAPTION_X = 10
MONTH_LABEL_INSET = 2


class Axis(str, Enum):
    X = "x"
    Y = "y"


@dataclass(slots=True, frozen=True)
class SyncEdge:
    """Directed scroll coupling: ``target`` mirrors ``source`` on ``axis``."""

    source: RegionName
    target: RegionName
    axis: Axis


SYNC_EDGES = (
    SyncEdge(RegionName.PLOT, RegionName.FIXED_COLUMN, Axis.Y),
    SyncEdge(RegionName.PLOT, RegionName.SCROLL_HEADER, Axis.X),
)


class ScrollSync:
    """Propagate the driver pane's scroll offsets to its followers."""

    driver = RegionName.PLOT

    def __init__(self, scene: SceneGraph, edges: Sequence[SyncEdge] = SYNC_EDGES):
        self.scene = scene
        self.edges = list(edges)

    def on_scroll(self, region: RegionName, scroll_left: float, scroll_top: float) -> bool:
        """Handle a user scroll event dispatched by the backend.

        Events from anything but the driver are ignored: followers have
        hidden scrollbars and never originate scroll state.

        Args:
            region: Pane the event was dispatched on
            scroll_left: New horizontal offset
            scroll_top: New vertical offset

        Returns:
            True when the event was applied and propagated
        """
        if self.scene.is_empty:
            return False
        if region != self.driver:
            get_logger().debug(f"Ignoring scroll event from follower pane {region.value}")
            return False

        source = self.scene.region(self.driver)
        source.scroll_left = min(max(0.0, scroll_left), source.max_scroll_left)
        source.scroll_top = min(max(0.0, scroll_top), source.max_scroll_top)
        self.propagate()
        return True

    def propagate(self) -> None:
        """Copy offsets along every edge, driver to follower."""
        for edge in self.edges:
            source = self.scene.region(edge.source)
            target = self.scene.region(edge.target)
            if edge.axis is Axis.X:
                target.scroll_left = source.scroll_left
            else:
                target.scroll_top = source.scroll_top


class PaneComposer:
    """Assemble row and grid geometry into the four panes of a SceneGraph."""

    def __init__(self, config: LayoutConfig, viewport: ViewportSize):
        self.config = config
        self.viewport = viewport

    def content_height(self, row_count: int) -> float:
        """Scrollable height shared by the label column and the plot."""
        return row_count * self.config.row_height + self.config.plot_padding

    def compose(
        self, rows: Sequence[RowGeometry], grid: GridGeometry, schema: ColumnSchema
    ) -> SceneGraph:
        """Build the scene for one update.

        Args:
            rows: Row geometry in row order
            grid: Grid geometry for the same scale
            schema: Resolved columns (header captions, category presence)

        Returns:
            SceneGraph with all four regions and the task hit regions
        """
        config = self.config
        pane_width = config.label_pane_width
        right_width = max(0.0, self.viewport.width - pane_width)
        body_height = max(0.0, self.viewport.height - config.header_height)
        content_height = self.content_height(len(rows))

        fixed_header = Region(
            name=RegionName.FIXED_HEADER,
            frame=Box(0.0, 0.0, pane_width, config.header_height),
            content_width=pane_width,
            content_height=config.header_height,
            primitives=self._fixed_header_primitives(schema),
        )
        scroll_header = Region(
            name=RegionName.SCROLL_HEADER,
            frame=Box(pane_width, 0.0, right_width, config.header_height),
            content_width=config.plot_width,
            content_height=config.header_height,
            scroll_x=True,
            hide_scrollbars=True,
            primitives=self._axis_header_primitives(grid),
        )
        fixed_column = Region(
            name=RegionName.FIXED_COLUMN,
            frame=Box(0.0, config.header_height, pane_width, body_height),
            content_width=pane_width,
            content_height=content_height,
            scroll_y=True,
            hide_scrollbars=True,
            primitives=self._label_column_primitives(rows, schema.has_category),
        )
        plot = Region(
            name=RegionName.PLOT,
            frame=Box(pane_width, config.header_height, right_width, body_height),
            content_width=config.plot_width,
            content_height=content_height,
            scroll_x=True,
            scroll_y=True,
            primitives=self._plot_primitives(rows, grid, content_height),
        )

        scene = SceneGraph(viewport=self.viewport)
        for region in (fixed_header, scroll_header, fixed_column, plot):
            scene.regions[region.name] = region
        scene.hit_regions = [
            HitRegion(task=row.task, box=row.hit_region)
            for row in rows
            if row.hit_region is not None
        ]
        return scene

    def _fixed_header_primitives(self, schema: ColumnSchema) -> list[Primitive]:
        config = self.config
        caption_style = {"font-weight": "bold", "font-size": "14px", "fill": HEADER_TEXT_COLOR}
        baseline = config.header_height / 2
        primitives: list[Primitive] = [
            Rect(
                Box(0.0, 0.0, config.label_pane_width, config.header_height),
                "header-background",
                {"fill": HEADER_COLOR},
            )
        ]
        if schema.has_category:
            primitives.append(
                Text(CAPTION_X, baseline, schema.category_title, "category-caption", caption_style)
            )
        primitives.append(
            Text(config.label_width, baseline, schema.task_title, "task-caption", caption_style)
        )
        return primitives

    def _axis_header_primitives(self, grid: GridGeometry) -> list[Primitive]:
        config = self.config
        strip = config.header_height / 2
        primitives: list[Primitive] = [
            Rect(
                Box(0.0, 0.0, config.plot_width, config.header_height),
                "axis-background",
                {"fill": AXIS_BACKGROUND},
            )
        ]

        # Upper strip: year bands with centred bold labels
        for band in grid.years:
            primitives.append(
                Rect(Box(band.x, 0.0, band.width, strip), "year-band", {"fill": HEADER_COLOR})
            )
            primitives.append(
                Text(
                    band.center_x,
                    strip - 8,
                    band.label,
                    "year-label",
                    {
                        "font-weight": "bold",
                        "font-size": "13px",
                        "text-anchor": "middle",
                        "fill": HEADER_TEXT_COLOR,
                    },
                )
            )

        # Lower strip: month ticks and abbreviations
        for tick in grid.months:
            primitives.append(
                Line(
                    tick.x,
                    strip,
                    tick.x,
                    config.header_height,
                    "month-tick",
                    {"stroke": GRIDLINE_COLOR, "stroke-dasharray": "3,3", "stroke-width": 0.5},
                )
            )
            primitives.append(
                Text(
                    tick.x + MONTH_LABEL_INSET,
                    config.header_height - 10,
                    tick.label,
                    "month-label",
                    {"font-size": "10px"},
                )
            )

        for x in grid.year_dividers:
            primitives.append(
                Line(
                    x, 0.0, x, config.header_height, "year-divider", {"stroke": YEAR_DIVIDER_COLOR}
                )
            )
        primitives.append(
            Line(
                0.0,
                strip,
                config.plot_width,
                strip,
                "axis-baseline",
                {"stroke": YEAR_DIVIDER_COLOR, "stroke-width": 0.5},
            )
        )
        return primitives

    def _label_column_primitives(
        self, rows: Sequence[RowGeometry], has_category: bool
    ) -> list[Primitive]:
        config = self.config
        label_style = {"font-size": "12px"}
        primitives: list[Primitive] = []
        for row in rows:
            baseline = row.label_baseline
            if has_category:
                primitives.append(
                    Text(CAPTION_X, baseline, row.task.category, "category-label", label_style)
                )
            primitives.append(
                Text(config.label_width, baseline, row.task.label, "task-label", label_style)
            )
            primitives.append(
                Line(
                    0.0,
                    row.band.bottom,
                    config.label_pane_width,
                    row.band.bottom,
                    "row-separator",
                    {"stroke": SEPARATOR_COLOR, "stroke-width": 1},
                )
            )
        return primitives

    def _plot_primitives(
        self, rows: Sequence[RowGeometry], grid: GridGeometry, content_height: float
    ) -> list[Primitive]:
        config = self.config
        primitives: list[Primitive] = []

        # Grid first so bars paint over it
        for tick in grid.months:
            primitives.append(
                Line(
                    tick.x,
                    0.0,
                    tick.x,
                    content_height,
                    "month-gridline",
                    {"stroke": GRIDLINE_COLOR, "stroke-dasharray": "2,1", "stroke-width": 0.2},
                )
            )
        for x in grid.year_dividers:
            primitives.append(
                Line(x, 0.0, x, content_height, "year-divider", {"stroke": YEAR_DIVIDER_COLOR})
            )

        for row in rows:
            primitives.append(
                Line(
                    0.0,
                    row.band.bottom,
                    config.plot_width,
                    row.band.bottom,
                    "row-separator",
                    {"stroke": SEPARATOR_COLOR, "stroke-width": 1},
                )
            )
            if row.planned_bar is not None:
                primitives.append(Rect(row.planned_bar, "planned-bar", {"fill": PLANNED_COLOR}))
            if row.actual_bar is not None:
                primitives.append(Rect(row.actual_bar, "actual-bar", {"fill": ACTUAL_COLOR}))
            if row.progress_overlay is not None:
                primitives.append(
                    Rect(row.progress_overlay, "progress-overlay", {"fill": PROGRESS_COLOR})
                )
            if row.milestone_marker is not None:
                primitives.append(
                    Path(row.milestone_marker.path, "milestone-marker", {"fill": MILESTONE_COLOR})
                )

        primitives.append(
            Line(
                grid.today_x,
                0.0,
                grid.today_x,
                content_height,
                "today-marker",
                {"stroke": TODAY_COLOR, "stroke-dasharray": "3,3"},
            )
        )
        return primitives
