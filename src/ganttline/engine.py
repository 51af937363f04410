"""Render pipeline entry points.

``build_scene`` is the pure function the host drives on every update;
``TimelineVisual`` wraps it with the per-chart presentation state (scroll
offsets and the tooltip overlay) that pointer events mutate between updates.
"""

from __future__ import annotations

from datetime import date

from .grid import build_grid
from .layout import layout_rows
from .logger import debug_enabled, details_enabled, get_logger
from .models import DataView, TemporalDomain, ViewportSize
from .normalizer import ColumnSchema, normalize_tasks
from .panes import PaneComposer, ScrollSync
from .scale import TemporalScale
from .scene import RegionName, SceneGraph
from .tooltip import TooltipController
from .unified_config import UnifiedConfig


def build_scene(
    data_view: DataView | None,
    viewport: ViewportSize,
    *,
    config: UnifiedConfig | None = None,
    today: date | None = None,
) -> SceneGraph:
    """Lay out the whole chart from scratch.

    Args:
        data_view: Host data for this update; None means nothing was supplied
        viewport: Host viewport size (sizes the panes, not the timeline)
        config: Layout constants; defaults apply when omitted
        today: Date of the today marker (defaults to the current date)

    Returns:
        The complete scene, or an empty scene when there is nothing to draw
    """
    config = config or UnifiedConfig()
    today = today or date.today()  # noqa: DTZ011
    logger = get_logger()

    if data_view is None or not data_view.categories or not data_view.values:
        logger.summary("No category or value columns supplied; rendering nothing")
        return SceneGraph.empty_scene(viewport)

    schema = ColumnSchema.resolve(data_view)
    tasks = normalize_tasks(schema)
    if not tasks:
        logger.summary("No task rows supplied; rendering nothing")
        return SceneGraph.empty_scene(viewport)

    # One domain for every row and the header
    domain = TemporalDomain.from_tasks(tasks, today)
    scale = TemporalScale(domain=domain, width=config.layout.plot_width)

    rows = layout_rows(tasks, scale, config.layout)
    grid = build_grid(scale, today)
    scene = PaneComposer(config.layout, viewport).compose(rows, grid, schema)

    logger.summary(
        f"Laid out {len(rows)} tasks over {domain.start.isoformat()}..{domain.end.isoformat()} "
        f"({len(grid.years)} years)"
    )
    if details_enabled():
        missing = sum(1 for row in rows if row.actual_bar is None)
        if missing:
            logger.details(f"{missing} of {len(rows)} tasks have no actual bar")
    if debug_enabled():
        for row in rows:
            logger.debug(
                f"  row {row.row}: index={row.index} label={row.task.label!r} "
                f"actual={row.actual_bar} planned={row.planned_bar}"
            )
    return scene


class TimelineVisual:
    """One chart instance bound to a host.

    ``update`` clears and rebuilds everything; the event handlers only touch
    presentation state of the current scene.
    """

    def __init__(self, config: UnifiedConfig | None = None, *, today: date | None = None):
        """Initialize the visual.

        Args:
            config: Layout, tooltip and column configuration
            today: Fixed date for the today marker (defaults to the current date per update)
        """
        self.config = config or UnifiedConfig()
        self.today = today
        self.scene: SceneGraph | None = None
        self.scroll_sync: ScrollSync | None = None
        self.tooltip: TooltipController | None = None

    def update(self, data_view: DataView | None, viewport: ViewportSize) -> SceneGraph:
        """Rebuild the scene for new data or a new viewport."""
        # Clear previous state before rebuilding
        self.scene = None
        self.scroll_sync = None
        self.tooltip = None

        scene = build_scene(data_view, viewport, config=self.config, today=self.today)
        self.scroll_sync = ScrollSync(scene)
        if not scene.is_empty:
            # Only tasks with a hit region can ever be hovered
            tasks = [hit.task for hit in scene.hit_regions]
            self.tooltip = TooltipController(tasks, self.config.tooltip)
            scene.tooltip = self.tooltip.overlay
        self.scene = scene
        return scene

    def on_scroll(self, region: RegionName, scroll_left: float, scroll_top: float) -> bool:
        """Forward a backend scroll event to scroll synchronization."""
        if self.scroll_sync is None:
            return False
        return self.scroll_sync.on_scroll(region, scroll_left, scroll_top)

    def on_pointer_enter(self, task_index: int) -> None:
        if self.tooltip is not None:
            self.tooltip.pointer_enter(task_index)

    def on_pointer_move(self, page_x: float, page_y: float) -> None:
        if self.tooltip is not None:
            self.tooltip.pointer_move(page_x, page_y)

    def on_pointer_leave(self) -> None:
        if self.tooltip is not None:
            self.tooltip.pointer_leave()
