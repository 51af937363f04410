"""Hover tooltip content and the single shared overlay."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from .models import Task
from .unified_config import TooltipConfig

DATE_FORMAT = "%Y-%m-%d"


def format_date(value: date | None) -> str:
    """Format a date as YYYY-MM-DD, or an empty string when absent."""
    return value.strftime(DATE_FORMAT) if value is not None else ""


def format_percent(value: float) -> str:
    """Format a progress value without a trailing ``.0`` for whole numbers."""
    if value == int(value):
        return f"{int(value)}%"
    return f"{value:g}%"


def compose_tooltip(task: Task) -> list[str]:
    """Build the tooltip text block for ``task``, one entry per line.

    The first line is the task label; optional lines appear only when the
    underlying value is present.
    """
    lines = [task.label]
    if task.category:
        lines.append(f"Category: {task.category}")
    lines.append(f"Start: {format_date(task.actual_start)}")
    lines.append(f"End: {format_date(task.actual_end)}")
    if task.has_planned:
        lines.append(f"Planned Start: {format_date(task.planned_start)}")
        lines.append(f"Planned End: {format_date(task.planned_end)}")
    if task.progress_percent is not None:
        lines.append(f"Progress: {format_percent(task.progress_percent)}")
    return lines


@dataclass(slots=True)
class TooltipOverlay:
    """The one floating overlay of a chart."""

    visible: bool = False
    x: float = 0.0
    y: float = 0.0
    task_index: int | None = None
    lines: list[str] = field(default_factory=list[str])


class TooltipController:
    """Drive the shared overlay from pointer events on task hit regions.

    Only presentation state changes here; layout is never re-run.
    """

    def __init__(self, tasks: Iterable[Task], config: TooltipConfig | None = None):
        """Initialize the controller.

        Args:
            tasks: Tasks of the current update, looked up by ``index``
            config: Pointer offset of the overlay
        """
        self.tasks_by_index = {task.index: task for task in tasks}
        self.config = config or TooltipConfig()
        self.overlay = TooltipOverlay()

    def pointer_enter(self, task_index: int) -> None:
        """Show ``task_index``'s content, replacing whatever was shown."""
        task = self.tasks_by_index.get(task_index)
        if task is None:
            return
        self.overlay.task_index = task_index
        self.overlay.lines = compose_tooltip(task)
        self.overlay.visible = True

    def pointer_move(self, page_x: float, page_y: float) -> None:
        """Reposition the overlay next to the pointer while hovering."""
        if not self.overlay.visible:
            return
        self.overlay.x = page_x + self.config.offset_x
        self.overlay.y = page_y + self.config.offset_y

    def pointer_leave(self) -> None:
        """Hide the overlay."""
        self.overlay.visible = False
        self.overlay.task_index = None
