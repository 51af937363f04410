"""Declarative scene description handed to a rendering backend.

Every update produces a brand-new SceneGraph; backends paint it, nothing in
it is patched incrementally.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Task, ViewportSize
    from .tooltip import TooltipOverlay

Style = dict[str, str | float]


@dataclass(slots=True, frozen=True)
class Box:
    """Axis-aligned rectangle."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2


@dataclass(slots=True, frozen=True)
class Rect:
    box: Box
    css_class: str
    style: Style = field(default_factory=dict[str, str | float])


@dataclass(slots=True, frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    css_class: str
    style: Style = field(default_factory=dict[str, str | float])


@dataclass(slots=True, frozen=True)
class Text:
    x: float
    y: float
    text: str
    css_class: str
    style: Style = field(default_factory=dict[str, str | float])


@dataclass(slots=True, frozen=True)
class Path:
    d: str
    css_class: str
    style: Style = field(default_factory=dict[str, str | float])


Primitive = Rect | Line | Text | Path


class RegionName(str, Enum):
    """The four panes of the chart."""

    FIXED_HEADER = "fixed_header"
    SCROLL_HEADER = "scroll_header"
    FIXED_COLUMN = "fixed_column"
    PLOT = "plot"


@dataclass(slots=True)
class Region:
    """One pane: where it sits in the viewport and what it draws.

    ``frame`` is the visible box in viewport coordinates; primitives live in
    content coordinates of size ``content_width`` x ``content_height``.
    ``scroll_left``/``scroll_top`` are presentation state mutated by scroll
    synchronization, never by layout.
    """

    name: RegionName
    frame: Box
    content_width: float
    content_height: float
    scroll_x: bool = False
    scroll_y: bool = False
    hide_scrollbars: bool = False
    primitives: list[Primitive] = field(default_factory=list[Primitive])
    scroll_left: float = 0.0
    scroll_top: float = 0.0

    @property
    def max_scroll_left(self) -> float:
        return max(0.0, self.content_width - self.frame.width)

    @property
    def max_scroll_top(self) -> float:
        return max(0.0, self.content_height - self.frame.height)

    def of_class(self, css_class: str) -> list[Primitive]:
        """Return the primitives tagged with ``css_class``, in paint order."""
        return [p for p in self.primitives if p.css_class == css_class]


@dataclass(slots=True, frozen=True)
class HitRegion:
    """Invisible pointer target for one task, in plot content coordinates."""

    task: Task
    box: Box

    @property
    def task_index(self) -> int:
        return self.task.index


@dataclass(slots=True)
class SceneGraph:
    """Complete description of one rendered chart."""

    viewport: ViewportSize
    regions: dict[RegionName, Region] = field(default_factory=dict[RegionName, Region])
    hit_regions: list[HitRegion] = field(default_factory=list[HitRegion])
    tooltip: TooltipOverlay | None = None

    @classmethod
    def empty_scene(cls, viewport: ViewportSize) -> SceneGraph:
        """The defined empty state: nothing to draw."""
        return cls(viewport=viewport)

    @property
    def is_empty(self) -> bool:
        return not self.regions

    def region(self, name: RegionName) -> Region:
        return self.regions[name]
