"""Tests for the render pipeline and the stateful visual."""

from collections.abc import Callable
from datetime import date

import pytest

from ganttline.engine import TimelineVisual, build_scene
from ganttline.models import Column, DataView, ViewportSize
from ganttline.scene import Rect, RegionName, Text
from ganttline.unified_config import LayoutConfig, UnifiedConfig

TODAY = date(2024, 6, 1)
VIEWPORT = ViewportSize(width=800, height=400)
FULL_ROW = ("Eng", "Design", "2024-01-10", "2024-03-05", "2024-01-01", "2024-02-01", "2024-02-15")


class TestBuildScene:
    """Test whole-chart layout."""

    def test_single_task_in_one_year(self, make_view: Callable[..., DataView]) -> None:
        view = make_view([("Eng", "Design", "2024-01-10", "2024-03-05")])
        scene = build_scene(view, VIEWPORT, today=TODAY)
        plot = scene.region(RegionName.PLOT)

        (bar,) = plot.of_class("actual-bar")
        assert isinstance(bar, Rect)
        assert bar.box.x == pytest.approx(9 * 4600 / 365)
        assert bar.box.right == pytest.approx(64 * 4600 / 365)
        assert len(plot.of_class("month-gridline")) == 12

        header = scene.region(RegionName.SCROLL_HEADER)
        assert [p.text for p in header.of_class("year-label") if isinstance(p, Text)] == ["2024"]

    def test_earlier_task_gets_first_row(self, make_view: Callable[..., DataView]) -> None:
        view = make_view(
            [
                ("Eng", "A", "2023-06-01", "2023-08-01"),
                ("Eng", "B", "2022-01-01", "2022-02-01"),
            ]
        )
        scene = build_scene(view, VIEWPORT, today=TODAY)

        header = scene.region(RegionName.SCROLL_HEADER)
        years = [p.text for p in header.of_class("year-label") if isinstance(p, Text)]
        assert years == ["2022", "2023"]
        assert len(scene.region(RegionName.PLOT).of_class("month-gridline")) == 24

        hits = sorted(scene.hit_regions, key=lambda hit: hit.box.y)
        assert [hit.task_index for hit in hits] == [1, 0]
        assert [hit.task.label for hit in hits] == ["B", "A"]

    def test_full_row_draws_every_layer(self, make_view: Callable[..., DataView]) -> None:
        view = make_view([FULL_ROW], progress=[40])
        plot = build_scene(view, VIEWPORT, today=TODAY).region(RegionName.PLOT)

        (planned,) = plot.of_class("planned-bar")
        (actual,) = plot.of_class("actual-bar")
        (progress,) = plot.of_class("progress-overlay")
        assert len(plot.of_class("milestone-marker")) == 1
        assert isinstance(planned, Rect) and isinstance(actual, Rect)
        assert isinstance(progress, Rect)
        assert planned.box.bottom < actual.box.y
        assert progress.box.width == pytest.approx(actual.box.width * 0.4)

    def test_malformed_date_keeps_other_rows(self, make_view: Callable[..., DataView]) -> None:
        view = make_view(
            [
                ("Eng", "Good", "2024-01-10", "2024-03-05"),
                ("Eng", "Bad", "banana", "banana"),
            ]
        )
        scene = build_scene(view, VIEWPORT, today=TODAY)

        assert len(scene.region(RegionName.PLOT).of_class("actual-bar")) == 1
        labels = scene.region(RegionName.FIXED_COLUMN).of_class("task-label")
        assert [p.text for p in labels if isinstance(p, Text)] == ["Good", "Bad"]
        assert [hit.task_index for hit in scene.hit_regions] == [0]

    def test_short_label_column_still_renders_bar(self) -> None:
        view = DataView(
            categories=[
                Column("Category", ["Eng"]),
                Column("Task", ["a"]),
                Column("Start", ["2024-01-01", "2024-02-01"]),
                Column("End", ["2024-01-15", "2024-02-15"]),
            ],
            values=[Column("Progress", [])],
        )
        scene = build_scene(view, VIEWPORT, today=TODAY)
        assert len(scene.region(RegionName.PLOT).of_class("actual-bar")) == 2

    def test_today_marker_position(self, make_view: Callable[..., DataView]) -> None:
        view = make_view([("Eng", "Design", "2024-01-01", "2024-12-31")])
        plot = build_scene(view, VIEWPORT, today=date(2024, 7, 1)).region(RegionName.PLOT)
        (marker,) = plot.of_class("today-marker")
        assert marker.x1 == pytest.approx(182 * 4600 / 365)  # type: ignore[union-attr]

    def test_plot_width_from_config(self, make_view: Callable[..., DataView]) -> None:
        config = UnifiedConfig(layout=LayoutConfig(plot_width=2000))
        view = make_view([("Eng", "Design", "2024-01-01", "2024-12-31")])
        scene = build_scene(view, VIEWPORT, config=config, today=TODAY)
        assert scene.region(RegionName.PLOT).content_width == 2000
        assert scene.region(RegionName.SCROLL_HEADER).content_width == 2000


class TestEmptyState:
    """Test the defined empty state."""

    def test_no_data_view(self) -> None:
        scene = build_scene(None, VIEWPORT, today=TODAY)
        assert scene.is_empty
        assert scene.hit_regions == []

    def test_no_categories(self) -> None:
        assert build_scene(DataView(), VIEWPORT, today=TODAY).is_empty

    def test_no_rows(self) -> None:
        view = DataView(
            categories=[Column("Category", []), Column("Task", [])],
            values=[Column("Progress", [])],
        )
        assert build_scene(view, VIEWPORT, today=TODAY).is_empty

    def test_no_value_columns(self, make_view: Callable[..., DataView]) -> None:
        """Label and date columns alone are not enough to draw."""
        view = make_view([("Eng", "Design", "2024-01-10", "2024-03-05")], progress=None)
        scene = build_scene(view, VIEWPORT, today=TODAY)
        assert scene.is_empty
        assert scene.hit_regions == []

    def test_empty_progress_column_still_draws(
        self, make_view: Callable[..., DataView]
    ) -> None:
        view = make_view([("Eng", "Design", "2024-01-10", "2024-03-05")], progress=[])
        assert not build_scene(view, VIEWPORT, today=TODAY).is_empty


class TestTimelineVisual:
    """Test the stateful chart wrapper."""

    @pytest.fixture
    def visual(self) -> TimelineVisual:
        return TimelineVisual(today=TODAY)

    def test_update_replaces_scene(
        self, visual: TimelineVisual, make_view: Callable[..., DataView]
    ) -> None:
        first = visual.update(make_view([("Eng", "A", "2024-01-01", "2024-02-01")]), VIEWPORT)
        second = visual.update(
            make_view(
                [("Eng", "A", "2024-01-01", "2024-02-01"), ("Eng", "B", "2024-03-01", "2024-04-01")]
            ),
            VIEWPORT,
        )
        assert visual.scene is second
        assert second is not first
        assert len(second.region(RegionName.PLOT).of_class("actual-bar")) == 2

    def test_update_resets_scroll(
        self, visual: TimelineVisual, make_view: Callable[..., DataView]
    ) -> None:
        view = make_view([("Eng", "A", "2024-01-01", "2024-02-01")])
        visual.update(view, VIEWPORT)
        visual.on_scroll(RegionName.PLOT, 500, 0)

        scene = visual.update(view, VIEWPORT)
        assert scene.region(RegionName.PLOT).scroll_left == 0
        assert scene.region(RegionName.SCROLL_HEADER).scroll_left == 0

    def test_scroll_events(
        self, visual: TimelineVisual, make_view: Callable[..., DataView]
    ) -> None:
        scene = visual.update(make_view([("Eng", "A", "2024-01-01", "2024-02-01")]), VIEWPORT)
        assert visual.on_scroll(RegionName.PLOT, 700, 0)
        assert scene.region(RegionName.SCROLL_HEADER).scroll_left == 700
        assert not visual.on_scroll(RegionName.SCROLL_HEADER, 10, 0)
        assert scene.region(RegionName.PLOT).scroll_left == 700

    def test_pointer_events_drive_single_overlay(
        self, visual: TimelineVisual, make_view: Callable[..., DataView]
    ) -> None:
        scene = visual.update(
            make_view(
                [("Eng", "A", "2024-01-01", "2024-02-01"), ("Ops", "B", "2024-03-01", "2024-04-01")]
            ),
            VIEWPORT,
        )
        overlay = scene.tooltip
        assert overlay is not None
        assert not overlay.visible

        visual.on_pointer_enter(0)
        visual.on_pointer_move(100, 200)
        assert overlay.visible
        assert overlay.lines[0] == "A"
        assert (overlay.x, overlay.y) == (110, 210)

        visual.on_pointer_enter(1)
        assert overlay.task_index == 1
        assert overlay.lines[0] == "B"

        visual.on_pointer_leave()
        assert not overlay.visible

    def test_empty_update_is_inert(self, visual: TimelineVisual) -> None:
        scene = visual.update(None, VIEWPORT)
        assert scene.is_empty
        assert scene.tooltip is None
        assert not visual.on_scroll(RegionName.PLOT, 10, 10)
        visual.on_pointer_enter(0)
        visual.on_pointer_leave()
