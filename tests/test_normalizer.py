"""Tests for column schema resolution and task normalization."""

from collections.abc import Callable
from datetime import date

from ganttline.models import Column, DataView
from ganttline.normalizer import ColumnRole, ColumnSchema, normalize_tasks

FULL_ROW = ("Eng", "Design", "2024-01-10", "2024-03-05", "2024-01-01", "2024-02-01", "2024-02-15")


class TestColumnSchemaPositional:
    """Test the positional column contract."""

    def test_two_label_columns_bind_category(self, make_view: Callable[..., DataView]) -> None:
        view = make_view([FULL_ROW], progress=[40])
        schema = ColumnSchema.resolve(view)

        assert schema.has_category
        assert schema.get(ColumnRole.CATEGORY) is view.categories[0]
        assert schema.get(ColumnRole.TASK) is view.categories[1]
        assert schema.get(ColumnRole.MILESTONE) is view.categories[6]
        assert schema.get(ColumnRole.PROGRESS) is view.values[0]
        assert schema.category_title == "Category"
        assert schema.task_title == "Task"

    def test_single_label_column_is_the_task(self) -> None:
        """With one category column it is the task label and no category exists."""
        view = DataView(
            categories=[Column("Work Item", ["Design", "Build"])],
            values=[Column("Done", [10, 20])],
        )
        schema = ColumnSchema.resolve(view)

        assert not schema.has_category
        assert schema.get(ColumnRole.TASK).display_name == "Work Item"
        assert schema.get(ColumnRole.ACTUAL_START) is None
        assert schema.task_title == "Work Item"
        assert schema.category_title == "Category"

        tasks = normalize_tasks(schema)
        assert [(t.label, t.category, t.actual_start) for t in tasks] == [
            ("Design", "", None),
            ("Build", "", None),
        ]
        assert tasks[1].progress_percent == 20.0

    def test_column_count_decides_category(self) -> None:
        """Two or more columns always bind the first as category, whatever its content."""
        view = DataView(categories=[Column("Begin", ["2024-01-10"]), Column("Name", ["Design"])])
        schema = ColumnSchema.resolve(view)
        assert schema.has_category
        assert schema.get(ColumnRole.CATEGORY).display_name == "Begin"
        assert schema.get(ColumnRole.TASK).display_name == "Name"

    def test_missing_optional_columns_are_unbound(self, make_view: Callable[..., DataView]) -> None:
        view = make_view([("Eng", "Design", "2024-01-10", "2024-03-05")], progress=None)
        schema = ColumnSchema.resolve(view)
        assert schema.get(ColumnRole.PLANNED_START) is None
        assert schema.get(ColumnRole.MILESTONE) is None
        assert schema.get(ColumnRole.PROGRESS) is None


class TestColumnSchemaByRole:
    """Test explicit role binding."""

    def test_roles_override_positions(self) -> None:
        view = DataView(
            categories=[
                Column("Finish", ["2024-03-05"], role="actual_end"),
                Column("Name", ["Design"], role="task"),
                Column("Begin", ["2024-01-10"], role="actual_start"),
            ],
            values=[Column("Done", [50], role="progress")],
        )
        schema = ColumnSchema.resolve(view)

        assert not schema.has_category
        assert schema.get(ColumnRole.TASK).display_name == "Name"
        assert schema.get(ColumnRole.ACTUAL_END).display_name == "Finish"

        tasks = normalize_tasks(schema)
        assert tasks[0].actual_start == date(2024, 1, 10)
        assert tasks[0].actual_end == date(2024, 3, 5)
        assert tasks[0].progress_percent == 50.0

    def test_unknown_role_is_ignored(self) -> None:
        view = DataView(
            categories=[Column("Name", ["a"], role="task"), Column("Owner", ["bob"], role="owner")]
        )
        schema = ColumnSchema.resolve(view)
        assert set(schema.columns) == {ColumnRole.TASK}


class TestNormalizeTasks:
    """Test Task record construction."""

    def test_full_row(self, make_view: Callable[..., DataView]) -> None:
        view = make_view([FULL_ROW], progress=[40])
        (task,) = normalize_tasks(ColumnSchema.resolve(view))

        assert task.index == 0
        assert task.label == "Design"
        assert task.category == "Eng"
        assert task.actual_start == date(2024, 1, 10)
        assert task.actual_end == date(2024, 3, 5)
        assert task.planned_start == date(2024, 1, 1)
        assert task.planned_end == date(2024, 2, 1)
        assert task.milestone == date(2024, 2, 15)
        assert task.progress_percent == 40.0

    def test_no_category_column_gives_empty_category(
        self, make_view: Callable[..., DataView]
    ) -> None:
        view = make_view([("Design",)], has_category=False)
        (task,) = normalize_tasks(ColumnSchema.resolve(view))
        assert task.category == ""
        assert task.label == "Design"
        assert task.actual_start is None

    def test_index_follows_input_order(self, make_view: Callable[..., DataView]) -> None:
        view = make_view(
            [
                ("Eng", "Later", "2023-06-01", "2023-08-01"),
                ("Eng", "Earlier", "2022-01-01", "2022-02-01"),
            ]
        )
        tasks = normalize_tasks(ColumnSchema.resolve(view))
        assert [(t.index, t.label) for t in tasks] == [(0, "Later"), (1, "Earlier")]

    def test_invalid_dates_are_absent(self, make_view: Callable[..., DataView]) -> None:
        view = make_view([("Eng", "Broken", "not-a-date", "2024-03-05", "", None, "garbage")])
        (task,) = normalize_tasks(ColumnSchema.resolve(view))
        assert task.actual_start is None
        assert task.actual_end == date(2024, 3, 5)
        assert task.planned_start is None
        assert task.milestone is None

    def test_short_columns_read_as_absent(self) -> None:
        """Columns shorter than the task count never index out of bounds."""
        view = DataView(
            categories=[
                Column("Category", ["Eng"]),
                Column("Task", ["a", "b", "c"]),
                Column("Start", ["2024-01-01", "2024-02-01", "2024-03-01"]),
                Column("End", ["2024-01-15", "2024-02-15"]),
                Column("Planned Start", ["2024-01-01"]),
            ],
            values=[Column("Progress", [10])],
        )
        tasks = normalize_tasks(ColumnSchema.resolve(view))

        assert len(tasks) == 3
        assert tasks[2].category == ""
        assert tasks[2].actual_end is None
        assert tasks[1].planned_start is None
        assert tasks[1].progress_percent is None

    def test_short_label_column_keeps_rows(self) -> None:
        """Rows beyond the label column still exist with an empty label."""
        view = DataView(
            categories=[
                Column("Category", ["Eng"]),
                Column("Task", ["a"]),
                Column("Start", ["2024-01-01", "2024-02-01"]),
                Column("End", ["2024-01-15", "2024-02-15"]),
            ]
        )
        tasks = normalize_tasks(ColumnSchema.resolve(view))

        assert len(tasks) == 2
        assert tasks[1].label == ""
        assert tasks[1].actual_start == date(2024, 2, 1)

    def test_lone_planned_date_is_kept_but_not_planned(
        self, make_view: Callable[..., DataView]
    ) -> None:
        view = make_view([("Eng", "a", "2024-01-01", "2024-02-01", "2024-01-05", None)])
        (task,) = normalize_tasks(ColumnSchema.resolve(view))
        assert task.planned_start == date(2024, 1, 5)
        assert not task.has_planned

    def test_nan_progress_is_absent(self, make_view: Callable[..., DataView]) -> None:
        view = make_view([("Eng", "a", "2024-01-01", "2024-02-01")], progress=[float("nan")])
        (task,) = normalize_tasks(ColumnSchema.resolve(view))
        assert task.progress_percent is None

    def test_no_task_column_means_no_tasks(self) -> None:
        view = DataView(categories=[Column("Start", ["2024-01-01"], role="actual_start")])
        assert normalize_tasks(ColumnSchema.resolve(view)) == []
