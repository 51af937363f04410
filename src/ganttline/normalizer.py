"""Normalize host columns into Task records.

The host hands over positional columns whose meaning depends on whether a
category column was supplied. ColumnSchema resolves that once per update into
named roles so nothing downstream touches raw column indices.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from .logger import get_logger
from .models import Column, DataView, Task, parse_date, parse_progress

DEFAULT_CATEGORY_TITLE = "Category"
DEFAULT_TASK_TITLE = "Task"


class ColumnRole(str, Enum):
    """Purpose of a host column."""

    CATEGORY = "category"
    TASK = "task"
    ACTUAL_START = "actual_start"
    ACTUAL_END = "actual_end"
    PLANNED_START = "planned_start"
    PLANNED_END = "planned_end"
    MILESTONE = "milestone"
    PROGRESS = "progress"


# Positional order of category columns when a category column is present
POSITIONAL_ROLES = [
    ColumnRole.CATEGORY,
    ColumnRole.TASK,
    ColumnRole.ACTUAL_START,
    ColumnRole.ACTUAL_END,
    ColumnRole.PLANNED_START,
    ColumnRole.PLANNED_END,
    ColumnRole.MILESTONE,
]


@dataclass(slots=True)
class ColumnSchema:
    """Role -> column binding resolved from one data view."""

    columns: dict[ColumnRole, Column] = field(default_factory=dict[ColumnRole, Column])

    @classmethod
    def resolve(cls, data_view: DataView) -> ColumnSchema:
        """Bind the data view's columns to roles.

        If any column carries an explicit role, every column is bound by role.
        Otherwise the positional contract applies: a category column exists
        only when at least two category columns were supplied, and when it is
        missing every later role shifts left by one position.
        """
        all_columns = [*data_view.categories, *data_view.values]
        if any(column.role for column in all_columns):
            return cls._resolve_by_role(all_columns)
        return cls._resolve_by_position(data_view)

    @classmethod
    def _resolve_by_role(cls, columns: list[Column]) -> ColumnSchema:
        bound: dict[ColumnRole, Column] = {}
        for column in columns:
            if column.role is None:
                continue
            try:
                role = ColumnRole(column.role)
            except ValueError:
                get_logger().details(
                    f"Ignoring column '{column.display_name}' with unknown role '{column.role}'"
                )
                continue
            # First column wins when a role is bound twice
            bound.setdefault(role, column)
        return cls(columns=bound)

    @classmethod
    def _resolve_by_position(cls, data_view: DataView) -> ColumnSchema:
        categories = data_view.categories
        has_category = len(categories) >= 2  # noqa: PLR2004 - category + task
        roles = POSITIONAL_ROLES if has_category else POSITIONAL_ROLES[1:]

        bound: dict[ColumnRole, Column] = {}
        for position, role in enumerate(roles):
            if position < len(categories):
                bound[role] = categories[position]
        if data_view.values:
            bound[ColumnRole.PROGRESS] = data_view.values[0]
        return cls(columns=bound)

    def get(self, role: ColumnRole) -> Column | None:
        """Return the column bound to ``role``, if any."""
        return self.columns.get(role)

    @property
    def has_category(self) -> bool:
        """True when a category column is bound."""
        return ColumnRole.CATEGORY in self.columns

    @property
    def category_title(self) -> str:
        """Header caption for the category column."""
        column = self.get(ColumnRole.CATEGORY)
        return column.display_name if column and column.display_name else DEFAULT_CATEGORY_TITLE

    @property
    def task_title(self) -> str:
        """Header caption for the task column."""
        column = self.get(ColumnRole.TASK)
        return column.display_name if column and column.display_name else DEFAULT_TASK_TITLE

    @property
    def row_count(self) -> int:
        """Number of tasks: the longest bound label or date column.

        A label column shorter than the date columns must not drop rows, so
        the measure column is the only one left out.
        """
        if ColumnRole.TASK not in self.columns:
            return 0
        return max(
            len(column) for role, column in self.columns.items() if role is not ColumnRole.PROGRESS
        )

    def cell(self, role: ColumnRole, index: int) -> object:
        """Return the raw cell for ``role`` at ``index`` (None when absent)."""
        column = self.get(role)
        return column.get(index) if column else None


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def _date_cell(schema: ColumnSchema, role: ColumnRole, index: int) -> date | None:
    raw = schema.cell(role, index)
    parsed = parse_date(raw)
    if parsed is None and raw not in (None, ""):
        get_logger().degraded(index, f"unparseable {role.value} {raw!r}, treated as absent")
    return parsed


def normalize_tasks(schema: ColumnSchema) -> list[Task]:
    """Build one Task per input row.

    Short columns, unparseable dates and non-numeric progress all read as
    absent; nothing here raises for bad data.

    Args:
        schema: Resolved column schema for this update

    Returns:
        Tasks in input order, ``index`` equal to the row position
    """
    tasks: list[Task] = []
    for index in range(schema.row_count):
        planned_start = _date_cell(schema, ColumnRole.PLANNED_START, index)
        planned_end = _date_cell(schema, ColumnRole.PLANNED_END, index)
        if (planned_start is None) != (planned_end is None):
            get_logger().degraded(index, "lone planned date ignored for the planned bar")

        category = _text(schema.cell(ColumnRole.CATEGORY, index)) if schema.has_category else ""
        tasks.append(
            Task(
                index=index,
                label=_text(schema.cell(ColumnRole.TASK, index)),
                category=category,
                actual_start=_date_cell(schema, ColumnRole.ACTUAL_START, index),
                actual_end=_date_cell(schema, ColumnRole.ACTUAL_END, index),
                planned_start=planned_start,
                planned_end=planned_end,
                progress_percent=parse_progress(schema.cell(ColumnRole.PROGRESS, index)),
                milestone=_date_cell(schema, ColumnRole.MILESTONE, index),
            )
        )
    return tasks
