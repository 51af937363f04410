"""Pytest configuration and fixtures for ganttline tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import pytest

from ganttline import context
from ganttline.logger import reset_logger
from ganttline.models import Column, DataView

# Positional header order when a category column is present
POSITIONAL_HEADERS = [
    "Category",
    "Task",
    "Start",
    "End",
    "Planned Start",
    "Planned End",
    "Milestone",
]


@pytest.fixture(autouse=True)
def clean_global_state() -> None:
    """Reset logger and CLI context before each test for isolation."""
    reset_logger()
    context.set_config_path(None)


def positional_view(
    rows: Sequence[Sequence[Any]],
    *,
    has_category: bool = True,
    progress: Sequence[Any] | None = (),
) -> DataView:
    """Build a positional DataView from row tuples.

    Each row lists cells in positional order (category first when
    ``has_category``); rows may be shorter than the full header list, which
    leaves trailing optional columns absent for that row. A progress column
    is always supplied (empty by default) unless ``progress`` is None.

    Example:
        positional_view([("Eng", "Design", "2024-01-10", "2024-03-05")])
    """
    headers = POSITIONAL_HEADERS if has_category else POSITIONAL_HEADERS[1:]
    width = max((len(row) for row in rows), default=0)
    categories = [
        Column(
            display_name=headers[position],
            values=[row[position] if position < len(row) else None for row in rows],
        )
        for position in range(width)
    ]
    values: list[Column] = []
    if progress is not None:
        values.append(Column(display_name="Progress", values=list(progress)))
    return DataView(categories=categories, values=values)


@pytest.fixture
def make_view() -> Callable[..., DataView]:
    """Factory fixture for positional data views."""
    return positional_view
