"""Pydantic schemas for YAML task files."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class TaskFileSchema(BaseModel):
    """Schema for a YAML task file.

    Each entry of ``tasks`` is one row; keys are column headers and are bound
    to roles through the ``columns`` config section, exactly like CSV headers.
    """

    tasks: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("tasks", mode="before")
    @classmethod
    def ensure_rows_are_mappings(cls, v: Any) -> list[dict[str, Any]]:
        """Reject anything but a list of mappings, and stringify header keys."""
        if v is None:
            return []
        if not isinstance(v, list):
            raise ValueError("'tasks' must be a list of rows")
        rows: list[dict[str, Any]] = []
        for position, row in enumerate(v):  # type: ignore[misc]
            if not isinstance(row, dict):
                raise ValueError(f"tasks[{position}] must be a mapping of column -> value")
            rows.append({str(key): value for key, value in row.items()})  # type: ignore[misc]
        return rows
