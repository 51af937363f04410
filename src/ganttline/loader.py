"""Load task tables from CSV or YAML files into a host-style DataView."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .exceptions import DataLoadError
from .logger import get_logger
from .models import Column, DataView
from .normalizer import ColumnRole
from .schemas import TaskFileSchema
from .unified_config import ColumnsConfig

CSV_SUFFIXES = {".csv"}
YAML_SUFFIXES = {".yaml", ".yml"}


def _bind_headers(headers: list[str], columns: ColumnsConfig) -> dict[ColumnRole, str]:
    """Map each role to the actual header that matches it (case-insensitive)."""
    by_lower = {header.strip().lower(): header for header in headers}
    bound: dict[ColumnRole, str] = {}
    for role_name, header_name in columns.by_role().items():
        header = by_lower.get(header_name.strip().lower())
        if header is not None:
            bound[ColumnRole(role_name)] = header
    return bound


def _build_data_view(
    records: list[dict[str, Any]], headers: list[str], columns: ColumnsConfig
) -> DataView:
    bound = _bind_headers(headers, columns)
    if ColumnRole.TASK not in bound:
        raise DataLoadError(
            f"No task column found; expected a '{columns.task}' header "
            f"(have: {', '.join(headers) or 'none'})"
        )

    data_view = DataView()
    for role, header in bound.items():
        values = _column_values(records, header)
        column = Column(display_name=header, values=values, role=role.value)
        if role is ColumnRole.PROGRESS:
            data_view.values.append(column)
        else:
            data_view.categories.append(column)

    # Hosts always supply a measure column; an empty one stands in when the file has none
    if not data_view.values:
        data_view.values.append(
            Column(display_name=columns.progress, values=[], role=ColumnRole.PROGRESS.value)
        )

    get_logger().summary(
        f"Loaded {len(records)} rows; columns bound: "
        + ", ".join(f"{role.value}={header}" for role, header in bound.items())
    )
    return data_view


def _column_values(records: list[dict[str, Any]], header: str) -> list[Any]:
    """Collect one column, trimming trailing blank cells so short columns stay short."""
    values = [record.get(header) for record in records]
    while values and values[-1] in (None, ""):
        values.pop()
    return values


def _load_csv(path: Path, columns: ColumnsConfig) -> DataView:
    with path.open(newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        records = list(reader)
        headers = list(reader.fieldnames or [])
    return _build_data_view(records, headers, columns)


def _load_yaml(path: Path, columns: ColumnsConfig) -> DataView:
    with path.open(encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise DataLoadError(f"Invalid YAML in {path}: {e}") from e

    if not data:
        raise DataLoadError(f"Empty data file: {path}")

    try:
        schema = TaskFileSchema.model_validate(data)
    except ValidationError as e:
        raise DataLoadError(f"Invalid task file {path}: {e}") from e

    # Header order: first appearance across rows
    headers: list[str] = []
    for record in schema.tasks:
        for key in record:
            if key not in headers:
                headers.append(key)
    return _build_data_view(schema.tasks, headers, columns)


def load_data_view(path: Path | str, columns: ColumnsConfig | None = None) -> DataView:
    """Load a task table from a CSV or YAML file.

    Args:
        path: Path to a .csv, .yaml or .yml file
        columns: Header names per role (defaults apply when omitted)

    Returns:
        DataView with every column bound by role

    Raises:
        DataLoadError: If the file is missing, unsupported or malformed
    """
    path = Path(path)
    columns = columns or ColumnsConfig()

    if not path.exists():
        raise DataLoadError(f"Data file not found: {path}")

    suffix = path.suffix.lower()
    if suffix in CSV_SUFFIXES:
        return _load_csv(path, columns)
    if suffix in YAML_SUFFIXES:
        return _load_yaml(path, columns)
    raise DataLoadError(f"Unsupported data file type '{path.suffix}' (use .csv, .yaml or .yml)")
