"""Unified configuration loader for layout, column mapping and tooltips.

This module provides a single configuration file format (ganttline_config.yaml)
with one optional section per concern:

    layout:   pixel constants for rows, bars, panes and the timeline width
    columns:  data-file header name for each column role
    tooltip:  pointer offset of the hover overlay
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from . import context

CONFIG_FILENAME = "ganttline_config.yaml"


class LayoutConfig(BaseModel):
    """Pixel constants shared by every row and pane."""

    row_height: float = Field(default=50, gt=0)
    bar_height: float = Field(default=14, gt=0)
    bar_gap: float = Field(default=1, ge=0)
    header_height: float = Field(default=60, gt=0)
    label_width: float = Field(default=120, gt=0)
    task_column_width: float = Field(default=180, gt=0)
    plot_width: float = Field(default=4600, gt=0)  # Full timeline width, not the viewport
    plot_padding: float = Field(default=20, ge=0)
    milestone_size: float = Field(default=10, gt=0)
    # "proportional": overlay width = bar width * percent / 100
    # "none": overlay drawn zero-width
    progress_policy: Literal["proportional", "none"] = "proportional"

    @model_validator(mode="after")
    def validate_stacked_bars_fit(self) -> LayoutConfig:
        """Ensure a planned/actual bar pair fits inside one row."""
        if 2 * self.bar_height + self.bar_gap > self.row_height:
            raise ValueError(
                f"layout.row_height ({self.row_height}) must hold two bars of "
                f"{self.bar_height}px plus a {self.bar_gap}px gap"
            )
        return self

    @property
    def label_pane_width(self) -> float:
        """Width of the fixed label column (label + task columns)."""
        return self.label_width + self.task_column_width


class ColumnsConfig(BaseModel):
    """Header names used to bind data-file columns to roles.

    Matching is case-insensitive. A role whose header is missing from the
    file is simply absent.
    """

    category: str = "category"
    task: str = "task"
    actual_start: str = "start"
    actual_end: str = "end"
    planned_start: str = "planned_start"
    planned_end: str = "planned_end"
    milestone: str = "milestone"
    progress: str = "progress"

    def by_role(self) -> dict[str, str]:
        """Return the role -> header mapping."""
        return self.model_dump()


class TooltipConfig(BaseModel):
    """Placement of the hover overlay relative to the pointer."""

    offset_x: float = 10
    offset_y: float = 10


class UnifiedConfig(BaseModel):
    """Unified configuration with all sections defaulted."""

    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    columns: ColumnsConfig = Field(default_factory=ColumnsConfig)
    tooltip: TooltipConfig = Field(default_factory=TooltipConfig)


def load_unified_config(config_path: Path | str) -> UnifiedConfig:
    """Load unified configuration from YAML file.

    Args:
        config_path: Path to ganttline_config.yaml file

    Returns:
        UnifiedConfig with any omitted sections defaulted

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is empty or invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open() as f:
        try:
            data: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    if not data:
        raise ValueError("Empty configuration file")

    if not isinstance(data, dict):
        raise ValueError("Config must be a mapping of sections")

    unknown = set(data) - set(UnifiedConfig.model_fields)
    if unknown:
        raise ValueError(f"Unknown config sections: {', '.join(sorted(unknown))}")

    try:
        return UnifiedConfig.model_validate(data)
    except ValidationError as e:
        # pydantic's ValidationError is already a ValueError; re-raise with the path
        raise ValueError(f"Invalid config {config_path}: {e}") from e


def discover_config(data_path: Path | None = None, config_path: Path | None = None) -> Path | None:
    """Find the config file to use.

    Search order:
    1. Explicit config_path argument
    2. Global context (set via CLI --config)
    3. data file directory / ganttline_config.yaml
    4. Current directory / ganttline_config.yaml
    """
    if config_path is not None:
        return config_path

    ctx_config = context.get_config_path()
    if ctx_config is not None:
        return ctx_config

    if data_path is not None:
        dir_config = Path(data_path).parent / CONFIG_FILENAME
        if dir_config.exists():
            return dir_config

    cwd_config = Path(CONFIG_FILENAME)
    if cwd_config.exists():
        return cwd_config

    return None
