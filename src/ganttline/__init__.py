"""Gantt-style timeline layout engine with frozen label and axis panes."""

__version__ = "0.1.0"
