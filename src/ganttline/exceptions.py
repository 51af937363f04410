"""Custom exceptions for ganttline."""


class GanttlineError(Exception):
    """Base exception for all ganttline errors."""

    pass


class DataLoadError(GanttlineError):
    """Raised when a task data file cannot be read."""

    pass
