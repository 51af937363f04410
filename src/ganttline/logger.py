"""Logging configuration for ganttline with custom verbosity levels."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

# Define custom levels between standard logging levels
SUMMARY_LEVEL = 25  # Between INFO (20) and WARNING (30) - for verbosity level 1
DETAILS_LEVEL = 15  # Between DEBUG (10) and INFO (20) - for verbosity level 2

logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
logging.addLevelName(DETAILS_LEVEL, "DETAILS")

# Verbosity level constants for external use
VERBOSITY_SILENT = 0  # Only errors
VERBOSITY_SUMMARY = 1  # One line per update
VERBOSITY_DETAILS = 2  # Per-row degradations
VERBOSITY_DEBUG = 3  # Full geometry dump


class GanttlineLogger(logging.Logger):
    """Custom logger with semantic verbosity methods.

    Provides methods that correspond to verbosity levels:
    - summary(): verbosity level 1 - what an update produced
    - details(): verbosity level 2 - per-row diagnostics
    - degraded(): verbosity level 2 - one input row rendered with degraded geometry
    - debug(): verbosity level 3 - per-row geometry
    """

    def summary(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log an update summary (verbosity level 1)."""
        if self.isEnabledFor(SUMMARY_LEVEL):
            self._log(SUMMARY_LEVEL, msg, args, **kwargs)

    def details(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log per-row details (verbosity level 2)."""
        if self.isEnabledFor(DETAILS_LEVEL):
            self._log(DETAILS_LEVEL, msg, args, **kwargs)

    def degraded(self, index: int, reason: str) -> None:
        """Log that input row `index` rendered with reduced geometry (verbosity level 2)."""
        if self.isEnabledFor(DETAILS_LEVEL):
            self._log(DETAILS_LEVEL, "Row %d: %s", (index, reason))


def get_logger() -> GanttlineLogger:
    """Get the ganttline logger instance (singleton).

    Returns the same logger instance on every call. Use setup_logger()
    to configure it before first use.

    Returns:
        The ganttline logger singleton instance
    """
    logging.setLoggerClass(GanttlineLogger)
    logger = logging.getLogger("ganttline")
    assert isinstance(logger, GanttlineLogger)
    return logger


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Configure the ganttline logger with verbosity level.

    Can be called multiple times to reconfigure the logger.

    Args:
        verbosity: 0=silent (errors only), 1=summary, 2=details, 3=debug
        stream: Optional output stream (defaults to sys.stderr, useful for testing)
    """
    logger = get_logger()

    # Clear existing handlers
    logger.handlers.clear()

    level_map = {
        VERBOSITY_SILENT: logging.ERROR,
        VERBOSITY_SUMMARY: SUMMARY_LEVEL,
        VERBOSITY_DETAILS: DETAILS_LEVEL,
        VERBOSITY_DEBUG: logging.DEBUG,
    }
    logger.setLevel(level_map.get(verbosity, logging.ERROR))

    output_stream = stream if stream is not None else sys.stderr

    # Handler with clean formatting (no level prefix)
    handler = logging.StreamHandler(output_stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Reset the logger to clean state.

    Useful for testing to ensure clean state between tests.
    """
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.ERROR)


def details_enabled() -> bool:
    """Check if details-level logging is enabled (verbosity >= 2)."""
    return get_logger().isEnabledFor(DETAILS_LEVEL)


def debug_enabled() -> bool:
    """Check if debug-level logging is enabled (verbosity >= 3)."""
    return get_logger().isEnabledFor(logging.DEBUG)
