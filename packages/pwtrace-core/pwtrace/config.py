"""Configuration from environment variables (read by the CLI only)."""

from __future__ import annotations

import os

from pwtrace.loader.trace_loader import DEFAULT_MAX_DEPTH

DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_max_depth() -> int:
    """Return the report-bundle nesting limit from ``PWTRACE_MAX_DEPTH``.

    Raises:
        ValueError: If the value is not a positive integer.
    """
    raw = os.environ.get("PWTRACE_MAX_DEPTH", "").strip()
    if not raw:
        return DEFAULT_MAX_DEPTH
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"PWTRACE_MAX_DEPTH must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"PWTRACE_MAX_DEPTH must be at least 1, got {value}")
    return value


def get_log_level() -> str:
    """Return the log level from ``PWTRACE_LOG_LEVEL`` (default ``WARNING``)."""
    level = os.environ.get("PWTRACE_LOG_LEVEL", "").upper() or DEFAULT_LOG_LEVEL
    if level not in LOG_LEVELS:
        raise ValueError(f"Unsupported log level: {level!r}. Choose from {LOG_LEVELS}")
    return level
