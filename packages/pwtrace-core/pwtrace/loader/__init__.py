"""Archive loaders — bytes in, model plus diagnostics out."""

from __future__ import annotations

from pwtrace.loader.dispatch import load_archive
from pwtrace.loader.test_case_loader import load_test_cases
from pwtrace.loader.trace_loader import DEFAULT_MAX_DEPTH, load_trace

__all__ = ["load_archive", "load_trace", "load_test_cases", "DEFAULT_MAX_DEPTH"]
