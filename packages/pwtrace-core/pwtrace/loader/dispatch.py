"""Dispatcher — classify an archive and hand it to the matching loader."""

from __future__ import annotations

import logging

from pwtrace.archive.classifier import classify
from pwtrace.archive.reader import ArchiveReader
from pwtrace.loader.test_case_loader import load_test_cases_reader
from pwtrace.loader.trace_loader import DEFAULT_MAX_DEPTH, check_max_depth, load_trace_reader
from pwtrace.models.results import ArchiveKind, ArchiveLoadResult

logger = logging.getLogger(__name__)


def load_archive(data: bytes, *, max_depth: int = DEFAULT_MAX_DEPTH) -> ArchiveLoadResult:
    """Load any supported archive: single trace, report bundle or test-case bundle.

    Raises:
        ArchiveError: If *data* is not a ZIP archive.
        NoRecognizedFormat: If the archive matches no supported layout.
        TraceLoadError: Any other fatal failure from the trace loader.
        ValueError: If *max_depth* is below 1.
    """
    check_max_depth(max_depth)
    with ArchiveReader.open(data) as reader:
        kind = classify(reader)
        logger.info("Archive classified as %s", kind.value)

        if kind == ArchiveKind.test_case_bundle:
            result = load_test_cases_reader(reader)
            return ArchiveLoadResult(
                kind=kind,
                test_cases=result.collection,
                diagnostics=result.diagnostics,
            )

        trace_result = load_trace_reader(reader, kind, max_depth=max_depth)
        return ArchiveLoadResult(
            kind=kind,
            trace=trace_result.model,
            diagnostics=trace_result.diagnostics,
        )
