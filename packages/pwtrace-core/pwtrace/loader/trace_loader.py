"""Trace loader — single trace archives and report bundles of nested traces."""

from __future__ import annotations

import logging

from pwtrace.archive.classifier import (
    NETWORK_SUFFIX,
    TRACE_SUFFIX,
    classify,
    entry_basename,
    is_report_entry,
    resource_entries,
    trace_ordinals,
)
from pwtrace.archive.reader import ArchiveReader
from pwtrace.engine.reconstruct import reconstruct_context
from pwtrace.errors import ArchiveTooDeep, MissingRequiredEntry, NoRecognizedFormat, TraceLoadError
from pwtrace.models.results import ArchiveKind, LoadDiagnostic, TraceLoadResult
from pwtrace.models.trace import Context, ResourceSnapshot, TraceModel
from pwtrace.utils.encoding import MIME_TYPES, extension

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 8


def load_trace(data: bytes, *, max_depth: int = DEFAULT_MAX_DEPTH) -> TraceLoadResult:
    """Load a trace archive (single trace or report bundle) from bytes.

    Raises:
        ArchiveError: If *data* is not a ZIP archive.
        MissingRequiredEntry: If the archive holds no ``.trace`` entries.
        ArchiveTooDeep: If report bundles nest deeper than *max_depth*.
        ReadError: If a trace entry (or nested archive) cannot be read.
        ValueError: If *max_depth* is below 1.
    """
    check_max_depth(max_depth)
    diagnostics: list[LoadDiagnostic] = []
    contexts = _load_trace_bytes(data, depth=0, max_depth=max_depth, diagnostics=diagnostics)
    return TraceLoadResult(model=TraceModel(contexts=contexts), diagnostics=diagnostics)


def load_trace_reader(
    reader: ArchiveReader,
    kind: ArchiveKind,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> TraceLoadResult:
    """Load an already opened and classified archive (used by the dispatcher)."""
    check_max_depth(max_depth)
    diagnostics: list[LoadDiagnostic] = []
    contexts = _load_classified(reader, kind, depth=0, max_depth=max_depth, diagnostics=diagnostics)
    return TraceLoadResult(model=TraceModel(contexts=contexts), diagnostics=diagnostics)


def check_max_depth(max_depth: int) -> None:
    """Raises ValueError unless *max_depth* is a positive integer."""
    if max_depth < 1:
        raise ValueError(f"max_depth must be at least 1, got {max_depth}")


def _load_trace_bytes(
    data: bytes,
    *,
    depth: int,
    max_depth: int,
    diagnostics: list[LoadDiagnostic],
    prefix: str = "",
) -> list[Context]:
    if depth > max_depth:
        raise ArchiveTooDeep(f"Nested report archives exceed the maximum depth of {max_depth}")

    with ArchiveReader.open(data) as reader:
        logger.info("Opened archive %s with %d entries", prefix or "<root>", len(reader))
        try:
            kind = classify(reader)
        except NoRecognizedFormat as exc:
            raise MissingRequiredEntry(f"No .trace entries found in archive: {exc}") from exc
        return _load_classified(
            reader, kind, depth=depth, max_depth=max_depth, diagnostics=diagnostics, prefix=prefix,
        )


def _load_classified(
    reader: ArchiveReader,
    kind: ArchiveKind,
    *,
    depth: int,
    max_depth: int,
    diagnostics: list[LoadDiagnostic],
    prefix: str = "",
) -> list[Context]:
    if kind == ArchiveKind.report_bundle:
        return _load_report(reader, depth=depth, max_depth=max_depth, diagnostics=diagnostics, prefix=prefix)
    if kind == ArchiveKind.single_trace:
        return _load_single(reader, diagnostics=diagnostics, prefix=prefix)
    raise MissingRequiredEntry("No .trace entries found in archive")


def _load_report(
    reader: ArchiveReader,
    *,
    depth: int,
    max_depth: int,
    diagnostics: list[LoadDiagnostic],
    prefix: str,
) -> list[Context]:
    nested = [n for n in reader.names() if is_report_entry(n)]
    if not nested:
        raise MissingRequiredEntry("Report archive contains no data/*.zip entries")

    logger.info("Report archive with %d nested trace archive(s)", len(nested))
    contexts: list[Context] = []
    for name in nested:
        label = f"{prefix}{name}"
        logger.info("Loading nested archive: %s", label)
        try:
            nested_bytes = reader.read_bytes(name)
            contexts.extend(_load_trace_bytes(
                nested_bytes,
                depth=depth + 1,
                max_depth=max_depth,
                diagnostics=diagnostics,
                prefix=f"{label}!",
            ))
        except ArchiveTooDeep:
            raise
        except TraceLoadError as exc:
            # Same exception type, message names the nested entry
            raise type(exc)(f"Nested archive {label}: {exc}") from exc

    logger.info("Loaded %d context(s) from report archive", len(contexts))
    return contexts


def _load_single(
    reader: ArchiveReader,
    *,
    diagnostics: list[LoadDiagnostic],
    prefix: str,
) -> list[Context]:
    ordinals = trace_ordinals(reader.names())
    if not ordinals:
        raise MissingRequiredEntry("No .trace entries found in archive")

    resources = [
        ResourceSnapshot(
            url=name,
            sha1=entry_basename(name).split(".", 1)[0],
            content_type=MIME_TYPES.get(extension(name)),
        )
        for name in resource_entries(reader)
    ]

    contexts: list[Context] = []
    for ordinal in ordinals:
        trace_name = f"{ordinal}{TRACE_SUFFIX}"
        network_name = f"{ordinal}{NETWORK_SUFFIX}"
        logger.info("Processing trace: %s%s", prefix, trace_name)

        trace_text = reader.read_text(trace_name)
        network_text = reader.read_text(network_name) if reader.has(network_name) else None

        context, found = reconstruct_context(
            trace_text,
            network_text,
            source=f"{prefix}{trace_name}",
            network_source=f"{prefix}{network_name}",
        )
        context.resources = [r.model_copy() for r in resources]
        diagnostics.extend(found)
        logger.info("Parsed %d actions, %d pages", len(context.actions), len(context.pages))
        contexts.append(context)
    return contexts
