"""Archive classification — decide what kind of archive a ZIP holds."""

from __future__ import annotations

import fnmatch
import posixpath

from pwtrace.archive.reader import ArchiveReader
from pwtrace.errors import NoRecognizedFormat
from pwtrace.models.results import ArchiveKind

REPORT_ENTRY_PATTERN = "data/*.zip"
TRACE_SUFFIX = ".trace"
NETWORK_SUFFIX = ".network"
RESOURCES_PREFIX = "resources/"


def is_report_entry(name: str) -> bool:
    return fnmatch.fnmatchcase(name, REPORT_ENTRY_PATTERN)


def is_ignored_entry(name: str) -> bool:
    """True for macOS metadata and dot-files, which never belong to a test case."""
    parts = [p for p in name.split("/") if p]
    if not parts:
        return True
    return "__MACOSX" in parts or parts[-1].startswith(".")


def group_test_case_entries(reader: ArchiveReader) -> dict[str, list[str]]:
    """Group file entries by their first path segment, in discovery order.

    A top-level file is its own group. Directory markers and ignored
    entries are left out.
    """
    groups: dict[str, list[str]] = {}
    for name in reader.names():
        if reader.is_dir(name) or is_ignored_entry(name):
            continue
        folder = name.strip("/").split("/")[0]
        if not folder:
            continue
        groups.setdefault(folder, []).append(name)
    return groups


def trace_ordinals(names: list[str]) -> list[str]:
    """Distinct ``<ordinal>`` prefixes of ``<ordinal>.trace`` entries, in discovery order."""
    ordinals: list[str] = []
    seen: set[str] = set()
    for name in names:
        if name.endswith(TRACE_SUFFIX):
            ordinal = name[: -len(TRACE_SUFFIX)]
            if ordinal not in seen:
                seen.add(ordinal)
                ordinals.append(ordinal)
    return ordinals


def resource_entries(reader: ArchiveReader) -> list[str]:
    return [
        name for name in reader.names()
        if name.startswith(RESOURCES_PREFIX) and not reader.is_dir(name)
    ]


def classify(reader: ArchiveReader) -> ArchiveKind:
    """Classify an opened archive; the first matching rule wins.

    1. any ``data/*.zip`` entry → report bundle
    2. any ``*.trace`` entry → single trace
    3. at least one test folder → test-case bundle

    Raises:
        NoRecognizedFormat: If none of the rules match.
    """
    names = reader.names()
    if any(is_report_entry(n) for n in names):
        return ArchiveKind.report_bundle
    if any(n.endswith(TRACE_SUFFIX) for n in names):
        return ArchiveKind.single_trace
    if group_test_case_entries(reader):
        return ArchiveKind.test_case_bundle
    raise NoRecognizedFormat(
        f"Archive with {len(names)} entries is not a trace, report or test-case bundle"
    )


def entry_basename(name: str) -> str:
    return posixpath.basename(name.rstrip("/"))
