"""Test-case loader — one TestCase per top-level folder of a results bundle.

Expected layout::

    test-case-1/
        error-context.md
        test-failed-1.png
        trace.zip
        video.webm
"""

from __future__ import annotations

import logging

from pwtrace.archive.classifier import entry_basename, group_test_case_entries
from pwtrace.archive.reader import ArchiveReader
from pwtrace.errors import TraceLoadError
from pwtrace.models.results import LoadDiagnostic, TestCaseLoadResult
from pwtrace.models.test_case import TestAttachment, TestCase, TestCaseCollection, TestStatus
from pwtrace.utils.encoding import extension, mime_type_for, to_data_url

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = (".md",)
SCREENSHOT_EXTENSIONS = (".png", ".jpg", ".jpeg")
VIDEO_EXTENSIONS = (".webm", ".mp4")
FAILURE_MARKERS = ("fail", "error")


def load_test_cases(data: bytes) -> TestCaseLoadResult:
    """Load every test folder in a ZIP archive.

    A folder whose files cannot be read is skipped and reported in the
    diagnostics; the remaining folders still load.

    Raises:
        ArchiveError: If *data* is not a ZIP archive.
    """
    with ArchiveReader.open(data) as reader:
        return load_test_cases_reader(reader)


def load_test_cases_reader(reader: ArchiveReader) -> TestCaseLoadResult:
    """Load test cases from an already opened archive."""
    groups = group_test_case_entries(reader)
    logger.info("Found %d test case folder(s)", len(groups))

    cases: list[TestCase] = []
    diagnostics: list[LoadDiagnostic] = []
    for folder, files in groups.items():
        try:
            cases.append(build_test_case(reader, folder, files))
        except TraceLoadError as exc:
            logger.warning("Failed to load test case %s: %s", folder, exc)
            diagnostics.append(LoadDiagnostic(source=folder, message=str(exc)))

    logger.info("Loaded %d test case(s)", len(cases))
    return TestCaseLoadResult(
        collection=TestCaseCollection(test_cases=cases),
        diagnostics=diagnostics,
    )


def build_test_case(reader: ArchiveReader, folder: str, files: list[str]) -> TestCase:
    """Assemble the TestCase for one folder from its files.

    Raises:
        ReadError / EntryNotFoundError: If any recognized file cannot be read.
    """
    markdown: str | None = None
    screenshots: list[TestAttachment] = []
    video: TestAttachment | None = None
    trace_file: TestAttachment | None = None

    for path in files:
        file_name = entry_basename(path).lower()
        ext = extension(file_name)

        if ext in MARKDOWN_EXTENSIONS:
            if markdown is None:
                markdown = reader.read_text(path)
        elif ext in SCREENSHOT_EXTENSIONS:
            screenshots.append(_attachment(reader, path))
        elif ext in VIDEO_EXTENSIONS:
            video = _attachment(reader, path)
        elif ext == ".zip" and "trace" in file_name:
            trace_file = _attachment(reader, path)

    status = detect_status(folder, markdown)
    error_message = first_line(markdown) if status == TestStatus.failed and markdown else None

    return TestCase(
        id=folder,
        name=format_test_name(folder),
        status=status,
        markdown_content=markdown,
        screenshots=screenshots,
        video=video,
        trace_file=trace_file,
        error_message=error_message,
    )


def detect_status(folder: str, markdown: str | None) -> TestStatus:
    """Failed if the folder name mentions a failure or an error report is present."""
    lowered = folder.lower()
    if markdown is not None or any(marker in lowered for marker in FAILURE_MARKERS):
        return TestStatus.failed
    return TestStatus.passed


def format_test_name(folder: str) -> str:
    """``"test-case_1"`` → ``"Test Case 1"``."""
    words = folder.replace("-", " ").replace("_", " ").split()
    return " ".join(w[:1].upper() + w[1:] for w in words)


def first_line(text: str) -> str | None:
    for line in text.split("\n"):
        if line.strip():
            return line.strip()
    return None


def _attachment(reader: ArchiveReader, path: str) -> TestAttachment:
    data = reader.read_bytes(path)
    mime_type = mime_type_for(path)
    return TestAttachment(
        name=entry_basename(path),
        mime_type=mime_type,
        data_url=to_data_url(data, mime_type),
        size_bytes=len(data),
    )
