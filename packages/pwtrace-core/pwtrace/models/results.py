"""Load result models — what comes back after loading an archive."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from pwtrace.models.test_case import TestCaseCollection
from pwtrace.models.trace import TraceModel


class ArchiveKind(str, Enum):
    single_trace = "single_trace"
    report_bundle = "report_bundle"
    test_case_bundle = "test_case_bundle"


class LoadDiagnostic(BaseModel):
    """A non-fatal problem found while loading; the model is still usable."""
    source: str = Field(..., description="Archive entry (or folder) the problem came from")
    message: str
    line: int | None = Field(None, description="1-based line number for event decode problems")

    def __str__(self) -> str:
        where = f"{self.source}:{self.line}" if self.line is not None else self.source
        return f"{where}: {self.message}"


class TraceLoadResult(BaseModel):
    """Result of loading a trace archive (single trace or report bundle)."""
    model: TraceModel
    diagnostics: list[LoadDiagnostic] = Field(default_factory=list)


class TestCaseLoadResult(BaseModel):
    """Result of loading a test-case bundle."""
    __test__ = False

    collection: TestCaseCollection
    diagnostics: list[LoadDiagnostic] = Field(default_factory=list)


class ArchiveLoadResult(BaseModel):
    """Result of :func:`pwtrace.loader.load_archive` — exactly one of ``trace``/``test_cases`` is set."""
    kind: ArchiveKind
    trace: TraceModel | None = None
    test_cases: TestCaseCollection | None = None
    diagnostics: list[LoadDiagnostic] = Field(default_factory=list)
