from pwtrace.models.events import (
    AfterActionEvent, BeforeActionEvent, ContextOptionsEvent, InputActionEvent, LogEvent,
    ScreencastFrameEvent, SerializedError, TraceEvent, UncaughtErrorEvent, UnrecognizedEvent,
    decode_event, encode_event,
)
from pwtrace.models.trace import (
    Action, Context, ErrorEvent, LogEntry, Page, ResourceSnapshot, ScreencastFrame, TraceModel,
)
from pwtrace.models.test_case import TestAttachment, TestCase, TestCaseCollection, TestStatus
from pwtrace.models.results import (
    ArchiveKind, ArchiveLoadResult, LoadDiagnostic, TestCaseLoadResult, TraceLoadResult,
)

__all__ = [
    "TraceEvent", "ContextOptionsEvent", "BeforeActionEvent", "AfterActionEvent",
    "InputActionEvent", "ScreencastFrameEvent", "LogEvent", "UncaughtErrorEvent",
    "UnrecognizedEvent", "SerializedError", "decode_event", "encode_event",
    "TraceModel", "Context", "Action", "Page", "ScreencastFrame", "LogEntry",
    "ErrorEvent", "ResourceSnapshot",
    "TestCase", "TestCaseCollection", "TestAttachment", "TestStatus",
    "ArchiveKind", "LoadDiagnostic", "TraceLoadResult", "TestCaseLoadResult",
    "ArchiveLoadResult",
]
