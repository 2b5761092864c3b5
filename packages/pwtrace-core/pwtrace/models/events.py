"""Trace event records — one JSON object per line in a ``.trace``/``.network`` entry."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, TypeAdapter
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for models that use camelCase names on the wire."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )


class SerializedError(WireModel):
    """Error attached to an action that failed."""
    message: str | None = None
    stack: str | None = None


class ContextOptionsEvent(WireModel):
    type: Literal["context-options"] = "context-options"
    version: int
    browser_name: str
    platform: str | None = None
    playwright_version: str | None = None
    wall_time: float
    monotonic_time: float
    title: str | None = None


class BeforeActionEvent(WireModel):
    type: Literal["before"] = "before"
    call_id: str
    start_time: float
    title: str | None = None
    class_name: str = Field(alias="class")
    method: str
    params: dict[str, Any] = Field(default_factory=dict)
    page_id: str | None = None
    parent_id: str | None = None


class AfterActionEvent(WireModel):
    type: Literal["after"] = "after"
    call_id: str
    end_time: float
    error: SerializedError | None = None
    result: Any = None


class InputActionEvent(WireModel):
    type: Literal["input"] = "input"
    call_id: str
    input_snapshot: Any = None


class ScreencastFrameEvent(WireModel):
    type: Literal["screencast-frame"] = "screencast-frame"
    page_id: str
    sha1: str
    width: int
    height: int
    timestamp: float
    frame_swap_wall_time: float | None = None


class LogEvent(WireModel):
    """A log line emitted while an action is running."""
    type: Literal["log"] = "log"
    call_id: str
    time: float
    message: str


class UncaughtErrorEvent(WireModel):
    """An uncaught error reported for the whole context."""
    type: Literal["error"] = "error"
    message: str
    stack: str | None = None


class UnrecognizedEvent(BaseModel):
    """Any record whose ``type`` is unknown; all original fields are kept."""
    model_config = ConfigDict(extra="allow")
    type: Any = None


EVENT_KINDS = frozenset({
    "context-options", "before", "after", "input", "screencast-frame", "log", "error",
})


def _event_kind(value: Any) -> str:
    if isinstance(value, dict):
        kind = value.get("type")
    else:
        kind = getattr(value, "type", None)
    if isinstance(kind, str) and kind in EVENT_KINDS:
        return kind
    return "unrecognized"


TraceEvent = Annotated[
    Union[
        Annotated[ContextOptionsEvent, Tag("context-options")],
        Annotated[BeforeActionEvent, Tag("before")],
        Annotated[AfterActionEvent, Tag("after")],
        Annotated[InputActionEvent, Tag("input")],
        Annotated[ScreencastFrameEvent, Tag("screencast-frame")],
        Annotated[LogEvent, Tag("log")],
        Annotated[UncaughtErrorEvent, Tag("error")],
        Annotated[UnrecognizedEvent, Tag("unrecognized")],
    ],
    Discriminator(_event_kind),
]

_event_adapter: TypeAdapter[TraceEvent] = TypeAdapter(TraceEvent)


def decode_event(line: str | bytes) -> TraceEvent:
    """Decode one JSON line into a trace event.

    Records with an unknown ``type`` decode to :class:`UnrecognizedEvent`.

    Raises:
        pydantic.ValidationError: If the line is not a JSON object, or a known
            event kind is missing required fields.
    """
    return _event_adapter.validate_json(line)


def encode_event(event: TraceEvent) -> str:
    """Serialize an event back to its single-line JSON form."""
    return event.model_dump_json(by_alias=True, exclude_none=True)
