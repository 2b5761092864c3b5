"""Trace models — the reconstructed view of a recorded browser session."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from pwtrace.models.events import SerializedError, TraceEvent, WireModel


class LogEntry(WireModel):
    """A timestamped log line recorded while an action was running."""
    time: float
    message: str


class ErrorEvent(WireModel):
    """An uncaught error that belongs to the context rather than an action."""
    message: str
    stack: str | None = None


class ResourceSnapshot(WireModel):
    """A resource stored in the archive under ``resources/``."""
    url: str
    content_type: str | None = None
    sha1: str | None = None


class ScreencastFrame(WireModel):
    sha1: str
    timestamp: float
    width: int
    height: int
    frame_swap_wall_time: float | None = None


class Page(WireModel):
    """A browser page and the screencast frames captured for it."""
    page_id: str
    screencast_frames: list[ScreencastFrame] = Field(default_factory=list)


class Action(WireModel):
    """One API call, built from a ``before`` event and its matching ``after``.

    ``end_time`` stays ``None`` while the call has not completed.
    """
    action_type: str = Field("action", alias="type")
    call_id: str
    start_time: float
    end_time: float | None = None
    title: str | None = None
    class_name: str | None = Field(None, alias="class")
    method: str | None = None
    params: dict[str, Any] = Field(default_factory=dict)
    page_id: str | None = None
    parent_id: str | None = None
    error: SerializedError | None = None
    result: Any = None
    log: list[LogEntry] = Field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return self.end_time is not None

    @property
    def duration(self) -> float | None:
        if self.end_time is None:
            return None
        return self.end_time - self.start_time

    @property
    def api_name(self) -> str:
        """``Class.method`` label, falling back to the title or call id."""
        if self.class_name and self.method:
            return f"{self.class_name}.{self.method}"
        return self.method or self.title or self.call_id


class Context(WireModel):
    """One browser context (session) recorded in a ``.trace`` entry."""
    start_time: float = 0.0
    end_time: float = 0.0
    wall_time: float = 0.0
    browser_name: str = ""
    platform: str | None = None
    playwright_version: str | None = None
    title: str | None = None
    pages: list[Page] = Field(default_factory=list)
    actions: list[Action] = Field(default_factory=list)
    resources: list[ResourceSnapshot] = Field(default_factory=list)
    events: list[TraceEvent] = Field(default_factory=list)
    errors: list[ErrorEvent] = Field(default_factory=list)

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    def action_by_id(self, call_id: str) -> Action | None:
        for action in self.actions:
            if action.call_id == call_id:
                return action
        return None

    def dangling_parent_ids(self) -> list[str]:
        """Call ids of actions whose ``parent_id`` matches no action in this context."""
        known = {a.call_id for a in self.actions}
        return [
            a.call_id for a in self.actions
            if a.parent_id is not None and a.parent_id not in known
        ]

    def children_of(self, call_id: str) -> list[Action]:
        return [a for a in self.actions if a.parent_id == call_id]


class TraceModel(WireModel):
    """All contexts found in an archive, in discovery order."""
    contexts: list[Context] = Field(default_factory=list)

    @property
    def action_count(self) -> int:
        return sum(len(c.actions) for c in self.contexts)
