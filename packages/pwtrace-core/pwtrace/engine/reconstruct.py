"""Reconstruction engine — replay trace events into a Context."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from pwtrace.models.events import (
    AfterActionEvent,
    BeforeActionEvent,
    ContextOptionsEvent,
    LogEvent,
    ScreencastFrameEvent,
    TraceEvent,
    UncaughtErrorEvent,
    decode_event,
)
from pwtrace.models.results import LoadDiagnostic
from pwtrace.models.trace import (
    Action,
    Context,
    ErrorEvent,
    LogEntry,
    Page,
    ScreencastFrame,
)

logger = logging.getLogger(__name__)


class TraceReconstructor:
    """Single-pass state machine over the events of one ``.trace`` entry.

    Feed lines (or decoded events) in file order, then call :meth:`finish`.
    Actions are keyed by call id while in progress and sorted by start
    time when the context is built.
    """

    def __init__(self, source: str = "<trace>") -> None:
        self.source = source
        self.diagnostics: list[LoadDiagnostic] = []
        self._context = Context()
        self._actions: dict[str, Action] = {}
        self._pages: dict[str, Page] = {}
        self._events: list[TraceEvent] = []
        self._origin: float | None = None

    def feed_text(self, text: str, *, source: str | None = None, apply: bool = True) -> None:
        """Decode every non-blank line of *text*.

        With ``apply=False`` the events are only retained (used for network
        entries, which drive no state).
        """
        source = source or self.source
        for lineno, raw in enumerate(text.split("\n"), start=1):
            line = raw.strip()
            if not line:
                continue
            try:
                event = decode_event(line)
            except ValidationError as exc:
                self._warn(source, _summarize(exc), line=lineno)
                continue
            if apply:
                self.apply(event)
            else:
                self._events.append(event)

    def apply(self, event: TraceEvent) -> None:
        """Apply one decoded event and retain it."""
        if isinstance(event, ContextOptionsEvent):
            self._on_context_options(event)
        elif isinstance(event, BeforeActionEvent):
            self._on_before(event)
        elif isinstance(event, AfterActionEvent):
            self._on_after(event)
        elif isinstance(event, ScreencastFrameEvent):
            self._on_screencast_frame(event)
        elif isinstance(event, LogEvent):
            self._on_log(event)
        elif isinstance(event, UncaughtErrorEvent):
            self._context.errors.append(ErrorEvent(message=event.message, stack=event.stack))
        self._events.append(event)

    def finish(self) -> Context:
        """Build the Context from everything fed so far."""
        ctx = self._context
        # sorted() is stable, so equal start times keep "before" order
        ctx.actions = sorted(self._actions.values(), key=lambda a: a.start_time)
        ctx.pages = list(self._pages.values())
        ctx.events = list(self._events)

        starts = [a.start_time for a in ctx.actions]
        if self._origin is not None:
            starts.append(self._origin)
        ctx.start_time = min(starts) if starts else 0.0
        ends = [a.end_time for a in ctx.actions if a.end_time is not None]
        ctx.end_time = max(ends) if ends else ctx.start_time

        for action in ctx.actions:
            if action.parent_id is not None and action.parent_id not in self._actions:
                self._warn(
                    self.source,
                    f"action {action.call_id} references unknown parent {action.parent_id}",
                )

        logger.debug(
            "Reconstructed %s: %d actions, %d pages, %d events",
            self.source, len(ctx.actions), len(ctx.pages), len(ctx.events),
        )
        return ctx

    # --- transitions ---

    def _on_context_options(self, event: ContextOptionsEvent) -> None:
        ctx = self._context
        ctx.browser_name = event.browser_name
        ctx.platform = event.platform
        ctx.playwright_version = event.playwright_version
        ctx.wall_time = event.wall_time
        ctx.title = event.title
        self._origin = event.monotonic_time

    def _on_before(self, event: BeforeActionEvent) -> None:
        if event.call_id in self._actions:
            self._warn(self.source, f"duplicate before event for {event.call_id} ignored")
            return
        self._actions[event.call_id] = Action(
            call_id=event.call_id,
            start_time=event.start_time,
            title=event.title,
            class_name=event.class_name,
            method=event.method,
            params=dict(event.params),
            page_id=event.page_id,
            parent_id=event.parent_id,
        )

    def _on_after(self, event: AfterActionEvent) -> None:
        action = self._actions.get(event.call_id)
        if action is None:
            return
        if action.end_time is not None:
            self._warn(self.source, f"duplicate after event for {event.call_id} ignored")
            return
        end_time = event.end_time
        if end_time < action.start_time:
            self._warn(
                self.source,
                f"action {event.call_id} ends ({end_time}) before it starts ({action.start_time})",
            )
            end_time = action.start_time
        action.end_time = end_time
        action.error = event.error
        action.result = event.result

    def _on_screencast_frame(self, event: ScreencastFrameEvent) -> None:
        page = self._pages.get(event.page_id)
        if page is None:
            page = self._pages[event.page_id] = Page(page_id=event.page_id)
        page.screencast_frames.append(ScreencastFrame(
            sha1=event.sha1,
            timestamp=event.timestamp,
            width=event.width,
            height=event.height,
            frame_swap_wall_time=event.frame_swap_wall_time,
        ))

    def _on_log(self, event: LogEvent) -> None:
        action = self._actions.get(event.call_id)
        if action is not None:
            action.log.append(LogEntry(time=event.time, message=event.message))

    def _warn(self, source: str, message: str, line: int | None = None) -> None:
        diag = LoadDiagnostic(source=source, message=message, line=line)
        logger.debug("Skipped: %s", diag)
        self.diagnostics.append(diag)


def reconstruct_context(
    trace_text: str,
    network_text: str | None = None,
    *,
    source: str = "<trace>",
    network_source: str | None = None,
) -> tuple[Context, list[LoadDiagnostic]]:
    """Reconstruct one Context from trace text and optional network text.

    Never raises on malformed lines: they are skipped and reported in the
    returned diagnostics.
    """
    rec = TraceReconstructor(source)
    rec.feed_text(trace_text)
    if network_text is not None:
        rec.feed_text(network_text, source=network_source or f"{source} (network)", apply=False)
    return rec.finish(), rec.diagnostics


def _summarize(exc: ValidationError) -> str:
    """One-line description of why a line did not decode."""
    errors = exc.errors()
    if not errors:
        return "invalid event"
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()))
    msg = first.get("msg", "invalid event")
    return f"{loc}: {msg}" if loc else msg
