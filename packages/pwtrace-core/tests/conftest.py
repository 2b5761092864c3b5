"""Shared test fixtures — in-memory ZIP archives and trace text builders."""

from __future__ import annotations

import io
import json
import zipfile
from typing import Any

import pytest


def build_zip(entries: dict[str, Any], compression: int = zipfile.ZIP_DEFLATED) -> bytes:
    """Build a ZIP from ``{name: content}``; names ending in ``/`` become directories."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression) as zf:
        for name, content in entries.items():
            if name.endswith("/"):
                zf.writestr(zipfile.ZipInfo(name), b"")
            else:
                zf.writestr(name, content)
    return buf.getvalue()


def trace_text(*events: dict[str, Any]) -> str:
    """Line-delimited JSON, one event per line."""
    return "\n".join(json.dumps(e) for e in events) + "\n"


def before(call_id: str, start: float, method: str = "click", **extra: Any) -> dict[str, Any]:
    event = {"type": "before", "callId": call_id, "startTime": start, "class": "Frame", "method": method}
    event.update(extra)
    return event


def after(call_id: str, end: float, **extra: Any) -> dict[str, Any]:
    event = {"type": "after", "callId": call_id, "endTime": end}
    event.update(extra)
    return event


CONTEXT_OPTIONS = {
    "type": "context-options",
    "version": 6,
    "browserName": "chromium",
    "platform": "linux",
    "playwrightVersion": "1.48.0",
    "wallTime": 1700000000000,
    "monotonicTime": 50,
    "title": "checkout flow",
    "options": {"viewport": {"width": 1280, "height": 720}},
}

SAMPLE_EVENTS = [
    CONTEXT_OPTIONS,
    before("call@1", 100, method="newPage", **{"class": "BrowserContext"}),
    after("call@1", 120),
    before("call@2", 130, method="goto", params={"url": "https://example.com"}, pageId="page@1"),
    {"type": "log", "callId": "call@2", "time": 135, "message": "navigating to \"https://example.com\""},
    {"type": "screencast-frame", "pageId": "page@1", "sha1": "abc.jpeg", "width": 1280, "height": 720, "timestamp": 140},
    after("call@2", 200),
    before("call@3", 210, method="click", pageId="page@1", parentId="call@2", title="Click submit"),
    {"type": "input", "callId": "call@3", "inputSnapshot": "snapshot@3"},
    after("call@3", 260, error={"message": "Timeout 30000ms exceeded", "stack": "at click"}),
    {"type": "screencast-frame", "pageId": "page@1", "sha1": "def.jpeg", "width": 1280, "height": 720, "timestamp": 250},
    {"type": "frame-snapshot", "snapshot": {"frameId": "frame@1"}},
]

NETWORK_EVENTS = [
    {"type": "resource-snapshot", "snapshot": {"request": {"url": "https://example.com/"}}},
]


@pytest.fixture
def make_zip():
    """Return the ZIP builder."""
    return build_zip


@pytest.fixture
def sample_trace_text() -> str:
    return trace_text(*SAMPLE_EVENTS)


@pytest.fixture
def sample_trace_zip(sample_trace_text) -> bytes:
    return build_zip({
        "0.trace": sample_trace_text,
        "0.network": trace_text(*NETWORK_EVENTS),
        "resources/": b"",
        "resources/abc.jpeg": b"\xff\xd8jpeg",
    })
