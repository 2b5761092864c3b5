"""MIME type lookup and ``data:`` URL encoding for archive attachments."""

from __future__ import annotations

import base64
import posixpath

MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webm": "video/webm",
    ".mp4": "video/mp4",
    ".zip": "application/zip",
    ".json": "application/json",
    ".html": "text/html",
    ".css": "text/css",
    ".js": "application/javascript",
    ".txt": "text/plain",
    ".md": "text/markdown",
}

DEFAULT_MIME_TYPE = "application/octet-stream"


def extension(name: str) -> str:
    """Lower-cased extension of *name*, including the dot (``""`` if none)."""
    return posixpath.splitext(name)[1].lower()


def mime_type_for(name: str) -> str:
    return MIME_TYPES.get(extension(name), DEFAULT_MIME_TYPE)


def to_data_url(data: bytes, mime_type: str) -> str:
    """Encode *data* as a self-contained ``data:<mime>;base64,...`` URL."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"
