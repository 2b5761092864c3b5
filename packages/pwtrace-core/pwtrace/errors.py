"""Exceptions raised when an archive cannot be loaded."""

from __future__ import annotations


class TraceLoadError(Exception):
    """Base class for fatal load failures."""


class ArchiveError(TraceLoadError):
    """The byte buffer is not a well-formed ZIP container."""


class EntryNotFoundError(TraceLoadError):
    """A named entry does not exist in the archive."""


class ReadError(TraceLoadError):
    """An entry exists but its data is corrupt or undecodable."""


class NoRecognizedFormat(TraceLoadError):
    """The archive is neither a trace, a report bundle, nor a test-case bundle."""


class MissingRequiredEntry(TraceLoadError):
    """A trace archive has no ``.trace`` entries (or a report has no nested archives)."""


class ArchiveTooDeep(TraceLoadError):
    """Nested report archives exceed the allowed depth."""
