"""ArchiveReader — read-only access to a ZIP container held in memory."""

from __future__ import annotations

import io
import zipfile
import zlib

from pwtrace.errors import ArchiveError, EntryNotFoundError, ReadError

# Errors zipfile raises while decompressing a damaged or unsupported member.
_ENTRY_READ_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    EOFError,
    NotImplementedError,
    RuntimeError,
    OSError,
)


class ArchiveReader:
    """A ZIP archive opened from a byte buffer.

    Nothing is cached: every ``read_*`` call decompresses the entry again.
    Nested archives are handled by opening a new reader over the bytes
    returned by :meth:`read_bytes`.
    """

    def __init__(self, zf: zipfile.ZipFile):
        self._zf = zf
        self._infos = {info.filename: info for info in zf.infolist()}

    @classmethod
    def open(cls, data: bytes) -> ArchiveReader:
        """Open *data* as a ZIP container.

        Raises:
            ArchiveError: If the buffer is not a valid ZIP archive.
        """
        try:
            zf = zipfile.ZipFile(io.BytesIO(data))
        except (zipfile.BadZipFile, OSError, ValueError) as exc:
            raise ArchiveError(f"Not a valid ZIP archive: {exc}") from exc
        return cls(zf)

    def __enter__(self) -> ArchiveReader:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._zf.close()

    def __len__(self) -> int:
        return len(self._infos)

    def names(self) -> list[str]:
        """Entry names in archive order, directory markers included."""
        return [info.filename for info in self._zf.infolist()]

    def has(self, name: str) -> bool:
        return name in self._infos

    def is_dir(self, name: str) -> bool:
        info = self._infos.get(name)
        if info is None:
            raise EntryNotFoundError(f"Entry not found: {name}")
        return info.is_dir()

    def read_bytes(self, name: str) -> bytes:
        """Return the decompressed content of entry *name*.

        Raises:
            EntryNotFoundError: If the entry does not exist.
            ReadError: If the entry data is corrupt or cannot be decompressed.
        """
        if name not in self._infos:
            raise EntryNotFoundError(f"Entry not found: {name}")
        try:
            return self._zf.read(name)
        except _ENTRY_READ_ERRORS as exc:
            raise ReadError(f"Failed to read {name}: {exc}") from exc

    def read_text(self, name: str, encoding: str = "utf-8") -> str:
        """Return entry *name* decoded as text (strict decoding)."""
        raw = self.read_bytes(name)
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError as exc:
            raise ReadError(f"Failed to decode {name} as {encoding}: {exc}") from exc
