"""Read-only view over zip-packed skills.

Archives are read fully into memory and parsed per ``open()`` call; there is
no cross-call cache. Blocking work (reading the file, inflating an entry)
runs in a worker thread so the event loop stays responsive.
"""

from __future__ import annotations

import asyncio
import io
import zipfile
import zlib
from dataclasses import dataclass
from pathlib import Path

from skillz.skills.errors import ArchiveError

# File suffixes (compared case-insensitively) treated as skill archives.
ARCHIVE_SUFFIXES = frozenset({".zip", ".skill"})


def is_archive_path(path: Path) -> bool:
    """Return whether ``path`` has a skill archive suffix."""
    return path.suffix.lower() in ARCHIVE_SUFFIXES


@dataclass(frozen=True)
class ArchiveEntry:
    """One member of an archive.

    Attributes:
        name: Internal member name, ``/``-separated.
        is_dir: Whether the member is a directory marker.
    """

    name: str
    is_dir: bool


class ArchiveReader:
    """Read-only access to the members of a zip archive held in memory.

    Example::

        reader = await ArchiveReader.open(Path("skills/pdf.zip"))
        if reader.has_file("pdf/SKILL.md"):
            data = await reader.read("pdf/SKILL.md")
    """

    def __init__(self, data: bytes, *, source: str | Path = "<memory>") -> None:
        """Parse the archive directory from raw bytes.

        Args:
            data: Complete archive bytes.
            source: Label used in error messages.

        Raises:
            ArchiveError: If the bytes are not a readable zip archive.
        """
        self.source = Path(source)
        try:
            self._zip = zipfile.ZipFile(io.BytesIO(data))
        except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError) as exc:
            raise ArchiveError(self.source, "not a valid zip archive", cause=exc) from exc
        self._entries = {info.filename: info.is_dir() for info in self._zip.infolist()}

    @classmethod
    async def open(cls, path: Path) -> ArchiveReader:
        """Read an archive file from disk.

        Args:
            path: Archive file to read.

        Returns:
            A reader over the archive's members.

        Raises:
            ArchiveError: If the file cannot be read or is not a zip archive.
        """
        try:
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as exc:
            raise ArchiveError(path, "failed to read file", cause=exc) from exc
        return cls(data, source=path)

    @property
    def entries(self) -> list[ArchiveEntry]:
        """All members, in archive order."""
        return [ArchiveEntry(name=name, is_dir=is_dir) for name, is_dir in self._entries.items()]

    @property
    def names(self) -> list[str]:
        """Names of all members, directories included."""
        return list(self._entries)

    @property
    def files(self) -> list[str]:
        """Names of all non-directory members."""
        return [name for name, is_dir in self._entries.items() if not is_dir]

    def has_file(self, name: str) -> bool:
        """Return whether ``name`` exists and is not a directory marker."""
        return self._entries.get(name) is False

    async def read(self, name: str) -> bytes:
        """Return the decompressed bytes of one file member.

        Args:
            name: Exact internal member name.

        Returns:
            The member's raw content.

        Raises:
            ArchiveError: If the member is missing, is a directory, or cannot
                be decompressed.
        """
        if not self.has_file(name):
            raise ArchiveError(self.source, f"no file member named '{name}'")
        try:
            return await asyncio.to_thread(self._zip.read, name)
        except (
            zipfile.BadZipFile,
            zipfile.LargeZipFile,
            zlib.error,
            NotImplementedError,
            RuntimeError,
            OSError,
        ) as exc:
            raise ArchiveError(self.source, f"failed to extract '{name}'", cause=exc) from exc

    def __len__(self) -> int:
        """Return the number of members."""
        return len(self._entries)

    def __repr__(self) -> str:
        """Return a string representation of the reader."""
        return f"ArchiveReader(source={str(self.source)!r}, entries={len(self._entries)})"
