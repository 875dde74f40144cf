"""Tests for the zip archive reader."""

from __future__ import annotations

import io
import zipfile
from pathlib import Path

import pytest

from skillz.skills.archive import ArchiveEntry, ArchiveReader, is_archive_path
from skillz.skills.errors import ArchiveError


def _zip_bytes(members: dict[str, bytes | str]) -> bytes:
    """Build an in-memory zip archive."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, content in members.items():
            if name.endswith("/"):
                zf.writestr(zipfile.ZipInfo(name), b"")
            else:
                zf.writestr(name, content)
    return buffer.getvalue()


class TestIsArchivePath:
    """Tests for is_archive_path."""

    @pytest.mark.parametrize("name", ["pdf.zip", "pdf.skill", "PDF.ZIP", "a.b.Skill"])
    def test_archive_suffixes(self, name: str) -> None:
        """Test recognized archive suffixes, case-insensitively."""
        assert is_archive_path(Path(name))

    @pytest.mark.parametrize("name", ["pdf.tar.gz", "SKILL.md", "zip", "pdf.zipx"])
    def test_other_suffixes(self, name: str) -> None:
        """Test other files are not archives."""
        assert not is_archive_path(Path(name))


class TestArchiveReader:
    """Tests for ArchiveReader over in-memory bytes."""

    def test_entries(self) -> None:
        """Test entries, names and files reflect archive members."""
        reader = ArchiveReader(
            _zip_bytes({"pdf/": b"", "pdf/SKILL.md": "doc", "pdf/a.txt": "a"})
        )

        assert reader.entries == [
            ArchiveEntry("pdf/", True),
            ArchiveEntry("pdf/SKILL.md", False),
            ArchiveEntry("pdf/a.txt", False),
        ]
        assert reader.names == ["pdf/", "pdf/SKILL.md", "pdf/a.txt"]
        assert reader.files == ["pdf/SKILL.md", "pdf/a.txt"]
        assert len(reader) == 3

    def test_has_file(self) -> None:
        """Test has_file ignores directory markers and missing names."""
        reader = ArchiveReader(_zip_bytes({"dir/": b"", "dir/x.txt": "x"}))

        assert reader.has_file("dir/x.txt")
        assert not reader.has_file("dir/")
        assert not reader.has_file("missing.txt")

    async def test_read(self) -> None:
        """Test reading a member returns its bytes."""
        reader = ArchiveReader(_zip_bytes({"SKILL.md": "hello", "bin.dat": b"\x00\xff"}))

        assert await reader.read("SKILL.md") == b"hello"
        assert await reader.read("bin.dat") == b"\x00\xff"

    async def test_read_missing_member(self) -> None:
        """Test reading a missing member raises ArchiveError."""
        reader = ArchiveReader(_zip_bytes({"a.txt": "a"}), source="mem.zip")

        with pytest.raises(ArchiveError, match="no file member named 'b.txt'") as exc_info:
            await reader.read("b.txt")

        assert exc_info.value.path == Path("mem.zip")

    async def test_read_directory_member(self) -> None:
        """Test a directory marker cannot be read."""
        reader = ArchiveReader(_zip_bytes({"dir/": b""}))

        with pytest.raises(ArchiveError):
            await reader.read("dir/")

    def test_invalid_bytes(self) -> None:
        """Test non-zip data is rejected."""
        with pytest.raises(ArchiveError, match="not a valid zip archive"):
            ArchiveReader(b"definitely not a zip", source="bad.zip")

    def test_repr(self) -> None:
        """Test repr shows source and entry count."""
        reader = ArchiveReader(_zip_bytes({"a.txt": "a"}), source="one.zip")
        assert repr(reader) == "ArchiveReader(source='one.zip', entries=1)"


class TestArchiveReaderOpen:
    """Tests for ArchiveReader.open."""

    async def test_open_file(self, tmp_path: Path) -> None:
        """Test opening an archive from disk."""
        path = tmp_path / "skill.zip"
        path.write_bytes(_zip_bytes({"SKILL.md": "doc"}))

        reader = await ArchiveReader.open(path)

        assert reader.source == path
        assert await reader.read("SKILL.md") == b"doc"

    async def test_open_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises ArchiveError with the OSError as cause."""
        with pytest.raises(ArchiveError, match="failed to read file") as exc_info:
            await ArchiveReader.open(tmp_path / "missing.zip")

        assert isinstance(exc_info.value.cause, OSError)

    async def test_open_corrupt_file(self, tmp_path: Path) -> None:
        """Test a file with an archive suffix but garbage content."""
        path = tmp_path / "corrupt.skill"
        path.write_bytes(b"PK\x03\x04 truncated")

        with pytest.raises(ArchiveError, match="not a valid zip archive"):
            await ArchiveReader.open(path)
