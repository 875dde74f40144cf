"""Shared test fixtures and configuration for skillz tests."""

from __future__ import annotations

import logging
import zipfile
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

SkillDirFactory = Callable[..., Path]
ArchiveFactory = Callable[..., Path]


def _skill_document(
    name: str,
    description: str = "A test skill",
    body: str = "# Instructions\n\nDo the thing.",
) -> str:
    """Render a SKILL.md document."""
    return f"---\nname: {name}\ndescription: {description}\n---\n\n{body}"


@pytest.fixture(autouse=True)
def _reset_skillz_logger():
    """Undo handler and level changes made by setup_logging."""
    logger = logging.getLogger("skillz")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for handler in logger.handlers[:]:
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)


@pytest.fixture
def skills_root(tmp_path: Path) -> Path:
    """Provide an empty skills root directory."""
    root = tmp_path / "skills"
    root.mkdir()
    return root


@pytest.fixture
def make_skill_dir(skills_root: Path) -> SkillDirFactory:
    """Factory fixture creating a directory skill under ``skills_root``.

    Usage:
        def test_something(make_skill_dir):
            skill_dir = make_skill_dir("pdf", files={"scripts/run.py": "print(1)"})
    """

    def _make(
        dirname: str,
        name: str | None = None,
        description: str = "A test skill",
        body: str = "# Instructions\n\nDo the thing.",
        files: Mapping[str, str | bytes] | None = None,
        parent: Path | None = None,
        document: str | None = None,
    ) -> Path:
        skill_dir = (parent or skills_root) / dirname
        skill_dir.mkdir(parents=True, exist_ok=True)
        if document is None:
            document = _skill_document(name or dirname, description, body)
        (skill_dir / "SKILL.md").write_text(document, encoding="utf-8")
        for relative, content in (files or {}).items():
            target = skill_dir / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")
        return skill_dir

    return _make


@pytest.fixture
def make_archive(skills_root: Path) -> ArchiveFactory:
    """Factory fixture writing a zip archive under ``skills_root``.

    Members ending in ``/`` are written as directory entries.

    Usage:
        def test_something(make_archive):
            path = make_archive("pdf.zip", {"pdf/SKILL.md": "...", "pdf/a.txt": "a"})
    """

    def _make(
        filename: str,
        members: Mapping[str, str | bytes],
        parent: Path | None = None,
    ) -> Path:
        archive_path = (parent or skills_root) / filename
        archive_path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(archive_path, "w", zipfile.ZIP_DEFLATED) as zf:
            for member, content in members.items():
                if member.endswith("/"):
                    zf.writestr(zipfile.ZipInfo(member), b"")
                else:
                    zf.writestr(member, content)
        return archive_path

    return _make
