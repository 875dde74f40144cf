"""Skill discovery and the in-memory skill registry.

Walks a skills root that mixes plain skill directories and zip archives:

1. A directory that directly contains ``SKILL.md`` is a skill; discovery does
   not descend into it.
2. Any other directory is scanned in lexical order: every subdirectory is
   recursed into first, then sibling ``.zip``/``.skill`` files are tried as
   archive skills.

Duplicate slugs and duplicate names are rejected, so the first skill
discovered in that order wins and a directory skill always beats an archive
with the same name in the same parent.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from skillz.skills.archive import ArchiveReader, is_archive_path
from skillz.skills.config import (
    SKILL_MARKDOWN,
    ArchiveBackend,
    DirectoryBackend,
    Skill,
    SkillMetadata,
)
from skillz.skills.errors import (
    RegistryError,
    RegistryErrorKind,
    SkillError,
    SkillNotFoundError,
)
from skillz.skills.loader import parse_skill_md, slugify


def _collect_resources(directory: Path, instructions_path: Path) -> tuple[Path, ...]:
    """Return every regular file under ``directory`` except its SKILL.md."""
    return tuple(
        path
        for path in sorted(directory.rglob("*"))
        if path != instructions_path and path.is_file()
    )


def _find_archive_prefix(reader: ArchiveReader) -> str | None:
    """Locate SKILL.md inside an archive.

    Returns:
        ``""`` when SKILL.md sits at the archive root, ``"<topdir>/"`` when it
        sits inside the only top-level directory, ``None`` otherwise.
    """
    files = set(reader.files)
    if SKILL_MARKDOWN in files:
        return ""

    top_level_dirs = {name.split("/", 1)[0] for name in reader.names if "/" in name}
    if len(top_level_dirs) == 1:
        prefix = f"{next(iter(top_level_dirs))}/"
        if f"{prefix}{SKILL_MARKDOWN}" in files:
            return prefix
    return None


class SkillRegistry:
    """Registry of skills discovered under a root directory.

    ``load()`` builds both indexes (by slug and by declared name) in memory
    and swaps them in only once the scan has finished, so lookups see either
    the previous set or the complete new one.

    Example::

        registry = SkillRegistry()
        await registry.load(Path("~/.skillz"))

        skill = registry.get("pdf-tools")
        all_skills = registry.list()
    """

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        """Initialize an empty registry.

        Args:
            logger: Logger receiving discovery diagnostics. Defaults to this
                module's logger.
        """
        self._logger = logger or logging.getLogger(__name__)
        self._root: Path | None = None
        self._skills_by_slug: dict[str, Skill] = {}
        self._skills_by_name: dict[str, Skill] = {}
        self._lock = asyncio.Lock()

    @property
    def root(self) -> Path | None:
        """Root of the last successful load, or ``None`` before any load."""
        return self._root

    async def load(self, root: str | Path) -> None:
        """Discover all skills under ``root``, replacing the current set.

        Per-entry failures (unreadable directories, corrupt archives, invalid
        SKILL.md documents, duplicates) are logged and skipped.

        Args:
            root: Skills root directory (``~`` is expanded).

        Raises:
            RegistryError: If ``root`` does not exist or is not a directory.
                The current set is left untouched.
        """
        root_path = Path(root).expanduser()
        if not root_path.is_dir():
            raise RegistryError(
                f"Skills root {root_path} does not exist or is not a directory.",
                RegistryErrorKind.INVALID_ROOT,
            )

        async with self._lock:
            resolved = root_path.resolve()
            self._logger.info("Discovering skills in %s", resolved)

            by_slug: dict[str, Skill] = {}
            by_name: dict[str, Skill] = {}
            await self._scan_directory(resolved, by_slug, by_name)

            self._root = resolved
            self._skills_by_slug = by_slug
            self._skills_by_name = by_name
            self._logger.info("Loaded %d skills", len(by_slug))

    async def _scan_directory(
        self,
        directory: Path,
        by_slug: dict[str, Skill],
        by_name: dict[str, Skill],
    ) -> None:
        """Scan one directory level. Order here decides duplicate precedence."""
        instructions_path = directory / SKILL_MARKDOWN
        try:
            if instructions_path.is_file():
                self._register_directory(directory, instructions_path, by_slug, by_name)
                return

            entries = sorted(directory.iterdir(), key=lambda p: p.name)
            subdirs = [entry for entry in entries if entry.is_dir()]
            archives = [entry for entry in entries if is_archive_path(entry) and entry.is_file()]
        except OSError as exc:
            self._logger.warning("Cannot read directory %s: %s", directory, exc)
            return

        for subdir in subdirs:
            await self._scan_directory(subdir, by_slug, by_name)

        for archive in archives:
            await self._try_register_archive(archive, by_slug, by_name)

    def _accepts(
        self,
        metadata: SkillMetadata,
        slug: str,
        location: Path,
        by_slug: dict[str, Skill],
        by_name: dict[str, Skill],
    ) -> bool:
        """Apply the slug and name uniqueness rules to a candidate."""
        if slug in by_slug:
            self._logger.error(
                "Duplicate skill slug '%s'; skipping %s (already registered from %s)",
                slug,
                location,
                by_slug[slug].location,
            )
            return False

        if metadata.name in by_name:
            self._logger.warning(
                "Duplicate skill name '%s' found in %s; only first occurrence is kept",
                metadata.name,
                location,
            )
            return False

        return True

    def _register_directory(
        self,
        directory: Path,
        instructions_path: Path,
        by_slug: dict[str, Skill],
        by_name: dict[str, Skill],
    ) -> None:
        """Register a directory-backed skill, logging and skipping on failure."""
        try:
            content = instructions_path.read_text(encoding="utf-8")
            metadata = parse_skill_md(content, str(instructions_path)).metadata
        except (SkillError, OSError, UnicodeDecodeError) as exc:
            self._logger.warning("Skipping invalid skill at %s: %s", directory, exc)
            return

        slug = slugify(metadata.name)
        if not self._accepts(metadata, slug, directory, by_slug, by_name):
            return

        try:
            resources = _collect_resources(directory, instructions_path)
        except OSError as exc:
            self._logger.warning("Skipping skill at %s: cannot list files: %s", directory, exc)
            return

        if directory.name != slug:
            self._logger.debug(
                "Skill directory name '%s' does not match slug '%s'", directory.name, slug
            )

        skill = Skill(
            slug=slug,
            metadata=metadata,
            backend=DirectoryBackend(directory=directory, instructions_path=instructions_path),
            resources=resources,
        )
        by_slug[slug] = skill
        by_name[metadata.name] = skill
        self._logger.debug("Registered skill '%s' from %s", slug, directory)

    async def _try_register_archive(
        self,
        archive_path: Path,
        by_slug: dict[str, Skill],
        by_name: dict[str, Skill],
    ) -> None:
        """Register an archive-backed skill if the archive holds one."""
        try:
            reader = await ArchiveReader.open(archive_path)
            prefix = _find_archive_prefix(reader)
            if prefix is None:
                self._logger.debug(
                    "Archive %s has no %s at its root or in a single top-level "
                    "directory; skipping",
                    archive_path,
                    SKILL_MARKDOWN,
                )
                return

            member = f"{prefix}{SKILL_MARKDOWN}"
            raw = await reader.read(member)
            metadata = parse_skill_md(raw.decode("utf-8"), f"{archive_path}:{member}").metadata
        except (SkillError, UnicodeDecodeError) as exc:
            self._logger.warning("Cannot read archive %s: %s", archive_path, exc)
            return

        slug = slugify(metadata.name)
        if not self._accepts(metadata, slug, archive_path, by_slug, by_name):
            return

        skill = Skill(
            slug=slug,
            metadata=metadata,
            backend=ArchiveBackend(archive_path=archive_path, root_prefix=prefix),
        )
        by_slug[slug] = skill
        by_name[metadata.name] = skill
        self._logger.debug(
            "Registered archive skill '%s' from %s (root_prefix=%r)", slug, archive_path, prefix
        )

    def get(self, slug: str) -> Skill:
        """Get a skill by slug.

        Args:
            slug: The skill slug.

        Returns:
            The registered ``Skill``.

        Raises:
            SkillNotFoundError: If no skill has that slug.
        """
        skill = self._skills_by_slug.get(slug)
        if skill is None:
            raise SkillNotFoundError(slug)
        return skill

    def get_by_name(self, name: str) -> Skill | None:
        """Get a skill by its declared name, or ``None``."""
        return self._skills_by_name.get(name)

    def has(self, slug: str) -> bool:
        """Check if a skill is registered under ``slug``."""
        return slug in self._skills_by_slug

    def list(self) -> list[Skill]:
        """List all registered skills in discovery order."""
        return list(self._skills_by_slug.values())

    def __len__(self) -> int:
        """Return the number of registered skills."""
        return len(self._skills_by_slug)

    def __repr__(self) -> str:
        """Return a string representation of the registry."""
        root = str(self._root) if self._root else None
        return f"SkillRegistry(root={root!r}, skills={list(self._skills_by_slug)})"
