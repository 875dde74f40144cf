"""Resource addressing and retrieval for registered skills.

Every non-SKILL.md file of a skill is addressable as::

    resource://skillz/<percent-encoded-slug>/<percent-encoded-path>

``ResourceResolver.fetch`` never raises: every failure comes back as a text
payload starting with ``Error:``, so one bad request cannot break the
enclosing response.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from pathlib import Path, PurePosixPath
from urllib.parse import quote, unquote

from skillz.skills.archive import ArchiveReader
from skillz.skills.config import (
    SKILL_MARKDOWN,
    ArchiveBackend,
    ResourceContent,
    ResourceDescriptor,
    Skill,
)
from skillz.skills.errors import InvalidResourceUriError, SkillError, SkillNotFoundError
from skillz.skills.loader import parse_skill_md
from skillz.skills.registry import SkillRegistry

RESOURCE_URI_PREFIX = "resource://skillz/"

# Archive members produced by archiving tools rather than skill authors.
_ARCHIVE_SYSTEM_FOLDER = "__MACOSX/"
_ARCHIVE_HIDDEN_SUFFIX = ".DS_Store"

_TRAVERSAL_ERROR = "invalid path: path traversal not allowed"


class _ResourceUnavailable(Exception):
    """Internal signal for a resource that is missing or out of bounds."""


_MIME_TYPES: dict[str, str] = {
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".py": "text/x-python",
    ".js": "text/javascript",
    ".ts": "text/typescript",
    ".json": "application/json",
    ".yaml": "text/yaml",
    ".yml": "text/yaml",
    ".xml": "text/xml",
    ".html": "text/html",
    ".css": "text/css",
    ".sh": "application/x-sh",
    ".bin": "application/octet-stream",
    ".dat": "application/octet-stream",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".pdf": "application/pdf",
}


def detect_mime_type(path: str) -> str | None:
    """Return the MIME type for ``path``'s extension, or ``None`` if unmapped."""
    return _MIME_TYPES.get(PurePosixPath(path).suffix.lower())


def build_resource_uri(skill: Skill, relative_path: str) -> str:
    """Build the public URI of one skill resource.

    Args:
        skill: Owning skill.
        relative_path: ``/``-separated path relative to the skill root.

    Returns:
        ``resource://skillz/<slug>/<path>`` with both parts percent-encoded;
        slashes in the path are kept.
    """
    return f"{RESOURCE_URI_PREFIX}{quote(skill.slug, safe='')}/{quote(relative_path, safe='/')}"


def resource_name(skill: Skill, relative_path: str) -> str:
    """Return the display name of a resource, ``<slug>/<path>``."""
    return f"{skill.slug}/{relative_path}"


def _is_traversal(path: str) -> bool:
    return ".." in path or path.startswith("/")


def parse_resource_uri(uri: str) -> tuple[str, str]:
    """Split a resource URI into its decoded slug and relative path.

    Args:
        uri: URI produced by ``build_resource_uri``.

    Returns:
        Tuple of (slug, relative_path).

    Raises:
        InvalidResourceUriError: If the prefix is wrong, the slug or path is
            empty, contains a NUL byte, or the path contains ``..`` or
            starts with ``/``.
    """
    if not uri.startswith(RESOURCE_URI_PREFIX):
        raise InvalidResourceUriError(
            uri,
            "unsupported URI prefix. Expected resource://skillz/{skill-slug}/{path}",
        )

    slug_part, _, path_part = uri[len(RESOURCE_URI_PREFIX) :].partition("/")
    if not slug_part or not path_part:
        raise InvalidResourceUriError(uri, "invalid resource URI format")

    slug = unquote(slug_part)
    relative_path = unquote(path_part)
    if _is_traversal(path_part) or _is_traversal(relative_path):
        raise InvalidResourceUriError(uri, _TRAVERSAL_ERROR)
    if "\x00" in slug or "\x00" in relative_path:
        raise InvalidResourceUriError(uri, "invalid resource URI format")

    return slug, relative_path


def _error_resource(uri: str, message: str) -> ResourceContent:
    """Build the in-band error payload for ``uri``."""
    name = "invalid resource"
    if uri.startswith(RESOURCE_URI_PREFIX) and len(uri) > len(RESOURCE_URI_PREFIX):
        name = uri[len(RESOURCE_URI_PREFIX) :]
    return ResourceContent(
        uri=uri,
        name=name,
        mime_type="text/plain",
        content=f"Error: {message}",
        encoding="utf-8",
    )


class ResourceResolver:
    """Resolves resource URIs and skill documents against a loaded registry.

    Branches explicitly on the skill's backend: directory skills are read from
    disk under a containment check, archive skills are re-opened per request.
    """

    def __init__(self, registry: SkillRegistry, *, logger: logging.Logger | None = None) -> None:
        """Initialize the resolver.

        Args:
            registry: Loaded registry to resolve slugs against.
            logger: Logger receiving fetch diagnostics. Defaults to this
                module's logger.
        """
        self.registry = registry
        self._logger = logger or logging.getLogger(__name__)

    async def fetch(self, uri: str) -> ResourceContent:
        """Fetch a resource by URI.

        Text that decodes as strict UTF-8 is returned as-is; anything else is
        base64-encoded.

        Args:
            uri: ``resource://skillz/<slug>/<path>`` URI.

        Returns:
            The resource content, or an error payload whose content starts
            with ``Error:``.
        """
        try:
            slug, relative_path = parse_resource_uri(uri)
        except InvalidResourceUriError as exc:
            self._logger.warning("Rejected resource URI %s: %s", uri, exc.detail)
            return _error_resource(uri, exc.detail)

        try:
            skill = self.registry.get(slug)
        except SkillNotFoundError:
            self._logger.warning("Resource requested for unknown skill '%s'", slug)
            return _error_resource(uri, f"skill not found: {slug}")

        try:
            if isinstance(skill.backend, ArchiveBackend):
                data = await self._read_archive_member(skill.backend, relative_path)
            else:
                data = await self._read_directory_file(skill.backend.directory, relative_path)
        except _ResourceUnavailable as exc:
            self._logger.warning("Resource %s unavailable: %s", uri, exc)
            return _error_resource(uri, str(exc))
        except (SkillError, OSError, ValueError) as exc:
            self._logger.warning("Failed to read resource %s: %s", uri, exc)
            return _error_resource(uri, f"failed to read resource: {exc}")

        try:
            content, encoding = data.decode("utf-8"), "utf-8"
        except UnicodeDecodeError:
            content, encoding = base64.b64encode(data).decode("ascii"), "base64"

        return ResourceContent(
            uri=uri,
            name=resource_name(skill, relative_path),
            mime_type=detect_mime_type(relative_path),
            content=content,
            encoding=encoding,
        )

    async def _read_directory_file(self, directory: Path, relative_path: str) -> bytes:
        base = directory.resolve()
        target = (base / relative_path).resolve()
        try:
            target.relative_to(base)
        except ValueError:
            raise _ResourceUnavailable(_TRAVERSAL_ERROR) from None

        if not target.is_file():
            raise _ResourceUnavailable(f"resource not found: {relative_path}")

        return await asyncio.to_thread(target.read_bytes)

    async def _read_archive_member(self, backend: ArchiveBackend, relative_path: str) -> bytes:
        reader = await ArchiveReader.open(backend.archive_path)
        member = f"{backend.root_prefix}{relative_path}"
        if not reader.has_file(member):
            raise _ResourceUnavailable(f"resource not found: {relative_path}")
        return await reader.read(member)

    async def list_resource_paths(self, skill: Skill) -> list[str]:
        """List a skill's resources as sorted ``/``-separated relative paths.

        Args:
            skill: A registered skill.

        Returns:
            Every resource path, excluding SKILL.md. Archive skills also skip
            ``__MACOSX/`` members and ``.DS_Store`` files.

        Raises:
            ArchiveError: If an archive skill's archive can no longer be read.
        """
        if not isinstance(skill.backend, ArchiveBackend):
            directory = skill.backend.directory
            return sorted(path.relative_to(directory).as_posix() for path in skill.resources)

        prefix = skill.backend.root_prefix
        reader = await ArchiveReader.open(skill.backend.archive_path)
        paths: list[str] = []
        for name in reader.files:
            if _ARCHIVE_SYSTEM_FOLDER in name or name.endswith(_ARCHIVE_HIDDEN_SUFFIX):
                continue
            if not name.startswith(prefix):
                continue
            relative_path = name[len(prefix) :]
            if relative_path and relative_path != SKILL_MARKDOWN:
                paths.append(relative_path)
        return sorted(paths)

    async def describe_resources(self, skill: Skill) -> list[ResourceDescriptor]:
        """Return the URI, name and MIME type of every resource of ``skill``."""
        return [
            ResourceDescriptor(
                uri=build_resource_uri(skill, path),
                name=resource_name(skill, path),
                mime_type=detect_mime_type(path),
            )
            for path in await self.list_resource_paths(skill)
        ]

    async def read_instructions(self, skill: Skill) -> str:
        """Return the instructions body of a skill's SKILL.md.

        The document is re-read and re-parsed on every call.

        Args:
            skill: A registered skill.

        Returns:
            The body text following the header block.

        Raises:
            SkillValidationError: If the document no longer parses.
            ArchiveError: If an archive skill's archive can no longer be read.
            OSError: If a directory skill's SKILL.md can no longer be read.
        """
        if isinstance(skill.backend, ArchiveBackend):
            reader = await ArchiveReader.open(skill.backend.archive_path)
            member = skill.backend.instructions_member
            content = (await reader.read(member)).decode("utf-8")
            source = f"{skill.backend.archive_path}:{member}"
        else:
            path = skill.backend.instructions_path
            content = await asyncio.to_thread(path.read_text, encoding="utf-8")
            source = str(path)

        return parse_skill_md(content, source).body
