"""Skill data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Fixed name of the metadata-and-instructions document inside every skill.
SKILL_MARKDOWN = "SKILL.md"


@dataclass
class SkillMetadata:
    """Metadata extracted from a SKILL.md header block.

    Attributes:
        name: Declared skill name (never blank).
        description: Human-readable description (never blank).
        license: License string, if declared.
        allowed_tools: Tool names the skill is meant to be used with.
        extra: Every other header key, with its original value shape.
    """

    name: str
    description: str
    license: str | None = None
    allowed_tools: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DirectoryBackend:
    """Storage locator for a skill that lives in a plain directory.

    Attributes:
        directory: Absolute path of the skill directory.
        instructions_path: Absolute path of its SKILL.md.
    """

    directory: Path
    instructions_path: Path


@dataclass(frozen=True)
class ArchiveBackend:
    """Storage locator for a skill packed in a zip archive.

    Attributes:
        archive_path: Absolute path of the archive file.
        root_prefix: Internal prefix of the skill inside the archive, either
            ``""`` or ``"<topdir>/"``.
    """

    archive_path: Path
    root_prefix: str = ""

    @property
    def instructions_member(self) -> str:
        """Archive member name of the SKILL.md document."""
        return f"{self.root_prefix}{SKILL_MARKDOWN}"


SkillBackend = DirectoryBackend | ArchiveBackend


@dataclass(frozen=True)
class Skill:
    """One discovered skill bundle.

    The ``backend`` field is a tagged variant: consumers branch on
    ``isinstance(skill.backend, ArchiveBackend)`` rather than dispatching
    through the skill itself.

    Attributes:
        slug: Unique identity derived from ``metadata.name``.
        metadata: Parsed header fields.
        backend: Directory or archive locator.
        resources: Absolute resource file paths, computed at registration for
            directory skills. Always empty for archive skills, whose entries
            are enumerated per request.
    """

    slug: str
    metadata: SkillMetadata
    backend: SkillBackend
    resources: tuple[Path, ...] = ()

    @property
    def is_archive(self) -> bool:
        """Whether the skill is backed by an archive."""
        return isinstance(self.backend, ArchiveBackend)

    @property
    def location(self) -> Path:
        """Directory or archive file the skill was loaded from."""
        if isinstance(self.backend, ArchiveBackend):
            return self.backend.archive_path
        return self.backend.directory


@dataclass(frozen=True)
class ParsedSkill:
    """Result of parsing a SKILL.md document.

    Attributes:
        metadata: Validated header fields.
        body: Instructions text after the closing marker.
    """

    metadata: SkillMetadata
    body: str


class ResourceDescriptor(BaseModel):
    """Addressable resource of a skill, as advertised to clients.

    Serialized with the wire key ``mimeType``.
    """

    model_config = ConfigDict(populate_by_name=True)

    uri: str
    name: str
    mime_type: str | None = Field(default=None, alias="mimeType")

    def to_payload(self) -> dict[str, Any]:
        """Return the wire representation, omitting an absent MIME type."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ResourceContent(ResourceDescriptor):
    """Fetched resource content, or an in-band error.

    Attributes:
        content: Decoded text, base64 text, or an ``Error:`` message.
        encoding: ``"utf-8"`` or ``"base64"``.
    """

    content: str
    encoding: str = "utf-8"
