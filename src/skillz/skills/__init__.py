"""Skill discovery, registry, and resource resolution.

Skills are directories or zip archives containing a ``SKILL.md`` document
(YAML front matter plus instructions) and any number of auxiliary files.

Quick Start:
    >>> from skillz.skills import ResourceResolver, SkillRegistry
    >>> registry = SkillRegistry()
    >>> await registry.load("~/.skillz")
    >>> resolver = ResourceResolver(registry)
    >>> payload = await resolver.fetch("resource://skillz/pdf-tools/scripts/run.py")

Classes:
    SkillRegistry: Discovers skills under a root and looks them up by slug.
    ResourceResolver: Fetches resources and instructions for registered skills.
    ArchiveReader: Read-only view over a zip archive.
    Skill: One discovered skill (directory- or archive-backed).
    SkillMetadata: Fields parsed from a SKILL.md header.

Exceptions:
    SkillError: Base exception for all skill-related errors.
    SkillValidationError: Malformed or incomplete SKILL.md document.
    RegistryError: Invalid skills root or unknown slug.
    SkillNotFoundError: Unknown slug (a ``RegistryError``).
    ArchiveError: Unreadable or corrupt archive.
    InvalidResourceUriError: Rejected resource URI.
"""

from __future__ import annotations

from skillz.skills.archive import ArchiveEntry, ArchiveReader
from skillz.skills.config import (
    SKILL_MARKDOWN,
    ArchiveBackend,
    DirectoryBackend,
    ParsedSkill,
    ResourceContent,
    ResourceDescriptor,
    Skill,
    SkillMetadata,
)
from skillz.skills.errors import (
    ArchiveError,
    InvalidResourceUriError,
    RegistryError,
    RegistryErrorKind,
    SkillError,
    SkillNotFoundError,
    SkillValidationError,
)
from skillz.skills.loader import parse_skill_md, slugify
from skillz.skills.registry import SkillRegistry
from skillz.skills.resources import (
    RESOURCE_URI_PREFIX,
    ResourceResolver,
    build_resource_uri,
    detect_mime_type,
    parse_resource_uri,
    resource_name,
)

__all__ = [
    "RESOURCE_URI_PREFIX",
    "SKILL_MARKDOWN",
    "ArchiveBackend",
    "ArchiveEntry",
    "ArchiveError",
    "ArchiveReader",
    "DirectoryBackend",
    "InvalidResourceUriError",
    "ParsedSkill",
    "RegistryError",
    "RegistryErrorKind",
    "ResourceContent",
    "ResourceDescriptor",
    "ResourceResolver",
    "Skill",
    "SkillError",
    "SkillMetadata",
    "SkillNotFoundError",
    "SkillRegistry",
    "SkillValidationError",
    "build_resource_uri",
    "detect_mime_type",
    "parse_resource_uri",
    "parse_skill_md",
    "resource_name",
    "slugify",
]
