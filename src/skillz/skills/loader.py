"""SKILL.md parser and slug derivation.

A SKILL.md document starts with a YAML header delimited by ``---`` lines,
followed by free-text instructions::

    ---
    name: PDF Tools
    description: Work with PDF files
    allowed-tools: Read, Bash
    ---
    # Instructions ...

Only the first pair of markers is used, so horizontal rules (``---``) in the
body are preserved.
"""

from __future__ import annotations

import re
from typing import Any

import yaml

from skillz.skills.config import ParsedSkill, SkillMetadata
from skillz.skills.errors import SkillValidationError

_MARKER = "---"

# Slug used when a name normalizes to nothing.
_FALLBACK_SLUG = "skill"

_SLUG_SEPARATOR_PATTERN = re.compile(r"[^a-z0-9]+")

# Header keys with a dedicated SkillMetadata field. Everything else goes to extra.
_ALLOWED_TOOLS_KEYS = ("allowed-tools", "allowed_tools")
_KNOWN_KEYS = frozenset({"name", "description", "license", *_ALLOWED_TOOLS_KEYS})


def slugify(value: str) -> str:
    """Convert a skill name into a stable slug.

    Lowercases, collapses each run of characters outside ``[a-z0-9]`` into a
    single hyphen and strips hyphens from both ends.

    Args:
        value: Declared skill name.

    Returns:
        The slug, or ``"skill"`` when nothing usable remains.
    """
    cleaned = _SLUG_SEPARATOR_PATTERN.sub("-", value.strip().lower()).strip("-")
    return cleaned or _FALLBACK_SLUG


def _split_frontmatter(content: str, source: str) -> tuple[str, str]:
    """Split document content into header YAML and body text.

    Args:
        content: Raw document content.
        source: Document label (for error messages).

    Returns:
        Tuple of (header_yaml, body). The body keeps everything after the
        closing marker, verbatim.

    Raises:
        SkillValidationError: If the ``---`` delimiters are missing or malformed.
    """
    lines = content.removeprefix("\ufeff").splitlines(keepends=True)
    if not lines or lines[0].rstrip() != _MARKER:
        raise SkillValidationError(
            source, "must begin with YAML front matter delimited by '---'"
        )

    for idx in range(1, len(lines)):
        if lines[idx].rstrip() == _MARKER:
            return "".join(lines[1:idx]), "".join(lines[idx + 1 :])

    raise SkillValidationError(source, "front matter is missing its closing '---'")


def _parse_yaml(header: str, source: str) -> dict[str, Any]:
    """Parse the header block into a mapping.

    Args:
        header: YAML text between the markers.
        source: Document label (for error messages).

    Returns:
        The parsed mapping. An empty header yields an empty mapping.

    Raises:
        SkillValidationError: If the YAML is invalid or not a mapping.
    """
    try:
        data = yaml.safe_load(header)
    except yaml.YAMLError as exc:
        detail = str(exc)
        mark = getattr(exc, "problem_mark", None)
        if mark is not None:
            detail = (
                f"YAML syntax error at line {mark.line + 2}, column {mark.column + 1}: "
                f"{getattr(exc, 'problem', exc)}"
            )
        raise SkillValidationError(source, f"unable to parse YAML: {detail}") from exc

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise SkillValidationError(
            source, f"front matter must define a mapping, not {type(data).__name__}"
        )

    return data


def _required_text(data: dict[str, Any], key: str, source: str) -> str:
    value = data.get(key)
    text = str(value).strip() if value is not None else ""
    if not text:
        raise SkillValidationError(source, f"front matter is missing '{key}'")
    return text


def _normalize_allowed_tools(value: Any) -> list[str]:
    """Normalize ``allowed-tools`` into a list of tool names.

    A comma-separated string is split; a list or tuple is stringified.
    Blank entries are dropped and any other shape yields an empty list.
    """
    if isinstance(value, str):
        parts = value.split(",")
    elif isinstance(value, (list, tuple)):
        parts = [str(item) for item in value]
    else:
        return []
    return [part.strip() for part in parts if part.strip()]


def parse_skill_md(content: str, source: str = "SKILL.md") -> ParsedSkill:
    """Parse a SKILL.md document into validated metadata and body.

    Args:
        content: Full document text.
        source: Label used in error messages, usually the file path or
            ``<archive>:<member>``.

    Returns:
        ``ParsedSkill`` with the metadata and the body with leading
        whitespace stripped.

    Raises:
        SkillValidationError: If the header block is absent or malformed, is
            not a mapping, or lacks a non-blank ``name`` or ``description``.
    """
    header, body = _split_frontmatter(content, source)
    data = _parse_yaml(header, source)

    name = _required_text(data, "name", source)
    description = _required_text(data, "description", source)

    allowed: Any = None
    for key in _ALLOWED_TOOLS_KEYS:
        if data.get(key):
            allowed = data[key]
            break

    license_value = data.get("license")

    metadata = SkillMetadata(
        name=name,
        description=description,
        license=str(license_value).strip() if license_value else None,
        allowed_tools=_normalize_allowed_tools(allowed),
        extra={key: value for key, value in data.items() if key not in _KNOWN_KEYS},
    )
    return ParsedSkill(metadata=metadata, body=body.lstrip())
