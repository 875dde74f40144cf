"""Skill subsystem exceptions."""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class SkillError(Exception):
    """Base exception for all skill-related errors.

    All custom exceptions in the skills subsystem inherit from this class,
    allowing callers to catch all skill errors with a single handler.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}({self.message!r})"


class SkillValidationError(SkillError):
    """Raised when a SKILL.md document is malformed or incomplete.

    Always attributable to one specific document, named by ``source``.

    Attributes:
        source: Label of the offending document (file path or archive member).
        detail: Description of what is wrong with it.
    """

    def __init__(self, source: str, detail: str) -> None:
        """Initialize the error.

        Args:
            source: Label of the offending document.
            detail: Description of the validation failure.
        """
        self.source = source
        self.detail = detail
        super().__init__(f"Invalid skill document {source}: {detail}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.source, self.detail))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}(source={self.source!r}, detail={self.detail!r})"


class RegistryErrorKind(str, Enum):
    """Category of a registry failure.

    Attributes:
        INVALID_ROOT: The skills root is missing or not a directory (fatal for
            the load call).
        NOT_FOUND: A lookup named a slug that is not registered.
    """

    INVALID_ROOT = "invalid_root"
    NOT_FOUND = "not_found"


class RegistryError(SkillError):
    """Raised by the skill registry.

    Attributes:
        kind: Category of the failure.
    """

    def __init__(self, message: str, kind: RegistryErrorKind = RegistryErrorKind.INVALID_ROOT) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
            kind: Category of the failure.
        """
        self.kind = RegistryErrorKind(kind)
        super().__init__(message)

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.message, self.kind))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}({self.message!r}, kind={self.kind.value!r})"


class SkillNotFoundError(RegistryError):
    """Raised when a slug is not present in the registry.

    Attributes:
        slug: Slug that was looked up.
    """

    def __init__(self, slug: str) -> None:
        """Initialize the error.

        Args:
            slug: Slug that was looked up.
        """
        self.slug = slug
        super().__init__(f"Unknown skill '{slug}'", RegistryErrorKind.NOT_FOUND)

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.slug,))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}(slug={self.slug!r})"


class ArchiveError(SkillError):
    """Raised when a skill archive cannot be opened or read.

    Attributes:
        path: Archive that failed.
        detail: Description of the failure.
        cause: Original exception, if any.
    """

    def __init__(self, path: str | Path, detail: str, cause: Exception | None = None) -> None:
        """Initialize the error.

        Args:
            path: Archive that failed.
            detail: Description of the failure.
            cause: Original exception that caused the failure.
        """
        self.path = Path(path)
        self.detail = detail
        self.cause = cause
        cause_str = f" ({cause})" if cause else ""
        super().__init__(f"Cannot read archive {self.path}: {detail}{cause_str}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (str(self.path), self.detail, self.cause))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{type(self).__name__}(path={str(self.path)!r}, "
            f"detail={self.detail!r}, cause={self.cause!r})"
        )


class InvalidResourceUriError(SkillError):
    """Raised when a resource URI is rejected before any lookup or I/O.

    ``ResourceResolver.fetch`` converts this into an in-band error payload;
    it only escapes from ``parse_resource_uri``.

    Attributes:
        uri: The rejected URI.
        detail: Why it was rejected.
    """

    def __init__(self, uri: str, detail: str) -> None:
        """Initialize the error.

        Args:
            uri: The rejected URI.
            detail: Why it was rejected.
        """
        self.uri = uri
        self.detail = detail
        super().__init__(detail)

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.uri, self.detail))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}(uri={self.uri!r}, detail={self.detail!r})"
