"""Tests for skill error hierarchy."""

from __future__ import annotations

import pickle
import zipfile
from pathlib import Path

from skillz.skills.errors import (
    ArchiveError,
    InvalidResourceUriError,
    RegistryError,
    RegistryErrorKind,
    SkillError,
    SkillNotFoundError,
    SkillValidationError,
)


class TestSkillError:
    """Tests for base SkillError."""

    def test_message(self) -> None:
        """Test error message stored and returned by str()."""
        error = SkillError("Something went wrong")
        assert error.message == "Something went wrong"
        assert str(error) == "Something went wrong"

    def test_repr(self) -> None:
        """Test repr produces useful debugging info."""
        assert repr(SkillError("boom")) == "SkillError('boom')"

    def test_picklable(self) -> None:
        """Test error can be pickled and unpickled."""
        restored = pickle.loads(pickle.dumps(SkillError("pickle test")))
        assert restored.message == "pickle test"


class TestSkillValidationError:
    """Tests for SkillValidationError."""

    def test_message_names_source(self) -> None:
        """Test message combines source and detail."""
        error = SkillValidationError("/skills/pdf/SKILL.md", "front matter is missing 'name'")

        assert error.source == "/skills/pdf/SKILL.md"
        assert error.detail == "front matter is missing 'name'"
        assert str(error) == (
            "Invalid skill document /skills/pdf/SKILL.md: front matter is missing 'name'"
        )
        assert isinstance(error, SkillError)

    def test_picklable(self) -> None:
        """Test error round-trips through pickle with its fields."""
        error = SkillValidationError("a.zip:SKILL.md", "bad")
        restored = pickle.loads(pickle.dumps(error))

        assert restored.source == "a.zip:SKILL.md"
        assert restored.detail == "bad"
        assert str(restored) == str(error)


class TestRegistryError:
    """Tests for RegistryError and SkillNotFoundError."""

    def test_default_kind_is_invalid_root(self) -> None:
        """Test kind defaults to INVALID_ROOT."""
        error = RegistryError("missing root")
        assert error.kind is RegistryErrorKind.INVALID_ROOT

    def test_kind_from_string(self) -> None:
        """Test kind accepts its string value."""
        error = RegistryError("gone", "not_found")  # type: ignore[arg-type]
        assert error.kind is RegistryErrorKind.NOT_FOUND

    def test_repr(self) -> None:
        """Test repr shows message and kind."""
        error = RegistryError("missing root")
        assert repr(error) == "RegistryError('missing root', kind='invalid_root')"

    def test_not_found(self) -> None:
        """Test SkillNotFoundError carries the slug and NOT_FOUND kind."""
        error = SkillNotFoundError("pdf-tools")

        assert isinstance(error, RegistryError)
        assert error.slug == "pdf-tools"
        assert error.kind is RegistryErrorKind.NOT_FOUND
        assert str(error) == "Unknown skill 'pdf-tools'"

    def test_picklable(self) -> None:
        """Test both registry errors survive pickling."""
        restored = pickle.loads(pickle.dumps(RegistryError("x", RegistryErrorKind.NOT_FOUND)))
        assert restored.kind is RegistryErrorKind.NOT_FOUND

        not_found = pickle.loads(pickle.dumps(SkillNotFoundError("pdf")))
        assert not_found.slug == "pdf"
        assert str(not_found) == "Unknown skill 'pdf'"


class TestArchiveError:
    """Tests for ArchiveError."""

    def test_message_without_cause(self) -> None:
        """Test message names the archive and detail."""
        error = ArchiveError("/skills/pdf.zip", "no file member named 'SKILL.md'")

        assert error.path == Path("/skills/pdf.zip")
        assert error.cause is None
        assert str(error) == "Cannot read archive /skills/pdf.zip: no file member named 'SKILL.md'"

    def test_message_with_cause(self) -> None:
        """Test cause is appended in parentheses."""
        cause = zipfile.BadZipFile("File is not a zip file")
        error = ArchiveError("/skills/bad.zip", "not a valid zip archive", cause=cause)

        assert error.cause is cause
        assert str(error).endswith("not a valid zip archive (File is not a zip file)")

    def test_picklable(self) -> None:
        """Test error survives pickling."""
        error = ArchiveError("/skills/pdf.zip", "failed to read file", cause=OSError("denied"))
        restored = pickle.loads(pickle.dumps(error))

        assert restored.path == Path("/skills/pdf.zip")
        assert restored.detail == "failed to read file"
        assert "denied" in str(restored)


class TestInvalidResourceUriError:
    """Tests for InvalidResourceUriError."""

    def test_message_is_detail(self) -> None:
        """Test str() is the bare detail."""
        error = InvalidResourceUriError("http://x", "invalid resource URI format")

        assert error.uri == "http://x"
        assert str(error) == "invalid resource URI format"
        assert "http://x" in repr(error)

    def test_picklable(self) -> None:
        """Test error survives pickling."""
        error = InvalidResourceUriError("resource://skillz/a/../b", "traversal")
        restored = pickle.loads(pickle.dumps(error))
        assert restored.uri == error.uri
        assert restored.detail == "traversal"
