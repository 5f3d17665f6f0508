"""Exceptions raised while validating and loading content."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

ROOT_PATH = "<root>"


# ---------------------------------------------------------------------------
# Validation errors (pure, raised by ``validate``)
# ---------------------------------------------------------------------------

class ContentValidationError(ValueError):
    """Base class for a single schema violation in a raw record.

    ``path`` is the dotted/indexed field path (``components[2].type``) and
    ``issues`` holds every violation found in the same record, this one
    first.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path or ROOT_PATH
        self.reason = reason
        self.issues: list[ContentValidationError] = [self]
        super().__init__(f"{self.path}: {reason}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContentValidationError):
            return NotImplemented
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class MissingOrInvalidField(ContentValidationError):
    """A required field is absent, or a field has the wrong type."""

    def __init__(self, path: str, expected: str, *, missing: bool = False) -> None:
        self.expected = expected
        self.missing = missing
        if missing:
            reason = f"required field is missing (expected {expected})"
        else:
            reason = f"expected {expected}"
        super().__init__(path, reason)


class InvalidEnumValue(ContentValidationError):
    """A value outside the closed set of an enumerated field."""

    def __init__(self, path: str, value: Any, allowed: Sequence[str]) -> None:
        self.value = value
        self.allowed = tuple(allowed)
        choices = ", ".join(repr(a) for a in self.allowed)
        super().__init__(path, f"invalid value {value!r}; expected one of {choices}")


class InvalidURL(ContentValidationError):
    """A URL-typed field holding something that is not an absolute URL."""

    def __init__(self, path: str, value: Any, detail: str = "") -> None:
        self.value = value
        self.detail = detail
        reason = f"invalid URL {value!r}"
        if detail:
            reason += f" ({detail})"
        super().__init__(path, reason)


# ---------------------------------------------------------------------------
# Loading errors (file-system side)
# ---------------------------------------------------------------------------

class ContentLoadError(Exception):
    """Base class for failures while reading a content directory."""


class FrontmatterError(ContentLoadError):
    """A content file has missing or unparseable frontmatter."""

    def __init__(self, source: Path | str, message: str) -> None:
        self.source = Path(source)
        super().__init__(f"{self.source}: {message}")


class EntryValidationError(ContentLoadError):
    """A content file's frontmatter failed schema validation."""

    def __init__(self, source: Path | str, error: ContentValidationError) -> None:
        self.source = Path(source)
        self.error = error
        super().__init__(f"{self.source}: {error}")

    @property
    def issues(self) -> list[ContentValidationError]:
        return self.error.issues


class DuplicateSlugError(ContentLoadError):
    """Two files in one collection resolve to the same slug."""

    def __init__(self, slug: str, first: Path | str, second: Path | str) -> None:
        self.slug = slug
        self.paths = (Path(first), Path(second))
        super().__init__(f"Duplicate slug '{slug}': {first} and {second}")


class CollectionNotFoundError(ContentLoadError, KeyError):
    """No collection is registered under the requested name."""

    def __init__(self, name: str, available: Sequence[str]) -> None:
        self.name = name
        self.available = tuple(available)
        super().__init__(f"Unknown collection '{name}'. Available: {', '.join(self.available)}")

    def __str__(self) -> str:
        return str(self.args[0])


class EntryNotFoundError(ContentLoadError, LookupError):
    """No entry with the requested slug exists in a collection."""

    def __init__(self, collection: str, slug: str) -> None:
        self.collection = collection
        self.slug = slug
        super().__init__(f"No entry '{slug}' in collection '{collection}'")
