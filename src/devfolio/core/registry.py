"""Content collection definitions.

A collection ties a directory name under the content root to the schema
its entries must satisfy::

    from devfolio.core.registry import get_collection

    projects = get_collection("projects")
    projects.schema          # -> ProjectEntry
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel

from .errors import CollectionNotFoundError
from .models import ProjectEntry


@dataclass(frozen=True)
class CollectionDefinition:
    """A named collection and the schema of its entries."""

    name: str
    schema: type[BaseModel]
    kind: str = "content"
    extensions: tuple[str, ...] = (".md", ".mdx")

    def accepts(self, filename: str) -> bool:
        return filename.lower().endswith(self.extensions)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_COLLECTION_REGISTRY: dict[str, CollectionDefinition] = {}


def define_collection(
    name: str,
    schema: type[BaseModel],
    *,
    kind: str = "content",
    extensions: tuple[str, ...] = (".md", ".mdx"),
) -> CollectionDefinition:
    """Register a collection and return its definition.

    Re-defining a name replaces the previous definition.
    """
    if kind != "content":
        raise ValueError(f"Unsupported collection kind '{kind}'. Only 'content' is supported.")
    definition = CollectionDefinition(name=name, schema=schema, kind=kind, extensions=extensions)
    _COLLECTION_REGISTRY[name.strip().lower()] = definition
    return definition


def get_collection(name: str) -> CollectionDefinition:
    """Get a collection by name. Raises ``CollectionNotFoundError`` if unknown."""
    key = name.strip().lower()
    if key not in _COLLECTION_REGISTRY:
        raise CollectionNotFoundError(name, sorted(_COLLECTION_REGISTRY))
    return _COLLECTION_REGISTRY[key]


def list_collections() -> list[CollectionDefinition]:
    """Return all registered collections."""
    return list(_COLLECTION_REGISTRY.values())


PROJECTS = define_collection("projects", ProjectEntry)
