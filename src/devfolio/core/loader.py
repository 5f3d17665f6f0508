"""Load Markdown-with-frontmatter content files into validated entries.

Layout on disk::

    src/content/
        projects/
            my-app.md          -> slug "my-app"
            tools/cli/index.md -> slug "tools/cli"
            _draft.md          (skipped)

The frontmatter of each file is handed to :func:`validate`; the Markdown
body is kept as-is for whatever renders it.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict

from .config import ContentConfig
from .errors import (
    ContentLoadError,
    ContentValidationError,
    DuplicateSlugError,
    EntryNotFoundError,
    EntryValidationError,
    FrontmatterError,
)
from .registry import CollectionDefinition, get_collection
from .validator import validate

log = logging.getLogger(__name__)

_FENCE = "---"
_SLUG_JUNK = re.compile(r"[^a-z0-9_-]+")


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class ContentEntry(BaseModel):
    """One loaded content file."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str                 # path relative to the collection dir, POSIX style
    slug: str
    collection: str
    body: str = ""
    data: Any               # validated schema instance (e.g. ProjectEntry)
    source_path: Path


@dataclass
class CheckReport:
    """Outcome of loading every file in a collection without stopping."""

    collection: str
    entries: list[ContentEntry] = field(default_factory=list)
    failures: list[ContentLoadError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def checked(self) -> int:
        return len(self.entries) + len(self.failures)


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------

def split_frontmatter(text: str, source: Path | str = "<string>") -> tuple[dict[str, Any], str]:
    """Split a Markdown document into ``(frontmatter, body)``.

    Frontmatter is the YAML between a leading ``---`` line and the next
    ``---`` line. An empty block yields ``{}``.
    """
    text = text.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != _FENCE:
        raise FrontmatterError(source, "missing frontmatter (file must start with '---')")

    for idx in range(1, len(lines)):
        if lines[idx].rstrip() == _FENCE:
            header = "".join(lines[1:idx])
            body = "".join(lines[idx + 1:])
            break
    else:
        raise FrontmatterError(source, "unterminated frontmatter (no closing '---')")

    try:
        data = yaml.safe_load(header)
    except yaml.YAMLError as exc:
        raise FrontmatterError(source, f"invalid YAML in frontmatter: {exc}") from exc

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        raise FrontmatterError(source, f"frontmatter must be a mapping, got {type(data).__name__}")
    return data, body


def slugify_entry_id(entry_id: str) -> str:
    """Turn ``Tools/My CLI/index.md`` into ``tools/my-cli``."""
    path = PurePosixPath(entry_id)
    parts = list(path.parent.parts) + [path.stem]
    if len(parts) > 1 and parts[-1].lower() == "index":
        parts.pop()
    cleaned = [_SLUG_JUNK.sub("-", p.lower()).strip("-") for p in parts if p not in ("", ".")]
    return "/".join(p for p in cleaned if p)


def read_record(path: Path | str) -> dict[str, Any]:
    """Read one raw record from a Markdown, YAML or JSON file."""
    path = Path(path)
    raw = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()

    if suffix in (".md", ".mdx", ".markdown"):
        data, _ = split_frontmatter(raw, path)
        return data
    if suffix == ".json":
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise FrontmatterError(path, f"invalid JSON: {exc.msg}") from exc
    elif suffix in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise FrontmatterError(path, f"invalid YAML: {exc}") from exc
    else:
        raise FrontmatterError(path, f"unsupported file type '{suffix}'. Use .md, .mdx, .yaml or .json.")

    if not isinstance(data, dict):
        raise FrontmatterError(path, f"record must be a mapping, got {type(data).__name__}")
    return data


def _is_hidden(relative: Path) -> bool:
    return any(part.startswith(("_", ".")) for part in relative.parts)


def _discover(directory: Path, definition: CollectionDefinition) -> list[Path]:
    found = [
        p for p in directory.rglob("*")
        if p.is_file() and definition.accepts(p.name)
    ]
    return sorted(p for p in found if not _is_hidden(p.relative_to(directory)))


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def load_entry(path: Path | str, collection: str | CollectionDefinition, root: Path | str | None = None) -> ContentEntry:
    """Load and validate a single content file.

    *root* is the collection directory used to compute the entry id; it
    defaults to the file's parent.
    """
    definition = collection if isinstance(collection, CollectionDefinition) else get_collection(collection)
    path = Path(path)
    root = Path(root) if root is not None else path.parent

    entry_id = path.relative_to(root).as_posix()
    frontmatter, body = split_frontmatter(path.read_text(encoding="utf-8"), path)

    try:
        data = validate(frontmatter, definition.schema)
    except ContentValidationError as exc:
        raise EntryValidationError(path, exc) from exc

    log.debug("Loaded %s entry %s", definition.name, entry_id)
    return ContentEntry(
        id=entry_id,
        slug=slugify_entry_id(entry_id),
        collection=definition.name,
        body=body,
        data=data,
        source_path=path,
    )


def _iter_collection(config: ContentConfig, name: str, *, strict: bool) -> CheckReport:
    definition = get_collection(name)
    directory = config.collection_dir(definition.name)
    report = CheckReport(collection=definition.name)

    if not directory.is_dir():
        log.warning("Collection '%s' has no directory at %s", definition.name, directory)
        return report

    seen: dict[str, Path] = {}
    for path in _discover(directory, definition):
        try:
            entry = load_entry(path, definition, directory)
            if entry.slug in seen:
                raise DuplicateSlugError(entry.slug, seen[entry.slug], path)
        except ContentLoadError as exc:
            if strict:
                raise
            log.warning("Skipping %s: %s", path, exc)
            report.failures.append(exc)
            continue
        seen[entry.slug] = path
        report.entries.append(entry)

    report.entries.sort(key=lambda e: e.id)
    log.info("Loaded %d %s entr%s from %s", len(report.entries), definition.name,
             "y" if len(report.entries) == 1 else "ies", directory)
    return report


def load_collection(config: ContentConfig, name: str = "projects") -> list[ContentEntry]:
    """Load every entry of a collection, sorted by id.

    Raises on the first failing file. A missing collection directory
    yields an empty list.
    """
    return _iter_collection(config, name, strict=True).entries


def check_collection(config: ContentConfig, name: str = "projects") -> CheckReport:
    """Load every entry, collecting failures instead of raising."""
    return _iter_collection(config, name, strict=False)


def get_entry(config: ContentConfig, name: str, slug: str) -> ContentEntry:
    """Return the entry with *slug* in collection *name*."""
    for entry in load_collection(config, name):
        if entry.slug == slug:
            return entry
    raise EntryNotFoundError(name, slug)
