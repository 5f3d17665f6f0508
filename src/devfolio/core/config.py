"""Content directory layout."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DEFAULT_CONTENT_ROOT = Path("src") / "content"
CONTENT_DIR_ENV = "DEVFOLIO_CONTENT_DIR"


@dataclass
class ContentConfig:
    """Where content collections live on disk.

    Each collection is a sub-directory of ``content_root`` named after the
    collection (``src/content/projects``).
    """

    content_root: Path = field(default_factory=lambda: DEFAULT_CONTENT_ROOT)

    def __post_init__(self) -> None:
        self.content_root = Path(self.content_root).expanduser()

    def collection_dir(self, name: str) -> Path:
        return self.content_root / name

    @classmethod
    def from_env(cls, content_root: str | Path | None = None) -> "ContentConfig":
        """Build a config from an explicit root, ``$DEVFOLIO_CONTENT_DIR``, or the default."""
        root = content_root or os.environ.get(CONTENT_DIR_ENV)
        if root:
            return cls(content_root=Path(root))
        return cls()
