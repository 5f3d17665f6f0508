"""Shared fixtures: throwaway content directories."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from devfolio.core.config import ContentConfig

LEDGER_MD = """\
---
name: Ledger
summary: Event-sourced bookkeeping.
website: https://ledger.example.com
tags: [elixir, cqrs]
tech:
  languages: [Elixir]
components:
  - name: api
    type: backend
    language: Elixir
    packageManager: mix
---

# Ledger

Body text.
"""

NOTES_MD = """\
---
name: Notes
summary: A tiny notes app.
status: archived
---
"""


def _write(root: Path, relative: str, content: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


@pytest.fixture
def write():
    """Write a (dedented) file under a root directory and return its path."""
    return _write


@pytest.fixture
def content_root(tmp_path):
    root = tmp_path / "content"
    _write(root, "projects/ledger.md", LEDGER_MD)
    _write(root, "projects/notes.md", NOTES_MD)
    return root


@pytest.fixture
def content_config(content_root):
    return ContentConfig(content_root=content_root)
