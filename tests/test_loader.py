"""Tests for reading content files from disk."""

from __future__ import annotations

import logging

import pytest

from devfolio.core.config import CONTENT_DIR_ENV, DEFAULT_CONTENT_ROOT, ContentConfig
from devfolio.core.errors import (
    CollectionNotFoundError,
    DuplicateSlugError,
    EntryNotFoundError,
    EntryValidationError,
    FrontmatterError,
    InvalidEnumValue,
)
from devfolio.core.loader import (
    check_collection,
    get_entry,
    load_collection,
    load_entry,
    read_record,
    slugify_entry_id,
    split_frontmatter,
)
from devfolio.core.models import ProjectEntry, ProjectStatus


# ---------------------------------------------------------------------------
# Frontmatter
# ---------------------------------------------------------------------------

class TestSplitFrontmatter:
    def test_basic(self):
        data, body = split_frontmatter("---\nname: X\nsummary: Y\n---\n# Hi\n")
        assert data == {"name": "X", "summary": "Y"}
        assert body == "# Hi\n"

    def test_empty_block(self):
        data, body = split_frontmatter("---\n---\nbody")
        assert data == {}
        assert body == "body"

    def test_byte_order_mark_ignored(self):
        data, _ = split_frontmatter("\ufeff---\nname: X\n---\n")
        assert data == {"name": "X"}

    def test_missing_frontmatter(self):
        with pytest.raises(FrontmatterError, match="missing frontmatter"):
            split_frontmatter("# Just markdown\n")

    def test_unterminated(self):
        with pytest.raises(FrontmatterError, match="unterminated"):
            split_frontmatter("---\nname: X\n")

    def test_invalid_yaml(self):
        with pytest.raises(FrontmatterError, match="invalid YAML"):
            split_frontmatter("---\nname: [unclosed\n---\n")

    def test_non_mapping(self):
        with pytest.raises(FrontmatterError, match="mapping"):
            split_frontmatter("---\n- a\n- b\n---\n")


class TestSlugify:
    @pytest.mark.parametrize("entry_id, slug", [
        ("ledger.md", "ledger"),
        ("My Project.md", "my-project"),
        ("tools/CLI Helper/index.md", "tools/cli-helper"),
        ("index.md", "index"),
        ("a--b__c.mdx", "a--b__c"),
        ("Über (v2).md", "ber-v2"),
    ])
    def test_slugify(self, entry_id, slug):
        assert slugify_entry_id(entry_id) == slug


# ---------------------------------------------------------------------------
# Single files
# ---------------------------------------------------------------------------

class TestLoadEntry:
    def test_load_entry(self, content_root):
        entry = load_entry(content_root / "projects" / "ledger.md", "projects")
        assert entry.id == "ledger.md"
        assert entry.slug == "ledger"
        assert entry.collection == "projects"
        assert isinstance(entry.data, ProjectEntry)
        assert entry.data.components[0].package_manager == "mix"
        assert entry.data.tech.frameworks == ()
        assert entry.body.startswith("\n# Ledger")

    def test_invalid_entry_names_file_and_field(self, write, tmp_path):
        path = write(tmp_path, "bad.md", """\
            ---
            name: X
            summary: Y
            components:
              - name: api
                type: server
                language: Go
            ---
            """)
        with pytest.raises(EntryValidationError) as exc:
            load_entry(path, "projects")
        assert exc.value.source == path
        assert isinstance(exc.value.error, InvalidEnumValue)
        assert "components[0].type" in str(exc.value)
        assert str(path) in str(exc.value)

    def test_unknown_collection(self, content_root):
        with pytest.raises(CollectionNotFoundError):
            load_entry(content_root / "projects" / "ledger.md", "posts")


class TestReadRecord:
    def test_markdown(self, content_root):
        record = read_record(content_root / "projects" / "notes.md")
        assert record["status"] == "archived"

    def test_yaml(self, write, tmp_path):
        path = write(tmp_path, "p.yaml", "name: X\nsummary: Y\n")
        assert read_record(path) == {"name": "X", "summary": "Y"}

    def test_json(self, write, tmp_path):
        path = write(tmp_path, "p.json", '{"name": "X", "summary": "Y"}')
        assert read_record(path) == {"name": "X", "summary": "Y"}

    def test_invalid_json(self, write, tmp_path):
        path = write(tmp_path, "p.json", "{nope")
        with pytest.raises(FrontmatterError, match="invalid JSON"):
            read_record(path)

    def test_unsupported_suffix(self, write, tmp_path):
        path = write(tmp_path, "p.txt", "name: X")
        with pytest.raises(FrontmatterError, match="unsupported"):
            read_record(path)


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------

class TestLoadCollection:
    def test_entries_sorted_by_id(self, content_config):
        entries = load_collection(content_config, "projects")
        assert [e.slug for e in entries] == ["ledger", "notes"]
        assert entries[1].data.status is ProjectStatus.ARCHIVED

    def test_underscore_and_dot_files_skipped(self, write, content_config, content_root):
        write(content_root, "projects/_draft.md", "no frontmatter at all")
        write(content_root, "projects/_drafts/wip.md", "no frontmatter either")
        write(content_root, "projects/.hidden.md", "nor here")
        write(content_root, "projects/readme.txt", "not markdown")
        entries = load_collection(content_config)
        assert len(entries) == 2

    def test_nested_directories(self, write, content_config, content_root):
        write(content_root, "projects/tools/cli/index.md", "---\nname: CLI\nsummary: s\n---\n")
        slugs = [e.slug for e in load_collection(content_config)]
        assert "tools/cli" in slugs

    def test_missing_directory_is_empty(self, tmp_path, caplog):
        config = ContentConfig(content_root=tmp_path / "nowhere")
        with caplog.at_level(logging.WARNING, logger="devfolio.core.loader"):
            assert load_collection(config) == []
        assert "no directory" in caplog.text

    def test_first_invalid_file_raises(self, write, content_config, content_root):
        write(content_root, "projects/broken.md", "---\nname: X\n---\n")
        with pytest.raises(EntryValidationError) as exc:
            load_collection(content_config)
        assert exc.value.error.path == "summary"

    def test_yaml_set_tags_rejected(self, write, content_config, content_root):
        write(content_root, "projects/set.md", "---\nname: S\nsummary: s\ntags: !!set {a: null, b: null}\n---\n")
        with pytest.raises(EntryValidationError) as exc:
            load_collection(content_config)
        assert exc.value.error.path == "tags"

    def test_duplicate_slug(self, write, content_config, content_root):
        write(content_root, "projects/Ledger.mdx", "---\nname: L\nsummary: s\n---\n")
        with pytest.raises(DuplicateSlugError) as exc:
            load_collection(content_config)
        assert exc.value.slug == "ledger"


class TestCheckCollection:
    def test_clean(self, content_config):
        report = check_collection(content_config)
        assert report.ok
        assert report.checked == 2

    def test_collects_every_failure(self, write, content_config, content_root, caplog):
        write(content_root, "projects/a.md", "---\nname: A\n---\n")
        write(content_root, "projects/b.md", "plain markdown")
        with caplog.at_level(logging.WARNING, logger="devfolio.core.loader"):
            report = check_collection(content_config)
        assert not report.ok
        assert len(report.entries) == 2
        assert [type(f) for f in report.failures] == [EntryValidationError, FrontmatterError]
        assert "Skipping" in caplog.text


class TestGetEntry:
    def test_found(self, content_config):
        assert get_entry(content_config, "projects", "notes").data.name == "Notes"

    def test_not_found(self, content_config):
        with pytest.raises(EntryNotFoundError):
            get_entry(content_config, "projects", "missing")


class TestContentConfig:
    def test_default_root(self, monkeypatch):
        monkeypatch.delenv(CONTENT_DIR_ENV, raising=False)
        assert ContentConfig.from_env().content_root == DEFAULT_CONTENT_ROOT

    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv(CONTENT_DIR_ENV, str(tmp_path))
        assert ContentConfig.from_env().content_root == tmp_path

    def test_explicit_root_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv(CONTENT_DIR_ENV, "/elsewhere")
        assert ContentConfig.from_env(tmp_path).content_root == tmp_path

    def test_collection_dir(self, tmp_path):
        assert ContentConfig(tmp_path).collection_dir("projects") == tmp_path / "projects"
