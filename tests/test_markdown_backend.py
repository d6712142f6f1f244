"""Tests for sync.backends.markdown."""

from datetime import datetime, timezone

import pytest
import yaml

from note_sync.config_schema import MarkdownSyncConfig, SyncConfig
from note_sync.sync.backends.markdown import (
    MarkdownBackend,
    build_front_matter,
    render_markdown_document,
)
from note_sync.sync.errors import NotConfiguredError, SyncIOError


def _config(path, include_metadata=False):
    return SyncConfig(
        markdown=MarkdownSyncConfig(
            enabled=True, path=path, include_metadata=include_metadata
        )
    )


class TestFrontMatter:
    def test_block_is_valid_yaml(self):
        synced_at = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        block = build_front_matter("note", synced_at)

        assert block.startswith("---\n")
        assert block.endswith("---\n\n")
        data = yaml.safe_load(block.split("---\n")[1])
        assert data["title"] == "note"
        assert data["source"] == "What The Note"
        assert str(data["synced_at"]).startswith("2026-01-02")

    def test_title_needing_quotes(self):
        block = build_front_matter('a: "b"')
        data = yaml.safe_load(block.split("---\n")[1])
        assert data["title"] == 'a: "b"'


class TestRenderDocument:
    def test_without_metadata(self):
        document = render_markdown_document(
            "<h1>Title</h1><p>Body</p>", "note", include_metadata=False
        )
        assert document == "# Title\n\nBody\n"

    def test_leading_heading_kept_even_when_equal_to_title(self):
        document = render_markdown_document("<h1>note</h1>", "note", False)
        assert document == "# note\n"

    def test_with_metadata(self):
        document = render_markdown_document("<p>Body</p>", "note", True)
        assert document.startswith("---\ntitle: note\n")
        assert document.endswith("---\n\nBody\n")

    def test_task_list(self):
        content = (
            '<ul data-type="taskList"><li data-checked="false">'
            '<label><input type="checkbox"></label><div><p>Milk</p></div></li>'
            '<li data-checked="true"><label><input type="checkbox"></label>'
            "<div><p>Eggs</p></div></li></ul>"
        )
        assert render_markdown_document(content, "note", False) == "- Milk\n- Eggs\n"

    def test_empty_note(self):
        assert render_markdown_document("", "note", False) == ""


class TestMarkdownBackend:
    def test_writes_file_and_parents(self, tmp_path):
        path = tmp_path / "sub" / "dir" / "note.md"
        MarkdownBackend().export("<p>Hello</p>", _config(str(path)))

        assert path.read_text(encoding="utf-8") == "Hello\n"

    def test_overwrites_existing(self, tmp_path):
        path = tmp_path / "note.md"
        path.write_text("old content that is longer\n", encoding="utf-8")

        MarkdownBackend().export("<p>new</p>", _config(str(path)))
        assert path.read_text(encoding="utf-8") == "new\n"

    def test_title_from_file_stem(self, tmp_path):
        path = tmp_path / "journal.md"
        MarkdownBackend().export("<p>x</p>", _config(str(path), include_metadata=True))

        assert "title: journal\n" in path.read_text(encoding="utf-8")

    def test_expands_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        MarkdownBackend().export("<p>x</p>", _config("~/out.md"))

        assert (tmp_path / "out.md").read_text(encoding="utf-8") == "x\n"

    @pytest.mark.parametrize("path", [None, "", "   "])
    def test_missing_path(self, path):
        with pytest.raises(NotConfiguredError, match="Markdown file path"):
            MarkdownBackend().export("<p>x</p>", _config(path))

    def test_write_failure_is_io_error(self, tmp_path):
        target = tmp_path / "is_a_dir"
        target.mkdir()

        with pytest.raises(SyncIOError):
            MarkdownBackend().export("<p>x</p>", _config(str(target)))
