"""
test_fs_utils.py
----------------
Unit tests for tracker.utils.fs module.

Tests note discovery and modification dates.
"""
import os
from datetime import date, datetime

from tracker.utils.fs import find_markdown_files, modified_date


class TestFindMarkdownFiles:
    """Test find_markdown_files function."""

    def test_find_markdown_files_in_directory(self, tmp_dir):
        (tmp_dir / "b.md").write_text("content")
        (tmp_dir / "a.md").write_text("content")
        (tmp_dir / "file.txt").write_text("content")

        files = find_markdown_files(tmp_dir)
        assert [f.name for f in files] == ["a.md", "b.md"]

    def test_recursive_by_default(self, tmp_dir):
        (tmp_dir / "2026").mkdir()
        (tmp_dir / "2026" / "nested.md").write_text("content")

        assert [f.name for f in find_markdown_files(tmp_dir)] == ["nested.md"]

    def test_custom_pattern(self, tmp_dir):
        (tmp_dir / "sub").mkdir()
        (tmp_dir / "sub" / "nested.md").write_text("content")
        (tmp_dir / "top.md").write_text("content")

        assert [f.name for f in find_markdown_files(tmp_dir, "*.md")] == ["top.md"]

    def test_directories_skipped(self, tmp_dir):
        (tmp_dir / "folder.md").mkdir()
        assert find_markdown_files(tmp_dir) == []

    def test_missing_directory(self, tmp_dir):
        assert find_markdown_files(tmp_dir / "nonexistent") == []


class TestModifiedDate:
    """Test modified_date function."""

    def test_local_calendar_day(self, tmp_dir):
        path = tmp_dir / "note.md"
        path.write_text("content")
        stamp = datetime(2024, 3, 1, 12, 0).timestamp()
        os.utime(path, (stamp, stamp))

        assert modified_date(path) == date(2024, 3, 1)


class TestHiddenPaths:
    """Test that dot-folders and dotfiles are not discovered."""

    def test_hidden_folders_skipped(self, tmp_dir):
        (tmp_dir / ".trash").mkdir()
        (tmp_dir / ".trash" / "Deleted.md").write_text("content")
        (tmp_dir / ".obsidian" / "plugins").mkdir(parents=True)
        (tmp_dir / ".obsidian" / "plugins" / "readme.md").write_text("content")
        (tmp_dir / "Visible.md").write_text("content")

        assert [f.name for f in find_markdown_files(tmp_dir)] == ["Visible.md"]

    def test_hidden_file_skipped(self, tmp_dir):
        (tmp_dir / ".draft.md").write_text("content")
        assert find_markdown_files(tmp_dir) == []

    def test_hidden_parent_of_root_allowed(self, tmp_dir):
        root = tmp_dir / ".vault" / "Vibing"
        root.mkdir(parents=True)
        (root / "Note.md").write_text("content")

        assert [f.name for f in find_markdown_files(root)] == ["Note.md"]
