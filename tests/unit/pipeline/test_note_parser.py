"""
test_note_parser.py
-------------------
Unit tests for tracker.pipeline.note_parser.

Tests section splitting, frontmatter handling, record construction and
per-note failure isolation.
"""
from dataclasses import FrozenInstanceError
from datetime import date
from unittest.mock import MagicMock

import pytest

from tracker.core.exceptions import NoteParseError
from tracker.core.logging_manager import TrackerLogger
from tracker.pipeline.note_parser import (
    frontmatter_list,
    parse_frontmatter,
    parse_note,
    parse_note_file,
    parse_notes,
    split_sections,
)


class TestSplitSections:
    """Test split_sections function."""

    def test_no_date_headings(self):
        assert split_sections(["# Title", "text", "## Ideas", "more"]) == []

    def test_single_section(self):
        sections = split_sections(["## 2026-01-22", "did things"])
        assert len(sections) == 1
        assert sections[0].date == date(2026, 1, 22)
        assert sections[0].lines == ("did things",)

    def test_lines_before_first_date_dropped(self):
        sections = split_sections(["intro", "## Overview", "more intro", "## 2026-01-22", "work"])
        assert len(sections) == 1
        assert sections[0].lines == ("work",)

    def test_non_date_heading_kept_inside_section(self):
        sections = split_sections(["## 2026-01-22", "a", "## Random notes", "b"])
        assert sections[0].lines == ("a", "## Random notes", "b")

    def test_empty_section_dropped(self):
        sections = split_sections(["## 2026-01-21", "## 2026-01-22", "work"])
        assert [s.date for s in sections] == [date(2026, 1, 22)]

    def test_blank_line_counts_as_content(self):
        sections = split_sections(["## 2026-01-21", "", "## 2026-01-22", "work"])
        assert [s.date for s in sections] == [date(2026, 1, 21), date(2026, 1, 22)]

    def test_sorted_ascending(self):
        lines = ["## 2026-01-23", "c", "## Jan 21, 2026", "a", "## 2026-01-22", "b"]
        sections = split_sections(lines)
        assert [s.content for s in sections] == ["a", "b", "c"]

    def test_same_day_sections_keep_source_order(self):
        lines = ["## 2026-01-22", "first", "## 2026-01-20", "x", "## 2026-01-22", "second"]
        sections = split_sections(lines)
        assert [s.content for s in sections] == ["x", "first", "second"]

    def test_h3_is_ordinary_content(self):
        sections = split_sections(["## 2026-01-22", "### 2026-01-23", "x"])
        assert len(sections) == 1
        assert sections[0].lines == ("### 2026-01-23", "x")


class TestFrontmatter:
    """Test frontmatter helpers."""

    def test_empty(self):
        assert parse_frontmatter("") == {}

    def test_only_comments(self):
        assert parse_frontmatter("# nothing here") == {}

    def test_mapping(self):
        assert parse_frontmatter("Stack: [Go]\nVibeTools: [Cursor]") == {
            "Stack": ["Go"],
            "VibeTools": ["Cursor"],
        }

    def test_malformed_yaml(self):
        with pytest.raises(NoteParseError):
            parse_frontmatter("Stack: [unclosed")

    def test_non_mapping(self):
        with pytest.raises(NoteParseError):
            parse_frontmatter("- just\n- a list")

    def test_list_missing_key(self):
        assert frontmatter_list({}, "Stack") == ()

    def test_list_null_value(self):
        assert frontmatter_list({"Stack": None}, "Stack") == ()

    def test_list_scalar_value(self):
        assert frontmatter_list({"Stack": "Rust"}, "Stack") == ("Rust",)

    def test_list_values_stringified(self):
        assert frontmatter_list({"Stack": ["Python", 3, None]}, "Stack") == ("Python", "3")


class TestParseNote:
    """Test parse_note function."""

    def test_undated_note_single_record(self, undated_note_content):
        records = parse_note(
            undated_note_content, title="Weekend Dashboard", modified=date(2024, 3, 1)
        )
        assert len(records) == 1
        record = records[0]
        assert record.date == date(2024, 3, 1)
        assert record.id == "weekend-dashboard"
        assert record.vibe_tools == ("Cursor",)
        assert record.stack == ("TypeScript",)
        assert record.learnings == ("Learned that chart libraries need fixed heights",)
        assert record.status == "completed"
        assert record.cost is None
        assert "Built a small dashboard" in record.description

    def test_dated_note_one_record_per_section(self, dated_note_content):
        records = parse_note(dated_note_content, title="Notes DB", modified=date(2024, 3, 1))
        assert [r.date.isoformat() for r in records] == ["2026-01-20", "2026-01-21", "2026-01-22"]
        assert [r.id for r in records] == [
            "notes-db-2026-01-20",
            "notes-db-2026-01-21",
            "notes-db-2026-01-22",
        ]
        assert {r.title for r in records} == {"Notes DB"}
        assert all(r.vibe_tools == ("Claude", "Cursor") for r in records)
        assert all(r.stack == ("Python", "SQLite") for r in records)

    def test_dated_note_section_fields(self, dated_note_content):
        records = parse_note(dated_note_content, title="Notes DB", modified=date(2024, 3, 1))
        first, second, third = records

        assert "Set up the project skeleton." in first.description
        assert "## Random notes" in first.description
        assert "Intro text" not in first.description

        assert second.learnings == (
            "Wondering whether FTS5 is enough",
            "Should add an index on created_at",
            "There is an issue with timezone handling",
        )
        assert second.intensity == 2

        assert third.cost == "$12"
        assert third.learnings == ("Learned that SQLite needs WAL mode for concurrent readers",)
        assert third.intensity == 1

    def test_single_dated_section_has_bare_id(self):
        records = parse_note("## 2026-01-22\nwork", title="Solo", modified=date(2024, 1, 1))
        assert [r.id for r in records] == ["solo"]
        assert records[0].date == date(2026, 1, 22)

    def test_duplicate_dates_get_unique_ids(self):
        text = "## 2026-01-22\nmorning\n## 2026-01-22\nevening"
        records = parse_note(text, title="Twice", modified=date(2024, 1, 1))
        assert [r.id for r in records] == ["twice-2026-01-22", "twice-2026-01-22-2"]

    def test_no_frontmatter(self):
        records = parse_note("Just some prose.", title="Plain", modified=date(2024, 1, 1))
        assert records[0].vibe_tools == ()
        assert records[0].stack == ()
        assert records[0].description == "Just some prose."

    def test_empty_note(self):
        records = parse_note("", title="Empty", modified=date(2024, 1, 1))
        assert len(records) == 1
        assert records[0].description == ""
        assert records[0].learnings == ()
        assert records[0].intensity == 1

    def test_non_latin_titles_keep_distinct_ids(self):
        first = parse_note("a", title="日本語 メモ", modified=date(2024, 1, 1))[0]
        second = parse_note("b", title="数据 管道", modified=date(2024, 1, 1))[0]
        assert first.id == "日本語-メモ"
        assert second.id == "数据-管道"

    def test_untitled_slug_fallback(self):
        records = parse_note("text", title="???", modified=date(2024, 1, 1))
        assert records[0].id == "untitled"

    def test_malformed_frontmatter_raises(self):
        with pytest.raises(NoteParseError):
            parse_note("---\nStack: [oops\n---\nbody", title="Bad", modified=date(2024, 1, 1))

    def test_intensity_uses_raw_section_length(self):
        text = "## 2026-01-22\n" + "word " * 300
        records = parse_note(text, title="Long", modified=date(2024, 1, 1))
        assert records[0].intensity == 3

    def test_records_are_immutable(self):
        record = parse_note("text", title="Frozen", modified=date(2024, 1, 1))[0]
        with pytest.raises(FrozenInstanceError):
            record.intensity = 4  # type: ignore[misc]

    def test_file_path_recorded(self):
        records = parse_note("x", title="P", modified=date(2024, 1, 1), file_path="/v/P.md")
        assert records[0].file_path == "/v/P.md"


class TestParseNoteFile:
    """Test parse_note_file function."""

    def test_title_and_mtime_from_file(self, notes_dir, write_note, undated_note_content):
        path = write_note(notes_dir, "Weekend Dashboard", undated_note_content, mtime="2024-03-01")
        records = parse_note_file(path)
        assert len(records) == 1
        assert records[0].title == "Weekend Dashboard"
        assert records[0].date == date(2024, 3, 1)
        assert records[0].file_path == str(path)

    def test_missing_file(self, tmp_dir):
        with pytest.raises(NoteParseError):
            parse_note_file(tmp_dir / "missing.md")

    def test_byte_order_mark_before_frontmatter(self, notes_dir, write_note):
        path = write_note(
            notes_dir, "Bom", "\ufeff---\nVibeTools: [Cursor]\nStack: [TypeScript]\n---\nBuilt it."
        )
        record = parse_note_file(path)[0]
        assert record.vibe_tools == ("Cursor",)
        assert record.stack == ("TypeScript",)
        assert record.description == "Built it."

    def test_undecodable_file(self, notes_dir):
        path = notes_dir / "binary.md"
        path.write_bytes(b"\xff\xfe\x00bad")
        with pytest.raises(NoteParseError):
            parse_note_file(path)


class TestParseNotes:
    """Test parse_notes batch function."""

    def test_failure_isolated(self, notes_dir, write_note):
        good = write_note(notes_dir, "Good", "## 2026-01-22\nwork")
        bad = write_note(notes_dir, "Bad", "---\nStack: [oops\n---\nbody")
        other = write_note(notes_dir, "Other", "text", mtime="2024-05-05")

        batch = parse_notes([good, bad, other])

        assert [r.path for r in batch.results] == [good, bad, other]
        assert not batch.ok
        assert [f.path for f in batch.failures] == [bad]
        assert "frontmatter" in batch.failures[0].error.lower()
        assert [r.title for r in batch.records] == ["Good", "Other"]

    def test_failure_logged(self, notes_dir, write_note):
        bad = write_note(notes_dir, "Bad", "---\nStack: [oops\n---\nbody")
        logger = MagicMock(spec=TrackerLogger)

        parse_notes([bad], logger)

        logger.log_note_failure.assert_called_once()
        path, error = logger.log_note_failure.call_args[0]
        assert path == bad
        assert isinstance(error, NoteParseError)
        logger.log_error.assert_not_called()

    def test_empty_batch(self):
        batch = parse_notes([])
        assert batch.ok
        assert batch.records == []
