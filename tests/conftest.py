"""
conftest.py
-----------
Shared pytest fixtures for activity tracker tests.

Provides fixtures for:
- Temporary vault layouts
- A note factory that writes notes with a chosen modification time
- Sample note contents
"""
import os
from datetime import datetime
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from tracker.core.config import TrackerConfig


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def vault(tmp_dir):
    """Vault root containing an empty ``Vibing`` notes folder."""
    (tmp_dir / "vault" / "Vibing").mkdir(parents=True)
    return tmp_dir / "vault"


@pytest.fixture
def notes_dir(vault):
    """The vault's notes folder."""
    return vault / "Vibing"


@pytest.fixture
def write_note():
    """
    Factory writing a note and setting its modification time.

    Usage:
        path = write_note(notes_dir, "My Project", text, mtime="2024-03-01")
    """

    def _write(directory: Path, title: str, text: str, mtime: str = "2024-03-01") -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"{title}.md"
        path.write_text(text, encoding="utf-8")
        stamp = datetime.fromisoformat(f"{mtime}T12:00:00").timestamp()
        os.utime(path, (stamp, stamp))
        return path

    return _write


@pytest.fixture
def tracker_config(vault, tmp_dir):
    """Config pointing at the temporary vault, writing into tmp_dir/out."""
    return TrackerConfig(
        vault_path=vault,
        output_paths=(
            tmp_dir / "out" / "data" / "activity-data.json",
            tmp_dir / "out" / "site" / "data" / "activity-data.json",
        ),
        fallback_dirs=(),
    )


# ----- Sample Note Content Fixtures -----

@pytest.fixture
def undated_note_content():
    """Note with frontmatter and no date headings."""
    return """---
VibeTools: [Cursor]
Stack: [TypeScript]
---

# Weekend Dashboard

Built a small dashboard for tracking workouts.

- Learned that chart libraries need fixed heights
"""


@pytest.fixture
def dated_note_content():
    """Note with three dated sections, out of chronological order."""
    return """---
VibeTools:
  - Claude
  - Cursor
Stack:
  - Python
  - SQLite
---

Intro text that belongs to no day.

## Jan 22, 2026

- Learned that SQLite needs WAL mode for concurrent readers
- Spent $12 on API credits

## 2026-01-20

Set up the **project** skeleton.

## Random notes

Still part of the 2026-01-20 section.

## 2026-01-21

1. Wondering whether FTS5 is enough
2. Should add an index on created_at
3. There is an issue with timezone handling
"""
