#!/usr/bin/env python3
"""
fs.py
-------------------
Filesystem helpers for note discovery.

Functions:
    find_markdown_files: Discover notes by glob pattern
    modified_date: Calendar day of a file's last modification
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import date, datetime
from pathlib import Path
from typing import List


def find_markdown_files(directory: Path, pattern: str = "**/*.md") -> List[Path]:
    """
    Find all files under ``directory`` matching ``pattern``.

    Files or folders whose name starts with ``.`` below ``directory``
    (``.trash/``, ``.obsidian/``, ``.draft.md``) are skipped. Results are
    sorted so runs are reproducible across filesystems. A missing
    directory yields an empty list.
    """
    if not directory.exists():
        return []
    return sorted(
        p
        for p in directory.glob(pattern)
        if p.is_file() and not _is_hidden(p.relative_to(directory))
    )


def _is_hidden(relative: Path) -> bool:
    return any(part.startswith(".") for part in relative.parts)


def modified_date(path: Path) -> date:
    """
    Return the local calendar day of ``path``'s last modification.

    Raises:
        OSError: If the file cannot be stat'ed
    """
    return datetime.fromtimestamp(path.stat().st_mtime).date()
