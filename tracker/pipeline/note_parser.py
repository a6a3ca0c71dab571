#!/usr/bin/env python3
"""
note_parser.py
-------------------
Convert project notes into dated ActivityRecords.

A note is a markdown file with optional YAML frontmatter:

    ---
    VibeTools: [Cursor, Claude]
    Stack: [TypeScript, Postgres]
    ---

    ## 2026-01-21
    Set up the schema.

    ## Jan 22, 2026
    - Learned that the ORM needs explicit transactions

Each ``## <date>`` heading opens a section and every section becomes one
record. A note without date headings becomes a single record dated by the
file's last modification day.

Programmatic API:
    from tracker.pipeline.note_parser import parse_note, parse_note_file, parse_notes

    records = parse_note(text, title="My Project", modified=date.today())
    records = parse_note_file(Path("Vibing/My Project.md"))
    batch = parse_notes(paths, logger)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from collections import Counter
from datetime import date
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

# --- Third party imports ---
import yaml

# --- Local imports ---
from tracker.core.exceptions import NoteParseError
from tracker.core.logging_manager import TrackerLogger, safe_logger
from tracker.dataclasses.activity_record import (
    ActivityRecord,
    BatchResult,
    NoteResult,
    Section,
)
from tracker.pipeline.extractors import (
    calculate_intensity,
    clean_markdown,
    detect_cost,
    extract_learnings,
    parse_heading_date,
)
from tracker.utils.fs import modified_date
from tracker.utils.md import split_frontmatter
from tracker.utils.slugify import slugify


# ----- Constants -----
SECTION_HEADING_PREFIX = "## "
TOOLS_KEY = "VibeTools"
STACK_KEY = "Stack"
UNTITLED_SLUG = "untitled"


# ----- Section splitting -----
def split_sections(lines: Sequence[str]) -> List[Section]:
    """
    Split note body lines into dated sections, oldest first.

    Lines before the first date heading are dropped, including non-date
    headings. A non-date ``## `` heading after a date heading is kept as
    content of that section. A date heading with nothing under it produces
    no section. Sections sharing a date stay separate, in source order.

    Args:
        lines: Note body lines (frontmatter already removed)

    Returns:
        Sections sorted ascending by date; empty if no date heading exists

    Examples:
        >>> [s.date.isoformat() for s in split_sections(
        ...     ["## 2026-01-23", "b", "## 2026-01-22", "a"])]
        ['2026-01-22', '2026-01-23']
    """
    sections: List[Section] = []
    current_date: Optional[date] = None
    buffer: List[str] = []

    for line in lines:
        if line.startswith(SECTION_HEADING_PREFIX):
            heading_date = parse_heading_date(line)
            if heading_date is not None:
                if current_date is not None and buffer:
                    sections.append(Section(current_date, tuple(buffer)))
                current_date = heading_date
                buffer = []
                continue

        if current_date is not None:
            buffer.append(line)

    if current_date is not None and buffer:
        sections.append(Section(current_date, tuple(buffer)))

    # sorted() is stable: same-day sections keep their source order
    return sorted(sections, key=lambda section: section.date)


# ----- Frontmatter -----
def parse_frontmatter(frontmatter_text: str) -> Dict[str, Any]:
    """
    Parse frontmatter YAML into a mapping.

    Raises:
        NoteParseError: If the YAML is malformed or not a mapping
    """
    if not frontmatter_text.strip():
        return {}

    try:
        data = yaml.safe_load(frontmatter_text)
    except yaml.YAMLError as e:
        raise NoteParseError(f"Cannot parse YAML frontmatter: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise NoteParseError(
            f"Frontmatter must be a mapping, got {type(data).__name__}"
        )
    return data


def frontmatter_list(frontmatter: Dict[str, Any], key: str) -> Tuple[str, ...]:
    """
    Read a list-of-strings frontmatter field.

    A missing or null value gives an empty tuple; a single scalar is
    treated as a one-item list.

    Examples:
        >>> frontmatter_list({"Stack": ["Go", "SQLite"]}, "Stack")
        ('Go', 'SQLite')
        >>> frontmatter_list({"Stack": "Go"}, "Stack")
        ('Go',)
        >>> frontmatter_list({}, "Stack")
        ()
    """
    value = frontmatter.get(key)
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(str(item).strip() for item in value if item is not None)
    return (str(value).strip(),)


# ----- Records -----
def _record_ids(base: str, sections: Sequence[Section]) -> List[str]:
    """Build unique ids: bare slug for one section, date-suffixed otherwise."""
    if len(sections) == 1:
        return [base]

    seen: Counter = Counter()
    ids: List[str] = []
    for section in sections:
        day = section.date.isoformat()
        seen[day] += 1
        suffix = day if seen[day] == 1 else f"{day}-{seen[day]}"
        ids.append(f"{base}-{suffix}")
    return ids


def build_record(
    section: Section,
    record_id: str,
    title: str,
    vibe_tools: Tuple[str, ...],
    stack: Tuple[str, ...],
    file_path: str,
) -> ActivityRecord:
    """Run every extractor over one section and assemble its record."""
    content = section.content
    learnings = extract_learnings(content)

    return ActivityRecord(
        id=record_id,
        date=section.date,
        title=title,
        vibe_tools=vibe_tools,
        stack=stack,
        description=clean_markdown(content),
        learnings=tuple(learnings),
        cost=detect_cost(content),
        intensity=calculate_intensity(content, learnings),
        file_path=file_path,
    )


def parse_note(
    text: str,
    title: str,
    modified: date,
    file_path: str = "",
) -> List[ActivityRecord]:
    """
    Parse one note's text into activity records.

    Args:
        text: Full note text, frontmatter included
        title: Display name of the note (usually the file stem)
        modified: Day used when the note has no date headings
        file_path: Source path recorded on each record

    Returns:
        One record per dated section (oldest first), or exactly one record
        dated ``modified`` when the note has no date headings

    Raises:
        NoteParseError: If the frontmatter is malformed
    """
    frontmatter_text, body_lines = split_frontmatter(text)
    frontmatter = parse_frontmatter(frontmatter_text)

    vibe_tools = frontmatter_list(frontmatter, TOOLS_KEY)
    stack = frontmatter_list(frontmatter, STACK_KEY)

    sections = split_sections(body_lines)
    if not sections:
        sections = [Section(modified, tuple(body_lines))]

    base_id = slugify(title) or UNTITLED_SLUG
    ids = _record_ids(base_id, sections)

    return [
        build_record(section, record_id, title, vibe_tools, stack, file_path)
        for section, record_id in zip(sections, ids)
    ]


def parse_note_file(path: Path) -> List[ActivityRecord]:
    """
    Read and parse a note file.

    The title is the file stem and the fallback date is the file's
    last-modified calendar day. A leading UTF-8 byte order mark is dropped.

    Raises:
        NoteParseError: If the file cannot be read or its frontmatter is invalid
    """
    try:
        text = path.read_text(encoding="utf-8-sig")
        modified = modified_date(path)
    except (OSError, UnicodeDecodeError) as e:
        raise NoteParseError(f"Cannot read note {path}: {e}") from e

    return parse_note(text, title=path.stem, modified=modified, file_path=str(path))


def parse_notes(
    paths: Iterable[Path],
    logger: Optional[TrackerLogger] = None,
) -> BatchResult:
    """
    Parse notes one at a time, isolating failures per note.

    A failing note contributes no records; its error is logged and kept
    in the batch result, and the remaining notes are still parsed.

    Args:
        paths: Note files, processed in the given order
        logger: Optional logger for operation tracking

    Returns:
        BatchResult with one NoteResult per path
    """
    batch = BatchResult()

    for path in paths:
        try:
            records = parse_note_file(path)
        except Exception as e:  # noqa: BLE001
            safe_logger(logger).log_note_failure(path, e)
            batch.results.append(NoteResult(path=path, error=str(e)))
            continue

        safe_logger(logger).log_note_parsed(path, len(records))
        batch.results.append(NoteResult(path=path, records=tuple(records)))

    return batch
