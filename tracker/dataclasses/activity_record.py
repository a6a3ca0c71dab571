#!/usr/bin/env python3
"""
activity_record.py
-------------------

Defines the records produced by the note parser and the per-day summaries
derived from them.

- Section: one dated run of body lines inside a note
- ActivityRecord: one day of work on one project, as emitted to JSON
- DailySummary: all records of one calendar day, folded together
- NoteResult / BatchResult: per-note outcome of a parsing batch

A note owns 1..N ActivityRecords. Records are frozen: nothing downstream
of the parser may change them.
"""
# ---- Annotations ----
from __future__ import annotations

# ---- Standard library imports ----
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple


# ----- Constants -----
STATUS_COMPLETED = "completed"
MIN_INTENSITY = 1
MAX_INTENSITY = 4


# ----- Dataclasses -----
@dataclass(frozen=True)
class Section:
    """
    A contiguous run of note body lines attributed to one calendar day.

    Attributes:
        date: Day the section belongs to
        lines: Raw body lines, heading excluded
    """

    date: date
    lines: Tuple[str, ...]

    @property
    def content(self) -> str:
        return "\n".join(self.lines)


@dataclass(frozen=True)
class ActivityRecord:
    """
    One day of activity on one project note.

    Attributes:
        id: Slug of the title, date-suffixed when the note has several records
        date: Calendar day of the activity
        title: Note display name (file stem)
        vibe_tools: Tool names from the ``VibeTools`` frontmatter key
        stack: Technologies from the ``Stack`` frontmatter key
        description: Cleaned prose of the section
        learnings: Extracted learning lines, in source order
        cost: First ``$<digits>`` amount found in the section, if any
        intensity: Work intensity heuristic, 1-4
        file_path: Source note path
        status: Always ``completed``
    """

    id: str
    date: date
    title: str
    vibe_tools: Tuple[str, ...] = ()
    stack: Tuple[str, ...] = ()
    description: str = ""
    learnings: Tuple[str, ...] = ()
    cost: Optional[str] = None
    intensity: int = MIN_INTENSITY
    file_path: str = ""
    status: str = STATUS_COMPLETED

    def __post_init__(self) -> None:
        if not MIN_INTENSITY <= self.intensity <= MAX_INTENSITY:
            raise ValueError(
                f"intensity must be within [{MIN_INTENSITY}, {MAX_INTENSITY}], "
                f"got {self.intensity}"
            )
        if self.status != STATUS_COMPLETED:
            raise ValueError(f"Unsupported status: {self.status!r}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the JSON document's field names."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "title": self.title,
            "vibeTools": list(self.vibe_tools),
            "stack": list(self.stack),
            "description": self.description,
            "learnings": list(self.learnings),
            "cost": self.cost,
            "status": self.status,
            "intensity": self.intensity,
            "filePath": self.file_path,
        }


@dataclass
class DailySummary:
    """
    Aggregate of every record on one calendar day.

    Attributes:
        intensity: Highest record intensity of the day
        project_count: Number of records on the day
        vibe_tools: Union of the records' tools, first-seen order
    """

    intensity: int = 0
    project_count: int = 0
    vibe_tools: List[str] = field(default_factory=list)

    def add(self, record: ActivityRecord) -> None:
        """Fold one record into the summary."""
        self.intensity = max(self.intensity, record.intensity)
        self.project_count += 1
        for tool in record.vibe_tools:
            if tool not in self.vibe_tools:
                self.vibe_tools.append(tool)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "intensity": self.intensity,
            "projectCount": self.project_count,
            "vibeTools": list(self.vibe_tools),
        }


@dataclass(frozen=True)
class NoteResult:
    """Outcome of parsing one note: its records, or why it failed."""

    path: Path
    records: Tuple[ActivityRecord, ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchResult:
    """Per-note results of a parsing batch, in processing order."""

    results: List[NoteResult] = field(default_factory=list)

    @property
    def records(self) -> List[ActivityRecord]:
        return [r for result in self.results for r in result.records]

    @property
    def failures(self) -> List[NoteResult]:
        return [result for result in self.results if not result.ok]

    @property
    def ok(self) -> bool:
        return not self.failures
