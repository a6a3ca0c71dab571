#!/usr/bin/env python3
"""
runner.py
-------------------
Batch driver: find notes, parse them, aggregate, write the document.

    <vault>/<notes_folder>/**/*.md  ──parse──▶  ActivityRecords
                                              │
                                              ▼
                      data/activity-data.json, site/data/activity-data.json

Notes are parsed strictly one at a time. Output files are only written
once the whole batch has been parsed, so a failed run never leaves a
partial document behind.

Programmatic API:
    from tracker.pipeline.runner import run
    result = run(config, logger)
    result.stats.summary()
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

# --- Local imports ---
from tracker.core.cli import ParseStats
from tracker.core.config import TrackerConfig
from tracker.core.exceptions import NoteParseError, NotesDirectoryError
from tracker.core.logging_manager import TrackerLogger, safe_logger
from tracker.dataclasses.activity_record import BatchResult
from tracker.pipeline.aggregate import build_document, write_document
from tracker.pipeline.note_parser import parse_notes
from tracker.utils.fs import find_markdown_files


@dataclass
class RunResult:
    """
    Everything a run produced.

    Attributes:
        notes_dir: Directory the notes were read from
        batch: Per-note parse results
        document: The activity document
        written: Paths the document was written to (empty on dry runs)
        stats: Run statistics
    """

    notes_dir: Path
    batch: BatchResult
    document: Dict[str, Any]
    written: List[Path] = field(default_factory=list)
    stats: ParseStats = field(default_factory=ParseStats)


def discover_notes(root: Path, pattern: str = "**/*.md") -> List[Path]:
    """Find note files under root, sorted by path."""
    return find_markdown_files(root, pattern)


def resolve_notes_dir(
    config: TrackerConfig,
    logger: Optional[TrackerLogger] = None,
) -> Tuple[Path, bool]:
    """
    Pick the directory to read notes from.

    Args:
        config: Run configuration
        logger: Optional logger

    Returns:
        Tuple of (directory, used_fallback)

    Raises:
        NotesDirectoryError: If neither the configured directory nor an
            allowed fallback exists
    """
    primary = config.notes_dir
    if primary.is_dir():
        return primary, False

    safe_logger(logger).log_warning(
        f"Notes folder not found at: {primary}"
    )

    if not config.use_fallback:
        raise NotesDirectoryError(f"Notes folder not found: {primary}")

    for candidate in config.fallback_dirs:
        if candidate.is_dir():
            safe_logger(logger).log_info(
                "Using fallback notes folder", {"path": str(candidate)}
            )
            return candidate, True

    tried = ", ".join(str(p) for p in (primary, *config.fallback_dirs))
    raise NotesDirectoryError(f"Notes folder not found. Tried: {tried}")


def run(
    config: TrackerConfig,
    logger: Optional[TrackerLogger] = None,
    dry_run: bool = False,
    strict: bool = False,
) -> RunResult:
    """
    Run the full pipeline for one configuration.

    Args:
        config: Run configuration
        logger: Optional logger for operation tracking
        dry_run: Build the document but write nothing
        strict: Treat any note failure as fatal (nothing is written)

    Returns:
        RunResult with the batch, document and statistics

    Raises:
        NotesDirectoryError: If no notes directory can be found
        NoteParseError: In strict mode, if any note failed
        OutputWriteError: If the document cannot be written
    """
    stats = ParseStats()
    notes_dir, stats.used_fallback = resolve_notes_dir(config, logger)

    paths = discover_notes(notes_dir, config.pattern)
    stats.notes_found = len(paths)
    safe_logger(logger).log_operation(
        "run_start", {"notes_dir": str(notes_dir), "notes_found": len(paths)}
    )

    batch = parse_notes(paths, logger)
    stats.files_processed = len(batch.results) - len(batch.failures)
    stats.errors = len(batch.failures)

    if strict and not batch.ok:
        failed = ", ".join(result.path.name for result in batch.failures)
        raise NoteParseError(f"{len(batch.failures)} note(s) failed to parse: {failed}")

    records = batch.records
    document = build_document(records)
    stats.records_created = len(records)
    stats.active_days = len(document["dailyContributions"])

    written: List[Path] = []
    if not dry_run:
        written = write_document(document, config.output_paths, logger)

    safe_logger(logger).log_operation("run_complete", {"stats": stats.summary()})

    return RunResult(
        notes_dir=notes_dir,
        batch=batch,
        document=document,
        written=written,
        stats=stats,
    )
