#!/usr/bin/env python3
"""
aggregate.py
-------------------
Fold activity records into the JSON document read by the contribution graph.

Output structure:
    {
        "metadata": {
            "generated": "2026-01-22T18:03:11.204000+00:00",
            "totalProjects": 12,
            "dateRange": {"start": "2025-11-02", "end": "2026-01-22"}
        },
        "dailyContributions": {
            "2026-01-22": {"intensity": 3, "projectCount": 2, "vibeTools": ["Cursor"]},
            ...
        },
        "projects": [ <ActivityRecord.to_dict()>, ... ]   # newest first
    }

The renderer treats an empty ``dailyContributions``, a null ``cost`` and
empty ``learnings`` as normal.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import os
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

# --- Local imports ---
from tracker.core.exceptions import OutputWriteError
from tracker.core.logging_manager import TrackerLogger, safe_logger
from tracker.dataclasses.activity_record import ActivityRecord, DailySummary


def build_daily_contributions(
    records: Iterable[ActivityRecord],
) -> Dict[str, DailySummary]:
    """
    Group records by day in a single pass.

    Returns:
        Mapping of ``YYYY-MM-DD`` to DailySummary, keys in ascending order
    """
    daily: Dict[str, DailySummary] = {}
    for record in records:
        daily.setdefault(record.date.isoformat(), DailySummary()).add(record)
    return {day: daily[day] for day in sorted(daily)}


def date_range(daily: Dict[str, DailySummary], today: date) -> Dict[str, str]:
    """First and last active day; both default to ``today`` when there are none."""
    days = sorted(daily)
    fallback = today.isoformat()
    return {
        "start": days[0] if days else fallback,
        "end": days[-1] if days else fallback,
    }


def sort_records(records: Iterable[ActivityRecord]) -> List[ActivityRecord]:
    """Newest first; records on the same day keep their relative order."""
    return sorted(records, key=lambda record: record.date, reverse=True)


def build_document(
    records: Sequence[ActivityRecord],
    generated: Optional[datetime] = None,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Build the activity document from parsed records.

    Args:
        records: Records from every successfully parsed note
        generated: Generation timestamp (default: now, UTC)
        today: Day used for an empty date range (default: today)

    Returns:
        JSON-serializable document
    """
    generated = generated or datetime.now(timezone.utc)
    today = today or date.today()

    daily = build_daily_contributions(records)

    return {
        "metadata": {
            "generated": generated.isoformat(),
            "totalProjects": len(records),
            "dateRange": date_range(daily, today),
        },
        "dailyContributions": {day: summary.to_dict() for day, summary in daily.items()},
        "projects": [record.to_dict() for record in sort_records(records)],
    }


def write_document(
    document: Dict[str, Any],
    paths: Iterable[Path],
    logger: Optional[TrackerLogger] = None,
) -> List[Path]:
    """
    Write the document as JSON to every path.

    Each file is written next to its target and then moved into place, so
    readers never see a half-written document.

    Raises:
        OutputWriteError: If any file cannot be written
    """
    payload = json.dumps(document, indent=2, ensure_ascii=False) + "\n"
    written: List[Path] = []

    for path in paths:
        path = Path(path)
        tmp_path = path.with_name(f".{path.name}.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            safe_logger(logger).log_error(e, {"operation": "write_document", "path": str(path)})
            raise OutputWriteError(f"Cannot write {path}: {e}") from e

        safe_logger(logger).log_operation("document_written", {"path": str(path)})
        written.append(path)

    return written


def summarize(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Headline numbers of a document, for the end-of-run report.

    Returns:
        Dict with total_projects, active_days, date_range, tools, stack
        (tools and stack in first-seen order)
    """
    tools: List[str] = []
    stack: List[str] = []
    for project in document["projects"]:
        for tool in project["vibeTools"]:
            if tool not in tools:
                tools.append(tool)
        for tech in project["stack"]:
            if tech not in stack:
                stack.append(tech)

    return {
        "total_projects": document["metadata"]["totalProjects"],
        "active_days": len(document["dailyContributions"]),
        "date_range": document["metadata"]["dateRange"],
        "tools": tools,
        "stack": stack,
    }
