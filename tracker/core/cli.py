#!/usr/bin/env python3
"""
cli.py
------
Logger setup and run statistics shared by tracker commands.

Functions:
    setup_logger: Initialize TrackerLogger for CLI operations

Classes:
    OperationStats: Base class for run statistics
    ParseStats: Statistics for a note parsing run

Usage:
    from tracker.core.cli import setup_logger, ParseStats

    logger = setup_logger(log_dir, "parse")
    stats = ParseStats()
    stats.files_processed += 1
    print(stats.summary())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

# --- Local imports ---
from tracker.core.logging_manager import TrackerLogger


# ═══════════════════════════════════════════════════════════════════════════
# LOGGER SETUP
# ═══════════════════════════════════════════════════════════════════════════

def setup_logger(log_dir: Path, component_name: str) -> TrackerLogger:
    """
    Setup logging for CLI operations.

    Logs go to ``<log_dir>/operations/``.

    Args:
        log_dir: Base log directory (typically paths.LOG_DIR)
        component_name: Component identifier for logging (e.g., 'parse')

    Returns:
        Configured TrackerLogger instance
    """
    operations_log_dir = Path(log_dir) / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return TrackerLogger(operations_log_dir, component_name=component_name)


# ═══════════════════════════════════════════════════════════════════════════
# STATISTICS CLASSES
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class OperationStats:
    """
    Base class for CLI operation statistics.

    Attributes:
        files_processed: Number of files successfully processed
        errors: Number of errors encountered
        start_time: Operation start timestamp
    """
    files_processed: int = 0
    errors: int = 0
    start_time: datetime = field(default_factory=datetime.now)
    _duration_cached: Optional[float] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.files_processed < 0:
            raise ValueError(f"files_processed must be non-negative, got {self.files_processed}")
        if self.errors < 0:
            raise ValueError(f"errors must be non-negative, got {self.errors}")

    def duration(self) -> float:
        """Elapsed seconds since start_time (cached after first call)."""
        if self._duration_cached is None:
            self._duration_cached = (datetime.now() - self.start_time).total_seconds()
        return self._duration_cached

    def summary(self) -> str:
        return (
            f"{self.files_processed} files processed, "
            f"{self.errors} errors, "
            f"{self.duration():.2f}s"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files_processed": self.files_processed,
            "errors": self.errors,
            "duration": self.duration(),
        }


@dataclass
class ParseStats(OperationStats):
    """
    Statistics for a note parsing run.

    Attributes:
        notes_found: Number of note files discovered
        records_created: Number of activity records produced
        active_days: Number of distinct days with activity
        used_fallback: Whether a fallback notes directory was used
    """
    notes_found: int = 0
    records_created: int = 0
    active_days: int = 0
    used_fallback: bool = False

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.notes_found < 0:
            raise ValueError(f"notes_found must be non-negative, got {self.notes_found}")
        if self.records_created < 0:
            raise ValueError(f"records_created must be non-negative, got {self.records_created}")

    def summary(self) -> str:
        parts = [
            f"{self.notes_found} notes found",
            f"{self.files_processed} parsed",
            f"{self.records_created} records",
            f"{self.active_days} active days",
            f"{self.errors} errors",
        ]
        if self.used_fallback:
            parts.append("fallback directory")
        parts.append(f"{self.duration():.2f}s")
        return ", ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d.update({
            "notes_found": self.notes_found,
            "records_created": self.records_created,
            "active_days": self.active_days,
            "used_fallback": self.used_fallback,
        })
        return d
