"""Record types produced and consumed by the tracker pipeline."""

from .activity_record import (
    ActivityRecord,
    BatchResult,
    DailySummary,
    NoteResult,
    Section,
)

__all__ = [
    "ActivityRecord",
    "BatchResult",
    "DailySummary",
    "NoteResult",
    "Section",
]
