# dovetail/model.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

MIN_MS = 60_000
HOUR_MS = 60 * MIN_MS

CONFIRMED = "confirmed"
TENTATIVE = "tentative"
CANCELLED = "cancelled"
STATUSES: Tuple[str, ...] = (CONFIRMED, TENTATIVE, CANCELLED)


@dataclass(frozen=True)
class Event:
    """A calendar event as handed over by the event store (read-only here)."""

    id: str
    start_ms: int
    end_ms: int
    title: str = ""
    attendee_count: int = 0
    category: str = ""
    status: str = CONFIRMED
    buffer_min: Optional[int] = None

    @property
    def label(self) -> str:
        return self.title or self.id

    @property
    def is_cancelled(self) -> bool:
        return self.status == CANCELLED


@dataclass(frozen=True)
class CandidateSlot:
    start_ms: int
    end_ms: int
    day_key: str
    is_free: bool
    conflicting: Tuple[Event, ...] = ()
    score: int = 0


@dataclass(frozen=True)
class ConflictRecord:
    original: Event        # lower priority, the one that should move
    other: Event           # keeps its place
    reason: str
    original_score: int
    other_score: int
    day_key: str
    overlap_start_ms: int
    overlap_end_ms: int
    suggested_slots: Tuple[CandidateSlot, ...] = ()
    resolution_type: str = "reschedule"

    @property
    def key(self) -> str:
        return conflict_key(self.original.id, self.other.id)


@dataclass(frozen=True)
class LayoutAssignment:
    event_id: str
    column_index: int
    column_count: int
    cluster_id: int = 0


@dataclass(frozen=True)
class ResolutionAction:
    """What a caller should do to its own event store; the engine only recommends."""

    kind: str  # "reschedule" | "buffer" | "skip"
    event_id: str
    conflict_key: str
    start_ms: Optional[int] = None
    end_ms: Optional[int] = None
    buffer_min: Optional[int] = None


@dataclass(frozen=True)
class DaySummary:
    day_key: str
    total_events: int
    total_hours: float
    events_by_category: Dict[str, int]
    conflicting_ids: Tuple[str, ...]
    highlight_ids: Tuple[str, ...]
    suggestions: Tuple[str, ...]


def conflict_key(a_id: str, b_id: str) -> str:
    lo, hi = sorted((str(a_id), str(b_id)))
    return f"{lo}|{hi}"


__all__ = [
    "MIN_MS",
    "HOUR_MS",
    "CONFIRMED",
    "TENTATIVE",
    "CANCELLED",
    "STATUSES",
    "Event",
    "CandidateSlot",
    "ConflictRecord",
    "LayoutAssignment",
    "ResolutionAction",
    "DaySummary",
    "conflict_key",
]
