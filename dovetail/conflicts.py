# dovetail/conflicts.py
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from .interval import overlap_span, overlaps
from .model import ConflictRecord, Event
from .priority import priority_score
from .util.tz import day_key_from_ms, resolve_tz

logger = logging.getLogger(__name__)


def active_events(events: Iterable[Event]) -> List[Event]:
    """Drop cancelled events; they take no part in conflicts or layout."""
    return [ev for ev in events if not ev.is_cancelled]


def group_by_day(events: Iterable[Event], *, tz_name: Optional[str] = "UTC") -> Dict[str, List[Event]]:
    """Bucket events by the calendar date of their start in `tz_name`.

    Buckets are sorted by (start_ms, end_ms, id).
    """
    tzinfo = resolve_tz(tz_name)
    groups: Dict[str, List[Event]] = {}
    for ev in events:
        day = day_key_from_ms(ev.start_ms, tzinfo)
        groups.setdefault(day, []).append(ev)
    for arr in groups.values():
        arr.sort(key=lambda e: (e.start_ms, e.end_ms, e.id))
    return groups


def _pick_mover(a: Event, a_score: int, b: Event, b_score: int) -> Tuple[Event, int, Event, int]:
    """Return (mover, mover_score, keeper, keeper_score).

    Lower score moves. On a tie the later start moves; on equal starts the
    larger id moves.
    """
    if a_score != b_score:
        if a_score < b_score:
            return a, a_score, b, b_score
        return b, b_score, a, a_score
    if (a.start_ms, a.id) > (b.start_ms, b.id):
        return a, a_score, b, b_score
    return b, b_score, a, a_score


def build_record(a: Event, b: Event, now_ms: int, day_key: str) -> ConflictRecord:
    a_score = priority_score(a, now_ms)
    b_score = priority_score(b, now_ms)
    mover, mover_score, keeper, keeper_score = _pick_mover(a, a_score, b, b_score)
    span = overlap_span(a, b) or (max(a.start_ms, b.start_ms), max(a.start_ms, b.start_ms))
    return ConflictRecord(
        original=mover,
        other=keeper,
        reason=f"Conflicts with {keeper.label}",
        original_score=mover_score,
        other_score=keeper_score,
        day_key=day_key,
        overlap_start_ms=span[0],
        overlap_end_ms=span[1],
    )


def detect_conflicts(
    events: Iterable[Event],
    now_ms: int,
    *,
    tz_name: Optional[str] = "UTC",
) -> List[ConflictRecord]:
    """Pairwise overlaps among non-cancelled events sharing a start day.

    Day-bucketed: O(k^2) per day with k events that day. Output is ordered by
    day, then by the (start, id) order of the pair's members.
    """
    groups = group_by_day(active_events(events), tz_name=tz_name)

    out: List[ConflictRecord] = []
    for day_key in sorted(groups):
        arr = groups[day_key]
        for i in range(len(arr)):
            a = arr[i]
            for j in range(i + 1, len(arr)):
                b = arr[j]
                if b.start_ms >= a.end_ms:
                    # sorted by start: nothing later in the bucket can overlap a
                    break
                if overlaps(a, b):
                    out.append(build_record(a, b, now_ms, day_key))

    logger.debug("detected %d conflict(s) across %d day(s)", len(out), len(groups))
    return out


__all__ = [
    "active_events",
    "group_by_day",
    "build_record",
    "detect_conflicts",
]
