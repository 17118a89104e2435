"""Per-day digest and quick open-slot lookup."""

from __future__ import annotations

import dataclasses
import datetime as dt
from typing import Dict, Iterable, List, Optional

from .config import DEFAULT_CONFIG, SchedulingConfig
from .interval import overlaps
from .layout import events_for_day
from .model import MIN_MS, CandidateSlot, DaySummary, Event
from .scoring import score_open_slot
from .slots import find_candidate_slots
from .util.tz import midnight_epoch_ms, resolve_tz

HEAVY_DAY_HOURS = 8
LIGHT_DAY_HOURS = 4
HEAVY_MEETING_COUNT = 5


def _suggestions(day_events: List[Event], total_hours: float) -> List[str]:
    out: List[str] = []
    if total_hours > HEAVY_DAY_HOURS:
        out.append("Consider scheduling breaks between meetings")
    if total_hours < LIGHT_DAY_HOURS:
        out.append("You have a light schedule - perfect for deep work")
    meeting_count = sum(1 for ev in day_events if ev.attendee_count > 1)
    if meeting_count > HEAVY_MEETING_COUNT:
        out.append("Heavy meeting load - consider consolidating or declining some")
    if not any(ev.category == "exercise" for ev in day_events):
        out.append("Don't forget to schedule some exercise")
    return out


def summarize_day(events: Iterable[Event], day: dt.date, *, tz_name: Optional[str] = "UTC") -> DaySummary:
    day_events = events_for_day(events, day, tz_name=tz_name)

    total_min = sum((ev.end_ms - ev.start_ms) / MIN_MS for ev in day_events)
    total_hours = round(total_min / 60, 1)

    by_category: Dict[str, int] = {}
    for ev in day_events:
        key = ev.category or "uncategorized"
        by_category[key] = by_category.get(key, 0) + 1

    conflicting: set[str] = set()
    for i, a in enumerate(day_events):
        for b in day_events[i + 1:]:
            if overlaps(a, b):
                conflicting.add(a.id)
                conflicting.add(b.id)

    highlights = tuple(ev.id for ev in day_events if ev.attendee_count > 1 or ev.category == "meeting")

    return DaySummary(
        day_key=day.isoformat(),
        total_events=len(day_events),
        total_hours=total_hours,
        events_by_category=dict(sorted(by_category.items())),
        conflicting_ids=tuple(sorted(conflicting)),
        highlight_ids=highlights,
        suggestions=tuple(_suggestions(day_events, total_hours)),
    )


def find_open_slots(
    events: Iterable[Event],
    day: dt.date,
    *,
    duration_min: int = 30,
    first_hour: int = 6,
    last_hour: int = 22,
    cfg: SchedulingConfig = DEFAULT_CONFIG,
) -> List[CandidateSlot]:
    """Free `duration_min` slots on one day between first_hour and last_hour, scored."""
    anchor_ms = midnight_epoch_ms(day, resolve_tz(cfg.tz))
    slots = find_candidate_slots(
        duration_min,
        list(events),
        anchor_ms,
        horizon_days=1,
        granularity_min=duration_min,
        day_start_hour=first_hour,
        day_end_hour=last_hour,
        tz_name=cfg.tz,
    )
    return [dataclasses.replace(s, score=score_open_slot(s, cfg=cfg)) for s in slots if s.is_free]


def best_meeting_times(
    events: Iterable[Event],
    day: dt.date,
    *,
    limit: int = 5,
    cfg: SchedulingConfig = DEFAULT_CONFIG,
) -> List[CandidateSlot]:
    """Open slots scoring above the baseline, in chronological order."""
    return [s for s in find_open_slots(events, day, cfg=cfg) if s.score > 100][: max(0, int(limit))]


__all__ = [
    "summarize_day",
    "find_open_slots",
    "best_meeting_times",
]
