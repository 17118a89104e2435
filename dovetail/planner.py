# dovetail/planner.py
from __future__ import annotations

import dataclasses
import datetime as dt
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .config import DEFAULT_CONFIG, SchedulingConfig
from .conflicts import active_events, detect_conflicts
from .interval import overlaps_ms
from .layout import events_for_day, layout_day
from .model import CandidateSlot, ConflictRecord, DaySummary, Event, LayoutAssignment, ResolutionAction
from .scoring import rank_slots, score_slots
from .slots import find_candidate_slots_ms
from .summary import summarize_day
from .util.tz import date_from_ms, resolve_tz
from .validate import partition_events

logger = logging.getLogger(__name__)


def suggest_slots(
    target: Event,
    busy_events: Iterable[Event],
    now_ms: int,
    *,
    cfg: SchedulingConfig = DEFAULT_CONFIG,
) -> Tuple[CandidateSlot, ...]:
    """Top `cfg.max_suggestions` free slots for moving `target`."""
    busy = [ev for ev in busy_events if ev.id != target.id]
    slots = find_candidate_slots_ms(
        target.end_ms - target.start_ms,
        busy,
        now_ms,
        horizon_days=cfg.horizon_days,
        granularity_min=cfg.granularity_min,
        day_start_hour=cfg.day_start_hour,
        day_end_hour=cfg.day_end_hour,
        tz_name=cfg.tz,
    )
    if cfg.skip_past_slots:
        slots = [s for s in slots if s.start_ms >= now_ms]
    scored = score_slots(slots, target, cfg=cfg)
    return tuple(rank_slots(scored, cfg.max_suggestions))


def plan(
    events: Sequence[Event],
    now_ms: int,
    cfg: SchedulingConfig = DEFAULT_CONFIG,
) -> List[ConflictRecord]:
    """Detect conflicts and attach ranked alternative slots to each.

    Malformed events are skipped (and logged) rather than aborting the pass.
    A record with no free slot in the horizon carries an empty
    `suggested_slots`; that is a normal outcome.
    """
    valid, _issues = partition_events(events)
    busy = active_events(valid)

    out: List[ConflictRecord] = []
    for rec in detect_conflicts(busy, now_ms, tz_name=cfg.tz):
        suggestions = suggest_slots(rec.original, busy, now_ms, cfg=cfg)
        if not suggestions:
            logger.info("no free slot within %d day(s) for %s", cfg.horizon_days, rec.original.id)
        out.append(dataclasses.replace(rec, suggested_slots=suggestions))
    return out


# resolution actions (recommendations only; callers own the event store)
def reschedule(record: ConflictRecord, slot_index: int = 0) -> Optional[ResolutionAction]:
    """Move the lower-priority event into a suggested slot; None without suggestions."""
    if not (0 <= slot_index < len(record.suggested_slots)):
        return None
    slot = record.suggested_slots[slot_index]
    return ResolutionAction(
        kind="reschedule",
        event_id=record.original.id,
        conflict_key=record.key,
        start_ms=slot.start_ms,
        end_ms=slot.end_ms,
    )


def add_buffer(record: ConflictRecord, increment_min: int = DEFAULT_CONFIG.buffer_increment_min) -> ResolutionAction:
    current = record.original.buffer_min or 0
    return ResolutionAction(
        kind="buffer",
        event_id=record.original.id,
        conflict_key=record.key,
        buffer_min=int(current) + int(increment_min),
    )


def skip(record: ConflictRecord) -> ResolutionAction:
    return ResolutionAction(kind="skip", event_id=record.original.id, conflict_key=record.key)


def auto_resolve(records: Iterable[ConflictRecord]) -> List[ResolutionAction]:
    """Accept the best suggestion for every record that has one.

    An event involved in several conflicts is moved once, by its first record.
    Slots taken by earlier accepted moves are claimed: a later record falls
    back to its next suggestion that does not overlap them, or is left
    unresolved when none is left.
    """
    out: List[ResolutionAction] = []
    moved: set[str] = set()
    claimed: List[Tuple[int, int]] = []
    for rec in records:
        if rec.original.id in moved:
            continue
        index = next(
            (
                i
                for i, slot in enumerate(rec.suggested_slots)
                if not any(overlaps_ms(slot.start_ms, slot.end_ms, c0, c1) for c0, c1 in claimed)
            ),
            None,
        )
        action = reschedule(rec, index) if index is not None else None
        if action is None:
            if rec.suggested_slots:
                logger.info("all suggestions for %s are taken by earlier moves", rec.original.id)
            continue
        moved.add(action.event_id)
        claimed.append((int(action.start_ms), int(action.end_ms)))
        out.append(action)
    return out


def filter_dismissed(records: Iterable[ConflictRecord], dismissed_keys: Iterable[str]) -> List[ConflictRecord]:
    dismissed = set(dismissed_keys)
    return [r for r in records if r.key not in dismissed]


def apply_action(events: Sequence[Event], action: ResolutionAction) -> List[Event]:
    """Return a new event list with `action` applied; the input is untouched."""
    out: List[Event] = []
    for ev in events:
        if ev.id != action.event_id:
            out.append(ev)
            continue
        if action.kind == "reschedule" and action.start_ms is not None and action.end_ms is not None:
            out.append(dataclasses.replace(ev, start_ms=int(action.start_ms), end_ms=int(action.end_ms)))
        elif action.kind == "buffer" and action.buffer_min is not None:
            out.append(dataclasses.replace(ev, buffer_min=int(action.buffer_min)))
        else:
            out.append(ev)
    return out


@dataclass(frozen=True)
class PlanReport:
    now_ms: int
    day_key: str
    conflicts: List[ConflictRecord]
    layout: List[LayoutAssignment]
    summary: DaySummary
    issues: List[str]


def build_plan_report(
    events: Sequence[Event],
    now_ms: int,
    cfg: SchedulingConfig = DEFAULT_CONFIG,
    *,
    day: Optional[dt.date] = None,
) -> PlanReport:
    """Compute a deterministic report: conflicts with suggestions, plus layout and
    summary for `day` (default: the date of `now_ms` in cfg.tz)."""
    valid, issues = partition_events(events)
    if day is None:
        day = date_from_ms(now_ms, resolve_tz(cfg.tz))

    conflicts = plan(valid, now_ms, cfg)
    visible = events_for_day(valid, day, tz_name=cfg.tz)
    return PlanReport(
        now_ms=int(now_ms),
        day_key=day.isoformat(),
        conflicts=conflicts,
        layout=layout_day(visible),
        summary=summarize_day(valid, day, tz_name=cfg.tz),
        issues=issues,
    )


__all__ = [
    "suggest_slots",
    "plan",
    "reschedule",
    "add_buffer",
    "skip",
    "auto_resolve",
    "filter_dismissed",
    "apply_action",
    "PlanReport",
    "build_plan_report",
]
