"""JSON I/O for events and engine results."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .model import CONFIRMED, CandidateSlot, ConflictRecord, DaySummary, Event, LayoutAssignment
from .util.timeparse import format_ms_iso, parse_iso_to_ms


def _as_int(v: Any) -> Optional[int]:
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    return None


def _instant_ms(raw: Dict[str, Any], name: str, tz: str) -> int:
    ms = _as_int(raw.get(f"{name}_ms"))
    if ms is not None:
        return ms
    s = raw.get(name)
    if isinstance(s, str) and s.strip():
        return parse_iso_to_ms(s, tz)
    raise ValueError(f"missing {name} (ISO string) or {name}_ms (int)")


def _attendee_count(v: Any) -> int:
    if isinstance(v, list):
        return len(v)
    n = _as_int(v)
    return 0 if n is None else n


def event_from_dict(raw: Dict[str, Any], *, tz: str = "UTC") -> Event:
    """Build an Event from a loose JSON object.

    Shape errors raise ValueError; invariant checks (start < end, counts) are
    left to `validate_event`.
    """
    if not isinstance(raw, dict):
        raise ValueError("event must be an object")
    ev_id = raw.get("id")
    if isinstance(ev_id, int) and not isinstance(ev_id, bool):
        ev_id = str(ev_id)
    if not isinstance(ev_id, str) or not ev_id.strip():
        raise ValueError("event id must be a non-empty string")

    attendees = raw.get("attendees", raw.get("attendee_count"))
    buffer_min = raw.get("buffer_min")
    if buffer_min is not None and _as_int(buffer_min) is None:
        raise ValueError(f"event {ev_id!r}: buffer_min must be int")

    return Event(
        id=ev_id,
        start_ms=_instant_ms(raw, "start", tz),
        end_ms=_instant_ms(raw, "end", tz),
        title=str(raw.get("title") or ""),
        attendee_count=_attendee_count(attendees),
        category=str(raw.get("category") or "").strip().lower(),
        status=str(raw.get("status") or CONFIRMED).strip().lower(),
        buffer_min=_as_int(buffer_min),
    )


def events_from_obj(obj: Any, *, tz: str = "UTC") -> Tuple[List[Event], List[str]]:
    """Return (events, issues). Unparseable entries are reported, not fatal."""
    if isinstance(obj, dict):
        obj = obj.get("events")
    if not isinstance(obj, list):
        raise ValueError("input must be a list of events or an object with an 'events' list")

    events: List[Event] = []
    issues: List[str] = []
    for i, raw in enumerate(obj):
        try:
            events.append(event_from_dict(raw, tz=tz))
        except ValueError as e:
            issues.append(f"events[{i}]: {e}")
    return events, issues


def load_events(path: Path, *, tz: str = "UTC") -> Tuple[List[Event], List[str]]:
    obj = json.loads(Path(path).read_text(encoding="utf-8", errors="replace"))
    return events_from_obj(obj, tz=tz)


def event_to_dict(ev: Event, *, tz: str = "UTC") -> Dict[str, Any]:
    return {
        "id": ev.id,
        "title": ev.title,
        "start_ms": ev.start_ms,
        "end_ms": ev.end_ms,
        "start": format_ms_iso(ev.start_ms, tz),
        "end": format_ms_iso(ev.end_ms, tz),
        "attendee_count": ev.attendee_count,
        "category": ev.category,
        "status": ev.status,
        "buffer_min": ev.buffer_min,
    }


def slot_to_dict(slot: CandidateSlot, *, tz: str = "UTC") -> Dict[str, Any]:
    return {
        "start_ms": slot.start_ms,
        "end_ms": slot.end_ms,
        "start": format_ms_iso(slot.start_ms, tz),
        "end": format_ms_iso(slot.end_ms, tz),
        "day_key": slot.day_key,
        "is_free": slot.is_free,
        "conflicting": [ev.id for ev in slot.conflicting],
        "score": slot.score,
    }


def conflict_to_dict(rec: ConflictRecord, *, tz: str = "UTC") -> Dict[str, Any]:
    return {
        "key": rec.key,
        "day_key": rec.day_key,
        "original": event_to_dict(rec.original, tz=tz),
        "other_id": rec.other.id,
        "reason": rec.reason,
        "original_score": rec.original_score,
        "other_score": rec.other_score,
        "overlap_start_ms": rec.overlap_start_ms,
        "overlap_end_ms": rec.overlap_end_ms,
        "resolution_type": rec.resolution_type,
        "suggested_slots": [slot_to_dict(s, tz=tz) for s in rec.suggested_slots],
    }


def layout_to_dict(a: LayoutAssignment) -> Dict[str, Any]:
    return {
        "event_id": a.event_id,
        "column_index": a.column_index,
        "column_count": a.column_count,
        "cluster_id": a.cluster_id,
    }


def summary_to_dict(s: DaySummary) -> Dict[str, Any]:
    return {
        "day_key": s.day_key,
        "total_events": s.total_events,
        "total_hours": s.total_hours,
        "events_by_category": dict(s.events_by_category),
        "conflicting_ids": list(s.conflicting_ids),
        "highlight_ids": list(s.highlight_ids),
        "suggestions": list(s.suggestions),
    }


def dump_json(obj: Any) -> str:
    return json.dumps(obj, indent=2, ensure_ascii=False, sort_keys=True) + "\n"


__all__ = [
    "event_from_dict",
    "events_from_obj",
    "load_events",
    "event_to_dict",
    "slot_to_dict",
    "conflict_to_dict",
    "layout_to_dict",
    "summary_to_dict",
    "dump_json",
]
