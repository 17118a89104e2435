# dovetail/layout.py
"""Side-by-side column packing for a single-day view.

Policy: greedy interval colouring per connected overlap cluster. Events are
taken in (start_ms, id) order and placed in the lowest-numbered column whose
previous occupant has already ended, so non-overlapping members of a cluster
reuse columns. Every member of a cluster reports the same `column_count`: the
number of columns the cluster needed, which for interval graphs equals the
largest number of its events alive at one instant.
"""

from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Optional

from .conflicts import active_events
from .model import Event, LayoutAssignment
from .util.tz import day_key_from_ms, resolve_tz


def events_for_day(events: Iterable[Event], day: dt.date, *, tz_name: Optional[str] = "UTC") -> List[Event]:
    """Non-cancelled events whose start falls on `day` in `tz_name`."""
    tzinfo = resolve_tz(tz_name)
    key = day.isoformat()
    out = [ev for ev in active_events(events) if day_key_from_ms(ev.start_ms, tzinfo) == key]
    out.sort(key=lambda e: (e.start_ms, e.id))
    return out


def _clusters(events: List[Event]) -> List[List[Event]]:
    groups: List[List[Event]] = []
    cur: List[Event] = []
    max_end = -1
    for ev in events:
        if cur and ev.start_ms < max_end:
            cur.append(ev)
            max_end = max(max_end, ev.end_ms)
            continue
        if cur:
            groups.append(cur)
        cur = [ev]
        max_end = ev.end_ms
    if cur:
        groups.append(cur)
    return groups


def layout_day(visible_events: Iterable[Event]) -> List[LayoutAssignment]:
    """Assign a column index and column count to every visible event.

    Cancelled events are left out. Output is in (start_ms, id) order.
    """
    items = sorted(active_events(visible_events), key=lambda e: (e.start_ms, e.id))

    out: List[LayoutAssignment] = []
    for cluster_id, group in enumerate(_clusters(items)):
        lane_ends: List[int] = []
        lanes: List[int] = []
        for ev in group:
            lane_index = -1
            for i, lane_end in enumerate(lane_ends):
                if lane_end <= ev.start_ms:
                    lane_index = i
                    break
            if lane_index < 0:
                lane_index = len(lane_ends)
                lane_ends.append(ev.end_ms)
            else:
                lane_ends[lane_index] = ev.end_ms
            lanes.append(lane_index)

        total = max(1, len(lane_ends))
        for ev, lane in zip(group, lanes):
            out.append(
                LayoutAssignment(
                    event_id=ev.id,
                    column_index=lane,
                    column_count=total,
                    cluster_id=cluster_id,
                )
            )
    return out


__all__ = [
    "events_for_day",
    "layout_day",
]
