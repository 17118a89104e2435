# dovetail/edit.py
"""Pointer-driven edits (drag to move, drag to resize).

Each returns a new Event; re-run `layout_day` afterwards.
"""

from __future__ import annotations

import dataclasses

from .model import MIN_MS, Event

MIN_RESIZE_MIN = 15


def snap_ms(ms: int, snap_min: int) -> int:
    if snap_min <= 1:
        return int(ms)
    step = int(snap_min) * MIN_MS
    return int(round(ms / step) * step)


def move_event(event: Event, new_start_ms: int, snap_min: int = 1) -> Event:
    dur_ms = event.end_ms - event.start_ms
    start = snap_ms(new_start_ms, snap_min)
    return dataclasses.replace(event, start_ms=start, end_ms=start + dur_ms)


def nudge_event(event: Event, delta_min: int) -> Event:
    delta_ms = int(delta_min) * MIN_MS
    return dataclasses.replace(event, start_ms=event.start_ms + delta_ms, end_ms=event.end_ms + delta_ms)


def resize_event(event: Event, new_duration_min: int, snap_min: int = 1) -> Event:
    dur_min = max(MIN_RESIZE_MIN, int(new_duration_min))
    if snap_min > 1:
        dur_min = max(MIN_RESIZE_MIN, int(round(dur_min / snap_min)) * int(snap_min))
    return dataclasses.replace(event, end_ms=event.start_ms + dur_min * MIN_MS)


__all__ = [
    "snap_ms",
    "move_event",
    "nudge_event",
    "resize_event",
]
