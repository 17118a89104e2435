# dovetail/interval.py
"""Half-open interval arithmetic on epoch-millisecond spans.

Anything exposing integer `start_ms` / `end_ms` attributes (events, slots)
is a span. `[start_ms, end_ms)`: an interval ending exactly when another
starts does not overlap it.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional, Protocol, Tuple

from .model import MIN_MS
from .util.tz import date_from_ms


class Span(Protocol):
    start_ms: int
    end_ms: int


def overlaps(a: Span, b: Span) -> bool:
    return a.start_ms < b.end_ms and b.start_ms < a.end_ms


def overlaps_ms(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    return a_start < b_end and b_start < a_end


def contains(outer: Span, inner: Span) -> bool:
    return outer.start_ms <= inner.start_ms and inner.end_ms <= outer.end_ms


def duration_min(a: Span) -> int:
    return int((a.end_ms - a.start_ms) // MIN_MS)


def overlap_span(a: Span, b: Span) -> Optional[Tuple[int, int]]:
    """Return the shared (start_ms, end_ms) of two spans, or None."""
    s = max(a.start_ms, b.start_ms)
    e = min(a.end_ms, b.end_ms)
    if e <= s:
        return None
    return s, e


def same_calendar_day(a: Span, b: Span, tz: dt.tzinfo) -> bool:
    """Compare the start instants' calendar dates in the reference zone."""
    return date_from_ms(a.start_ms, tz) == date_from_ms(b.start_ms, tz)


__all__ = [
    "Span",
    "overlaps",
    "overlaps_ms",
    "contains",
    "duration_min",
    "overlap_span",
    "same_calendar_day",
]
