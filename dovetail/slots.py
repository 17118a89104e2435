"""Candidate slot enumeration.

Design goals:
  - Slots are driven by absolute calendar dates derived from one reference
    instant, never by repeated clock reads: identical inputs give identical
    output.
  - Day anchors go through the reference zone so DST days stay aligned.
  - Every tick is reported, free or busy; callers filter.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Iterable, List, Optional

from .interval import overlaps_ms
from .model import MIN_MS, CandidateSlot, Event
from .util.tz import date_from_ms, resolve_tz, wall_clock_epoch_ms

logger = logging.getLogger(__name__)


def horizon_dates(now_ms: int, horizon_days: int, tz: dt.tzinfo) -> List[dt.date]:
    today = date_from_ms(now_ms, tz)
    return [today + dt.timedelta(days=i) for i in range(max(0, int(horizon_days)))]


def find_candidate_slots(
    duration_min: int,
    busy_events: Iterable[Event],
    now_ms: int,
    *,
    horizon_days: int = 7,
    granularity_min: int = 30,
    day_start_hour: int = 9,
    day_end_hour: int = 18,
    tz_name: Optional[str] = "UTC",
) -> List[CandidateSlot]:
    """Enumerate fixed-duration slots across the horizon starting "today".

    For each day, ticks run from day_start_hour:00 stepping granularity_min;
    a slot is kept only if it ends no later than day_end_hour:00. A slot is
    free iff no non-cancelled busy event overlaps it.
    """
    if duration_min <= 0:
        return []
    return find_candidate_slots_ms(
        int(duration_min) * MIN_MS,
        busy_events,
        now_ms,
        horizon_days=horizon_days,
        granularity_min=granularity_min,
        day_start_hour=day_start_hour,
        day_end_hour=day_end_hour,
        tz_name=tz_name,
    )


def find_candidate_slots_ms(
    duration_ms: int,
    busy_events: Iterable[Event],
    now_ms: int,
    *,
    horizon_days: int = 7,
    granularity_min: int = 30,
    day_start_hour: int = 9,
    day_end_hour: int = 18,
    tz_name: Optional[str] = "UTC",
) -> List[CandidateSlot]:
    """Same as `find_candidate_slots` with an exact duration in milliseconds.

    Used when a slot must match an existing event's span, seconds included.
    """
    if duration_ms <= 0 or granularity_min <= 0:
        return []

    tzinfo = resolve_tz(tz_name)
    busy = [ev for ev in busy_events if not ev.is_cancelled]
    dur_ms = int(duration_ms)
    step_ms = int(granularity_min) * MIN_MS

    out: List[CandidateSlot] = []
    for d in horizon_dates(now_ms, horizon_days, tzinfo):
        day_key = d.isoformat()
        w0 = wall_clock_epoch_ms(d, day_start_hour, 0, tzinfo)
        w1 = wall_clock_epoch_ms(d, day_end_hour, 0, tzinfo)
        s = w0
        while s + dur_ms <= w1:
            e = s + dur_ms
            hits = tuple(ev for ev in busy if overlaps_ms(s, e, ev.start_ms, ev.end_ms))
            out.append(
                CandidateSlot(
                    start_ms=int(s),
                    end_ms=int(e),
                    day_key=day_key,
                    is_free=not hits,
                    conflicting=hits,
                )
            )
            s += step_ms

    logger.debug(
        "enumerated %d slot(s) (%d free) over %d day(s)",
        len(out),
        sum(1 for x in out if x.is_free),
        horizon_days,
    )
    return out


def free_slots(slots: Iterable[CandidateSlot]) -> List[CandidateSlot]:
    return [s for s in slots if s.is_free]


__all__ = [
    "horizon_dates",
    "find_candidate_slots",
    "find_candidate_slots_ms",
    "free_slots",
]
