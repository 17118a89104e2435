"""Event validation helpers (library-facing).

The engine assumes validated input. Malformed events fed to the algorithms
directly produce meaningless (but non-crashing) results; run them through
`partition_events` first.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from .model import STATUSES, Event

logger = logging.getLogger(__name__)


class EventValidationError(ValueError):
    """Raised when a single event violates an input invariant."""


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def validate_event(event: Event) -> List[str]:
    errs: List[str] = []
    if not isinstance(event, Event):
        return ["event must be an Event"]

    label = f"event {event.id!r}"
    _require(isinstance(event.id, str) and bool(event.id.strip()), "event id must be non-empty string", errs)
    starts_ok = isinstance(event.start_ms, int) and isinstance(event.end_ms, int)
    _require(starts_ok, f"{label}: start_ms/end_ms must be int", errs)
    if starts_ok:
        _require(event.start_ms < event.end_ms, f"{label}: start_ms must be < end_ms", errs)
    _require(
        isinstance(event.attendee_count, int) and event.attendee_count >= 0,
        f"{label}: attendee_count must be >= 0",
        errs,
    )
    _require(event.status in STATUSES, f"{label}: status must be one of {', '.join(STATUSES)}", errs)
    if event.buffer_min is not None:
        _require(
            isinstance(event.buffer_min, int) and event.buffer_min >= 0,
            f"{label}: buffer_min must be a non-negative int",
            errs,
        )
    return errs


def assert_valid_event(event: Event) -> None:
    errs = validate_event(event)
    if errs:
        raise EventValidationError(errs[0])


def partition_events(events: Iterable[Event]) -> Tuple[List[Event], List[str]]:
    """Split events into (valid, issues).

    Each malformed or duplicate-id event is skipped on its own with a logged
    warning; the rest of the batch is kept.
    """
    valid: List[Event] = []
    issues: List[str] = []
    seen: set[str] = set()

    for ev in events:
        errs = validate_event(ev)
        if not errs and ev.id in seen:
            errs = [f"event {ev.id!r}: duplicate id"]
        if errs:
            for msg in errs:
                logger.warning("skipping malformed event: %s", msg)
            issues.extend(errs)
            continue
        seen.add(ev.id)
        valid.append(ev)

    return valid, issues


__all__ = [
    "EventValidationError",
    "validate_event",
    "assert_valid_event",
    "partition_events",
]
