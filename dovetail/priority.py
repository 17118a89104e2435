# dovetail/priority.py
from __future__ import annotations

from typing import Dict

from .model import CONFIRMED, HOUR_MS, TENTATIVE, Event

CATEGORY_WEIGHTS: Dict[str, int] = {
    "meeting": 100,
    "call": 80,
    "review": 70,
    "learning": 60,
    "focus": 50,
    "personal": 40,
    "break": 30,
    "exercise": 20,
    "lunch": 10,
}

STATUS_WEIGHTS: Dict[str, int] = {
    CONFIRMED: 50,
    TENTATIVE: 25,
}

ATTENDEE_WEIGHT = 10


def category_weight(category: str) -> int:
    # Unknown categories weigh nothing instead of failing.
    return CATEGORY_WEIGHTS.get(str(category or "").lower(), 0)


def urgency_bonus(start_ms: int, now_ms: int) -> int:
    """+100 when the event starts within 24h of now, +50 within 72h.

    Events already in the past count as urgent.
    """
    until_ms = int(start_ms) - int(now_ms)
    if until_ms < 24 * HOUR_MS:
        return 100
    if until_ms < 72 * HOUR_MS:
        return 50
    return 0


def priority_score(event: Event, now_ms: int) -> int:
    """Deterministic importance score; `now_ms` is the only time input."""
    score = ATTENDEE_WEIGHT * int(event.attendee_count)
    score += category_weight(event.category)
    score += STATUS_WEIGHTS.get(event.status, 0)
    score += urgency_bonus(event.start_ms, now_ms)
    return int(score)


__all__ = [
    "CATEGORY_WEIGHTS",
    "STATUS_WEIGHTS",
    "ATTENDEE_WEIGHT",
    "category_weight",
    "urgency_bonus",
    "priority_score",
]
