# dovetail/scoring.py
from __future__ import annotations

import dataclasses
from typing import Iterable, List

from .config import DEFAULT_CONFIG, SchedulingConfig
from .interval import Span
from .model import CandidateSlot
from .util.tz import local_datetime, resolve_tz

BASELINE = 100
BUSINESS_HOURS_BONUS = 50
WEEKDAY_BONUS = 30
HOUR_DISTANCE_PENALTY = 5
LUNCH_PENALTY = 30
SAME_DAY_BONUS = 100
NEXT_DAY_BONUS = 50
DAY_DISTANCE_PENALTY = 10
MORNING_BONUS = 30


def score_slot(slot: Span, original: Span, *, cfg: SchedulingConfig = DEFAULT_CONFIG) -> int:
    """Heuristic desirability of moving `original` into `slot` (>= 0).

    Only the two spans and the preferences are consulted.
    """
    tzinfo = resolve_tz(cfg.tz)
    start = local_datetime(slot.start_ms, tzinfo)
    orig = local_datetime(original.start_ms, tzinfo)
    hour = start.hour

    score = BASELINE
    if cfg.business_start_hour <= hour <= cfg.business_end_hour:
        score += BUSINESS_HOURS_BONUS
    if start.weekday() < 5:
        score += WEEKDAY_BONUS
    score -= HOUR_DISTANCE_PENALTY * abs(hour - orig.hour)
    if cfg.lunch_start_hour <= hour < cfg.lunch_end_hour:
        score -= LUNCH_PENALTY

    days_diff = (start.date() - orig.date()).days
    if days_diff == 0:
        score += SAME_DAY_BONUS
    elif days_diff == 1:
        score += NEXT_DAY_BONUS
    else:
        score -= DAY_DISTANCE_PENALTY * abs(days_diff)

    return max(0, score)


def score_slots(
    slots: Iterable[CandidateSlot],
    original: Span,
    *,
    cfg: SchedulingConfig = DEFAULT_CONFIG,
) -> List[CandidateSlot]:
    """Return new slots with `score` filled in; busy slots keep score 0."""
    out: List[CandidateSlot] = []
    for s in slots:
        if not s.is_free:
            out.append(s)
            continue
        out.append(dataclasses.replace(s, score=score_slot(s, original, cfg=cfg)))
    return out


def rank_slots(slots: Iterable[CandidateSlot], limit: int) -> List[CandidateSlot]:
    """Free slots by score descending, earliest start first on ties."""
    ranked = sorted((s for s in slots if s.is_free), key=lambda s: (-s.score, s.start_ms))
    return ranked[: max(0, int(limit))]


def score_open_slot(slot: Span, *, cfg: SchedulingConfig = DEFAULT_CONFIG) -> int:
    """Context-free score for an open slot: business hours, lunch, mornings."""
    hour = local_datetime(slot.start_ms, resolve_tz(cfg.tz)).hour
    score = BASELINE
    if cfg.business_start_hour <= hour <= cfg.business_end_hour:
        score += BUSINESS_HOURS_BONUS
    if cfg.lunch_start_hour <= hour < cfg.lunch_end_hour:
        score -= LUNCH_PENALTY
    if 9 <= hour < 11:
        score += MORNING_BONUS
    return max(0, score)


__all__ = [
    "score_slot",
    "score_slots",
    "rank_slots",
    "score_open_slot",
]
