#!/usr/bin/env python3
from __future__ import annotations

import argparse
import dataclasses
import os
import sys
from pathlib import Path
from typing import List

from dovetail.config import DEFAULT_CONFIG, ConfigError, assert_valid_config
from dovetail.conflicts import active_events
from dovetail.io import dump_json, load_events, slot_to_dict
from dovetail.scoring import score_slots
from dovetail.slots import find_candidate_slots
from dovetail.util.console import setup_logging
from dovetail.util.timeparse import parse_iso_to_ms
from dovetail.util.tz import normalize_tz_name, now_epoch_ms
from dovetail.validate import partition_events

TAG = "[dovetail-find-slots]"


def _die(msg: str, rc: int = 2) -> int:
    print(f"{TAG} ERROR: {msg}", file=sys.stderr)
    return rc


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="dovetail-find-slots",
        description="List candidate slots of a given duration against the busy events in a file.",
    )
    ap.add_argument("--events", required=True, help="Events JSON path")
    ap.add_argument("--duration", type=int, required=True, help="Slot duration in minutes")
    ap.add_argument("--now", default=None, help="Reference instant, ISO-8601 (default: current time)")
    ap.add_argument("--tz", default=os.getenv("DOVETAIL_TZ", "UTC"), help="Reference timezone (default: env DOVETAIL_TZ or UTC)")
    ap.add_argument("--horizon-days", type=int, default=DEFAULT_CONFIG.horizon_days)
    ap.add_argument("--granularity", type=int, default=DEFAULT_CONFIG.granularity_min)
    ap.add_argument("--day-start-hour", type=int, default=DEFAULT_CONFIG.day_start_hour)
    ap.add_argument("--day-end-hour", type=int, default=DEFAULT_CONFIG.day_end_hour)
    ap.add_argument("--free-only", action="store_true", help="Only print free slots")
    ap.add_argument("--score-like", default=None, help="Score free slots as alternatives for this event id")
    ap.add_argument("--log-level", default="WARNING")
    args = ap.parse_args(argv)
    setup_logging(args.log_level)

    cfg = dataclasses.replace(
        DEFAULT_CONFIG,
        tz=normalize_tz_name(args.tz),
        horizon_days=args.horizon_days,
        granularity_min=args.granularity,
        day_start_hour=args.day_start_hour,
        day_end_hour=args.day_end_hour,
    )
    try:
        assert_valid_config(cfg)
        now_ms = parse_iso_to_ms(args.now, cfg.tz) if args.now else now_epoch_ms()
    except (ConfigError, ValueError) as e:
        return _die(str(e))
    if args.duration <= 0:
        return _die("--duration must be positive")

    try:
        events, _issues = load_events(Path(args.events), tz=cfg.tz)
    except (OSError, ValueError) as e:
        return _die(f"Failed to load events: {e}")
    valid, _more = partition_events(events)
    busy = active_events(valid)

    target = None
    if args.score_like:
        target = next((ev for ev in busy if ev.id == args.score_like), None)
        if target is None:
            return _die(f"unknown event id for --score-like: {args.score_like}")
        busy = [ev for ev in busy if ev.id != target.id]

    slots = find_candidate_slots(
        args.duration,
        busy,
        now_ms,
        horizon_days=cfg.horizon_days,
        granularity_min=cfg.granularity_min,
        day_start_hour=cfg.day_start_hour,
        day_end_hour=cfg.day_end_hour,
        tz_name=cfg.tz,
    )
    if target is not None:
        slots = score_slots(slots, target, cfg=cfg)
    if args.free_only:
        slots = [s for s in slots if s.is_free]

    sys.stdout.write(dump_json({"now_ms": now_ms, "slots": [slot_to_dict(s, tz=cfg.tz) for s in slots]}))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
