from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import sys
from pathlib import Path

from .config import ConfigError, DEFAULT_CONFIG, assert_valid_config, load_config
from .io import conflict_to_dict, dump_json, layout_to_dict, load_events, summary_to_dict
from .planner import build_plan_report
from .util.console import eprint, setup_logging
from .util.timeparse import parse_date_yyyy_mm_dd, parse_iso_to_ms
from .util.tz import normalize_tz_name, now_epoch_ms

logger = logging.getLogger(__name__)


def _die(msg: str, rc: int = 2) -> int:
    eprint(f"[dovetail] ERROR: {msg}")
    return rc


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="dovetail",
        description="Detect calendar conflicts, suggest alternative slots and lay out a day view (JSON report).",
    )
    ap.add_argument("--events", required=True, help="Events JSON: a list, or an object with an 'events' list")
    ap.add_argument("--now", default=None, help="Reference instant, ISO-8601 (default: current time)")
    ap.add_argument(
        "--tz",
        default=None,
        help="Reference timezone for day boundaries (default: config tz, else env DOVETAIL_TZ, else UTC)",
    )
    ap.add_argument("--config", default=None, help="Scheduling preferences JSON")
    ap.add_argument("--horizon-days", type=int, default=None, help="Days to search for alternatives (default: 7)")
    ap.add_argument("--granularity", type=int, default=None, help="Slot step in minutes (default: 30)")
    ap.add_argument("--day-start-hour", type=int, default=None, help="First slot hour (default: 9)")
    ap.add_argument("--day-end-hour", type=int, default=None, help="Slots must end by this hour (default: 18)")
    ap.add_argument("--max-suggestions", type=int, default=None, help="Suggestions per conflict (default: 5)")
    ap.add_argument("--day", default=None, help="Day for layout/summary, YYYY-MM-DD (default: date of --now)")
    ap.add_argument("--out", default=None, help="Write the report here instead of stdout")
    ap.add_argument("--log-level", default=os.getenv("DOVETAIL_LOG_LEVEL", "WARNING"), help="Logging level (default: WARNING)")

    args = ap.parse_args(argv)
    setup_logging(args.log_level)

    base = dataclasses.replace(DEFAULT_CONFIG, tz=normalize_tz_name(os.getenv("DOVETAIL_TZ", "UTC")))
    try:
        cfg = load_config(Path(args.config), base=base) if args.config else base
    except (OSError, ValueError) as e:
        return _die(f"Failed to load config: {e}")

    overrides = {
        "horizon_days": args.horizon_days,
        "granularity_min": args.granularity,
        "day_start_hour": args.day_start_hour,
        "day_end_hour": args.day_end_hour,
        "max_suggestions": args.max_suggestions,
    }
    cfg = dataclasses.replace(cfg, **{k: v for k, v in overrides.items() if v is not None})
    if args.tz:
        cfg = dataclasses.replace(cfg, tz=normalize_tz_name(args.tz))
    try:
        assert_valid_config(cfg)
    except ConfigError as e:
        return _die(str(e))

    try:
        now_ms = parse_iso_to_ms(args.now, cfg.tz) if args.now else now_epoch_ms()
        day = parse_date_yyyy_mm_dd(args.day) if args.day else None
    except ValueError as e:
        return _die(str(e))

    try:
        events, load_issues = load_events(Path(args.events), tz=cfg.tz)
    except (OSError, ValueError) as e:
        return _die(f"Failed to load events: {e}")
    for msg in load_issues:
        logger.warning("skipping unreadable event: %s", msg)

    report = build_plan_report(events, now_ms, cfg, day=day)
    logger.info("%d conflict(s), %d issue(s)", len(report.conflicts), len(load_issues) + len(report.issues))

    data = {
        "now_ms": report.now_ms,
        "day_key": report.day_key,
        "cfg": cfg.to_dict(),
        "issues": list(load_issues) + list(report.issues),
        "conflicts": [conflict_to_dict(c, tz=cfg.tz) for c in report.conflicts],
        "layout": [layout_to_dict(a) for a in report.layout],
        "summary": summary_to_dict(report.summary),
    }
    text = dump_json(data)

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
        print(str(out_path.resolve()))
    else:
        sys.stdout.write(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
