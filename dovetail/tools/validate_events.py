#!/usr/bin/env python3
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import List

from dovetail.io import load_events
from dovetail.util.console import setup_logging
from dovetail.util.tz import normalize_tz_name
from dovetail.validate import partition_events

TAG = "[dovetail-validate-events]"


def _die(msg: str, rc: int = 2) -> int:
    print(f"{TAG} ERROR: {msg}", file=sys.stderr)
    return rc


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="dovetail-validate-events",
        description="Check an events JSON file against the engine's input invariants.",
    )
    ap.add_argument("--in", dest="in_json", required=True, help="Events JSON path")
    ap.add_argument("--tz", default=os.getenv("DOVETAIL_TZ", "UTC"), help="Zone for naive timestamps (default: env DOVETAIL_TZ or UTC)")
    ap.add_argument("--log-level", default="ERROR", help="Logging level (default: ERROR)")
    args = ap.parse_args(argv)
    setup_logging(args.log_level)

    try:
        events, issues = load_events(Path(args.in_json), tz=normalize_tz_name(args.tz))
    except (OSError, ValueError) as e:
        return _die(str(e))

    valid, more = partition_events(events)
    issues = issues + more
    if issues:
        for msg in issues:
            print(f"{TAG} {msg}", file=sys.stderr)
        print(f"{TAG} FAIL: {len(issues)} issue(s), {len(valid)} valid event(s)", file=sys.stderr)
        return 1

    print(f"{TAG} OK ({len(valid)} event(s))")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
