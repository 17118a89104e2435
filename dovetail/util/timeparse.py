# dovetail/util/timeparse.py
from __future__ import annotations

import datetime as dt

from .tz import resolve_tz


def parse_date_yyyy_mm_dd(s: str) -> dt.date:
    return dt.datetime.strptime(s, "%Y-%m-%d").date()


def parse_iso_to_ms(s: str, tz: str | None = "UTC") -> int:
    """Epoch ms for an ISO-8601 timestamp.

    Values without an offset are interpreted in `tz`; a trailing "Z" is UTC.
    """
    ss = str(s).strip()
    if not ss:
        raise ValueError("empty timestamp")
    if ss.endswith(("Z", "z")):
        ss = ss[:-1] + "+00:00"
    try:
        d = dt.datetime.fromisoformat(ss)
    except ValueError as ex:
        raise ValueError(f"Invalid ISO timestamp: {s!r}") from ex
    if d.tzinfo is None:
        d = d.replace(tzinfo=resolve_tz(tz))
    return int(d.timestamp() * 1000)


def format_ms_iso(ms: int, tz: str | None = "UTC") -> str:
    d = dt.datetime.fromtimestamp(int(ms) / 1000.0, tz=resolve_tz(tz)).replace(second=0, microsecond=0)
    return d.isoformat(timespec="minutes")
