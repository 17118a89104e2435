# dovetail/util/tz.py
from __future__ import annotations

import datetime as dt
import re
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")


def normalize_tz_name(name: Optional[str]) -> str:
    """Canonical zone name: "UTC", "local", an offset or an IANA name.

    An empty value means UTC, not the machine zone: conflict days, slot
    anchors and hour-of-day scores all derive from this name, and a host
    default would make the same event file plan differently per machine.
    "local" stays available as an explicit opt-in.
    """
    if name is None:
        return "UTC"
    s = str(name).strip()
    if not s:
        return "UTC"

    low = s.lower()
    if low in {"local", "system", "native"}:
        return "local"
    if low in {"utc", "z", "gmt", "utc0", "utc+0"}:
        return "UTC"

    return s


def resolve_tz(name: Optional[str]) -> dt.tzinfo:
    """Resolve a timezone name into a tzinfo.

    Raises ValueError for invalid timezone identifiers.
    """
    tz_name = normalize_tz_name(name)

    if tz_name == "UTC":
        return dt.timezone.utc

    if tz_name == "local":
        tz = dt.datetime.now().astimezone().tzinfo
        return tz or dt.timezone.utc

    m = _OFFSET_RE.match(tz_name)
    if m:
        sign_s, hh_s, mm_s = m.groups()
        hh = int(hh_s)
        mm = int(mm_s)
        if hh > 23 or mm > 59:
            raise ValueError(f"Invalid timezone offset: {tz_name!r}")
        sign = 1 if sign_s == "+" else -1
        off_min = sign * (hh * 60 + mm)
        return dt.timezone(dt.timedelta(minutes=off_min))

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as ex:
        raise ValueError(f"Invalid timezone identifier: {tz_name!r}") from ex


def local_datetime(ms: int, tz: dt.tzinfo) -> dt.datetime:
    return dt.datetime.fromtimestamp(int(ms) / 1000.0, tz=tz)


def date_from_ms(ms: int, tz: dt.tzinfo) -> dt.date:
    return local_datetime(ms, tz).date()


def day_key_from_ms(ms: Optional[int], tz: dt.tzinfo) -> Optional[str]:
    if ms is None:
        return None
    return date_from_ms(ms, tz).isoformat()


def midnight_epoch_ms(d: dt.date, tz: dt.tzinfo) -> int:
    aware = dt.datetime(d.year, d.month, d.day, 0, 0, 0, tzinfo=tz)
    return int(aware.timestamp() * 1000)


def wall_clock_epoch_ms(d: dt.date, hour: int, minute: int, tz: dt.tzinfo) -> int:
    """Epoch ms for `hour:minute` on date `d` in `tz` (hour 24 means next midnight)."""
    if hour >= 24:
        return midnight_epoch_ms(d + dt.timedelta(days=1), tz) + minute * 60000
    aware = dt.datetime(d.year, d.month, d.day, hour, minute, 0, tzinfo=tz)
    return int(aware.timestamp() * 1000)


def now_epoch_ms() -> int:
    return int(dt.datetime.now(tz=dt.timezone.utc).timestamp() * 1000)
