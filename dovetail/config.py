"""Scheduling preferences (library-facing)."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .util.tz import normalize_tz_name, resolve_tz


class ConfigError(ValueError):
    """Raised when scheduling preferences are unusable."""


@dataclass(frozen=True)
class SchedulingConfig:
    tz: str = "UTC"
    horizon_days: int = 7
    granularity_min: int = 30
    day_start_hour: int = 9
    day_end_hour: int = 18
    max_suggestions: int = 5
    buffer_increment_min: int = 15

    # Slot scoring windows. Business hours are inclusive, lunch is half-open.
    business_start_hour: int = 9
    business_end_hour: int = 17
    lunch_start_hour: int = 12
    lunch_end_hour: int = 13

    skip_past_slots: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


DEFAULT_CONFIG = SchedulingConfig()

_INT_FIELDS = (
    "horizon_days",
    "granularity_min",
    "day_start_hour",
    "day_end_hour",
    "max_suggestions",
    "buffer_increment_min",
    "business_start_hour",
    "business_end_hour",
    "lunch_start_hour",
    "lunch_end_hour",
)


def _as_int(v: Any, default: int) -> int:
    if v is None or isinstance(v, bool):
        return default
    if isinstance(v, int):
        return v
    if isinstance(v, str):
        try:
            return int(v.strip())
        except ValueError:
            return default
    return default


def config_from_dict(d: Optional[Dict[str, Any]], *, base: SchedulingConfig = DEFAULT_CONFIG) -> SchedulingConfig:
    """Build a config from a loose (JSON-decoded) dict; unknown keys are ignored."""
    if not isinstance(d, dict):
        return base
    kw: Dict[str, Any] = {}
    for name in _INT_FIELDS:
        if name in d:
            kw[name] = _as_int(d.get(name), getattr(base, name))
    if "tz" in d and d.get("tz") is not None:
        kw["tz"] = normalize_tz_name(str(d.get("tz")))
    if "skip_past_slots" in d and isinstance(d.get("skip_past_slots"), bool):
        kw["skip_past_slots"] = d["skip_past_slots"]
    return dataclasses.replace(base, **kw)


def validate_config(cfg: SchedulingConfig) -> List[str]:
    errs: List[str] = []
    if cfg.horizon_days < 1:
        errs.append("horizon_days must be >= 1")
    if cfg.granularity_min < 1:
        errs.append("granularity_min must be >= 1")
    if not (0 <= cfg.day_start_hour < cfg.day_end_hour <= 24):
        errs.append("day hours must satisfy 0 <= day_start_hour < day_end_hour <= 24")
    if cfg.max_suggestions < 0:
        errs.append("max_suggestions must be >= 0")
    if cfg.buffer_increment_min < 0:
        errs.append("buffer_increment_min must be >= 0")
    if cfg.lunch_end_hour < cfg.lunch_start_hour:
        errs.append("lunch_end_hour must be >= lunch_start_hour")
    try:
        resolve_tz(cfg.tz)
    except ValueError as e:
        errs.append(f"tz: {e}")
    return errs


def assert_valid_config(cfg: SchedulingConfig) -> None:
    errs = validate_config(cfg)
    if errs:
        raise ConfigError(errs[0])


def load_config(path: Path, *, base: SchedulingConfig = DEFAULT_CONFIG) -> SchedulingConfig:
    """Load preferences from a JSON object file and validate them."""
    obj = json.loads(Path(path).read_text(encoding="utf-8", errors="replace"))
    if not isinstance(obj, dict):
        raise ConfigError("config must be a JSON object")
    cfg = config_from_dict(obj, base=base)
    assert_valid_config(cfg)
    return cfg


__all__ = [
    "ConfigError",
    "SchedulingConfig",
    "DEFAULT_CONFIG",
    "config_from_dict",
    "validate_config",
    "assert_valid_config",
    "load_config",
]
