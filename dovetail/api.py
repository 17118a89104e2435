"""dovetail.api

Stable *library* entrypoint for DOVETAIL.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
  - No function here reads the clock: pass `now_ms` explicitly.
"""

from __future__ import annotations

from dovetail.config import (
    DEFAULT_CONFIG,
    ConfigError,
    SchedulingConfig,
    config_from_dict,
    load_config,
    validate_config,
)
from dovetail.conflicts import detect_conflicts
from dovetail.edit import move_event, resize_event
from dovetail.interval import contains, duration_min, overlaps, same_calendar_day
from dovetail.io import load_events
from dovetail.layout import events_for_day, layout_day
from dovetail.model import (
    CandidateSlot,
    ConflictRecord,
    DaySummary,
    Event,
    LayoutAssignment,
    ResolutionAction,
)
from dovetail.planner import (
    PlanReport,
    add_buffer,
    apply_action,
    auto_resolve,
    build_plan_report,
    filter_dismissed,
    plan,
    reschedule,
    skip,
    suggest_slots,
)
from dovetail.priority import priority_score
from dovetail.scoring import score_slot
from dovetail.slots import find_candidate_slots
from dovetail.summary import best_meeting_times, find_open_slots, summarize_day
from dovetail.validate import EventValidationError, assert_valid_event, partition_events, validate_event

__all__ = [
    # model
    "Event",
    "CandidateSlot",
    "ConflictRecord",
    "LayoutAssignment",
    "ResolutionAction",
    "DaySummary",
    # config
    "SchedulingConfig",
    "DEFAULT_CONFIG",
    "ConfigError",
    "config_from_dict",
    "load_config",
    "validate_config",
    # validation
    "EventValidationError",
    "validate_event",
    "assert_valid_event",
    "partition_events",
    # interval math
    "overlaps",
    "contains",
    "duration_min",
    "same_calendar_day",
    # engine
    "priority_score",
    "detect_conflicts",
    "find_candidate_slots",
    "score_slot",
    "suggest_slots",
    "plan",
    "layout_day",
    "events_for_day",
    # resolution
    "reschedule",
    "add_buffer",
    "skip",
    "auto_resolve",
    "filter_dismissed",
    "apply_action",
    # reports
    "PlanReport",
    "build_plan_report",
    "summarize_day",
    "find_open_slots",
    "best_meeting_times",
    # edits / io
    "move_event",
    "resize_event",
    "load_events",
]
