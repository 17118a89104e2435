from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from dovetail.config import (
    DEFAULT_CONFIG,
    ConfigError,
    SchedulingConfig,
    assert_valid_config,
    config_from_dict,
    load_config,
    validate_config,
)
from dovetail.model import Event
from dovetail.validate import EventValidationError, assert_valid_event, partition_events, validate_event


class TestConfigContract(unittest.TestCase):
    def test_defaults(self) -> None:
        cfg = DEFAULT_CONFIG
        self.assertEqual(cfg.tz, "UTC")
        self.assertEqual((cfg.horizon_days, cfg.granularity_min, cfg.max_suggestions), (7, 30, 5))
        self.assertEqual((cfg.day_start_hour, cfg.day_end_hour), (9, 18))
        self.assertEqual(validate_config(cfg), [])

    def test_from_dict_is_lenient(self) -> None:
        cfg = config_from_dict({"horizon_days": "3", "granularity_min": 15, "tz": "utc", "unknown": 1, "max_suggestions": True})
        self.assertEqual(cfg.horizon_days, 3)
        self.assertEqual(cfg.granularity_min, 15)
        self.assertEqual(cfg.tz, "UTC")
        self.assertEqual(cfg.max_suggestions, DEFAULT_CONFIG.max_suggestions)
        self.assertIs(config_from_dict(None), DEFAULT_CONFIG)

    def test_from_dict_falls_back_on_unparseable_numbers(self) -> None:
        cfg = config_from_dict({"horizon_days": "--5", "granularity_min": "15.5", "max_suggestions": " 3 ", "day_start_hour": "-1"})
        self.assertEqual(cfg.horizon_days, DEFAULT_CONFIG.horizon_days)
        self.assertEqual(cfg.granularity_min, DEFAULT_CONFIG.granularity_min)
        self.assertEqual(cfg.max_suggestions, 3)
        self.assertEqual(cfg.day_start_hour, -1)
        self.assertTrue(validate_config(cfg))

    def test_invalid_values_are_reported(self) -> None:
        bad = SchedulingConfig(horizon_days=0, day_start_hour=18, day_end_hour=9, tz="Not/AZone")
        errs = validate_config(bad)
        self.assertTrue(any("horizon_days" in e for e in errs))
        self.assertTrue(any("day hours" in e for e in errs))
        self.assertTrue(any(e.startswith("tz:") for e in errs))
        with self.assertRaises(ConfigError):
            assert_valid_config(bad)

    def test_load_config_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "prefs.json"
            p.write_text(json.dumps({"tz": "+02:00", "day_end_hour": 20, "skip_past_slots": False}) + "\n", encoding="utf-8")
            cfg = load_config(p)
            self.assertEqual((cfg.tz, cfg.day_end_hour, cfg.skip_past_slots), ("+02:00", 20, False))

            p.write_text(json.dumps({"granularity_min": 0}) + "\n", encoding="utf-8")
            with self.assertRaises(ConfigError):
                load_config(p)

            p.write_text("[]\n", encoding="utf-8")
            with self.assertRaises(ConfigError):
                load_config(p)


class TestEventValidationContract(unittest.TestCase):
    def test_valid_event(self) -> None:
        ev = Event(id="a", start_ms=0, end_ms=60_000, attendee_count=2, status="tentative", buffer_min=5)
        self.assertEqual(validate_event(ev), [])
        assert_valid_event(ev)

    def test_invariant_violations(self) -> None:
        self.assertIn("event 'a': start_ms must be < end_ms", validate_event(Event(id="a", start_ms=5, end_ms=5)))
        self.assertTrue(validate_event(Event(id="a", start_ms=0, end_ms=1, attendee_count=-1)))
        self.assertTrue(validate_event(Event(id="a", start_ms=0, end_ms=1, status="maybe")))
        self.assertTrue(validate_event(Event(id="a", start_ms=0, end_ms=1, buffer_min=-5)))
        self.assertTrue(validate_event(Event(id=" ", start_ms=0, end_ms=1)))
        with self.assertRaises(EventValidationError):
            assert_valid_event(Event(id="a", start_ms=10, end_ms=0))

    def test_partition_keeps_the_good_ones(self) -> None:
        events = [
            Event(id="a", start_ms=0, end_ms=60_000),
            Event(id="b", start_ms=60_000, end_ms=0),
            Event(id="a", start_ms=0, end_ms=120_000),
            Event(id="c", start_ms=0, end_ms=60_000),
        ]
        with self.assertLogs("dovetail.validate", level="WARNING") as logs:
            valid, issues = partition_events(events)
        self.assertEqual([e.id for e in valid], ["a", "c"])
        self.assertEqual(len(issues), 2)
        self.assertTrue(any("duplicate id" in msg for msg in issues))
        self.assertEqual(len(logs.output), 2)


if __name__ == "__main__":
    unittest.main(verbosity=2)
