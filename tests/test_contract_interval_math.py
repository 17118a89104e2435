from __future__ import annotations

import unittest
from datetime import datetime, timezone

from dovetail.interval import contains, duration_min, overlap_span, overlaps, overlaps_ms, same_calendar_day
from dovetail.model import Event
from dovetail.util.tz import resolve_tz


def _ms(y: int, mo: int, d: int, h: int = 0, mi: int = 0) -> int:
    return int(datetime(y, mo, d, h, mi, tzinfo=timezone.utc).timestamp() * 1000)


def _ev(ev_id: str, start_ms: int, end_ms: int) -> Event:
    return Event(id=ev_id, start_ms=start_ms, end_ms=end_ms)


class TestIntervalMathContract(unittest.TestCase):
    def test_overlap_is_symmetric(self) -> None:
        a = _ev("a", _ms(2024, 1, 15, 9), _ms(2024, 1, 15, 10))
        b = _ev("b", _ms(2024, 1, 15, 9, 30), _ms(2024, 1, 15, 10, 30))
        c = _ev("c", _ms(2024, 1, 15, 11), _ms(2024, 1, 15, 12))
        for x, y in ((a, b), (a, c), (b, c)):
            self.assertEqual(overlaps(x, y), overlaps(y, x))
        self.assertTrue(overlaps(a, b))
        self.assertFalse(overlaps(a, c))

    def test_overlap_is_reflexive_for_positive_duration(self) -> None:
        a = _ev("a", _ms(2024, 1, 15, 9), _ms(2024, 1, 15, 9, 1))
        self.assertTrue(overlaps(a, a))

    def test_touching_intervals_do_not_overlap(self) -> None:
        a = _ev("a", _ms(2024, 1, 15, 9), _ms(2024, 1, 15, 10))
        b = _ev("b", _ms(2024, 1, 15, 10), _ms(2024, 1, 15, 11))
        self.assertFalse(overlaps(a, b))
        self.assertFalse(overlaps_ms(a.start_ms, a.end_ms, b.start_ms, b.end_ms))
        self.assertIsNone(overlap_span(a, b))

    def test_overlap_span_is_the_shared_part(self) -> None:
        a = _ev("a", _ms(2024, 1, 15, 9), _ms(2024, 1, 15, 10))
        b = _ev("b", _ms(2024, 1, 15, 9, 30), _ms(2024, 1, 15, 10, 30))
        self.assertEqual(overlap_span(a, b), (_ms(2024, 1, 15, 9, 30), _ms(2024, 1, 15, 10)))

    def test_contains_and_duration(self) -> None:
        outer = _ev("o", _ms(2024, 1, 15, 9), _ms(2024, 1, 15, 12))
        inner = _ev("i", _ms(2024, 1, 15, 10), _ms(2024, 1, 15, 11, 30))
        self.assertTrue(contains(outer, inner))
        self.assertFalse(contains(inner, outer))
        self.assertTrue(contains(outer, outer))
        self.assertEqual(duration_min(inner), 90)
        self.assertEqual(duration_min(outer), 180)

    def test_same_calendar_day_uses_reference_zone(self) -> None:
        a = _ev("a", _ms(2024, 1, 15, 21, 30), _ms(2024, 1, 15, 22))
        b = _ev("b", _ms(2024, 1, 15, 22, 15), _ms(2024, 1, 15, 23))
        self.assertTrue(same_calendar_day(a, b, resolve_tz("UTC")))
        # 21:30Z is 23:30 on the 15th at +02:00; 22:15Z is already the 16th.
        self.assertFalse(same_calendar_day(a, b, resolve_tz("+02:00")))


if __name__ == "__main__":
    unittest.main(verbosity=2)
