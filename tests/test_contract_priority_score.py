from __future__ import annotations

import unittest
from datetime import datetime, timezone

from dovetail.model import HOUR_MS, Event
from dovetail.priority import category_weight, priority_score, urgency_bonus


NOW_MS = int(datetime(2024, 1, 15, 8, 0, tzinfo=timezone.utc).timestamp() * 1000)


class TestPriorityScoreContract(unittest.TestCase):
    def test_weights_add_up(self) -> None:
        ev = Event(
            id="a",
            start_ms=NOW_MS + HOUR_MS,
            end_ms=NOW_MS + 2 * HOUR_MS,
            attendee_count=3,
            category="meeting",
            status="confirmed",
        )
        # 3 attendees (30) + meeting (100) + confirmed (50) + within 24h (100)
        self.assertEqual(priority_score(ev, NOW_MS), 280)

    def test_tentative_and_far_future(self) -> None:
        ev = Event(
            id="a",
            start_ms=NOW_MS + 5 * 24 * HOUR_MS,
            end_ms=NOW_MS + 5 * 24 * HOUR_MS + HOUR_MS,
            attendee_count=1,
            category="call",
            status="tentative",
        )
        self.assertEqual(priority_score(ev, NOW_MS), 10 + 80 + 25)

    def test_unknown_category_weighs_nothing(self) -> None:
        self.assertEqual(category_weight("underwater-basket-weaving"), 0)
        self.assertEqual(category_weight(""), 0)
        self.assertEqual(category_weight("Meeting"), 100)

        ev = Event(id="a", start_ms=NOW_MS, end_ms=NOW_MS + HOUR_MS, category="mystery", status="cancelled")
        self.assertEqual(priority_score(ev, NOW_MS), 100)

    def test_urgency_bands(self) -> None:
        self.assertEqual(urgency_bonus(NOW_MS + 23 * HOUR_MS, NOW_MS), 100)
        self.assertEqual(urgency_bonus(NOW_MS + 24 * HOUR_MS, NOW_MS), 50)
        self.assertEqual(urgency_bonus(NOW_MS + 71 * HOUR_MS, NOW_MS), 50)
        self.assertEqual(urgency_bonus(NOW_MS + 72 * HOUR_MS, NOW_MS), 0)
        # already started counts as urgent
        self.assertEqual(urgency_bonus(NOW_MS - 3 * HOUR_MS, NOW_MS), 100)

    def test_score_depends_only_on_event_and_now(self) -> None:
        ev = Event(id="a", start_ms=NOW_MS + 30 * HOUR_MS, end_ms=NOW_MS + 31 * HOUR_MS, attendee_count=2, category="review")
        first = priority_score(ev, NOW_MS)
        self.assertEqual(priority_score(ev, NOW_MS), first)
        self.assertEqual(first, 20 + 70 + 50 + 50)


if __name__ == "__main__":
    unittest.main(verbosity=2)
