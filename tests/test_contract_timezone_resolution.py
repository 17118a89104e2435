from __future__ import annotations

import unittest
from datetime import date, datetime, timedelta, timezone

from dovetail.util.tz import midnight_epoch_ms, normalize_tz_name, resolve_tz, wall_clock_epoch_ms


class TestTimezoneResolutionContract(unittest.TestCase):
    def test_empty_zone_means_utc_not_host_zone(self) -> None:
        self.assertEqual(normalize_tz_name(None), "UTC")
        self.assertEqual(normalize_tz_name(""), "UTC")
        self.assertEqual(normalize_tz_name("   "), "UTC")
        self.assertIs(resolve_tz(None), timezone.utc)

    def test_aliases(self) -> None:
        self.assertEqual(normalize_tz_name("z"), "UTC")
        self.assertEqual(normalize_tz_name("GMT"), "UTC")
        self.assertEqual(normalize_tz_name("System"), "local")
        self.assertEqual(normalize_tz_name(" Europe/Bucharest "), "Europe/Bucharest")

    def test_fixed_offsets(self) -> None:
        self.assertEqual(resolve_tz("+02:00").utcoffset(None), timedelta(hours=2))
        self.assertEqual(resolve_tz("-0530").utcoffset(None), -timedelta(hours=5, minutes=30))
        with self.assertRaises(ValueError):
            resolve_tz("+25:00")
        with self.assertRaises(ValueError):
            resolve_tz("Not/AZone")

    def test_wall_clock_anchors(self) -> None:
        tz = resolve_tz("+02:00")
        d = date(2024, 1, 15)
        want = int(datetime(2024, 1, 15, 7, 0, tzinfo=timezone.utc).timestamp() * 1000)
        self.assertEqual(wall_clock_epoch_ms(d, 9, 0, tz), want)
        self.assertEqual(wall_clock_epoch_ms(d, 24, 0, tz), midnight_epoch_ms(date(2024, 1, 16), tz))


if __name__ == "__main__":
    unittest.main(verbosity=2)
