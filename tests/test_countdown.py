from __future__ import annotations

import datetime as dt
import unittest

from countdown_tracker.bucketing import countdown, countdown_days

TZ = dt.timezone(dt.timedelta(hours=1))
START = dt.datetime(2025, 5, 9, 2, 0, tzinfo=TZ)
END = dt.datetime(2025, 6, 7, 2, 0, tzinfo=TZ)


class TestCountdown(unittest.TestCase):
    def test_before_start(self) -> None:
        now = dt.datetime(2025, 5, 1, 2, 0, tzinfo=TZ)
        result = countdown(START, END, now)
        self.assertFalse(result.finished)
        self.assertEqual(result.progress, 0)
        self.assertEqual(result.days, 37)
        self.assertFalse(any(d.has_started for d in result.day_list))

    def test_midway(self) -> None:
        now = dt.datetime(2025, 5, 23, 14, 0, tzinfo=TZ)
        result = countdown(START, END, now)
        self.assertEqual((result.days, result.hours, result.minutes), (14, 12, 0))
        self.assertAlmostEqual(result.progress, 50)
        self.assertEqual(len(result.day_list), 30)
        started = [d.date for d in result.day_list if d.has_started]
        self.assertEqual(started[-1], dt.date(2025, 5, 23))

    def test_finished(self) -> None:
        result = countdown(START, END, END + dt.timedelta(minutes=1))
        self.assertTrue(result.finished)
        self.assertEqual((result.days, result.hours, result.minutes), (0, 0, 0))
        self.assertEqual(result.progress, 100)

    def test_days_follow_the_given_timezone(self) -> None:
        # 02:00 at UTC+1 is still the previous day at UTC-5
        west = dt.timezone(dt.timedelta(hours=-5))
        days = countdown_days(START, END, START, west)
        self.assertEqual(days[0].date, dt.date(2025, 5, 8))
        self.assertTrue(days[0].has_started)


if __name__ == "__main__":
    unittest.main(verbosity=2)
