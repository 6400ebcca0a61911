from __future__ import annotations

import datetime as dt
import unittest

from pydantic import ValidationError

from countdown_tracker.entries import (
    ActivitySubmission,
    WeightSubmission,
    build_activity_entry,
    build_weight_entry,
    find_for_day,
    upsert_entry,
)
from countdown_tracker.exceptions import EntryValidationError
from countdown_tracker.models import ActivityEntry, TargetEntry, WeightEntry

DAY = dt.date(2026, 1, 6)


class TestActivitySubmission(unittest.TestCase):
    def test_parses_clock_strings(self) -> None:
        submission = ActivitySubmission.model_validate(
            {"distance": "10", "time": "00:55:30", "pace": "05:33", "avgHeartRate": ""}
        )
        self.assertEqual(submission.distance, 10)
        self.assertAlmostEqual(submission.time, 55.5)
        self.assertAlmostEqual(submission.pace, 5.55)
        self.assertIsNone(submission.avg_heart_rate)

    def test_rejects_bad_clock_strings(self) -> None:
        with self.assertRaises(ValidationError):
            ActivitySubmission.model_validate({"distance": 5, "time": "aa:bb"})


class TestBuildEntries(unittest.TestCase):
    def test_new_entry_derives_pace(self) -> None:
        entry = build_activity_entry(ActivitySubmission(distance=5, time=30), DAY)
        self.assertEqual(entry.date, dt.datetime(2026, 1, 6))
        self.assertEqual(entry.pace, 6)
        self.assertEqual(entry.avg_heart_rate, 0)

    def test_update_keeps_unset_fields(self) -> None:
        existing = ActivityEntry(date=DAY, distance=5, time=30, avg_heart_rate=150, vo2_max=48)
        entry = build_activity_entry(ActivitySubmission(time=28, max_heart_rate=175), DAY, existing)
        self.assertEqual(entry.distance, 5)
        self.assertEqual(entry.time, 28)
        self.assertEqual(entry.avg_heart_rate, 150)
        self.assertEqual(entry.max_heart_rate, 175)
        self.assertEqual(entry.vo2_max, 48)

    def test_targets_are_not_used_as_previous_values(self) -> None:
        target = TargetEntry(date=DAY, distance=6, time=0)
        with self.assertRaises(EntryValidationError) as ctx:
            build_activity_entry(ActivitySubmission(time=30), DAY, target)
        self.assertEqual(ctx.exception.message, "Please enter a valid distance")

    def test_validation_messages(self) -> None:
        with self.assertRaises(EntryValidationError) as ctx:
            build_activity_entry(ActivitySubmission(distance=0, time=30), DAY)
        self.assertEqual(ctx.exception.status_code, 400)
        with self.assertRaises(EntryValidationError) as ctx:
            build_activity_entry(ActivitySubmission(distance=5), DAY)
        self.assertEqual(ctx.exception.message, "Please enter a valid time")
        with self.assertRaises(EntryValidationError) as ctx:
            build_weight_entry(WeightSubmission(weight=-3), DAY)
        self.assertEqual(ctx.exception.message, "Please enter a valid weight")

    def test_weight_entry(self) -> None:
        entry = build_weight_entry(WeightSubmission(weight=88.4), DAY)
        self.assertEqual(entry.weight, 88.4)
        self.assertEqual(entry.date.date(), DAY)


class TestUpsert(unittest.TestCase):
    def test_replaces_same_day_entry(self) -> None:
        entries = [WeightEntry(date="2026-01-05", weight=90), WeightEntry(date="2026-01-06T07:00:00", weight=89)]
        updated = upsert_entry(entries, WeightEntry(date=DAY, weight=88))
        self.assertEqual([e.weight for e in updated], [90, 88])
        self.assertEqual([e.weight for e in entries], [90, 89])

    def test_appends_new_day(self) -> None:
        updated = upsert_entry([], WeightEntry(date=DAY, weight=88))
        self.assertEqual(len(updated), 1)
        self.assertEqual(find_for_day(updated, DAY).weight, 88)
        self.assertIsNone(find_for_day(updated, dt.date(2026, 1, 7)))


if __name__ == "__main__":
    unittest.main(verbosity=2)
