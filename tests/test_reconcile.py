from __future__ import annotations

import datetime as dt
import unittest

from countdown_tracker.models import ActivityEntry, Snapshot, WeightEntry
from countdown_tracker.reconcile import apply_retention, filter_snapshot, reconcile, reconcile_snapshots


def weight(day: str, kg: float) -> WeightEntry:
    return WeightEntry(date=day, weight=kg)


class TestReconcile(unittest.TestCase):
    def test_incoming_replaces_remote_for_same_day(self) -> None:
        remote = [weight("2026-01-05T00:00:00Z", 90)]
        incoming = [weight("2026-01-05T00:00:00Z", 88)]
        merged = reconcile(remote, incoming)
        self.assertEqual([e.weight for e in merged], [88])

    def test_same_day_different_times_collide(self) -> None:
        remote = [weight("2026-01-05T07:00:00Z", 90)]
        incoming = [weight("2026-01-05T21:00:00Z", 89)]
        self.assertEqual([e.weight for e in reconcile(remote, incoming)], [89])

    def test_last_incoming_entry_for_a_day_wins(self) -> None:
        incoming = [weight("2026-01-05", 90), weight("2026-01-05T12:00:00", 87)]
        self.assertEqual([e.weight for e in reconcile([], incoming)], [87])

    def test_result_is_sorted_and_unique_per_day(self) -> None:
        remote = [weight("2026-01-09", 88), weight("2026-01-02", 90)]
        incoming = [weight("2026-01-05", 89), weight("2026-01-01", 91)]
        merged = reconcile(remote, incoming)
        self.assertEqual(
            [e.date.date().isoformat() for e in merged],
            ["2026-01-01", "2026-01-02", "2026-01-05", "2026-01-09"],
        )

    def test_idempotent(self) -> None:
        remote = [weight("2026-01-02", 90), weight("2026-01-05", 89)]
        incoming = [weight("2026-01-05", 88), weight("2026-01-06", 87)]
        once = reconcile(remote, incoming)
        self.assertEqual(reconcile(once, []), once)
        self.assertEqual(reconcile(once, incoming), once)

    def test_retention_cutoff(self) -> None:
        remote = [weight(f"{day}T08:00:00Z", 90) for day in ("2025-12-20", "2025-12-31", "2026-01-01", "2026-01-10")]
        merged = reconcile(remote, [], retention_cutoff=dt.date(2026, 1, 1))
        self.assertEqual([e.date.date() for e in merged], [dt.date(2026, 1, 1), dt.date(2026, 1, 10)])
        self.assertEqual(len(apply_retention(remote, None)), 4)

    def test_day_keys_use_canonical_timezone(self) -> None:
        plus3 = dt.timezone(dt.timedelta(hours=3))
        # 22:00 UTC on the 4th is the 5th at UTC+3
        remote = [weight("2026-01-04T22:00:00Z", 90)]
        incoming = [weight("2026-01-05T06:00:00+03:00", 88)]
        self.assertEqual(len(reconcile(remote, incoming)), 2)
        self.assertEqual([e.weight for e in reconcile(remote, incoming, tz=plus3)], [88])


class TestSnapshotReconcile(unittest.TestCase):
    def test_both_arrays_merge_and_keep_remote_version(self) -> None:
        remote = Snapshot(
            activity_entries=[ActivityEntry(date="2026-01-06", distance=5, time=30)],
            weight_entries=[weight("2026-01-06", 90)],
            version='"abc"',
        )
        incoming = Snapshot(activity_entries=[ActivityEntry(date="2026-01-06", distance=6, time=33)])
        merged = reconcile_snapshots(remote, incoming)
        self.assertEqual(merged.version, '"abc"')
        self.assertEqual([e.distance for e in merged.activity_entries], [6])
        self.assertEqual([e.weight for e in merged.weight_entries], [90])

    def test_filter_snapshot(self) -> None:
        snapshot = Snapshot(weight_entries=[weight("2025-12-31", 90), weight("2026-01-01", 89)])
        filtered = filter_snapshot(snapshot, dt.date(2026, 1, 1))
        self.assertEqual([e.weight for e in filtered.weight_entries], [89])


if __name__ == "__main__":
    unittest.main(verbosity=2)
