from __future__ import annotations

import contextlib
import io
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from countdown_tracker.cli.generate_report import main
from countdown_tracker.models import ActivityEntry, Snapshot, WeightEntry
from countdown_tracker.storage import LocalCache


class TestReportCommand(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        env = {
            "TRACKER_DATA_DIR": self.tmp.name,
            "BLOB_URL": "",
            "RETENTION_CUTOFF": "none",
            "TRACKER_TIMEZONE": "UTC",
        }
        self.env = mock.patch.dict(os.environ, env)
        self.env.start()

    def tearDown(self) -> None:
        self.env.stop()
        self.tmp.cleanup()

    def seed(self) -> None:
        LocalCache(Path(self.tmp.name)).save(
            Snapshot(
                activity_entries=[
                    ActivityEntry(date="2026-01-06", distance=21.1, time=120, avg_heart_rate=150),
                    ActivityEntry(date="2026-02-03", distance=8, time=46),
                ],
                weight_entries=[WeightEntry(date="2026-01-06", weight=90.2)],
            )
        )

    def run_main(self, argv: list[str]) -> tuple[int, str]:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = main(argv)
        return code, out.getvalue()

    def test_empty_store(self) -> None:
        code, out = self.run_main([])
        self.assertEqual(code, 0)
        self.assertIn("No tracker data found.", out)

    def test_full_report(self) -> None:
        self.seed()
        code, out = self.run_main([])
        self.assertEqual(code, 0)
        self.assertIn("TRAINING REPORT", out)
        self.assertIn("Half marathons: 1", out)
        self.assertIn("2026-01", out)
        self.assertIn("2026-02", out)
        self.assertIn("Weight 90.2 -> 90.2 kg", out)

    def test_single_month(self) -> None:
        self.seed()
        code, out = self.run_main(["--month", "2026-02"])
        self.assertEqual(code, 0)
        self.assertIn("1 runs, 8.0 km", out)
        self.assertNotIn("\n2026-01\n", out)

    def test_invalid_month(self) -> None:
        self.seed()
        for month in ("2026-13", "January"):
            code, out = self.run_main(["--month", month])
            self.assertEqual(code, 1)
            self.assertIn(f"Invalid month: {month}", out)


if __name__ == "__main__":
    unittest.main(verbosity=2)
