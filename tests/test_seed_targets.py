from __future__ import annotations

import contextlib
import io
import json
import unittest

import httpx

from countdown_tracker.cli.seed_targets import build_payload, count_targets, main
from countdown_tracker.utils.dates import resolve_timezone

API_URL = "http://tracker.test/api/data"


def run_main(argv: list[str], client: httpx.Client | None = None) -> tuple[int, str]:
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        code = main(argv, client=client)
    return code, out.getvalue()


class TestPayload(unittest.TestCase):
    def test_payload_holds_only_targets(self) -> None:
        payload = build_payload()
        self.assertEqual(payload["weightEntries"], [])
        self.assertEqual(len(payload["activityEntries"]), 50)
        self.assertEqual(count_targets(payload, "training-plan-2026-q1"), 50)
        self.assertEqual(count_targets(payload, "other"), 0)
        first = payload["activityEntries"][0]
        self.assertEqual(first["distance"], 6)
        self.assertEqual(first["time"], 0)

    def test_targets_are_midnight_in_the_given_timezone(self) -> None:
        naive = build_payload()["activityEntries"][0]
        self.assertEqual(naive["date"], "2026-01-06T00:00:00")
        west = build_payload(resolve_timezone("America/New_York"))["activityEntries"][0]
        self.assertEqual(west["date"], "2026-01-06T00:00:00-05:00")


class TestSeedCommand(unittest.TestCase):
    def test_dry_run_posts_nothing(self) -> None:
        code, out = run_main(["--dry-run"])
        self.assertEqual(code, 0)
        self.assertIn("Generated 50 target entries", out)
        self.assertIn("2026-01-06", out)

    def test_timezone_option(self) -> None:
        code, out = run_main(["--dry-run", "--timezone", "America/New_York"])
        self.assertEqual(code, 0)
        self.assertIn("2026-01-06T00:00:00-05:00", out)

        code, out = run_main(["--dry-run", "--timezone", "No/Such_Zone"])
        self.assertEqual(code, 1)
        self.assertIn("Error", out)

    def test_posts_and_verifies(self) -> None:
        requests: list[httpx.Request] = []
        stored: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if request.method == "POST":
                stored.update(json.loads(request.content))
                return httpx.Response(200, json={"success": True, "activityCount": 50, "weightCount": 0})
            return httpx.Response(200, json=stored)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        code, out = run_main(["--api-url", API_URL], client=client)
        self.assertEqual(code, 0)
        self.assertEqual([r.method for r in requests], ["POST", "GET"])
        self.assertIn("found 50 target entries", out)

    def test_server_error_fails(self) -> None:
        client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(500, text="boom")))
        code, out = run_main(["--api-url", API_URL], client=client)
        self.assertEqual(code, 1)
        self.assertIn("500", out)


if __name__ == "__main__":
    unittest.main(verbosity=2)
