#!/usr/bin/env python3
"""
Seed the calendar with planned run targets from the training plan.

Posts one TargetEntry per planned day to the data API. Running it again does
not create duplicates because the API keeps one entry per calendar day.
"""

import argparse
import os
from datetime import tzinfo
from typing import Any, Optional

import httpx
from dotenv import load_dotenv

from countdown_tracker.bucketing.schedule import DEFAULT_SCHEDULE
from countdown_tracker.utils.dates import resolve_timezone

DEFAULT_API_URL = "http://localhost:8000/api/data"


def build_payload(tz: Optional[tzinfo] = None) -> dict[str, Any]:
    """
    Payload carrying every planned target and no weights.

    Targets are stamped at midnight in ``tz``; without one they are naive
    and the API files them under its own canonical timezone.
    """
    targets = DEFAULT_SCHEDULE.targets(tz)
    return {
        "activityEntries": [target.to_payload() for target in targets],
        "weightEntries": [],
    }


def count_targets(data: dict[str, Any], source: str) -> int:
    return sum(
        1
        for entry in data.get("activityEntries") or []
        if entry.get("kind") == "target" and entry.get("source") == source
    )


def main(argv: list[str] | None = None, client: httpx.Client | None = None) -> int:
    """Main function to seed plan targets."""
    parser = argparse.ArgumentParser(description="Seed planned run targets into the tracker")
    parser.add_argument("--api-url", help=f"Data endpoint (default: $API_URL or {DEFAULT_API_URL})")
    parser.add_argument("--dry-run", action="store_true", help="Print the targets without posting")
    parser.add_argument("--env-file", help="Path to .env file")
    parser.add_argument("--timezone", help="Timezone of the target days (default: $TRACKER_TIMEZONE, else naive)")
    args = parser.parse_args(argv)

    if args.env_file:
        load_dotenv(dotenv_path=args.env_file, override=True)
    else:
        load_dotenv()

    tz_name = args.timezone or os.environ.get("TRACKER_TIMEZONE")
    try:
        tz = resolve_timezone(tz_name) if tz_name else None
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    payload = build_payload(tz)
    entries = payload["activityEntries"]
    print(f"Generated {len(entries)} target entries")
    if entries:
        print(f"Date range: {entries[0]['date']} to {entries[-1]['date']}")

    if args.dry_run:
        for entry in entries:
            print(f"  {entry['date'][:10]}  {entry['distance']:g} km")
        return 0

    api_url = args.api_url or os.environ.get("API_URL", DEFAULT_API_URL)
    api_key = os.environ.get("DATA_API_SECRET", "")
    headers = {"x-data-key": api_key} if api_key else {}

    client = client or httpx.Client(timeout=30.0)
    try:
        print(f"Posting targets to {api_url}...")
        response = client.post(api_url, json=payload, headers=headers)
        if response.status_code != 200:
            print(f"Error seeding targets: {response.status_code} {response.text}")
            return 1
        print(f"Result: {response.json()}")

        print("Verifying seed...")
        verify = client.get(api_url, headers=headers)
        if verify.status_code != 200:
            print(f"Warning: could not verify ({verify.status_code})")
            return 0
        found = count_targets(verify.json(), DEFAULT_SCHEDULE.source)
        print(f"Verification: found {found} target entries")
    except httpx.HTTPError as e:
        print(f"Error seeding targets: {e}")
        return 1
    finally:
        client.close()

    return 0


if __name__ == "__main__":
    exit(main())
