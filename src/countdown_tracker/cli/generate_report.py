#!/usr/bin/env python3
"""
Print a training report from the tracker data.

Structure:
1. Overall summary and goal progress
2. Month-by-month summaries with weight progress
"""

import argparse
from typing import Optional

from dotenv import load_dotenv

from countdown_tracker.bucketing import (
    count_runs_at_least,
    distance_progress,
    latest_weight,
    longest_run,
    monthly_summary,
    monthly_weight_progress,
    summarize,
    weight_progress,
)
from countdown_tracker.config import Settings
from countdown_tracker.models.entries import Snapshot
from countdown_tracker.service import build_service
from countdown_tracker.utils.dates import calendar_day
from countdown_tracker.utils.formatting import format_hours_minutes, format_pace


def months_in(snapshot: Snapshot, tz=None) -> list[tuple[int, int]]:
    """Every (year, month) with at least one entry, oldest first."""
    months = {
        (day.year, day.month)
        for day in (
            calendar_day(e.date, tz)
            for e in [*snapshot.activity_entries, *snapshot.weight_entries]
        )
    }
    return sorted(months)


def print_overall_summary(snapshot: Snapshot, settings: Settings) -> None:
    totals = summarize(snapshot.activity_entries)
    print("=" * 80)
    print("TRAINING REPORT")
    print("=" * 80)
    print(f"Runs:           {totals.total_runs}")
    print(f"Distance:       {totals.total_distance:.1f} km")
    print(f"Time:           {format_hours_minutes(totals.total_time)}")
    print(f"Average pace:   {format_pace(totals.avg_pace) if totals.avg_pace else 'N/A'} /km")
    print(f"Avg VO2 max:    {round(totals.avg_vo2_max)}")

    longest = longest_run(snapshot.activity_entries)
    if longest.date is not None:
        print(f"Longest run:    {longest.distance:.1f} km on {longest.date.date().isoformat()}")
    print(f"Half marathons: {count_runs_at_least(snapshot.activity_entries)}")

    progress = distance_progress(totals.total_distance, settings.DISTANCE_GOAL_KM)
    print(
        f"Distance goal:  {progress.progress:.1f}% of {settings.DISTANCE_GOAL_KM:g} km "
        f"({max(progress.remaining, 0):.1f} km to go)"
    )

    current = latest_weight(snapshot.weight_entries)
    if current is not None:
        weight = weight_progress(current, settings.START_WEIGHT, settings.TARGET_WEIGHT)
        status = "Goal achieved!" if weight.remaining <= 0 else f"{weight.remaining:.1f} kg to target"
        print(f"Weight:         {current:.1f} kg, {weight.progress:.1f}% ({status})")
    print()


def print_month(snapshot: Snapshot, year: int, month: int, tz=None) -> None:
    summary = monthly_summary(snapshot.activity_entries, year, month, tz)
    print("-" * 80)
    print(f"{year}-{month:02d}")
    print("-" * 80)
    print(
        f"  {summary.total_runs} runs, {summary.total_distance:.1f} km, "
        f"{format_hours_minutes(summary.total_time)}"
    )
    if summary.total_runs:
        print(
            f"  Pace {format_pace(summary.avg_pace)} /km, avg HR {round(summary.avg_heart_rate)}, "
            f"max HR {summary.max_heart_rate}"
        )
    weights = monthly_weight_progress(snapshot.weight_entries, year, month, tz)
    if weights is not None:
        print(
            f"  Weight {weights.start_weight:.1f} -> {weights.current_weight:.1f} kg "
            f"(target {weights.target_weight:.1f}, {weights.progress:.1f}%)"
        )


def main(argv: Optional[list[str]] = None) -> int:
    """Main function to print the report."""
    parser = argparse.ArgumentParser(description="Print a training report from tracker data")
    parser.add_argument("--month", help="Only this month, as YYYY-MM")
    parser.add_argument("--env-file", help="Path to .env file")
    args = parser.parse_args(argv)

    if args.env_file:
        load_dotenv(dotenv_path=args.env_file, override=True)

    settings = Settings()
    service = build_service(settings)
    try:
        snapshot = service.load()
    finally:
        service.close()

    if snapshot.is_empty:
        print("No tracker data found.")
        return 0

    print_overall_summary(snapshot, settings)

    if args.month:
        try:
            year, month = (int(part) for part in args.month.split("-"))
            if not 1 <= month <= 12:
                raise ValueError(args.month)
        except ValueError:
            print(f"Invalid month: {args.month}. Expected format: YYYY-MM")
            return 1
        months = [(year, month)]
    else:
        months = months_in(snapshot, service.tz)

    for year, month in months:
        print_month(snapshot, year, month, service.tz)
    return 0


if __name__ == "__main__":
    exit(main())
