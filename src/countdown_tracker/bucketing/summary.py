"""Aggregate statistics over recorded runs."""

from datetime import tzinfo
from typing import Iterable, Optional

from countdown_tracker.models.calendar import LongestRun, MonthlySummary
from countdown_tracker.models.entries import ActivityEntry
from countdown_tracker.utils.dates import in_month

HALF_MARATHON_KM = 21.1


def actual_runs(entries: Iterable[ActivityEntry]) -> list[ActivityEntry]:
    """Drop planned targets, keeping recorded runs only."""
    return [entry for entry in entries if not entry.is_target]


def summarize(entries: Iterable[ActivityEntry]) -> MonthlySummary:
    """Calculate summary statistics for a list of runs."""
    runs = actual_runs(entries)
    if not runs:
        return MonthlySummary()

    total_distance = sum(r.distance for r in runs)
    total_time = sum(r.time for r in runs)
    total_runs = len(runs)

    return MonthlySummary(
        total_distance=total_distance,
        total_time=total_time,
        total_runs=total_runs,
        avg_pace=total_time / total_distance if total_distance > 0 else 0.0,
        avg_heart_rate=sum(r.avg_heart_rate for r in runs) / total_runs,
        max_heart_rate=max(r.max_heart_rate for r in runs),
        avg_vo2_max=sum(r.vo2_max for r in runs) / total_runs,
    )


def monthly_summary(
    entries: Iterable[ActivityEntry], year: int, month: int, tz: Optional[tzinfo] = None
) -> MonthlySummary:
    """Summarize the runs recorded in one month. An empty month is all zeros."""
    return summarize(e for e in entries if in_month(e.date, year, month, tz))


def longest_run(entries: Iterable[ActivityEntry]) -> LongestRun:
    runs = actual_runs(entries)
    if not runs:
        return LongestRun()
    # First of equally long runs wins
    longest = max(runs, key=lambda r: r.distance)
    return LongestRun(distance=longest.distance, date=longest.date)


def count_runs_at_least(entries: Iterable[ActivityEntry], distance_km: float = HALF_MARATHON_KM) -> int:
    """Count recorded runs of at least ``distance_km`` (default: half marathon)."""
    return sum(1 for r in actual_runs(entries) if r.distance >= distance_km)
