"""Progress-bar percentages for weight and distance goals."""

from datetime import date, tzinfo
from typing import Iterable, Optional

from countdown_tracker.models.calendar import DistanceProgress, MonthlyWeightProgress, WeightProgress
from countdown_tracker.models.entries import WeightEntry
from countdown_tracker.utils.dates import calendar_day, in_month

MONTHLY_WEIGHT_LOSS_KG = 2.0


def progress_fraction(current: float, start: float, target: float) -> float:
    """
    Percentage of the way from ``start`` to ``target``, clamped to [0, 100].

    Works in either direction: for a decreasing metric (weight loss) this is
    (start - current) / (start - target); with start=0 it is current / target.
    Returns 0 when start equals target.
    """
    span = target - start
    if span == 0:
        return 0.0
    fraction = (current - start) / span
    return max(0.0, min(1.0, fraction)) * 100


def weight_progress(current: float, start: float, target: float) -> WeightProgress:
    return WeightProgress(
        progress=progress_fraction(current, start, target),
        remaining=current - target,
    )


def distance_progress(total_distance: float, goal: float = 1000.0) -> DistanceProgress:
    return DistanceProgress(
        progress=progress_fraction(total_distance, 0.0, goal),
        remaining=goal - total_distance,
    )


def latest_weight(entries: Iterable[WeightEntry], tz: Optional[tzinfo] = None) -> Optional[float]:
    """Most recent weight by calendar day, or None without entries."""
    latest: Optional[WeightEntry] = None
    for entry in entries:
        if latest is None or calendar_day(entry.date, tz) >= calendar_day(latest.date, tz):
            latest = entry
    return latest.weight if latest else None


def monthly_weight_progress(
    entries: Iterable[WeightEntry],
    year: int,
    month: int,
    tz: Optional[tzinfo] = None,
    loss_kg: float = MONTHLY_WEIGHT_LOSS_KG,
) -> Optional[MonthlyWeightProgress]:
    """
    Progress toward losing ``loss_kg`` within a month.

    The start weight is the one logged on the 1st, or the month's earliest
    weight otherwise; the current weight is the month's latest. Returns None
    when nothing was logged in the month.
    """
    month_entries = sorted(
        (e for e in entries if in_month(e.date, year, month, tz)),
        key=lambda e: calendar_day(e.date, tz),
    )
    if not month_entries:
        return None

    first_of_month = date(year, month, 1)
    start_weight = next(
        (e.weight for e in month_entries if calendar_day(e.date, tz) == first_of_month),
        month_entries[0].weight,
    )
    current_weight = month_entries[-1].weight
    target_weight = start_weight - loss_kg

    return MonthlyWeightProgress(
        start_weight=start_weight,
        target_weight=target_weight,
        current_weight=current_weight,
        progress=progress_fraction(current_weight, start_weight, target_weight),
        remaining=current_weight - target_weight,
    )
