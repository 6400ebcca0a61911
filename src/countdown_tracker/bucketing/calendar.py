"""Month grid classification for the calendar view."""

from datetime import tzinfo
from typing import Iterable, Mapping, Optional, Sequence, TypeVar

from countdown_tracker.bucketing.schedule import DEFAULT_SCHEDULE, TrainingSchedule
from countdown_tracker.models.calendar import CalendarDay, HighlightRange
from countdown_tracker.models.entries import ActivityEntry, DatedEntry, WeightEntry
from countdown_tracker.utils.dates import DateLike, calendar_day, iter_days, month_grid_bounds

E = TypeVar("E", bound=DatedEntry)


def index_by_day(entries: Iterable[E], tz: Optional[tzinfo] = None) -> dict:
    """
    Build a calendar-day lookup table for a collection of entries.

    When several entries share a day the last one wins, as in reconciliation.
    """
    return {calendar_day(entry.date, tz): entry for entry in entries}


def classify_calendar_month(
    year: int,
    month: int,
    today: DateLike,
    highlight_ranges: Sequence[HighlightRange] = (),
    activities: Optional[Mapping] = None,
    weights: Optional[Mapping] = None,
    tz: Optional[tzinfo] = None,
    schedule: Optional[TrainingSchedule] = None,
) -> list[CalendarDay]:
    """
    Classify every cell of a Sunday-to-Saturday month grid.

    Args:
        year: Displayed year
        month: Displayed month (1-12)
        today: Reference date for past/future; only its calendar day matters
        highlight_ranges: Labeled ranges tested against every cell
        activities: ActivityEntry lookup keyed by calendar day (see index_by_day)
        weights: WeightEntry lookup keyed by calendar day
        tz: Canonical timezone used to truncate aware ``today`` values
        schedule: Training schedule for per-day targets

    Returns:
        Cells in date order; the count is always a multiple of 7
    """
    activities = activities or {}
    weights = weights or {}
    schedule = schedule or DEFAULT_SCHEDULE
    reference_day = calendar_day(today, tz)
    grid_start, grid_end = month_grid_bounds(year, month)

    cells: list[CalendarDay] = []
    for day in iter_days(grid_start, grid_end):
        is_current_month = day.month == month and day.year == year
        highlights = [r.label for r in highlight_ranges if r.contains(day)]
        activity: Optional[ActivityEntry] = activities.get(day)
        weight: Optional[WeightEntry] = weights.get(day)
        cells.append(
            CalendarDay(
                date=day,
                day=day.day,
                is_current_month=is_current_month,
                is_past=day < reference_day,
                is_overlapping=bool(highlights) and not is_current_month,
                highlights=highlights,
                activity=activity,
                weight=weight,
                target_distance=schedule.target_for(day),
            )
        )
    return cells
