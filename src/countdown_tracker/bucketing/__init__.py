"""Pure date-bucketing functions behind the calendar and summary views."""

from countdown_tracker.bucketing.calendar import classify_calendar_month, index_by_day
from countdown_tracker.bucketing.countdown import countdown, countdown_days
from countdown_tracker.bucketing.progress import (
    distance_progress,
    latest_weight,
    monthly_weight_progress,
    progress_fraction,
    weight_progress,
)
from countdown_tracker.bucketing.schedule import (
    DEFAULT_SCHEDULE,
    PLAN_2026_Q1,
    TrainingSchedule,
    weekly_target_for,
)
from countdown_tracker.bucketing.summary import (
    count_runs_at_least,
    longest_run,
    monthly_summary,
    summarize,
)

__all__ = [
    "classify_calendar_month",
    "index_by_day",
    "countdown",
    "countdown_days",
    "distance_progress",
    "latest_weight",
    "monthly_weight_progress",
    "progress_fraction",
    "weight_progress",
    "DEFAULT_SCHEDULE",
    "PLAN_2026_Q1",
    "TrainingSchedule",
    "weekly_target_for",
    "count_runs_at_least",
    "longest_run",
    "monthly_summary",
    "summarize",
]
