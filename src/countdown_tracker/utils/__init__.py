"""Utility functions for the countdown tracker."""

from countdown_tracker.utils.formatting import (
    format_duration,
    format_hours_minutes,
    format_pace,
    parse_duration_to_minutes,
    parse_pace_to_minutes,
)
from countdown_tracker.utils.dates import (
    calendar_day,
    day_key,
    in_month,
    is_before_day,
    iter_days,
    month_bounds,
    month_grid_bounds,
    parse_date,
    parse_timestamp,
    resolve_timezone,
    today_in,
)

__all__ = [
    "format_pace",
    "format_duration",
    "format_hours_minutes",
    "parse_duration_to_minutes",
    "parse_pace_to_minutes",
    "calendar_day",
    "day_key",
    "in_month",
    "is_before_day",
    "iter_days",
    "month_bounds",
    "month_grid_bounds",
    "parse_date",
    "parse_timestamp",
    "resolve_timezone",
    "today_in",
]
