"""Pydantic models for the countdown tracker."""

from countdown_tracker.models.entries import (
    PLAN_SOURCE,
    ActivityEntry,
    DatedEntry,
    Snapshot,
    TargetEntry,
    WeightEntry,
    parse_activity,
)
from countdown_tracker.models.calendar import (
    CalendarDay,
    Countdown,
    CountdownDay,
    DistanceProgress,
    HighlightRange,
    LongestRun,
    MonthlySummary,
    MonthlyWeightProgress,
    WeightProgress,
)
from countdown_tracker.models.training_plan import (
    PlannedWeek,
    ScheduleRule,
    TrainingPlan,
    Weekday,
)

__all__ = [
    # Entry models
    "PLAN_SOURCE",
    "DatedEntry",
    "ActivityEntry",
    "TargetEntry",
    "WeightEntry",
    "Snapshot",
    "parse_activity",
    # Derived results
    "HighlightRange",
    "CalendarDay",
    "MonthlySummary",
    "LongestRun",
    "WeightProgress",
    "MonthlyWeightProgress",
    "DistanceProgress",
    "CountdownDay",
    "Countdown",
    # Training plan models
    "Weekday",
    "ScheduleRule",
    "PlannedWeek",
    "TrainingPlan",
]
