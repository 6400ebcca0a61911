"""Pydantic models for training plans."""

from datetime import date, timedelta
from enum import IntEnum

from pydantic import BaseModel, Field


class Weekday(IntEnum):
    """Days of the week, numbered like ``date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


class ScheduleRule(BaseModel):
    """A planned distance for one weekday within a date range."""

    start: date
    end: date
    weekday: Weekday
    distance_km: float = Field(gt=0)

    def matches(self, day: date) -> bool:
        return self.start <= day <= self.end and day.weekday() == self.weekday


class PlannedWeek(BaseModel):
    """A week in the training plan, keyed by its Monday."""

    week_start_date: date
    runs: dict[Weekday, float] = Field(default_factory=dict)


class TrainingPlan(BaseModel):
    """Complete training plan model."""

    source: str
    plan_start_date: date
    plan_end_date: date
    weeks: list[PlannedWeek] = Field(default_factory=list)

    def rules(self) -> list[ScheduleRule]:
        """Flatten the plan into schedule rules, clipped to the plan window."""
        rules: list[ScheduleRule] = []
        for week in self.weeks:
            start = max(week.week_start_date, self.plan_start_date)
            end = min(week.week_start_date + timedelta(days=6), self.plan_end_date)
            if end < start:
                continue
            for weekday, distance in sorted(week.runs.items()):
                rules.append(
                    ScheduleRule(start=start, end=end, weekday=weekday, distance_km=distance)
                )
        return rules
