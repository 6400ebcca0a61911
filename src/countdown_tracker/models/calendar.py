"""Pydantic models for derived calendar, summary and progress results."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from countdown_tracker.models.entries import ActivityEntry, WeightEntry


class ResultModel(BaseModel):
    """Derived result; serializes with camelCase keys when dumped by alias."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HighlightRange(BaseModel):
    """A labeled date range highlighted on the calendar (e.g. travel)."""

    label: str
    start: date
    end: date
    inclusive: bool = True  # include the end day

    @model_validator(mode="after")
    def _check_order(self) -> "HighlightRange":
        if self.end < self.start:
            raise ValueError(f"Range {self.label!r} ends before it starts")
        return self

    def contains(self, day: date) -> bool:
        if self.inclusive:
            return self.start <= day <= self.end
        return self.start <= day < self.end


class CalendarDay(ResultModel):
    """One cell of a full-week month grid."""

    date: date
    day: int
    is_current_month: bool
    is_past: bool
    is_overlapping: bool = False  # adjacent-month cell inside a highlight range
    highlights: list[str] = Field(default_factory=list)
    activity: Optional[ActivityEntry] = None
    weight: Optional[WeightEntry] = None
    target_distance: Optional[float] = None


class MonthlySummary(ResultModel):
    """Aggregate statistics over a set of runs."""

    total_distance: float = 0.0
    total_time: float = 0.0
    total_runs: int = 0
    avg_pace: float = 0.0
    avg_heart_rate: float = 0.0
    max_heart_rate: int = 0
    avg_vo2_max: float = 0.0


class LongestRun(ResultModel):
    distance: float = 0.0
    date: Optional[datetime] = None


class WeightProgress(ResultModel):
    """Progress toward the overall weight goal."""

    progress: float
    remaining: float


class MonthlyWeightProgress(ResultModel):
    """Progress toward losing a fixed amount within one month."""

    start_weight: float
    target_weight: float
    current_weight: float
    progress: float
    remaining: float


class DistanceProgress(ResultModel):
    """Progress toward a cumulative distance goal."""

    progress: float
    remaining: float


class CountdownDay(ResultModel):
    date: date
    has_started: bool


class Countdown(ResultModel):
    """Time remaining until a fixed instant."""

    days: int
    hours: int
    minutes: int
    progress: float
    finished: bool
    day_list: list[CountdownDay] = Field(default_factory=list)
