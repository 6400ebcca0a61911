"""Build validated entries from user submissions."""

from datetime import date, datetime, time, tzinfo
from typing import Any, Optional, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from countdown_tracker.exceptions import EntryValidationError
from countdown_tracker.models.entries import ActivityEntry, DatedEntry, WeightEntry
from countdown_tracker.utils.dates import calendar_day
from countdown_tracker.utils.formatting import parse_duration_to_minutes, parse_pace_to_minutes

E = TypeVar("E", bound=DatedEntry)


def _minutes(value: Any, parser: Any) -> Any:
    if value is None or isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if ":" in text:
            parsed = parser(text)
            if parsed is None:
                raise ValueError(f"Could not parse {value!r}")
            return parsed
        return float(text)
    return value


class ActivitySubmission(BaseModel):
    """
    Form input for a day's run. Blank fields are None.

    ``time`` takes minutes or "hh:mm:ss"; ``pace`` takes minutes or "mm:ss".
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    distance: Optional[float] = None
    time: Optional[float] = None
    pace: Optional[float] = None
    avg_heart_rate: Optional[float] = None
    max_heart_rate: Optional[float] = None
    vo2_max: Optional[int] = None

    @field_validator("time", mode="before")
    @classmethod
    def _parse_time(cls, value: Any) -> Any:
        return _minutes(value, parse_duration_to_minutes)

    @field_validator("pace", mode="before")
    @classmethod
    def _parse_pace(cls, value: Any) -> Any:
        return _minutes(value, parse_pace_to_minutes)

    @field_validator("distance", "avg_heart_rate", "max_heart_rate", "vo2_max", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class WeightSubmission(BaseModel):
    weight: Optional[float] = None


def _entry_timestamp(day: date) -> datetime:
    return datetime.combine(day, time.min)


def _pick(new: Any, old: Any, default: Any = None) -> Any:
    if new is not None:
        return new
    if old is not None:
        return old
    return default


def build_activity_entry(
    submission: ActivitySubmission, day: date, existing: Optional[ActivityEntry] = None
) -> ActivityEntry:
    """
    Build the entry for ``day`` from a submission.

    When updating an existing entry, blank fields keep their previous values.

    Raises:
        EntryValidationError: If distance or time ends up missing or not positive
    """
    if existing is not None and existing.is_target:
        existing = None

    distance = _pick(submission.distance, existing.distance if existing else None)
    minutes = _pick(submission.time, existing.time if existing else None)

    if distance is None or distance <= 0:
        raise EntryValidationError("Please enter a valid distance")
    if minutes is None or minutes <= 0:
        raise EntryValidationError("Please enter a valid time")

    pace = _pick(submission.pace, existing.pace if existing else None, minutes / distance)
    return ActivityEntry(
        date=_entry_timestamp(day),
        distance=distance,
        time=minutes,
        pace=pace,
        avg_heart_rate=_pick(submission.avg_heart_rate, existing.avg_heart_rate if existing else None, 0),
        max_heart_rate=_pick(submission.max_heart_rate, existing.max_heart_rate if existing else None, 0),
        vo2_max=_pick(submission.vo2_max, existing.vo2_max if existing else None, 0),
    )


def build_weight_entry(submission: WeightSubmission, day: date) -> WeightEntry:
    """
    Raises:
        EntryValidationError: If the weight is missing or not positive
    """
    if submission.weight is None or submission.weight <= 0:
        raise EntryValidationError("Please enter a valid weight")
    return WeightEntry(date=_entry_timestamp(day), weight=submission.weight)


def find_for_day(entries: Sequence[E], day: date, tz: Optional[tzinfo] = None) -> Optional[E]:
    """Get the entry recorded on ``day``, if any."""
    for entry in entries:
        if calendar_day(entry.date, tz) == day:
            return entry
    return None


def upsert_entry(entries: Sequence[E], entry: E, tz: Optional[tzinfo] = None) -> list[E]:
    """Return a new list with ``entry`` replacing the same-day entry, or appended."""
    day = calendar_day(entry.date, tz)
    updated = list(entries)
    for index, existing in enumerate(updated):
        if calendar_day(existing.date, tz) == day:
            updated[index] = entry
            return updated
    updated.append(entry)
    return updated
