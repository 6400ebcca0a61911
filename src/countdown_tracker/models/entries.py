"""Pydantic models for tracked entries and the stored snapshot."""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from countdown_tracker.exceptions import EntryValidationError
from countdown_tracker.logger import get_logger
from countdown_tracker.utils.dates import parse_timestamp

logger = get_logger("countdown_tracker.models")

PLAN_SOURCE = "training-plan-2026-q1"


class DatedEntry(BaseModel):
    """Base for records identified by the calendar day of ``date``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: datetime

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> datetime:
        return parse_timestamp(value)

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the stored JSON shape (camelCase, ISO-8601 date)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ActivityEntry(DatedEntry):
    """One calendar day's recorded run."""

    distance: float = Field(ge=0)  # km
    time: float = Field(ge=0)  # minutes
    pace: Optional[float] = None  # min/km, derived when missing
    avg_heart_rate: int = Field(default=0, ge=0)
    max_heart_rate: int = Field(default=0, ge=0)
    vo2_max: int = Field(default=0, ge=0)

    # Only set on planned entries
    kind: Optional[Literal["target"]] = None
    source: Optional[str] = None

    @field_validator("avg_heart_rate", "max_heart_rate", "vo2_max", mode="before")
    @classmethod
    def _round_integral(cls, value: Any) -> Any:
        if value is None:
            return 0
        if isinstance(value, float):
            return round(value)
        return value

    @model_validator(mode="after")
    def _derive_pace(self) -> "ActivityEntry":
        if self.pace is None:
            self.pace = self.time / self.distance if self.distance > 0 else 0.0
        return self

    @property
    def is_target(self) -> bool:
        return self.kind == "target"


class TargetEntry(ActivityEntry):
    """A planned run produced by a training plan."""

    kind: Literal["target"] = "target"
    source: str = PLAN_SOURCE


class WeightEntry(DatedEntry):
    """One calendar day's body-weight measurement."""

    weight: float = Field(gt=0)  # kg


def parse_activity(raw: Any) -> ActivityEntry:
    """Validate a raw activity record, returning a TargetEntry for planned runs."""
    if isinstance(raw, dict) and raw.get("kind") == "target":
        return TargetEntry.model_validate(raw)
    return ActivityEntry.model_validate(raw)


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or "record"
    return f"{field}: {first['msg']}"


def _parse_list(raw: Any, parser: Any, label: str, strict: bool = False) -> list[Any]:
    if not isinstance(raw, list):
        if raw is not None:
            if strict:
                raise EntryValidationError(f"{label} must be a list")
            logger.warning(f"Snapshot field {label} is not a list, using []")
        return []
    entries = []
    for index, item in enumerate(raw):
        try:
            entries.append(parser(item))
        except ValidationError as e:
            if strict:
                raise EntryValidationError(f"Invalid {label}[{index}]: {_describe(e)}") from e
            logger.warning(f"Dropping invalid {label} record {item!r}: {e.error_count()} error(s)")
    return entries


class Snapshot(BaseModel):
    """The full stored state: both entry arrays plus the store's version tag."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    activity_entries: list[ActivityEntry] = Field(default_factory=list)
    weight_entries: list[WeightEntry] = Field(default_factory=list)

    # ETag of the blob this snapshot was read from; never serialized
    version: Optional[str] = Field(default=None, exclude=True)

    @classmethod
    def from_payload(cls, raw: Any, version: Optional[str] = None, strict: bool = False) -> "Snapshot":
        """
        Build a snapshot from a JSON payload.

        Missing arrays are always empty. Stored blobs are read leniently:
        non-list arrays become empty and invalid records are dropped with a
        warning. With ``strict`` (client submissions) those raise instead.

        Raises:
            EntryValidationError: In strict mode, on the first invalid record
        """
        if not isinstance(raw, dict):
            if strict:
                raise EntryValidationError("Payload must be a JSON object")
            logger.warning(f"Snapshot payload is {type(raw).__name__}, not an object; using empty snapshot")
            raw = {}
        return cls(
            activity_entries=_parse_list(raw.get("activityEntries"), parse_activity, "activityEntries", strict),
            weight_entries=_parse_list(
                raw.get("weightEntries"), WeightEntry.model_validate, "weightEntries", strict
            ),
            version=version,
        )

    def to_payload(self) -> dict[str, Any]:
        """Serialize to ``{"activityEntries": [...], "weightEntries": [...]}``."""
        return {
            "activityEntries": [entry.to_payload() for entry in self.activity_entries],
            "weightEntries": [entry.to_payload() for entry in self.weight_entries],
        }

    @property
    def is_empty(self) -> bool:
        return not self.activity_entries and not self.weight_entries
