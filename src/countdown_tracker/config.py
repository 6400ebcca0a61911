"""Environment-driven settings."""

import json
import os
from datetime import date, datetime, tzinfo
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

from countdown_tracker.models.calendar import HighlightRange
from countdown_tracker.utils.dates import parse_date, parse_timestamp, resolve_timezone

load_dotenv()

DEFAULT_RETENTION_CUTOFF = "2026-01-01"
DEFAULT_COUNTDOWN_START = "2025-05-09T02:00:00+01:00"
DEFAULT_COUNTDOWN_END = "2025-06-07T02:00:00+01:00"


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value else default


class Settings:
    """Snapshot of the process environment taken at construction time."""

    def __init__(self) -> None:
        # Remote blob store
        self.BLOB_URL: Optional[str] = os.getenv("BLOB_URL") or None
        self.BLOB_TOKEN: Optional[str] = os.getenv("BLOB_TOKEN") or None

        # Shared secret checked against the x-data-key header
        self.DATA_API_SECRET: Optional[str] = os.getenv("DATA_API_SECRET") or None
        self.REQUIRE_DATA_KEY = _env_bool("REQUIRE_DATA_KEY")

        self.TRACKER_TIMEZONE = os.getenv("TRACKER_TIMEZONE", "UTC")
        self.RETENTION_CUTOFF_RAW = os.getenv("RETENTION_CUTOFF", DEFAULT_RETENTION_CUTOFF)
        self.TRACKER_DATA_DIR: Optional[str] = os.getenv("TRACKER_DATA_DIR") or None

        # Goals
        self.TARGET_WEIGHT = _env_float("TARGET_WEIGHT", 80.0)
        self.START_WEIGHT = _env_float("START_WEIGHT", 91.5)
        self.DISTANCE_GOAL_KM = _env_float("DISTANCE_GOAL_KM", 1000.0)

        self.COUNTDOWN_START_RAW = os.getenv("COUNTDOWN_START", DEFAULT_COUNTDOWN_START)
        self.COUNTDOWN_END_RAW = os.getenv("COUNTDOWN_END", DEFAULT_COUNTDOWN_END)
        self.HIGHLIGHT_RANGES_RAW = os.getenv("HIGHLIGHT_RANGES", "[]")

        self.API_HOST = os.getenv("API_HOST", "127.0.0.1")
        self.API_PORT = int(os.getenv("API_PORT", "8000"))

    @property
    def timezone(self) -> tzinfo:
        return resolve_timezone(self.TRACKER_TIMEZONE)

    @property
    def retention_cutoff(self) -> Optional[date]:
        raw = (self.RETENTION_CUTOFF_RAW or "").strip()
        if not raw or raw.lower() == "none":
            return None
        return parse_date(raw)

    @property
    def countdown_start(self) -> datetime:
        return parse_timestamp(self.COUNTDOWN_START_RAW)

    @property
    def countdown_end(self) -> datetime:
        return parse_timestamp(self.COUNTDOWN_END_RAW)

    @property
    def highlight_ranges(self) -> list[HighlightRange]:
        try:
            raw = json.loads(self.HIGHLIGHT_RANGES_RAW or "[]")
        except json.JSONDecodeError as e:
            raise ValueError(f"HIGHLIGHT_RANGES is not valid JSON: {e}") from e
        return [HighlightRange.model_validate(item) for item in raw]


@lru_cache
def get_settings() -> Settings:
    return Settings()
