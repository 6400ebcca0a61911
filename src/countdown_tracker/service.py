"""Two-tier tracker service: local cache plus remote blob, reconciled by day."""

from datetime import date, datetime, timezone, tzinfo
from pathlib import Path
from typing import Any, Optional, Sequence

from countdown_tracker.bucketing import (
    DEFAULT_SCHEDULE,
    TrainingSchedule,
    classify_calendar_month,
    count_runs_at_least,
    countdown,
    distance_progress,
    index_by_day,
    latest_weight,
    longest_run,
    monthly_summary,
    monthly_weight_progress,
    summarize,
    weight_progress,
)
from countdown_tracker.config import Settings, get_settings
from countdown_tracker.entries import (
    ActivitySubmission,
    WeightSubmission,
    build_activity_entry,
    build_weight_entry,
    find_for_day,
)
from countdown_tracker.exceptions import ConflictError, StoreError
from countdown_tracker.logger import get_logger
from countdown_tracker.models.calendar import HighlightRange
from countdown_tracker.models.entries import Snapshot
from countdown_tracker.reconcile import filter_snapshot, reconcile_snapshots
from countdown_tracker.storage import EntryStore, LocalCache, RemoteStore
from countdown_tracker.utils.dates import today_in

logger = get_logger("countdown_tracker.service")


class TrackerService:
    """
    The only component that decides precedence between the two stores.

    Reads prefer the remote blob and fall back to the local cache. Writes go
    to the local cache first, then to the remote blob via fetch, reconcile
    and a conditional write that is retried on conflict. Changes the remote
    has not accepted yet are kept in ``pending`` and replayed over every
    remote read until a write succeeds.
    """

    def __init__(
        self,
        local: EntryStore,
        remote: Optional[EntryStore] = None,
        retention_cutoff: Optional[date] = None,
        tz: Optional[tzinfo] = None,
        max_attempts: int = 3,
        pending: Optional[EntryStore] = None,
    ):
        """
        Args:
            local: Cache of the last known canonical snapshot
            remote: Canonical blob store; None runs on the cache alone
            retention_cutoff: Entries before this day are dropped
            tz: Canonical timezone for calendar days
            max_attempts: Conditional-write attempts before giving up
            pending: Store for unsent changes; kept in memory when None
        """
        self.local = local
        self.remote = remote
        self.retention_cutoff = retention_cutoff
        self.tz = tz or timezone.utc
        self.max_attempts = max_attempts
        self.pending = pending
        self._pending = Snapshot()

    def today(self) -> date:
        return today_in(self.tz)

    def _load_pending(self) -> Snapshot:
        return self.pending.load() if self.pending is not None else self._pending

    def _save_pending(self, snapshot: Snapshot) -> None:
        if self.pending is not None:
            self.pending.save(snapshot)
        else:
            self._pending = snapshot

    def load(self) -> Snapshot:
        """Current canonical snapshot, from the remote blob when reachable."""
        if self.remote is None:
            return filter_snapshot(self.local.load(), self.retention_cutoff, self.tz)

        try:
            snapshot = filter_snapshot(self.remote.load(), self.retention_cutoff, self.tz)
        except StoreError as e:
            logger.warning(f"Remote load failed, falling back to local cache: {e.message}")
            return filter_snapshot(self.local.load(), self.retention_cutoff, self.tz)

        pending = self._load_pending()
        if not pending.is_empty:
            logger.info(
                f"Replaying unsent changes: {len(pending.activity_entries)} activities, "
                f"{len(pending.weight_entries)} weights"
            )
            snapshot = reconcile_snapshots(snapshot, pending, self.retention_cutoff, self.tz)

        try:
            self.local.save(snapshot)
        except StoreError as e:
            logger.warning(f"Could not refresh local cache: {e.message}")
        return snapshot

    def submit(self, delta: Snapshot) -> Snapshot:
        """
        Merge ``delta`` into the canonical snapshot and persist it.

        Raises:
            StoreError: The remote blob could not be read or written; the
                change stays pending and is sent with the next submit
            ConflictError: Every attempt lost a race with another writer
        """
        cached = reconcile_snapshots(self.local.load(), delta, self.retention_cutoff, self.tz)
        self.local.save(cached)

        if self.remote is None:
            logger.info(
                f"Saved locally: {len(cached.activity_entries)} activities, "
                f"{len(cached.weight_entries)} weights"
            )
            return cached

        pending = reconcile_snapshots(self._load_pending(), delta, self.retention_cutoff, self.tz)
        self._save_pending(pending)

        for attempt in range(1, self.max_attempts + 1):
            current = self.remote.load()
            merged = reconcile_snapshots(current, pending, self.retention_cutoff, self.tz)
            try:
                merged.version = self.remote.save(merged)
            except ConflictError:
                logger.warning(f"Remote blob changed during write (attempt {attempt}/{self.max_attempts})")
                continue

            logger.info(
                f"Remote saved: incoming {len(delta.activity_entries)} activities / "
                f"{len(delta.weight_entries)} weights, stored {len(merged.activity_entries)} / "
                f"{len(merged.weight_entries)}"
            )
            self._save_pending(Snapshot())
            self.local.save(merged)
            return merged

        raise ConflictError(f"Remote data kept changing; gave up after {self.max_attempts} attempts")

    def log_activity(self, submission: ActivitySubmission, day: Optional[date] = None) -> Snapshot:
        """Record (or update) the run for ``day`` (default: today)."""
        day = day or self.today()
        existing = find_for_day(self.load().activity_entries, day, self.tz)
        entry = build_activity_entry(submission, day, existing)
        return self.submit(Snapshot(activity_entries=[entry]))

    def log_weight(self, submission: WeightSubmission, day: Optional[date] = None) -> Snapshot:
        """Record (or replace) the weight for ``day`` (default: today)."""
        entry = build_weight_entry(submission, day or self.today())
        return self.submit(Snapshot(weight_entries=[entry]))

    def close(self) -> None:
        """Release the remote store's HTTP client, if any."""
        close = getattr(self.remote, "close", None)
        if close is not None:
            close()


def month_view(
    snapshot: Snapshot,
    year: int,
    month: int,
    today: date,
    highlight_ranges: Sequence[HighlightRange] = (),
    tz: Optional[tzinfo] = None,
    schedule: TrainingSchedule = DEFAULT_SCHEDULE,
) -> dict[str, Any]:
    """Everything the calendar needs for one month, JSON-ready with camelCase keys."""
    days = classify_calendar_month(
        year,
        month,
        today,
        highlight_ranges,
        activities=index_by_day(snapshot.activity_entries, tz),
        weights=index_by_day(snapshot.weight_entries, tz),
        tz=tz,
        schedule=schedule,
    )
    weight_month = monthly_weight_progress(snapshot.weight_entries, year, month, tz)
    return {
        "year": year,
        "month": month,
        "days": [day.model_dump(mode="json", by_alias=True) for day in days],
        "summary": monthly_summary(snapshot.activity_entries, year, month, tz).model_dump(by_alias=True),
        "weightProgress": weight_month.model_dump(by_alias=True) if weight_month else None,
    }


def overview(snapshot: Snapshot, settings: Settings, tz: Optional[tzinfo] = None) -> dict[str, Any]:
    """Overall totals and goal progress, camelCase keys."""
    totals = summarize(snapshot.activity_entries)
    current_weight = latest_weight(snapshot.weight_entries, tz)
    return {
        "summary": totals.model_dump(by_alias=True),
        "longestRun": longest_run(snapshot.activity_entries).model_dump(mode="json", by_alias=True),
        "halfMarathons": count_runs_at_least(snapshot.activity_entries),
        "distanceProgress": distance_progress(totals.total_distance, settings.DISTANCE_GOAL_KM).model_dump(
            by_alias=True
        ),
        "currentWeight": current_weight,
        "weightProgress": (
            weight_progress(current_weight, settings.START_WEIGHT, settings.TARGET_WEIGHT).model_dump(by_alias=True)
            if current_weight is not None
            else None
        ),
    }


def countdown_view(settings: Settings, now: Optional[datetime] = None) -> dict[str, Any]:
    """Countdown to the configured end instant."""
    start, end = settings.countdown_start, settings.countdown_end
    if now is None:
        now = datetime.now(start.tzinfo) if start.tzinfo else datetime.now()
    return countdown(start, end, now, settings.timezone).model_dump(mode="json", by_alias=True)


def build_service(settings: Optional[Settings] = None) -> TrackerService:
    """
    Wire a TrackerService from settings; without BLOB_URL only the local cache is used.

    Call ``close()`` on the result when done.
    """
    settings = settings or get_settings()
    data_dir = Path(settings.TRACKER_DATA_DIR) if settings.TRACKER_DATA_DIR else None
    remote = RemoteStore(settings.BLOB_URL, settings.BLOB_TOKEN) if settings.BLOB_URL else None
    if remote is None:
        logger.info("BLOB_URL not set, using the local cache as the only store")
    return TrackerService(
        local=LocalCache(data_dir),
        remote=remote,
        retention_cutoff=settings.retention_cutoff,
        tz=settings.timezone,
        pending=LocalCache(data_dir, file_name=LocalCache.PENDING_FILE_NAME),
    )
