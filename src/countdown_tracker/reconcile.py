"""Merge a remote snapshot with a local delta, one entry per calendar day."""

from datetime import date, tzinfo
from typing import Iterable, Optional, TypeVar

from countdown_tracker.models.entries import DatedEntry, Snapshot
from countdown_tracker.utils.dates import calendar_day, day_key

E = TypeVar("E", bound=DatedEntry)


def apply_retention(entries: Iterable[E], cutoff: Optional[date], tz: Optional[tzinfo] = None) -> list[E]:
    """Drop entries whose calendar day is strictly before ``cutoff``."""
    if cutoff is None:
        return list(entries)
    return [entry for entry in entries if calendar_day(entry.date, tz) >= cutoff]


def reconcile(
    remote: Iterable[E],
    incoming: Iterable[E],
    retention_cutoff: Optional[date] = None,
    tz: Optional[tzinfo] = None,
) -> list[E]:
    """
    Produce the canonical entry list from a remote snapshot and an incoming delta.

    Entries are keyed by calendar day, not by raw timestamp, so two readings
    on the same day collide. Incoming entries replace remote ones for the
    same day, and within ``incoming`` the last entry for a day wins. The
    result is sorted by day and filtered by ``retention_cutoff``.
    """
    by_day: dict[str, E] = {}
    for entry in remote:
        by_day[day_key(entry.date, tz)] = entry
    for entry in incoming:
        by_day[day_key(entry.date, tz)] = entry

    # Keys are YYYY-MM-DD so string order is date order
    merged = [by_day[key] for key in sorted(by_day)]
    return apply_retention(merged, retention_cutoff, tz)


def reconcile_snapshots(
    remote: Snapshot,
    incoming: Snapshot,
    retention_cutoff: Optional[date] = None,
    tz: Optional[tzinfo] = None,
) -> Snapshot:
    """Reconcile both entry arrays; the result carries the remote version."""
    return Snapshot(
        activity_entries=reconcile(
            remote.activity_entries, incoming.activity_entries, retention_cutoff, tz
        ),
        weight_entries=reconcile(
            remote.weight_entries, incoming.weight_entries, retention_cutoff, tz
        ),
        version=remote.version,
    )


def filter_snapshot(snapshot: Snapshot, retention_cutoff: Optional[date], tz: Optional[tzinfo] = None) -> Snapshot:
    """Apply the retention filter to both arrays of a snapshot."""
    return Snapshot(
        activity_entries=apply_retention(snapshot.activity_entries, retention_cutoff, tz),
        weight_entries=apply_retention(snapshot.weight_entries, retention_cutoff, tz),
        version=snapshot.version,
    )
