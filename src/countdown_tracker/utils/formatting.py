"""Formatting and parsing utilities for durations and paces."""

from typing import Optional


def parse_duration_to_minutes(value: str) -> Optional[float]:
    """
    Parse "hh:mm:ss" (or "mm:ss") into minutes.

    Returns None for blank or unparseable input.
    """
    if not value or not value.strip():
        return None
    parts = value.strip().split(":")
    try:
        numbers = [int(part) for part in parts]
    except ValueError:
        return None
    if len(numbers) == 3:
        hours, minutes, seconds = numbers
        return hours * 60 + minutes + seconds / 60
    if len(numbers) == 2:
        minutes, seconds = numbers
        return minutes + seconds / 60
    return None


def parse_pace_to_minutes(value: str) -> Optional[float]:
    """Parse a "mm:ss" pace into minutes per km. Returns None if unparseable."""
    if not value or not value.strip():
        return None
    parts = value.strip().split(":")
    if len(parts) != 2:
        return None
    try:
        minutes, seconds = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    return minutes + seconds / 60


def format_duration(minutes: float) -> str:
    """Convert minutes to HH:MM:SS format."""
    if minutes is None or minutes != minutes or minutes < 0:
        return "N/A"
    total_seconds = round(minutes * 60)
    hours = total_seconds // 3600
    mins = (total_seconds % 3600) // 60
    secs = total_seconds % 60
    return f"{hours:02d}:{mins:02d}:{secs:02d}"


def format_pace(minutes_per_km: float) -> str:
    """Convert a pace in minutes per km to MM:SS format (e.g., '05:45')."""
    if minutes_per_km is None or minutes_per_km != minutes_per_km or minutes_per_km < 0:
        return "N/A"
    total_seconds = round(minutes_per_km * 60)
    return f"{total_seconds // 60:02d}:{total_seconds % 60:02d}"


def format_hours_minutes(minutes: float) -> str:
    """Format a total time in minutes as e.g. '3h 25m'."""
    return f"{int(minutes // 60)}h {int(minutes % 60)}m"
