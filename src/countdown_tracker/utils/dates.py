"""Date utility functions for the countdown tracker."""

import re
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Iterator, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DateLike = Union[date, datetime, str]

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")


def resolve_timezone(name: Optional[str]) -> tzinfo:
    """
    Resolve a timezone setting into a tzinfo.

    Accepts "UTC" (also "Z"/"GMT"), "local" for the machine timezone, an IANA
    name such as "Asia/Riyadh", or a fixed offset such as "+03:00".

    Raises:
        ValueError: If the identifier is not a known zone or offset
    """
    value = (name or "UTC").strip()
    lowered = value.lower()
    if lowered in {"utc", "z", "gmt"}:
        return timezone.utc
    if lowered == "local":
        return datetime.now().astimezone().tzinfo or timezone.utc

    match = _OFFSET_RE.match(value)
    if match:
        sign, hours, minutes = match.groups()
        if int(hours) > 23 or int(minutes) > 59:
            raise ValueError(f"Invalid timezone offset: {value!r}")
        offset = timedelta(hours=int(hours), minutes=int(minutes))
        return timezone(offset if sign == "+" else -offset)

    try:
        return ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError) as err:
        raise ValueError(f"Invalid timezone identifier: {value!r}") from err


def parse_date(date_str: str) -> date:
    """
    Parse a date string in ISO format (YYYY-MM-DD).

    Args:
        date_str: Date string in ISO format

    Returns:
        Date object
    """
    try:
        return date.fromisoformat(date_str)
    except ValueError as err:
        raise ValueError(f"Invalid date format: {date_str}. Expected format: YYYY-MM-DD") from err


def parse_timestamp(value: DateLike) -> datetime:
    """
    Parse an ISO-8601 timestamp (or a date) into a datetime.

    Date-only values become midnight. A trailing "Z" is read as UTC.

    Raises:
        ValueError: If the string is not ISO-8601
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except (AttributeError, ValueError) as err:
        raise ValueError(f"Invalid timestamp: {value!r}. Expected ISO-8601") from err


def calendar_day(value: DateLike, tz: Optional[tzinfo] = None) -> date:
    """
    Truncate a date-like value to its calendar day.

    Aware datetimes are converted to ``tz`` first when one is given; naive
    datetimes are taken to already be in the canonical timezone.
    """
    if isinstance(value, str):
        value = parse_timestamp(value)
    if isinstance(value, datetime):
        if tz is not None and value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    return value


def day_key(value: DateLike, tz: Optional[tzinfo] = None) -> str:
    """Get the YYYY-MM-DD key used to bucket entries by calendar day."""
    return calendar_day(value, tz).isoformat()


def is_before_day(value: DateLike, reference: DateLike, tz: Optional[tzinfo] = None) -> bool:
    """True if the calendar day of ``value`` is strictly before that of ``reference``."""
    return calendar_day(value, tz) < calendar_day(reference, tz)


def in_month(value: DateLike, year: int, month: int, tz: Optional[tzinfo] = None) -> bool:
    """Check whether a date-like value falls in the given month."""
    day = calendar_day(value, tz)
    return day.year == year and day.month == month


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Get the first and last day of a month."""
    first = date(year, month, 1)
    next_first = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return first, next_first - timedelta(days=1)


def month_grid_bounds(year: int, month: int) -> tuple[date, date]:
    """
    Get the full-week span that displays a month.

    Starts on the Sunday on or before the 1st and ends on the Saturday on or
    after the last day of the month.
    """
    first, last = month_bounds(year, month)
    # date.weekday(): Monday=0 .. Sunday=6
    start = first - timedelta(days=(first.weekday() + 1) % 7)
    end = last + timedelta(days=(5 - last.weekday()) % 7)
    return start, end


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every day from start to end, inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def today_in(tz: Optional[tzinfo] = None) -> date:
    """Get the current calendar day in the given timezone."""
    return datetime.now(tz or timezone.utc).date()
