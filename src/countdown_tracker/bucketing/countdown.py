"""Countdown to a fixed instant."""

from datetime import datetime, timedelta, tzinfo
from typing import Optional

from countdown_tracker.models.calendar import Countdown, CountdownDay
from countdown_tracker.utils.dates import calendar_day, iter_days


def countdown_days(
    start: datetime, end: datetime, now: datetime, tz: Optional[tzinfo] = None
) -> list[CountdownDay]:
    """List every calendar day from start to end; a day has started once its midnight passed."""
    today = calendar_day(now, tz)
    return [
        CountdownDay(date=day, has_started=day <= today)
        for day in iter_days(calendar_day(start, tz), calendar_day(end, tz))
    ]


def countdown(
    start: datetime, end: datetime, now: datetime, tz: Optional[tzinfo] = None
) -> Countdown:
    """
    Time left until ``end`` and the elapsed share of the start-to-end window.

    ``start``, ``end`` and ``now`` must all be aware or all naive.
    """
    day_list = countdown_days(start, end, now, tz)
    remaining = end - now
    if remaining <= timedelta(0):
        return Countdown(days=0, hours=0, minutes=0, progress=100.0, finished=True, day_list=day_list)

    total = (end - start).total_seconds()
    elapsed = (now - start).total_seconds()
    progress = max(0.0, min(100.0, elapsed / total * 100)) if total > 0 else 0.0

    hours, rest = divmod(remaining.seconds, 3600)
    return Countdown(
        days=remaining.days,
        hours=hours,
        minutes=rest // 60,
        progress=progress,
        finished=False,
        day_list=day_list,
    )
