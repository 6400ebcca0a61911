"""Weekly training targets from a hand-authored plan."""

from datetime import date, datetime, time, tzinfo
from typing import Optional, Sequence

from countdown_tracker.models.entries import PLAN_SOURCE, TargetEntry
from countdown_tracker.models.training_plan import (
    PlannedWeek,
    ScheduleRule,
    TrainingPlan,
    Weekday,
)

MON, TUE, WED, THU, FRI, SAT = (
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
    Weekday.SATURDAY,
)


def _week(monday: date, runs: dict[Weekday, float]) -> PlannedWeek:
    return PlannedWeek(week_start_date=monday, runs=runs)


# Jan: Tue/Thu/Sat. Feb: Mon/Wed/Fri/Sat. Mar: Mon/Tue/Thu/Fri/Sat.
PLAN_2026_Q1 = TrainingPlan(
    source=PLAN_SOURCE,
    plan_start_date=date(2026, 1, 5),
    plan_end_date=date(2026, 3, 31),
    weeks=[
        _week(date(2026, 1, 5), {TUE: 6, THU: 6, SAT: 10}),
        _week(date(2026, 1, 12), {TUE: 6, THU: 7, SAT: 11}),
        _week(date(2026, 1, 19), {TUE: 7, THU: 7, SAT: 12}),
        _week(date(2026, 1, 26), {TUE: 7, THU: 8, SAT: 14}),
        _week(date(2026, 2, 2), {MON: 7, WED: 7, FRI: 6, SAT: 14}),
        _week(date(2026, 2, 9), {MON: 7, WED: 8, FRI: 7, SAT: 15}),
        _week(date(2026, 2, 16), {MON: 8, WED: 8, FRI: 7, SAT: 16}),
        _week(date(2026, 2, 23), {MON: 8, WED: 8, FRI: 8, SAT: 18}),
        _week(date(2026, 3, 2), {MON: 7, TUE: 8, THU: 7, FRI: 6, SAT: 18}),
        _week(date(2026, 3, 9), {MON: 8, TUE: 8, THU: 8, FRI: 6, SAT: 19}),
        _week(date(2026, 3, 16), {MON: 8, TUE: 9, THU: 8, FRI: 7, SAT: 20}),
        _week(date(2026, 3, 23), {MON: 8, TUE: 9, THU: 8, FRI: 8, SAT: 21}),
        # Only Monday and Tuesday fall inside the plan window
        _week(date(2026, 3, 30), {MON: 8, TUE: 9}),
    ],
)


class TrainingSchedule:
    """An ordered list of schedule rules; the first match wins."""

    def __init__(self, rules: Sequence[ScheduleRule], source: str = PLAN_SOURCE):
        self.rules = list(rules)
        self.source = source

    @classmethod
    def from_plan(cls, plan: TrainingPlan) -> "TrainingSchedule":
        return cls(plan.rules(), source=plan.source)

    def target_for(self, day: date) -> Optional[float]:
        """Get the planned distance in km for a day, or None if nothing is planned."""
        for rule in self.rules:
            if rule.matches(day):
                return rule.distance_km
        return None

    def targets(self, tz: Optional[tzinfo] = None) -> list[TargetEntry]:
        """
        Expand the rules into one TargetEntry per planned day.

        Dates are midnight in ``tz``, or naive midnight (read as the
        canonical timezone, like user entries) when ``tz`` is None. A day
        claimed by an earlier rule is not emitted again, matching target_for.
        """
        seen: set[date] = set()
        targets: list[TargetEntry] = []
        for rule in self.rules:
            for offset in range((rule.end - rule.start).days + 1):
                day = date.fromordinal(rule.start.toordinal() + offset)
                if day.weekday() != rule.weekday or day in seen:
                    continue
                seen.add(day)
                targets.append(
                    TargetEntry(
                        date=datetime.combine(day, time.min, tzinfo=tz),
                        distance=rule.distance_km,
                        time=0,
                        pace=0,
                        source=self.source,
                    )
                )
        targets.sort(key=lambda t: t.date)
        return targets


DEFAULT_SCHEDULE = TrainingSchedule.from_plan(PLAN_2026_Q1)


def weekly_target_for(day: date, schedule: Optional[TrainingSchedule] = None) -> Optional[float]:
    """Planned distance for ``day`` under the given (default: 2026 Q1) schedule."""
    return (schedule or DEFAULT_SCHEDULE).target_for(day)
