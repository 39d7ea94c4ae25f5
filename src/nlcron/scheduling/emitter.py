"""Cron emitter.

Maps a validated SchedulePattern onto the five cron fields and a canonical
description. The description is written from the pattern itself, not read
back from the fields, so each shape keeps its own wording.

Field mapping:
    Variant           minute   hour   dom         month  dow
    ──────────────────────────────────────────────────────────
    Daily             minute   hour   *           *      *
    Weekdays          minute   hour   *           *      1-5
    Weekends          minute   hour   *           *      6,0
    Weekly            minute   hour   *           *      weekday
    DaysOfWeek        minute   hour   *           *      weekday list
    Monthly/OnDates   minute   hour   day list    *      *
    EveryNMinutes     */n      *      *           *      *
    EveryNHours       minute   */n    *           *      *
    HourlyAt          minute   *      *           *      *
    RawCron           as written
"""

from __future__ import annotations

from typing import Any, Callable

from nlcron.scheduling.cron import CronBuilder, CronExpression
from nlcron.scheduling.patterns import (
    SCHEDULE_PATTERN_TYPES,
    Daily,
    DaysOfWeek,
    EveryNHours,
    EveryNMinutes,
    HourlyAt,
    Monthly,
    OnDates,
    RawCron,
    SchedulePattern,
    Weekdays,
    Weekends,
    Weekly,
)

Emission = tuple[CronExpression, str]


def format_clock(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"


def _format_days(days: tuple[int, ...]) -> str:
    return ", ".join(str(day) for day in days)


# =============================================================================
# Per-variant Emitters
# =============================================================================


def _emit_daily(p: Daily) -> Emission:
    cron = CronBuilder().daily_at(p.hour, p.minute).build()
    return cron, f"Daily at {format_clock(p.hour, p.minute)}"


def _emit_weekdays(p: Weekdays) -> Emission:
    cron = CronBuilder().daily_at(p.hour, p.minute).on_weekdays().build()
    return cron, f"Weekdays at {format_clock(p.hour, p.minute)}"


def _emit_weekends(p: Weekends) -> Emission:
    cron = CronBuilder().daily_at(p.hour, p.minute).on_weekends().build()
    return cron, f"Weekends at {format_clock(p.hour, p.minute)}"


def _emit_weekly(p: Weekly) -> Emission:
    cron = CronBuilder().daily_at(p.hour, p.minute).on_weekday(p.weekday).build()
    return cron, f"Weekly on {p.weekday.label} at {format_clock(p.hour, p.minute)}"


def _emit_days_of_week(p: DaysOfWeek) -> Emission:
    cron = CronBuilder().daily_at(p.hour, p.minute).on_weekday(*p.weekdays).build()
    labels = ", ".join(day.plural for day in p.weekdays)
    return cron, f"{labels} at {format_clock(p.hour, p.minute)}"


def _emit_monthly(p: Monthly) -> Emission:
    cron = CronBuilder().daily_at(p.hour, p.minute).on_day(*p.days_of_month).build()
    clock = format_clock(p.hour, p.minute)
    if p.default_day:
        return cron, f"Monthly on day 1 at {clock} (default day)"
    return cron, f"Monthly on {_format_days(p.days_of_month)} at {clock}"


def _emit_on_dates(p: OnDates) -> Emission:
    cron = CronBuilder().daily_at(p.hour, p.minute).on_day(*p.days_of_month).build()
    return cron, f"On {_format_days(p.days_of_month)} at {format_clock(p.hour, p.minute)}"


def _emit_every_n_minutes(p: EveryNMinutes) -> Emission:
    cron = CronBuilder().every_n_minutes(p.n).build()
    return cron, f"Every {p.n} minute(s)"


def _emit_every_n_hours(p: EveryNHours) -> Emission:
    cron = CronBuilder().at_minute(p.minute).every_n_hours(p.n).build()
    if p.minute == 0:
        return cron, f"Every {p.n} hour(s)"
    return cron, f"Every {p.n} hour(s) at :{p.minute:02d}"


def _emit_hourly_at(p: HourlyAt) -> Emission:
    cron = CronBuilder().hourly_at(p.minute).build()
    if p.minute == 0:
        return cron, "Every hour on the hour"
    return cron, f"Every hour at :{p.minute:02d}"


def _emit_raw_cron(p: RawCron) -> Emission:
    return CronExpression(*p.expression.split()), f"custom schedule: {p.expression}"


_EMITTERS: dict[type[SchedulePattern], Callable[[Any], Emission]] = {
    Daily: _emit_daily,
    Weekdays: _emit_weekdays,
    Weekends: _emit_weekends,
    Weekly: _emit_weekly,
    DaysOfWeek: _emit_days_of_week,
    Monthly: _emit_monthly,
    OnDates: _emit_on_dates,
    EveryNMinutes: _emit_every_n_minutes,
    EveryNHours: _emit_every_n_hours,
    HourlyAt: _emit_hourly_at,
    RawCron: _emit_raw_cron,
}

_missing = [t.__name__ for t in SCHEDULE_PATTERN_TYPES if t not in _EMITTERS]
if _missing:
    raise TypeError(f"No cron emitter registered for: {', '.join(_missing)}")


# =============================================================================
# Public API
# =============================================================================


def emit(pattern: SchedulePattern) -> Emission:
    """Convert a schedule pattern into a cron expression and description.

    Args:
        pattern: A validated SchedulePattern.

    Returns:
        Tuple of (CronExpression, description).

    Raises:
        TypeError: If pattern is not a SchedulePattern variant.
    """
    emitter = _EMITTERS.get(type(pattern))
    if emitter is None:
        raise TypeError(f"Unsupported schedule pattern: {pattern!r}")
    return emitter(pattern)
