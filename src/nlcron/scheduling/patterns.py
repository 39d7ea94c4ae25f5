"""Schedule patterns recognized in natural-language phrases.

A SchedulePattern is a closed family of frozen dataclasses, one per phrase
shape. Every variant validates its fields on construction and raises the
matching typed error, so any instance that exists can be emitted as cron.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import IntEnum
from typing import Any, ClassVar, Iterable

from nlcron.scheduling.cron import FIELD_CONSTRAINTS, CronFieldType, CronParser
from nlcron.scheduling.errors import InvalidDateList, InvalidInterval, InvalidTime, NoMatch


# =============================================================================
# Weekdays
# =============================================================================


class Weekday(IntEnum):
    """Day of week using the cron numbering (Sunday=0)."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def plural(self) -> str:
        return f"{self.label}s"

    @classmethod
    def from_token(cls, token: str) -> "Weekday | None":
        """Resolve a day name or abbreviation, singular or plural."""
        token = token.strip().lower()
        if token in WEEKDAY_ALIASES:
            return WEEKDAY_ALIASES[token]
        if token.endswith("s") and token[:-1] in WEEKDAY_ALIASES:
            return WEEKDAY_ALIASES[token[:-1]]
        return None


WEEKDAY_ALIASES: dict[str, Weekday] = {
    "sun": Weekday.SUNDAY,
    "sunday": Weekday.SUNDAY,
    "mon": Weekday.MONDAY,
    "monday": Weekday.MONDAY,
    "tue": Weekday.TUESDAY,
    "tues": Weekday.TUESDAY,
    "tuesday": Weekday.TUESDAY,
    "wed": Weekday.WEDNESDAY,
    "weds": Weekday.WEDNESDAY,
    "wednesday": Weekday.WEDNESDAY,
    "thu": Weekday.THURSDAY,
    "thur": Weekday.THURSDAY,
    "thurs": Weekday.THURSDAY,
    "thursday": Weekday.THURSDAY,
    "fri": Weekday.FRIDAY,
    "friday": Weekday.FRIDAY,
    "sat": Weekday.SATURDAY,
    "saturday": Weekday.SATURDAY,
}


# =============================================================================
# Validation Helpers
# =============================================================================


def _check_range(
    value: int,
    field_type: CronFieldType,
    error: type[InvalidTime] | type[InvalidDateList],
) -> None:
    constraints = FIELD_CONSTRAINTS[field_type]
    if not constraints.min_value <= value <= constraints.max_value:
        raise error(
            f"{constraints.label.capitalize()} must be between "
            f"{constraints.min_value} and {constraints.max_value}",
            str(value),
        )


def _check_clock(hour: int, minute: int) -> None:
    _check_range(hour, CronFieldType.HOUR, InvalidTime)
    _check_range(minute, CronFieldType.MINUTE, InvalidTime)


def interval_reason(field_type: CronFieldType) -> str:
    constraints = FIELD_CONSTRAINTS[field_type]
    return f"Every N {constraints.label}s needs N between 1 and {constraints.max_value}"


def _check_interval(n: int, field_type: CronFieldType) -> None:
    # The step has to be smaller than the field's modulus to mean anything.
    if not 1 <= n <= FIELD_CONSTRAINTS[field_type].max_value:
        raise InvalidInterval(interval_reason(field_type), str(n))


def normalize_days_of_month(days: Iterable[int]) -> tuple[int, ...]:
    """Deduplicate, range check and sort day-of-month values."""
    values = set()
    for day in days:
        _check_range(day, CronFieldType.DAY_OF_MONTH, InvalidDateList)
        values.add(day)
    if not values:
        raise InvalidDateList("Day-of-month list is empty")
    return tuple(sorted(values))


# =============================================================================
# Schedule Patterns
# =============================================================================


@dataclass(frozen=True)
class SchedulePattern:
    """Base class of all recognized schedule shapes."""

    kind: ClassVar[str] = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data: dict[str, Any] = {"kind": self.kind}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Weekday):
                value = value.name.lower()
            elif isinstance(value, tuple):
                value = [v.name.lower() if isinstance(v, Weekday) else v for v in value]
            data[f.name] = value
        return data


@dataclass(frozen=True)
class Daily(SchedulePattern):
    """Every day at a fixed time."""

    kind: ClassVar[str] = "daily"

    hour: int
    minute: int

    def __post_init__(self) -> None:
        _check_clock(self.hour, self.minute)


@dataclass(frozen=True)
class Weekdays(SchedulePattern):
    """Monday through Friday at a fixed time."""

    kind: ClassVar[str] = "weekdays"

    hour: int
    minute: int

    def __post_init__(self) -> None:
        _check_clock(self.hour, self.minute)


@dataclass(frozen=True)
class Weekends(SchedulePattern):
    """Saturday and Sunday at a fixed time."""

    kind: ClassVar[str] = "weekends"

    hour: int
    minute: int

    def __post_init__(self) -> None:
        _check_clock(self.hour, self.minute)


@dataclass(frozen=True)
class Weekly(SchedulePattern):
    """One day of the week at a fixed time."""

    kind: ClassVar[str] = "weekly"

    weekday: Weekday
    hour: int
    minute: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "weekday", Weekday(self.weekday))
        _check_clock(self.hour, self.minute)


@dataclass(frozen=True)
class DaysOfWeek(SchedulePattern):
    """Several named days of the week at a fixed time."""

    kind: ClassVar[str] = "days_of_week"

    weekdays: tuple[Weekday, ...]
    hour: int
    minute: int

    def __post_init__(self) -> None:
        days = tuple(sorted({Weekday(day) for day in self.weekdays}))
        if not days:
            raise NoMatch("No weekday given")
        object.__setattr__(self, "weekdays", days)
        _check_clock(self.hour, self.minute)


@dataclass(frozen=True)
class Monthly(SchedulePattern):
    """Given days of every month at a fixed time.

    ``default_day`` is set when the phrase named no day and day 1 was used.
    """

    kind: ClassVar[str] = "monthly"

    days_of_month: tuple[int, ...]
    hour: int
    minute: int
    default_day: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "days_of_month", normalize_days_of_month(self.days_of_month))
        _check_clock(self.hour, self.minute)


@dataclass(frozen=True)
class OnDates(SchedulePattern):
    """Given days of the month at a fixed time, phrased without "monthly"."""

    kind: ClassVar[str] = "on_dates"

    days_of_month: tuple[int, ...]
    hour: int
    minute: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "days_of_month", normalize_days_of_month(self.days_of_month))
        _check_clock(self.hour, self.minute)


@dataclass(frozen=True)
class EveryNMinutes(SchedulePattern):
    kind: ClassVar[str] = "every_n_minutes"

    n: int

    def __post_init__(self) -> None:
        _check_interval(self.n, CronFieldType.MINUTE)


@dataclass(frozen=True)
class EveryNHours(SchedulePattern):
    kind: ClassVar[str] = "every_n_hours"

    n: int
    minute: int = 0

    def __post_init__(self) -> None:
        _check_interval(self.n, CronFieldType.HOUR)
        _check_range(self.minute, CronFieldType.MINUTE, InvalidTime)


@dataclass(frozen=True)
class HourlyAt(SchedulePattern):
    kind: ClassVar[str] = "hourly_at"

    minute: int

    def __post_init__(self) -> None:
        _check_range(self.minute, CronFieldType.MINUTE, InvalidTime)


@dataclass(frozen=True)
class RawCron(SchedulePattern):
    """A cron expression typed directly by the user."""

    kind: ClassVar[str] = "raw_cron"

    expression: str

    def __post_init__(self) -> None:
        expression = CronParser(self.expression).parse()
        object.__setattr__(self, "expression", str(expression))


SCHEDULE_PATTERN_TYPES: tuple[type[SchedulePattern], ...] = (
    Daily,
    Weekdays,
    Weekends,
    Weekly,
    DaysOfWeek,
    Monthly,
    OnDates,
    EveryNMinutes,
    EveryNHours,
    HourlyAt,
    RawCron,
)
