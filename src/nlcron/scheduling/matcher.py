"""Natural-language schedule matcher.

The matcher classifies a phrase against an ordered tuple of shapes. Each
shape pairs a recognizer (an anchored regular expression over the keyword
skeleton) with an extractor that turns the captured slots into a validated
SchedulePattern. Shapes are tried in precedence order, most specific first;
the first recognizer that accepts the phrase decides the outcome, and any
error raised by its extractor is reported as is.

Precedence:
    1. raw cron                       30 3 * * 1
    2. monthly on <dates> at HH:MM    monthly on 1st and 15th at 04:00
    3. on <dates> at HH:MM            on 10,20 at 22:30
    4. every N minutes                every 15 minutes
    5. every N hours                  every 2 hours
    6. hourly at :MM                  hourly at :10
    7. weekly on <weekday> at HH:MM   weekly on fri at 02:45
    8. weekdays at HH:MM              weekdays at 07:15
    9. weekends at HH:MM              weekends at 19:05
    10. <days> at HH:MM               monday wednesday at 03:00
    11. daily at HH:MM                daily at 05:30

Usage:
    >>> from nlcron.scheduling.matcher import match
    >>> match("weekly on sun at 03:30")
    Weekly(weekday=<Weekday.SUNDAY: 0>, hour=3, minute=30)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable

from nlcron.scheduling.cron import CronFieldType, CronParser
from nlcron.scheduling.errors import (
    InvalidDateList,
    InvalidInterval,
    InvalidTime,
    NoMatch,
    ParseError,
)
from nlcron.scheduling.patterns import (
    WEEKDAY_ALIASES,
    Daily,
    DaysOfWeek,
    EveryNHours,
    EveryNMinutes,
    HourlyAt,
    Monthly,
    OnDates,
    RawCron,
    SchedulePattern,
    Weekday,
    Weekdays,
    Weekends,
    Weekly,
    interval_reason,
    normalize_days_of_month,
)

logger = logging.getLogger(__name__)

Slots = dict[str, str]


# =============================================================================
# Token Grammar
# =============================================================================

ORDINAL = r"(?:st|nd|rd|th)"
DATE_TOKEN = rf"[0-9]+{ORDINAL}?"
LIST_SEP = r"(?:\s*,\s*(?:and\s+)?|\s*&\s*|\s+and\s+|\s+)"
DATE_LIST = rf"{DATE_TOKEN}(?:{LIST_SEP}{DATE_TOKEN})*"

# Longest names first so "thursday" is not read as "thu" + garbage.
DAY_TOKEN = "(?:{})s?".format(
    "|".join(sorted(WEEKDAY_ALIASES, key=len, reverse=True))
)
DAY_LIST = rf"{DAY_TOKEN}(?:{LIST_SEP}{DAY_TOKEN})*"

_DATE_TOKEN_RE = re.compile(rf"(?P<day>[0-9]+)(?P<suffix>{ORDINAL})?", re.IGNORECASE)
_DAY_TOKEN_RE = re.compile(DAY_TOKEN, re.IGNORECASE)

_CLOCK_24H = re.compile(r"^(?P<hour>[0-9]{1,2}):(?P<minute>[0-9]{2})$")
_CLOCK_12H = re.compile(
    r"^(?P<hour>[0-9]{1,2})(?::(?P<minute>[0-9]{2}))?\s*(?P<meridian>am|pm)$"
)

NAMED_TIMES: dict[str, tuple[int, int]] = {
    "midnight": (0, 0),
    "noon": (12, 0),
}

# Longer digit runs are out of range for every cron field.
MAX_DIGITS = 4


# =============================================================================
# Token Parsers
# =============================================================================


def normalize_phrase(phrase: str) -> str:
    """Trim, collapse internal whitespace and fold typographic dashes."""
    folded = phrase.replace("\u2013", "-").replace("\u2014", "-")
    return " ".join(folded.split())


def parse_clock(text: str) -> tuple[int, int]:
    """Parse a time of day into (hour, minute).

    Accepts ``HH:MM`` on the 24-hour clock, ``H[:MM]am``/``pm``, ``noon``
    and ``midnight``.

    Raises:
        InvalidTime: If the token is malformed or out of range.
    """
    token = text.strip().lower()
    if token in NAMED_TIMES:
        return NAMED_TIMES[token]

    m = _CLOCK_24H.match(token)
    if m:
        hour, minute = int(m.group("hour")), int(m.group("minute"))
        if hour > 23:
            raise InvalidTime("Hour must be between 0 and 23", text)
        if minute > 59:
            raise InvalidTime("Minute must be between 0 and 59", text)
        return hour, minute

    m = _CLOCK_12H.match(token)
    if m:
        hour = int(m.group("hour"))
        minute = int(m.group("minute") or 0)
        if not 1 <= hour <= 12:
            raise InvalidTime("Hour must be between 1 and 12 with am/pm", text)
        if minute > 59:
            raise InvalidTime("Minute must be between 0 and 59", text)
        if m.group("meridian") == "am":
            hour = 0 if hour == 12 else hour
        elif hour != 12:
            hour += 12
        return hour, minute

    raise InvalidTime("Expected a time like HH:MM", text)


def parse_number(
    digits: str,
    error: type[ParseError],
    reason: str,
    fragment: str,
) -> int:
    """Convert a run of ASCII digits, rejecting runs too long for any field."""
    if len(digits) > MAX_DIGITS:
        raise error(reason, fragment)
    return int(digits)


def parse_minute_offset(text: str) -> int:
    """Parse the digits of a ``:MM`` minute offset."""
    minute = parse_number(text, InvalidTime, "Minute must be between 0 and 59", f":{text}")
    if minute > 59:
        raise InvalidTime("Minute must be between 0 and 59", f":{text}")
    return minute


def ordinal_suffix(n: int) -> str:
    """Return the English ordinal suffix for n (1 -> st, 12 -> th)."""
    if 10 <= n % 100 <= 20:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")


def parse_date_list(text: str) -> tuple[int, ...]:
    """Parse a day-of-month list such as ``1st and 15th`` or ``15,1``.

    Returns:
        Deduplicated ascending tuple of days.

    Raises:
        InvalidDateList: If a day is outside 1-31 or has the wrong suffix.
    """
    days = []
    for m in _DATE_TOKEN_RE.finditer(text):
        token = m.group(0)
        day = parse_number(
            m.group("day"), InvalidDateList, "Day of month must be between 1 and 31", token
        )
        if not 1 <= day <= 31:
            raise InvalidDateList("Day of month must be between 1 and 31", token)
        suffix = m.group("suffix")
        if suffix and suffix.lower() != ordinal_suffix(day):
            raise InvalidDateList(
                f"Ordinal suffix does not match the number (expected {day}{ordinal_suffix(day)})",
                token,
            )
        days.append(day)
    return normalize_days_of_month(days)


def parse_weekday_list(text: str) -> tuple[Weekday, ...]:
    """Parse weekday names into a deduplicated, cron-ordered tuple."""
    days = {Weekday.from_token(m.group(0)) for m in _DAY_TOKEN_RE.finditer(text)}
    days.discard(None)
    return tuple(sorted(days))


# =============================================================================
# Shapes
# =============================================================================


@dataclass(frozen=True)
class Shape:
    """A recognized phrasing with its recognizer and extractor.

    Attributes:
        name: Syntax summary shown in help text.
        example: Example phrase accepted by this shape.
        recognize: Returns captured slots, or None if the phrase has another shape.
        extract: Builds the validated pattern from the slots.
    """

    name: str
    example: str
    recognize: Callable[[str], Slots | None]
    extract: Callable[[Slots], SchedulePattern]


def _regex(pattern: str) -> Callable[[str], Slots | None]:
    compiled = re.compile(pattern, re.IGNORECASE)

    def recognize(text: str) -> Slots | None:
        m = compiled.fullmatch(text)
        if m is None:
            return None
        return {k: v for k, v in m.groupdict().items() if v is not None}

    return recognize


def _recognize_raw(text: str) -> Slots | None:
    if CronParser.looks_like_cron(text):
        return {"expression": text}
    return None


def _extract_raw(slots: Slots) -> SchedulePattern:
    return RawCron(slots["expression"])


def _extract_monthly(slots: Slots) -> SchedulePattern:
    hour, minute = parse_clock(slots["time"])
    if "dates" not in slots:
        return Monthly((1,), hour, minute, default_day=True)
    return Monthly(parse_date_list(slots["dates"]), hour, minute)


def _extract_on_dates(slots: Slots) -> SchedulePattern:
    days = parse_date_list(slots["dates"])
    hour, minute = parse_clock(slots["time"])
    return OnDates(days, hour, minute)


def _parse_interval(text: str, field_type: CronFieldType) -> int:
    return parse_number(text, InvalidInterval, interval_reason(field_type), text)


def _extract_every_minutes(slots: Slots) -> SchedulePattern:
    return EveryNMinutes(_parse_interval(slots.get("n", "1"), CronFieldType.MINUTE))


def _extract_every_hours(slots: Slots) -> SchedulePattern:
    minute = parse_minute_offset(slots["minute"]) if "minute" in slots else 0
    return EveryNHours(_parse_interval(slots["n"], CronFieldType.HOUR), minute)


def _extract_hourly(slots: Slots) -> SchedulePattern:
    minute = parse_minute_offset(slots["minute"]) if "minute" in slots else 0
    return HourlyAt(minute)


def _extract_weekly(slots: Slots) -> SchedulePattern:
    (weekday,) = parse_weekday_list(slots["day"])
    hour, minute = parse_clock(slots["time"])
    return Weekly(weekday, hour, minute)


def _extract_weekdays(slots: Slots) -> SchedulePattern:
    return Weekdays(*parse_clock(slots["time"]))


def _extract_weekends(slots: Slots) -> SchedulePattern:
    return Weekends(*parse_clock(slots["time"]))


def _extract_days(slots: Slots) -> SchedulePattern:
    days = parse_weekday_list(slots["days"])
    hour, minute = parse_clock(slots["time"])
    if len(days) == 1:
        return Weekly(days[0], hour, minute)
    return DaysOfWeek(days, hour, minute)


def _extract_daily(slots: Slots) -> SchedulePattern:
    return Daily(*parse_clock(slots["time"]))


SHAPES: tuple[Shape, ...] = (
    Shape(
        "raw cron",
        "30 3 * * 1",
        _recognize_raw,
        _extract_raw,
    ),
    Shape(
        "monthly on <dates> at HH:MM",
        "monthly on 1st and 15th at 04:00",
        _regex(rf"monthly(?:\s+on(?:\s+the)?\s+(?P<dates>{DATE_LIST}))?\s+at\s+(?P<time>.+)"),
        _extract_monthly,
    ),
    Shape(
        "on <dates> at HH:MM",
        "on 10,20 at 22:30",
        _regex(rf"on(?:\s+the)?\s+(?P<dates>{DATE_LIST})\s+at\s+(?P<time>.+)"),
        _extract_on_dates,
    ),
    Shape(
        "every N minutes",
        "every 15 minutes",
        _regex(r"every\s+(?:(?P<n>[0-9]+)\s*)?(?:minutes?|mins?)"),
        _extract_every_minutes,
    ),
    Shape(
        "every N hours",
        "every 2 hours",
        _regex(r"every\s+(?P<n>[0-9]+)\s*(?:hours?|hrs?)(?:\s+at\s+:(?P<minute>[0-9]+))?"),
        _extract_every_hours,
    ),
    Shape(
        "hourly at :MM",
        "hourly at :10",
        _regex(r"(?:hourly|every\s+hour)(?:\s+at\s+:(?P<minute>[0-9]+))?"),
        _extract_hourly,
    ),
    Shape(
        "weekly on <weekday> at HH:MM",
        "weekly on fri at 02:45",
        _regex(rf"weekly\s+on\s+(?P<day>{DAY_TOKEN})\s+at\s+(?P<time>.+)"),
        _extract_weekly,
    ),
    Shape(
        "weekdays at HH:MM",
        "weekdays at 07:15",
        _regex(r"(?:every\s+)?weekdays?(?:\s+at)?\s+(?P<time>.+)"),
        _extract_weekdays,
    ),
    Shape(
        "weekends at HH:MM",
        "weekends at 19:05",
        _regex(r"(?:every\s+)?weekends?(?:\s+at)?\s+(?P<time>.+)"),
        _extract_weekends,
    ),
    Shape(
        "<days> at HH:MM",
        "monday wednesday at 03:00",
        _regex(rf"(?:(?:weekly\s+)?on\s+|every\s+)?(?P<days>{DAY_LIST})\s+at\s+(?P<time>.+)"),
        _extract_days,
    ),
    Shape(
        "daily at HH:MM",
        "daily at 05:30",
        _regex(r"(?:daily|(?:every\s+)?day)(?:\s+at)?\s+(?P<time>.+)"),
        _extract_daily,
    ),
)


# =============================================================================
# Matcher
# =============================================================================


def find_shape(text: str) -> tuple[Shape, Slots] | None:
    """Return the first shape whose recognizer accepts already normalized text."""
    for shape in SHAPES:
        slots = shape.recognize(text)
        if slots is not None:
            return shape, slots
    return None


def match(phrase: str) -> SchedulePattern:
    """Classify a phrase and extract its validated schedule pattern.

    Args:
        phrase: Natural-language schedule or raw cron expression.

    Returns:
        The matched SchedulePattern.

    Raises:
        NoMatch: If no shape recognizes the phrase.
        InvalidTime, InvalidDateList, InvalidInterval, MalformedRawCron:
            If the recognized shape carries an unusable value.
    """
    text = normalize_phrase(phrase)
    if not text:
        raise NoMatch("The expression is empty", phrase=phrase)

    found = find_shape(text)
    if found is None:
        raise NoMatch("Unsupported phrasing", text, phrase)

    shape, slots = found
    logger.debug(f"Phrase {text!r} matched shape {shape.name!r}")
    try:
        return shape.extract(slots)
    except ParseError as e:
        e.phrase = phrase
        raise


def list_supported_patterns() -> tuple[tuple[str, str], ...]:
    """List (shape_name, example_phrase) pairs in precedence order."""
    return tuple((shape.name, shape.example) for shape in SHAPES)
