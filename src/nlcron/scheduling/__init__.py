"""Scheduling module for nlcron.

This package turns schedule phrases into five-field cron expressions.

Components:
    - matcher: classifies a phrase against ordered shapes and extracts a
      validated SchedulePattern
    - emitter: maps a SchedulePattern onto cron fields and a description
    - cron: CronExpression value, raw expression checker and builder
    - patterns: the SchedulePattern variants
    - errors: typed ParseError hierarchy

Syntax Reference:
    Field         Values          Accepted in raw cron
    ─────────────────────────────────────────────────
    Minute        0-59            * / , -
    Hour          0-23            * / , -
    Day of Month  1-31            * / , -
    Month         1-12 or JAN-DEC * / , -
    Day of Week   0-6 or SUN-SAT  * / , -

Usage:
    >>> from nlcron.scheduling import match, emit
    >>>
    >>> pattern = match("weekdays at 07:15")
    >>> cron, description = emit(pattern)
    >>> str(cron)
    '15 7 * * 1-5'
"""

from nlcron.scheduling.cron import (
    # Core
    CronExpression,
    CronFieldType,
    # Parser
    CronParser,
    # Builder
    CronBuilder,
    # Validation
    validate_expression,
    is_valid_expression,
)

from nlcron.scheduling.errors import (
    ErrorKind,
    ParseError,
    NoMatch,
    InvalidTime,
    InvalidDateList,
    InvalidInterval,
    MalformedRawCron,
)

from nlcron.scheduling.patterns import (
    SchedulePattern,
    Weekday,
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

from nlcron.scheduling.matcher import (
    SHAPES,
    Shape,
    match,
    list_supported_patterns,
)

from nlcron.scheduling.emitter import emit

__all__ = [
    # Cron
    "CronExpression",
    "CronFieldType",
    "CronParser",
    "CronBuilder",
    "validate_expression",
    "is_valid_expression",
    # Errors
    "ErrorKind",
    "ParseError",
    "NoMatch",
    "InvalidTime",
    "InvalidDateList",
    "InvalidInterval",
    "MalformedRawCron",
    # Patterns
    "SchedulePattern",
    "Weekday",
    "Daily",
    "Weekdays",
    "Weekends",
    "Weekly",
    "DaysOfWeek",
    "Monthly",
    "OnDates",
    "EveryNMinutes",
    "EveryNHours",
    "HourlyAt",
    "RawCron",
    # Matcher
    "SHAPES",
    "Shape",
    "match",
    "list_supported_patterns",
    # Emitter
    "emit",
]
