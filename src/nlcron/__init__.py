"""nlcron - Translate natural-language schedules into cron entries."""

from nlcron.api import (
    Translation,
    is_valid_phrase,
    list_supported_patterns,
    translate,
    validate_phrase,
)
from nlcron.scheduling import (
    CronExpression,
    ErrorKind,
    InvalidDateList,
    InvalidInterval,
    InvalidTime,
    MalformedRawCron,
    NoMatch,
    ParseError,
    SchedulePattern,
)

__version__ = "0.1.0"

__all__ = [
    # Core API
    "translate",
    "list_supported_patterns",
    "validate_phrase",
    "is_valid_phrase",
    "Translation",
    # Types
    "CronExpression",
    "SchedulePattern",
    # Errors
    "ErrorKind",
    "ParseError",
    "NoMatch",
    "InvalidTime",
    "InvalidDateList",
    "InvalidInterval",
    "MalformedRawCron",
]
