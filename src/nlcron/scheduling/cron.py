"""Five-field cron expressions.

This module defines the cron expression value produced by the translator,
a syntactic checker for raw expressions typed by the user, and a fluent
builder used by the emitter to assemble fields.

Field grammar (per field, comma separated list of):
    *           Any value
    n           Literal integer (or a JAN-DEC / SUN-SAT name where allowed)
    a-b         Range
    */s, a/s    Step from start or from a value
    a-b/s       Stepped range

Only the shape of each field is checked. Numbers are not range checked, and
vendor extensions (?, L, W, #, @aliases) are rejected.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, NamedTuple

from nlcron.scheduling.errors import MalformedRawCron


# =============================================================================
# Field Types
# =============================================================================


class CronFieldType(Enum):
    """Positions of the five cron fields."""

    MINUTE = auto()
    HOUR = auto()
    DAY_OF_MONTH = auto()
    MONTH = auto()
    DAY_OF_WEEK = auto()


FIELD_ORDER: tuple[CronFieldType, ...] = (
    CronFieldType.MINUTE,
    CronFieldType.HOUR,
    CronFieldType.DAY_OF_MONTH,
    CronFieldType.MONTH,
    CronFieldType.DAY_OF_WEEK,
)


@dataclass(frozen=True)
class FieldConstraints:
    """Constraints for a cron field."""

    min_value: int
    max_value: int
    names: dict[str, int] = field(default_factory=dict)
    label: str = ""


FIELD_CONSTRAINTS: dict[CronFieldType, FieldConstraints] = {
    CronFieldType.MINUTE: FieldConstraints(0, 59, label="minute"),
    CronFieldType.HOUR: FieldConstraints(0, 23, label="hour"),
    CronFieldType.DAY_OF_MONTH: FieldConstraints(1, 31, label="day-of-month"),
    CronFieldType.MONTH: FieldConstraints(
        1, 12,
        names={
            "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4,
            "MAY": 5, "JUN": 6, "JUL": 7, "AUG": 8,
            "SEP": 9, "OCT": 10, "NOV": 11, "DEC": 12,
        },
        label="month",
    ),
    CronFieldType.DAY_OF_WEEK: FieldConstraints(
        0, 6,
        names={
            "SUN": 0, "MON": 1, "TUE": 2, "WED": 3,
            "THU": 4, "FRI": 5, "SAT": 6,
        },
        label="day-of-week",
    ),
}

# Characters that can appear in a raw cron field. Anything else means the
# input is prose, not an attempt at cron.
RAW_FIELD_CHARS = re.compile(r"^[0-9A-Za-z*/,\-?]+$")
NUMERIC_FIELD_CHARS = re.compile(r"^[0-9*/,\-?]+$")


# =============================================================================
# Cron Expression
# =============================================================================


class CronExpression(NamedTuple):
    """Ordered five-field cron expression.

    Example:
        >>> expr = CronExpression("30", "3", "*", "*", "1")
        >>> str(expr)
        '30 3 * * 1'
    """

    minute: str
    hour: str
    day_of_month: str
    month: str
    day_of_week: str

    @classmethod
    def parse(cls, expression: str) -> "CronExpression":
        """Check a raw cron expression and split it into fields.

        Args:
            expression: Cron expression string.

        Returns:
            CronExpression with the fields exactly as written.

        Raises:
            MalformedRawCron: If the expression is not well formed.
        """
        return CronParser(expression).parse()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return self._asdict()

    def __str__(self) -> str:
        return " ".join(self)


# =============================================================================
# Cron Parser
# =============================================================================


class CronParser:
    """Syntactic checker for standard 5-field cron expressions."""

    def __init__(self, expression: str) -> None:
        self._original = " ".join(expression.split())

    @staticmethod
    def looks_like_cron(expression: str) -> bool:
        """Check whether text has the shape of a raw cron expression.

        The minute and hour fields never carry names, so any word there
        means the text is a phrase rather than a cron attempt.
        """
        parts = expression.split()
        if len(parts) != 5:
            return False
        if not all(RAW_FIELD_CHARS.match(part) for part in parts):
            return False
        return all(NUMERIC_FIELD_CHARS.match(part) for part in parts[:2])

    def parse(self) -> CronExpression:
        """Check every field and return the split expression.

        Raises:
            MalformedRawCron: If a field violates the grammar.
        """
        parts = self._original.split()
        if len(parts) != 5:
            raise MalformedRawCron(
                f"Invalid number of fields: {len(parts)}. Expected 5 fields",
                self._original,
                self._original,
            )

        for part, field_type in zip(parts, FIELD_ORDER):
            self._check_field(part, field_type)

        return CronExpression(*parts)

    def _fail(self, message: str, fragment: str) -> MalformedRawCron:
        return MalformedRawCron(message, fragment, self._original)

    def _check_field(self, part: str, field_type: CronFieldType) -> None:
        """Check a single cron field."""
        constraints = FIELD_CONSTRAINTS[field_type]

        if "?" in part:
            raise self._fail(f"? is not supported in the {constraints.label} field", part)

        for segment in part.split(","):
            if not segment:
                raise self._fail(f"Empty list element in the {constraints.label} field", part)

            if "/" in segment:
                self._check_step(segment, constraints)
            elif segment == "*":
                continue
            elif "-" in segment:
                self._check_range(segment, constraints)
            else:
                self._check_value(segment, constraints)

    def _check_step(self, segment: str, constraints: FieldConstraints) -> None:
        """Check step expression (*/n, a/n or a-b/n)."""
        parts = segment.split("/")
        if len(parts) != 2:
            raise self._fail(f"Invalid step in the {constraints.label} field", segment)

        base, step = parts
        if not base:
            raise self._fail(f"Missing step base in the {constraints.label} field", segment)
        if not (step.isascii() and step.isdigit()):
            raise self._fail(f"Step must be a positive integer in the {constraints.label} field", segment)
        if not step.lstrip("0"):
            raise self._fail(f"Step must be positive in the {constraints.label} field", segment)

        if base == "*":
            return
        if "-" in base:
            self._check_range(base, constraints)
        else:
            self._check_value(base, constraints)

    def _check_range(self, segment: str, constraints: FieldConstraints) -> None:
        """Check range expression (a-b)."""
        parts = segment.split("-")
        if len(parts) != 2:
            raise self._fail(f"Invalid range in the {constraints.label} field", segment)

        for value in parts:
            if not value:
                raise self._fail(f"Incomplete range in the {constraints.label} field", segment)
            self._check_value(value, constraints)

    def _check_value(self, value: str, constraints: FieldConstraints) -> None:
        """Check a single value (number or name)."""
        if value.isascii() and value.isdigit():
            return
        if value.upper() in constraints.names:
            return
        raise self._fail(f"Invalid value in the {constraints.label} field", value)


# =============================================================================
# Cron Builder
# =============================================================================


class CronBuilder:
    """Fluent builder for cron expressions.

    Example:
        >>> expr = (CronBuilder()
        ...     .daily_at(9, 0)
        ...     .on_weekdays()
        ...     .build())
    """

    def __init__(self) -> None:
        """Initialize builder with defaults (every minute)."""
        self._minute: str = "*"
        self._hour: str = "*"
        self._day_of_month: str = "*"
        self._month: str = "*"
        self._day_of_week: str = "*"

    def at_minute(self, *minutes: int) -> "CronBuilder":
        """Set specific minutes."""
        self._minute = ",".join(str(m) for m in minutes)
        return self

    def every_n_minutes(self, n: int) -> "CronBuilder":
        """Run every n minutes."""
        self._minute = f"*/{n}"
        return self

    def every_n_hours(self, n: int) -> "CronBuilder":
        """Run every n hours."""
        self._hour = f"*/{n}"
        return self

    def on_day(self, *days: int) -> "CronBuilder":
        """Set specific days of month."""
        self._day_of_month = ",".join(str(d) for d in days)
        return self

    def on_weekday(self, *weekdays: int) -> "CronBuilder":
        """Set specific weekdays (0=SUN, 6=SAT)."""
        self._day_of_week = ",".join(str(int(w)) for w in weekdays)
        return self

    def on_weekdays(self) -> "CronBuilder":
        """Run Monday through Friday."""
        self._day_of_week = "1-5"
        return self

    def on_weekends(self) -> "CronBuilder":
        """Run Saturday and Sunday."""
        self._day_of_week = "6,0"
        return self

    def daily_at(self, hour: int, minute: int = 0) -> "CronBuilder":
        """Run daily at specific time."""
        self._minute = str(minute)
        self._hour = str(hour)
        return self

    def hourly_at(self, minute: int) -> "CronBuilder":
        """Run hourly at specific minute."""
        self._minute = str(minute)
        self._hour = "*"
        return self

    def build(self) -> CronExpression:
        """Build the cron expression."""
        return CronExpression(
            self._minute,
            self._hour,
            self._day_of_month,
            self._month,
            self._day_of_week,
        )


# =============================================================================
# Validation Functions
# =============================================================================


def validate_expression(expression: str) -> list[str]:
    """Validate a cron expression.

    Args:
        expression: Cron expression to validate.

    Returns:
        List of validation errors (empty if valid).
    """
    errors = []

    try:
        CronExpression.parse(expression)
    except MalformedRawCron as e:
        errors.append(str(e))

    return errors


def is_valid_expression(expression: str) -> bool:
    """Check if a cron expression is well formed.

    Args:
        expression: Cron expression to check.

    Returns:
        True if valid.
    """
    try:
        CronExpression.parse(expression)
        return True
    except MalformedRawCron:
        return False
