"""Main API functions for nlcron."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from nlcron.scheduling import matcher
from nlcron.scheduling.cron import CronExpression
from nlcron.scheduling.emitter import emit
from nlcron.scheduling.errors import ParseError
from nlcron.scheduling.patterns import SchedulePattern


@dataclass(frozen=True)
class Translation:
    """Result of translating a schedule phrase.

    Attributes:
        pattern: The matched schedule pattern.
        cron: The five cron fields.
        description: Human-readable description of the schedule.
    """

    pattern: SchedulePattern
    cron: CronExpression
    description: str

    @property
    def expression(self) -> str:
        """The cron expression as a single line."""
        return str(self.cron)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "cron": self.expression,
            "fields": self.cron.to_dict(),
            "description": self.description,
            "pattern": self.pattern.to_dict(),
        }


def translate(phrase: str) -> Translation:
    """Translate a schedule phrase or raw cron string into cron.

    Args:
        phrase: Natural-language schedule (case and spacing are ignored)
                or a raw five-field cron expression.

    Returns:
        Translation holding the pattern, cron fields and description.

    Raises:
        ParseError: One of NoMatch, InvalidTime, InvalidDateList,
                    InvalidInterval or MalformedRawCron.

    Example:
        >>> import nlcron
        >>> result = nlcron.translate("weekdays at 07:15")
        >>> result.expression
        '15 7 * * 1-5'
        >>> result.description
        'Weekdays at 07:15'

        >>> # Raw cron passes through unchanged
        >>> nlcron.translate("30 3 * * 1").description
        'custom schedule: 30 3 * * 1'
    """
    pattern = matcher.match(phrase)
    cron, description = emit(pattern)
    return Translation(pattern=pattern, cron=cron, description=description)


def list_supported_patterns() -> tuple[tuple[str, str], ...]:
    """List supported phrasings as (shape_name, example_phrase) pairs.

    The pairs are returned in the order shapes are tried.
    """
    return matcher.list_supported_patterns()


def validate_phrase(phrase: str) -> list[str]:
    """Validate a schedule phrase.

    Returns:
        List of error messages (empty if the phrase translates).
    """
    try:
        translate(phrase)
    except ParseError as e:
        return [str(e)]
    return []


def is_valid_phrase(phrase: str) -> bool:
    """Check if a schedule phrase translates."""
    return not validate_phrase(phrase)
