"""Typed errors raised while translating a schedule phrase.

Every failure the translator can produce is a user-input error. Each one
carries its kind, a short reason and the offending fragment of the input so
that callers can render a plain message or a JSON object without parsing the
message text again.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


# =============================================================================
# Error Kinds
# =============================================================================


class ErrorKind(str, Enum):
    """Classification of translation failures."""

    NO_MATCH = "no_match"
    INVALID_TIME = "invalid_time"
    INVALID_DATE_LIST = "invalid_date_list"
    INVALID_INTERVAL = "invalid_interval"
    MALFORMED_RAW_CRON = "malformed_raw_cron"

    def __str__(self) -> str:
        return self.value


# =============================================================================
# Exception Classes
# =============================================================================


class ParseError(ValueError):
    """Base class for schedule translation errors.

    Attributes:
        kind: Error classification.
        reason: Human readable reason, without the fragment.
        fragment: Offending part of the input.
        phrase: The complete phrase being translated, when known.
    """

    kind: ErrorKind = ErrorKind.NO_MATCH

    def __init__(self, reason: str, fragment: str = "", phrase: str = "") -> None:
        self.reason = reason
        self.fragment = fragment
        self.phrase = phrase
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.fragment:
            return f"{self.reason}: `{self.fragment}`"
        return self.reason

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "kind": self.kind.value,
            "reason": self.reason,
            "fragment": self.fragment,
            "phrase": self.phrase,
            "message": str(self),
        }


class NoMatch(ParseError):
    """No supported shape recognizes the phrase."""

    kind = ErrorKind.NO_MATCH


class InvalidTime(ParseError):
    """A time of day or minute offset is malformed or out of range."""

    kind = ErrorKind.INVALID_TIME


class InvalidDateList(ParseError):
    """A day-of-month list contains an unusable entry."""

    kind = ErrorKind.INVALID_DATE_LIST


class InvalidInterval(ParseError):
    """A repeat interval is zero or exceeds its field's range."""

    kind = ErrorKind.INVALID_INTERVAL


class MalformedRawCron(ParseError):
    """A five-field expression violates the cron field grammar."""

    kind = ErrorKind.MALFORMED_RAW_CRON

