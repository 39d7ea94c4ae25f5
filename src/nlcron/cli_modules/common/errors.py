"""CLI error handling utilities.

This module provides standardized error handling for CLI commands.
"""

from __future__ import annotations

import functools
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Callable, TypeVar

import typer

from nlcron.config import ConfigError
from nlcron.crontab import CrontabWriteError
from nlcron.scheduling.errors import ErrorKind, ParseError

logger = logging.getLogger(__name__)


# =============================================================================
# Error Codes
# =============================================================================


class ErrorCode(Enum):
    """Standard CLI error codes."""

    # General errors (1-9)
    GENERAL_ERROR = 1
    USAGE_ERROR = 2

    # File errors (10-19)
    FILE_NOT_WRITABLE = 12

    # Schedule errors (20-29)
    INVALID_SCHEDULE = 20

    # Configuration errors (30-39)
    CONFIG_INVALID = 31


# =============================================================================
# Exception Classes
# =============================================================================


class CLIError(Exception):
    """Base exception for CLI errors.

    Attributes:
        message: Error message
        code: Error code
        details: Additional error details
        hint: Helpful hint for resolution
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.GENERAL_ERROR,
        details: dict[str, Any] | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.hint = hint

    def __str__(self) -> str:
        parts = [self.message]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        return "\n".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "message": self.message,
            "code": self.code.value,
            "details": self.details,
            "hint": self.hint,
        }


class UsageError(CLIError):
    """Error when arguments are missing or inconsistent."""

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message=message, code=ErrorCode.USAGE_ERROR, hint=hint)


class ScheduleError(CLIError):
    """Error when the schedule phrase cannot be translated."""

    def __init__(self, error: ParseError) -> None:
        hint = None
        if error.kind is ErrorKind.NO_MATCH:
            hint = "Use flag --list-patterns to list all supported shapes."
        expression = error.phrase or error.fragment
        super().__init__(
            message=f"Could not parse expression `{expression}`: {error}",
            code=ErrorCode.INVALID_SCHEDULE,
            details=error.to_dict(),
            hint=hint,
        )
        self.error = error


class CrontabError(CLIError):
    """Error when the cron file cannot be written."""

    def __init__(self, message: str, path: Path | str) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.FILE_NOT_WRITABLE,
            details={"path": str(path)},
            hint="Check permissions, or choose another file with --file.",
        )
        self.path = path


def to_cli_error(error: Exception) -> CLIError:
    """Wrap a library error into the matching CLIError."""
    if isinstance(error, CLIError):
        return error
    if isinstance(error, ParseError):
        return ScheduleError(error)
    if isinstance(error, CrontabWriteError):
        return CrontabError(str(error), error.path)
    if isinstance(error, ConfigError):
        return CLIError(str(error), code=ErrorCode.CONFIG_INVALID)
    return CLIError(str(error))


# =============================================================================
# Decorator
# =============================================================================


F = TypeVar("F", bound=Callable[..., Any])


def echo_error(error: CLIError) -> None:
    """Print an error and its hint to stderr."""
    typer.echo(typer.style(f"Error: {error.message}", fg="red"), err=True)
    if error.hint:
        typer.echo(typer.style(f"Hint: {error.hint}", fg="yellow"), err=True)


def error_boundary(func: F) -> F:
    """Simple error boundary decorator.

    Catches all exceptions and converts them to CLI errors.

    Args:
        func: Function to wrap

    Returns:
        Wrapped function
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except (CLIError, ParseError, CrontabWriteError, ConfigError) as e:
            error = to_cli_error(e)
            echo_error(error)
            raise typer.Exit(error.code.value)
        except Exception as e:
            logger.exception("Unexpected error")
            typer.echo(typer.style(f"Error: {e}", fg="red"), err=True)
            raise typer.Exit(ErrorCode.GENERAL_ERROR.value)

    return wrapper  # type: ignore
