"""Common CLI infrastructure.

This package provides shared components for CLI commands:
    - output: Output formatting utilities
    - errors: CLI error handling
"""

from nlcron.cli_modules.common.output import (
    ColorTheme,
    ConsoleOutput,
    JsonOutput,
)
from nlcron.cli_modules.common.errors import (
    CLIError,
    CrontabError,
    ErrorCode,
    ScheduleError,
    UsageError,
    error_boundary,
    to_cli_error,
)

__all__ = [
    # Output
    "ColorTheme",
    "ConsoleOutput",
    "JsonOutput",
    # Errors
    "CLIError",
    "CrontabError",
    "ErrorCode",
    "ScheduleError",
    "UsageError",
    "error_boundary",
    "to_cli_error",
]
