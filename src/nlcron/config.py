"""Runtime configuration for the nlcron command line.

Settings come from environment variables; command-line flags override them.

Environment:
    NLCRON_NO_COLOR / NO_COLOR   Disable colored output when set
    NLCRON_LOG_LEVEL             Logging level (default WARNING)
    CRONTAB                      Cron file used by --write
    USER / USERNAME              User name for cron file discovery
    HOME / USERPROFILE           Home directory for the ~/.crontab fallback

Usage:
    >>> from nlcron.config import NlcronConfig
    >>> config = NlcronConfig.from_env()
    >>> config.log_level
    'WARNING'
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping


_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


class ConfigError(Exception):
    """Invalid configuration value."""

    pass


def _first(environ: Mapping[str, str], *names: str) -> str | None:
    for name in names:
        value = environ.get(name)
        if value:
            return value
    return None


def _is_truthy(value: str | None) -> bool:
    return value is not None and value.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class NlcronConfig:
    """Command-line settings.

    Attributes:
        no_color: Disable colored output.
        log_level: Name of the logging level.
        crontab: Explicit cron file, if configured.
        user: User name used to locate the system cron file.
        home: Home directory used for the fallback cron file.
    """

    no_color: bool = False
    log_level: str = "WARNING"
    crontab: Path | None = None
    user: str = "user"
    home: Path = Path(".")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "NlcronConfig":
        """Build configuration from environment variables.

        Args:
            environ: Mapping to read (defaults to os.environ).

        Raises:
            ConfigError: If NLCRON_LOG_LEVEL is not a logging level name.
        """
        env = os.environ if environ is None else environ

        # NO_COLOR is honored whenever it is present, whatever its value.
        no_color = _is_truthy(env.get("NLCRON_NO_COLOR")) or "NO_COLOR" in env

        log_level = env.get("NLCRON_LOG_LEVEL", "WARNING").strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigError(f"Unknown log level in NLCRON_LOG_LEVEL: {log_level}")

        crontab = _first(env, "CRONTAB")
        home = _first(env, "HOME", "USERPROFILE")

        return cls(
            no_color=no_color,
            log_level=log_level,
            crontab=Path(crontab) if crontab else None,
            user=_first(env, "USER", "USERNAME") or "user",
            home=Path(home) if home else Path("."),
        )


def configure_logging(level: str | int) -> None:
    """Configure root logging for command-line runs."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
