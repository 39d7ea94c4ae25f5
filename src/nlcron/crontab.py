"""Cron file entries and writing.

Renders a translated schedule plus command into a crontab block and appends
it to the user's cron file.

Block layout:
    # optional comment
    KEY=value            (one line per environment variable)
    <cron> <command>
"""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from nlcron.config import NlcronConfig

logger = logging.getLogger(__name__)


class CrontabWriteError(Exception):
    """Raised when the cron file cannot be written."""

    def __init__(self, message: str, path: Path) -> None:
        self.path = path
        super().__init__(message)


@dataclass(frozen=True)
class EnvVar:
    """Environment assignment placed above a cron entry."""

    key: str
    value: str

    @classmethod
    def parse(cls, raw: str) -> "EnvVar":
        """Parse ``KEY=value``.

        Raises:
            ValueError: If there is no ``=`` or the key is empty.
        """
        key, sep, value = raw.partition("=")
        if not sep:
            raise ValueError("Expected key=value")
        if not key.strip():
            raise ValueError("Environment key cannot be empty")
        return cls(key.strip(), value.strip())

    def to_dict(self) -> dict[str, str]:
        return {"key": self.key, "value": self.value}

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


@dataclass(frozen=True)
class CronEntry:
    """A schedule, the command it runs and optional decorations.

    Attributes:
        cron: Five-field cron expression line.
        description: Human-readable schedule description.
        command: Shell command, already quoted.
        comment: Comment line placed above the entry.
        env: Environment assignments placed above the entry.
    """

    cron: str
    description: str
    command: str
    comment: str | None = None
    env: tuple[EnvVar, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "cron": self.cron,
            "description": self.description,
            "command": self.command,
            "comment": self.comment,
            "env": [e.to_dict() for e in self.env],
        }


def quote_command(parts: Iterable[str]) -> str:
    """Shell-quote each command word and join them with spaces."""
    return " ".join(shlex.quote(part) for part in parts)


def render_entry(entry: CronEntry) -> str:
    """Render the crontab block for an entry."""
    lines = []
    if entry.comment:
        lines.append(f"# {entry.comment}")
    lines.extend(str(env) for env in entry.env)
    lines.append(f"{entry.cron} {entry.command}")
    return "\n".join(lines)


def detect_cron_file(config: NlcronConfig) -> Path:
    """Locate the cron file to write to.

    Order: the CRONTAB setting, then the first system spool location that
    exists (or whose directory exists), then ``<home>/.crontab``.
    """
    if config.crontab is not None:
        return config.crontab

    candidates = [
        Path("/var/spool/cron/crontabs") / config.user,
        Path("/var/spool/cron") / config.user,
        Path("/etc/cron.d") / config.user,
    ]
    for path in candidates:
        if path.exists() or path.parent.exists():
            return path

    return config.home / ".crontab"


def _ends_with_newline(path: Path) -> bool:
    with path.open("rb") as f:
        f.seek(-1, 2)
        return f.read(1) == b"\n"


def append_entry(path: Path, block: str) -> None:
    """Append a rendered block to a cron file.

    Creates missing parent directories and keeps the existing last line
    intact when the file does not end with a newline.

    Raises:
        CrontabWriteError: If the file cannot be read or written.
    """
    try:
        if str(path.parent) not in ("", "."):
            path.parent.mkdir(parents=True, exist_ok=True)

        payload = ""
        if path.exists() and path.stat().st_size > 0 and not _ends_with_newline(path):
            payload = "\n"
        payload += block + "\n"

        with path.open("a", encoding="utf-8") as f:
            f.write(payload)
    except OSError as e:
        raise CrontabWriteError(f"Failed writing to {path}: {e}", path) from e

    logger.info(f"Appended cron entry to {path}")
