"""Output formatting utilities for CLI commands.

This module provides standardized output formatting for consistent
display across all CLI commands.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable

import typer
from rich.console import Console
from rich.table import Table


# =============================================================================
# Color Theme
# =============================================================================


@dataclass(frozen=True)
class ColorTheme:
    """Color theme for terminal output."""

    accent: str = "bright_cyan"
    success: str = "bright_green"
    warning: str = "bright_yellow"


DEFAULT_THEME = ColorTheme()


# =============================================================================
# Console Output
# =============================================================================


class ConsoleOutput:
    """Console output formatter with color support."""

    def __init__(
        self,
        theme: ColorTheme = DEFAULT_THEME,
        no_color: bool = False,
    ) -> None:
        """Initialize console output.

        Args:
            theme: Color theme to use
            no_color: Disable colored output
        """
        self.theme = theme
        self.no_color = no_color

    def paint(self, text: Any, color: str | None) -> str:
        """Return text styled with a color, or plain when color is off."""
        raw = str(text)
        if self.no_color or color is None:
            return raw
        return typer.style(raw, fg=color)

    def accent(self, text: Any) -> str:
        return self.paint(text, self.theme.accent)

    def success(self, text: Any) -> str:
        return self.paint(text, self.theme.success)

    def warning(self, text: Any) -> str:
        return self.paint(text, self.theme.warning)

    def write(self, content: str = "") -> None:
        """Write a line to stdout."""
        typer.echo(content)

    def header(self, title: str) -> None:
        """Write a section title."""
        self.write(self.accent(title))

    def key_value(self, key: str, value: Any, indent: int = 0) -> None:
        """Write a key-value pair.

        Args:
            key: Key name
            value: Value
            indent: Indentation level
        """
        prefix = "  " * indent
        self.write(f"{prefix}{key}: {value}")

    def pattern_table(self, patterns: Iterable[tuple[str, str]]) -> None:
        """Write the supported phrasing table."""
        example_style = None if self.no_color else self.theme.success
        table = Table(show_header=True)
        table.add_column("Syntax", no_wrap=True)
        table.add_column("Example", no_wrap=True, style=example_style)
        for syntax, example in patterns:
            table.add_row(syntax, f"e.g. {example}")

        console = Console(no_color=self.no_color, highlight=False)
        console.print(
            "Supported phrasing samples:",
            style=None if self.no_color else self.theme.accent,
            markup=False,
        )
        console.print(table)


# =============================================================================
# JSON Output
# =============================================================================


class JsonOutput:
    """JSON output formatter.

    Formats data as JSON for machine consumption.
    """

    def __init__(self, pretty: bool = True, indent: int = 2) -> None:
        self.pretty = pretty
        self.indent = indent if pretty else None

    def format(self, data: Any) -> str:
        """Format data as JSON."""
        return json.dumps(data, indent=self.indent, default=str)

    def write_data(self, data: Any) -> None:
        """Write data as JSON."""
        typer.echo(self.format(data))
