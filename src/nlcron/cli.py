"""Command-line interface for nlcron."""

import logging
import sys
from pathlib import Path
from typing import Annotated, Any, Optional

import click
import typer
from typer.core import TyperCommand

from nlcron.api import Translation, list_supported_patterns, translate
from nlcron.cli_modules.common.errors import ErrorCode, UsageError, error_boundary
from nlcron.cli_modules.common.output import ConsoleOutput, JsonOutput
from nlcron.config import NlcronConfig, configure_logging
from nlcron.crontab import (
    CronEntry,
    EnvVar,
    append_entry,
    detect_cron_file,
    quote_command,
    render_entry,
)
from nlcron.scheduling.errors import ParseError

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="nlcron",
    help="Translate natural language schedules into cron entries.",
    add_completion=False,
)


class CommandAfterExpression(TyperCommand):
    """Parses options only up to the first COMMAND word.

    Options may come before or after EXPRESSION. From the second positional
    argument on, every word belongs to COMMAND, including words that look
    like options (`rsync --delete -v`).
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        takes_value = {
            opt
            for param in self.get_params(ctx)
            if isinstance(param, click.Option) and not param.is_flag and not param.count
            for opt in param.opts
        }
        positionals = 0
        i = 0
        while i < len(args):
            arg = args[i]
            if arg == "--":
                break
            if arg.startswith("-") and arg != "-":
                i += 2 if arg in takes_value else 1
                continue
            positionals += 1
            if positionals == 2:
                args = [*args[:i], "--", *args[i:]]
                break
            i += 1
        return super().parse_args(ctx, args)


def _parse_env(values: list[str]) -> tuple[EnvVar, ...]:
    env = []
    for raw in values:
        try:
            env.append(EnvVar.parse(raw))
        except ValueError as e:
            raise UsageError(f"Invalid --env value `{raw}`: {e}")
    return tuple(env)


def _build_report(
    result: Translation,
    entry: CronEntry,
    target: Optional[Path],
    wrote_file: bool,
    dry_run: bool,
) -> dict[str, Any]:
    return {
        "cron": result.expression,
        "description": result.description,
        "schedule": result.cron.to_dict(),
        "pattern": result.pattern.to_dict(),
        "entry": entry.to_dict(),
        "file": str(target) if target else None,
        "wrote_file": wrote_file,
        "dry_run": dry_run,
    }


def _print_summary(
    out: ConsoleOutput,
    entry: CronEntry,
    block: str,
    target: Optional[Path],
    wrote_file: bool,
    dry_run: bool,
) -> None:
    out.header("Parsed Input")
    out.key_value("Schedule", f"{out.success(entry.cron)}  ({entry.description})")
    out.key_value("Command", entry.command)
    if entry.comment:
        out.key_value("Comment", entry.comment)
    if entry.env:
        out.key_value("Env", ", ".join(str(e) for e in entry.env))
    if target is not None:
        if dry_run:
            status = out.warning("dry run - not written")
        elif wrote_file:
            status = out.success("written")
        else:
            status = out.warning("skipped")
        out.key_value("File", f"{target} ({status})")
    out.write()
    out.header("Preview Output")
    out.write(block)


@app.command(cls=CommandAfterExpression)
@error_boundary
def main(
    expression: Annotated[
        Optional[str],
        typer.Argument(help="Natural language schedule or raw cron expression", show_default=False),
    ] = None,
    command: Annotated[
        Optional[list[str]],
        typer.Argument(help="Command to schedule", show_default=False),
    ] = None,
    comment: Annotated[
        Optional[str],
        typer.Option("--comment", "-c", help="Comment that will be placed above the cron entry"),
    ] = None,
    file: Annotated[
        Optional[Path],
        typer.Option("--file", "-f", help="Cron file to append the entry to (requires --write)"),
    ] = None,
    write: Annotated[
        bool,
        typer.Option("--write", help="Write the entry to the user's cron file (auto-detected unless --file is given)"),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Preview without writing"),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Emit JSON describing the entry"),
    ] = False,
    no_color: Annotated[
        bool,
        typer.Option("--no-color", help="Disable color"),
    ] = False,
    list_patterns: Annotated[
        bool,
        typer.Option("--list-patterns", help="Show phrasing patterns (and quit)"),
    ] = False,
    env: Annotated[
        Optional[list[str]],
        typer.Option("--env", metavar="KEY=VALUE", help="Environment variable set before the entry (repeatable)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Translate EXPRESSION into a cron schedule for COMMAND."""
    config = NlcronConfig.from_env()
    configure_logging("DEBUG" if verbose else config.log_level)

    use_color = not (no_color or config.no_color) and sys.stdout.isatty()
    out = ConsoleOutput(no_color=not use_color)

    if list_patterns:
        out.pattern_table(list_supported_patterns())
        return

    if not expression:
        raise UsageError("Missing argument 'EXPRESSION'.", hint="Try 'nlcron --help'.")
    if not command:
        raise UsageError("Missing argument 'COMMAND...'.", hint="Try 'nlcron --help'.")
    if file is not None and not write:
        raise UsageError("--file requires --write")

    env_vars = _parse_env(env or [])

    try:
        result = translate(expression)
    except ParseError as e:
        if not json_output:
            raise
        JsonOutput().write_data({"error": e.to_dict()})
        raise typer.Exit(ErrorCode.INVALID_SCHEDULE.value)

    logger.debug(f"Translated {expression!r} to {result.expression!r}")

    entry = CronEntry(
        cron=result.expression,
        description=result.description,
        command=quote_command(command),
        comment=comment,
        env=env_vars,
    )
    block = render_entry(entry)

    target: Optional[Path] = None
    wrote_file = False
    if write:
        target = file if file is not None else detect_cron_file(config)
        if not dry_run:
            append_entry(target, block)
            wrote_file = True

    if json_output:
        JsonOutput().write_data(_build_report(result, entry, target, wrote_file, dry_run))
        return

    _print_summary(out, entry, block, target, wrote_file, dry_run)


if __name__ == "__main__":
    app()
