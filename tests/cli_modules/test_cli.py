"""Tests for the nlcron command line."""

import json

import pytest
from typer.testing import CliRunner

from nlcron.cli import app


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep cron file discovery and color settings inside the test."""
    for name in ("NLCRON_NO_COLOR", "NO_COLOR", "NLCRON_LOG_LEVEL", "CRONTAB"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CRONTAB", str(tmp_path / "auto-crontab"))


# =============================================================================
# Preview Tests
# =============================================================================


class TestPreview:
    """Tests for the default preview output."""

    def test_preview(self, runner):
        """Test a phrase is previewed without writing."""
        result = runner.invoke(app, ["daily at 05:30", "backup.sh"])

        assert result.exit_code == 0
        assert "Parsed Input" in result.output
        assert "30 5 * * *" in result.output
        assert "Daily at 05:30" in result.output
        assert "Preview Output" in result.output
        assert "30 5 * * * backup.sh" in result.output

    def test_no_ansi_when_not_a_tty(self, runner):
        """Test output is plain when stdout is not a terminal."""
        result = runner.invoke(app, ["daily at 05:30", "backup.sh"])
        assert "\x1b[" not in result.output

    def test_command_words_are_quoted(self, runner):
        """Test command words with spaces are shell quoted."""
        result = runner.invoke(app, ["hourly at :10", "echo", "hello world"])

        assert result.exit_code == 0
        assert "10 * * * * echo 'hello world'" in result.output

    def test_option_words_after_command_belong_to_command(self, runner):
        """Test option-like words after the first command word are command words."""
        result = runner.invoke(app, ["daily at 05:30", "rsync", "--delete", "-v"])

        assert result.exit_code == 0
        assert "30 5 * * * rsync --delete -v" in result.output

    def test_options_between_expression_and_command(self, runner):
        """Test options placed after the expression are still read as options."""
        result = runner.invoke(app, ["daily at 05:30", "-c", "nightly", "--no-color", "backup.sh"])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        block = lines[lines.index("Preview Output") + 1:]
        assert block == ["# nightly", "30 5 * * * backup.sh"]

    def test_double_dash_starts_command(self, runner):
        """Test an explicit -- passes option-like words to the command."""
        result = runner.invoke(app, ["daily at 05:30", "--", "--write"])

        assert result.exit_code == 0
        assert "30 5 * * * --write" in result.output

    def test_comment_and_env(self, runner):
        """Test comment and env lines appear above the entry."""
        result = runner.invoke(app, [
            "-c", "nightly backup",
            "--env", "MAILTO=ops@example.com",
            "weekdays at 07:15", "backup.sh",
        ])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        block = lines[lines.index("Preview Output") + 1:]
        assert block == [
            "# nightly backup",
            "MAILTO=ops@example.com",
            "15 7 * * 1-5 backup.sh",
        ]

    def test_raw_cron(self, runner):
        """Test raw cron passes through."""
        result = runner.invoke(app, ["30 3 * * 1", "run.sh"])

        assert result.exit_code == 0
        assert "custom schedule: 30 3 * * 1" in result.output


# =============================================================================
# List Patterns Tests
# =============================================================================


class TestListPatterns:
    """Tests for --list-patterns."""

    def test_list_patterns(self, runner):
        """Test every shape and example is listed."""
        result = runner.invoke(app, ["--list-patterns"])

        assert result.exit_code == 0
        assert "Supported phrasing samples:" in result.output
        assert "monthly on <dates> at HH:MM" in result.output
        assert "e.g. monthly on 1st and 15th at 04:00" in result.output
        assert "e.g. daily at 05:30" in result.output

    def test_list_patterns_ignores_missing_arguments(self, runner):
        """Test no expression or command is needed."""
        result = runner.invoke(app, ["--list-patterns", "--no-color"])
        assert result.exit_code == 0


# =============================================================================
# JSON Output Tests
# =============================================================================


class TestJsonOutput:
    """Tests for --json."""

    def test_json(self, runner):
        """Test the JSON report."""
        result = runner.invoke(app, ["--json", "every 15 minutes", "poll.sh"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["cron"] == "*/15 * * * *"
        assert data["description"] == "Every 15 minute(s)"
        assert data["schedule"]["minute"] == "*/15"
        assert data["pattern"] == {"kind": "every_n_minutes", "n": 15}
        assert data["entry"]["command"] == "poll.sh"
        assert data["file"] is None
        assert data["wrote_file"] is False
        assert data["dry_run"] is False

    def test_json_error(self, runner):
        """Test errors are reported as JSON."""
        result = runner.invoke(app, ["--json", "every 60 minutes", "poll.sh"])

        assert result.exit_code == 20
        data = json.loads(result.stdout)
        assert data["error"]["kind"] == "invalid_interval"
        assert data["error"]["fragment"] == "60"
        assert data["error"]["phrase"] == "every 60 minutes"


# =============================================================================
# Write Tests
# =============================================================================


class TestWrite:
    """Tests for --write, --file and --dry-run."""

    def test_write_file(self, runner, tmp_path):
        """Test the entry is appended to the given file."""
        target = tmp_path / "crontab"
        result = runner.invoke(app, [
            "--write", "--file", str(target),
            "weekly on sun at 03:30", "cleanup.sh",
        ])

        assert result.exit_code == 0
        assert target.read_text() == "30 3 * * 0 cleanup.sh\n"
        assert "written" in result.output

    def test_write_detected_file(self, runner, tmp_path):
        """Test --write without --file uses the detected cron file."""
        result = runner.invoke(app, ["--write", "daily at 05:30", "backup.sh"])

        assert result.exit_code == 0
        assert (tmp_path / "auto-crontab").read_text() == "30 5 * * * backup.sh\n"

    def test_write_after_expression(self, runner, tmp_path):
        """Test --write placed after the expression writes the entry."""
        result = runner.invoke(app, ["daily at 05:30", "--write", "backup.sh"])

        assert result.exit_code == 0
        assert (tmp_path / "auto-crontab").read_text() == "30 5 * * * backup.sh\n"

    def test_file_after_expression(self, runner, tmp_path):
        """Test an option value after the expression is not taken as the command."""
        target = tmp_path / "crontab"
        result = runner.invoke(app, [
            "daily at 05:30", "--write", "-f", str(target), "rsync", "--delete",
        ])

        assert result.exit_code == 0
        assert target.read_text() == "30 5 * * * rsync --delete\n"

    def test_write_twice(self, runner, tmp_path):
        """Test repeated writes append."""
        target = tmp_path / "crontab"
        for phrase in ("daily at 05:30", "every 2 hours"):
            runner.invoke(app, ["--write", "-f", str(target), phrase, "job"])

        assert target.read_text() == "30 5 * * * job\n0 */2 * * * job\n"

    def test_dry_run(self, runner, tmp_path):
        """Test --dry-run does not touch the file."""
        target = tmp_path / "crontab"
        result = runner.invoke(app, [
            "--write", "--dry-run", "--file", str(target),
            "daily at 05:30", "backup.sh",
        ])

        assert result.exit_code == 0
        assert not target.exists()
        assert "dry run - not written" in result.output

    def test_json_write(self, runner, tmp_path):
        """Test the JSON report records the written file."""
        target = tmp_path / "crontab"
        result = runner.invoke(app, [
            "--json", "--write", "--file", str(target),
            "daily at 05:30", "backup.sh",
        ])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["file"] == str(target)
        assert data["wrote_file"] is True

    def test_file_requires_write(self, runner, tmp_path):
        """Test --file without --write is a usage error."""
        result = runner.invoke(app, [
            "--file", str(tmp_path / "crontab"),
            "daily at 05:30", "backup.sh",
        ])

        assert result.exit_code == 2
        assert "--file requires --write" in result.output

    def test_unwritable_file(self, runner, tmp_path):
        """Test write failures exit with the file error code."""
        target = tmp_path / "dir"
        target.mkdir()
        result = runner.invoke(app, ["--write", "-f", str(target), "daily at 05:30", "x"])

        assert result.exit_code == 12
        assert "Failed writing to" in result.output


# =============================================================================
# Error Tests
# =============================================================================


class TestErrors:
    """Tests for error reporting and exit codes."""

    def test_no_match(self, runner):
        """Test an unsupported phrase."""
        result = runner.invoke(app, ["do something whenever", "x"])

        assert result.exit_code == 20
        assert "Could not parse expression `do something whenever`" in result.output
        assert "--list-patterns" in result.output

    def test_invalid_time(self, runner):
        """Test an out-of-range time."""
        result = runner.invoke(app, ["daily at 24:00", "x"])

        assert result.exit_code == 20
        assert "Hour must be between 0 and 23: `24:00`" in result.output

    def test_missing_command(self, runner):
        """Test a phrase without a command."""
        result = runner.invoke(app, ["daily at 05:30"])

        assert result.exit_code == 2
        assert "COMMAND" in result.output

    def test_missing_expression(self, runner):
        """Test no arguments at all."""
        result = runner.invoke(app, [])
        assert result.exit_code == 2

    def test_invalid_env(self, runner):
        """Test a malformed --env value."""
        result = runner.invoke(app, ["--env", "NOEQUALS", "daily at 05:30", "x"])

        assert result.exit_code == 2
        assert "Invalid --env value `NOEQUALS`" in result.output

    def test_invalid_log_level(self, runner, monkeypatch):
        """Test a bad NLCRON_LOG_LEVEL."""
        monkeypatch.setenv("NLCRON_LOG_LEVEL", "loud")
        result = runner.invoke(app, ["daily at 05:30", "x"])

        assert result.exit_code == 31
