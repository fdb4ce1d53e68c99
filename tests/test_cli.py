"""
Tests for the command-line interface.
"""

from __future__ import annotations

import json
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from model_filter import __version__
from model_filter.cli import main, parse_form_fields
from model_filter.errors import FilterError

RULES_TOML = """
[rules]
id = ["primary"]
status = ["in", "status"]
created_from = ["from", "created_at"]
created_to = ["to", "created_at"]
subject = ["like"]
"""


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def rules_file(tmp_path: Path) -> Path:
    path = tmp_path / "rules.toml"
    path.write_text(RULES_TOML)
    return path


@pytest.fixture
def cli(runner: CliRunner, tmp_path: Path, monkeypatch):
    """Invoke the CLI against a session database in a temp directory."""
    monkeypatch.chdir(tmp_path)
    db = tmp_path / "sessions.db"

    def invoke(*args: str, session: str = "alice"):
        return runner.invoke(main, ["--db", str(db), "--session", session, *args])

    return invoke


class TestParseFormFields:
    """Tests for parse_form_fields."""

    def test_single_values(self):
        assert parse_form_fields(("a=1", "b=x=y")) == {"a": "1", "b": "x=y"}

    def test_repeated_names_become_lists(self):
        assert parse_form_fields(("s=open", "s=closed", "s=pending")) == {
            "s": ["open", "closed", "pending"]
        }

    def test_empty_value_kept(self):
        assert parse_form_fields(("a=",)) == {"a": ""}

    @pytest.mark.parametrize("item", ["novalue", "=x"])
    def test_invalid(self, item):
        with pytest.raises(click.BadParameter):
            parse_form_fields((item,))


class TestCommands:
    """Tests for CLI commands."""

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_set_and_show(self, cli):
        result = cli("set", "tickets", "-f", "status=open", "-f", "status=pending", "-f", "subject=Print")
        assert result.exit_code == 0, result.output
        assert "Saved 2 field(s)" in result.output

        result = cli("show", "tickets", "status")
        assert result.exit_code == 0
        assert json.loads(result.output) == ["open", "pending"]

        result = cli("show", "tickets")
        assert result.exit_code == 0
        assert "subject" in result.output

    def test_show_missing_field(self, cli):
        result = cli("show", "tickets", "status")

        assert result.exit_code == 0
        assert result.output.strip() == "null"

    def test_show_empty(self, cli):
        result = cli("show", "tickets")

        assert "No form data" in result.output

    def test_render(self, cli, rules_file):
        cli("set", "tickets", "-f", "status=open", "-f", "status=closed", "-f", "created_from=2024-01-05")

        result = cli("render", "tickets", "--rules", str(rules_file))

        assert result.exit_code == 0, result.output
        lines = result.output.strip().splitlines()
        assert lines[0] == "SELECT * FROM tickets WHERE status IN (?, ?) AND created_at >= ?"
        assert json.loads(lines[1].removeprefix("params: ")) == ["open", "closed", "2024-01-05 00:00:00"]

    def test_render_primary_and_pagination(self, cli, rules_file):
        cli("set", "tickets", "-f", "id=42", "-f", "subject=Print")

        result = cli("render", "tickets", "-r", str(rules_file), "-t", "support_tickets", "--page", "2", "--per-page", "10")

        assert result.exit_code == 0, result.output
        assert result.output.splitlines()[0] == "SELECT * FROM support_tickets WHERE id = ? LIMIT 10 OFFSET 10"

    def test_render_bad_date(self, cli, rules_file):
        cli("set", "tickets", "-f", "created_to=someday")

        result = cli("render", "tickets", "--rules", str(rules_file))

        assert result.exit_code == 1
        assert "Cannot parse date value" in result.output

    def test_render_strict_rejects_unknown_kind(self, cli, tmp_path):
        path = tmp_path / "fuzzy.toml"
        path.write_text('[rules]\nq = ["fuzzy"]\n')

        result = cli("render", "tickets", "--rules", str(path), "--strict")

        assert result.exit_code == 1
        assert "Unknown rule kind" in result.output

    def test_sessions_are_isolated(self, cli):
        cli("set", "tickets", "-f", "subject=Print", session="alice")

        result = cli("show", "tickets", "subject", session="bob")

        assert result.output.strip() == "null"

    def test_clear(self, cli):
        cli("set", "tickets", "-f", "subject=Print")
        cli("set", "users", "-f", "name=alice")

        result = cli("clear", "tickets")

        assert result.exit_code == 0
        assert cli("show", "tickets", "subject").output.strip() == "null"
        assert cli("show", "users", "name").output.strip() == '"alice"'

    @pytest.mark.parametrize("command", ["set", "show", "clear"])
    def test_empty_key_is_an_error(self, cli, command):
        result = cli(command, "")

        assert result.exit_code == 1
        assert "Filter key must be a non-empty string" in result.output
        assert not isinstance(result.exception, FilterError)


class TestLoggingOptions:
    """Tests for logging configuration in the CLI."""

    @pytest.fixture
    def logging_calls(self, monkeypatch) -> list[dict]:
        calls: list[dict] = []
        monkeypatch.setattr(
            "model_filter.cli.setup_logging", lambda **kwargs: calls.append(kwargs)
        )
        return calls

    def test_logging_settings_are_forwarded(self, cli, tmp_path, logging_calls):
        config = tmp_path / "cli.toml"
        config.write_text(
            '[logging]\nlevel = "INFO"\nformat = "json"\n'
            "include_timestamp = false\ninclude_location = true\n"
        )

        result = cli("--config", str(config), "show", "tickets")

        assert result.exit_code == 0, result.output
        assert logging_calls == [
            {
                "level": "INFO",
                "format": "json",
                "include_timestamp": False,
                "include_location": True,
            }
        ]

    def test_verbose_overrides_level(self, cli, tmp_path, logging_calls):
        config = tmp_path / "cli.toml"
        config.write_text('[logging]\nlevel = "ERROR"\n')

        result = cli("--config", str(config), "--verbose", "show", "tickets")

        assert result.exit_code == 0, result.output
        assert logging_calls[0]["level"] == "DEBUG"
        assert logging_calls[0]["include_timestamp"] is True
        assert logging_calls[0]["include_location"] is False
