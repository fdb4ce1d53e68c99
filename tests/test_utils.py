"""
Tests for utility modules.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from datetime import date, datetime
from pathlib import Path

import pytest
import structlog

from model_filter.errors import ParseError
from model_filter.utils.logging import (
    bind_context,
    clear_context,
    get_logger,
    setup_logging,
)
from model_filter.utils.time import end_of_day, parse_date, start_of_day


class TestParseDate:
    """Tests for strict date parsing."""

    @pytest.mark.parametrize(
        "value",
        [
            "2024-01-05",
            "2024-01-05 13:45:00",
            "2024-01-05T13:45:00",
            "2024-01-05 13:45",
            "2024/01/05",
            "01/05/2024",
            "5 January 2024",
            "Jan 5, 2024",
            " 2024-01-05 ",
        ],
    )
    def test_accepted_formats(self, value):
        assert parse_date(value) == date(2024, 1, 5)

    def test_date_and_datetime_objects(self):
        assert parse_date(date(2024, 1, 5)) == date(2024, 1, 5)
        assert parse_date(datetime(2024, 1, 5, 18, 0)) == date(2024, 1, 5)

    @pytest.mark.parametrize("value", ["not a date", "2024-13-45", "yesterday", " ", 20240105, None])
    def test_rejected_values(self, value):
        with pytest.raises(ParseError):
            parse_date(value)

    def test_custom_formats(self):
        assert parse_date("05.01.2024", formats=["%d.%m.%Y"]) == date(2024, 1, 5)

        with pytest.raises(ParseError):
            parse_date("05.01.2024", formats=[])

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError, match="Cannot parse date value"):
            parse_date("garbage")


class TestDayBounds:
    """Tests for start_of_day and end_of_day."""

    def test_start_of_day(self):
        assert start_of_day("2024-01-05") == "2024-01-05 00:00:00"

    def test_end_of_day(self):
        assert end_of_day("2024-01-05") == "2024-01-05 23:59:59"

    def test_time_of_day_is_dropped(self):
        assert start_of_day("2024-01-05 18:30:00") == "2024-01-05 00:00:00"
        assert end_of_day("2024-01-05 01:00:00") == "2024-01-05 23:59:59"

    def test_output_format(self):
        assert end_of_day("2024-01-05", output_format="%Y%m%d%H%M%S") == "20240105235959"


class TestLogging:
    """Tests for logging helpers."""

    @pytest.mark.parametrize("fmt", ["console", "json"])
    def test_setup_logging(self, fmt):
        setup_logging(level="DEBUG", format=fmt, include_location=True)

        logger = get_logger("model_filter.test")
        logger.debug("test_event", key="tickets")

    def test_context_binding(self):
        bind_context(session_id="alice")
        try:
            get_logger(__name__).info("with_context")
        finally:
            clear_context()


FILTER_SCRIPT = """
from model_filter.engine import FilterEngine
from model_filter.query import SQLQuery
from model_filter.state import MemoryStore

engine = FilterEngine(MemoryStore(), "tickets")
engine.set_rules({"subject": ("like",), "created_to": ("to", "created_at")})
engine.set_form_data({"subject": "Print", "created_to": "2024-01-05"})
engine.filter(SQLQuery("tickets"))
"""


class TestLibraryLogging:
    """Tests for logging before the application configures it."""

    def test_filter_prints_nothing(self):
        """Test library events stay silent without setup_logging."""
        env = dict(os.environ, PYTHONPATH=str(Path(__file__).resolve().parents[1] / "src"))

        result = subprocess.run(
            [sys.executable, "-c", FILTER_SCRIPT],
            capture_output=True,
            text=True,
            env=env,
            check=True,
        )

        assert result.stdout == ""
        assert result.stderr == ""

    def test_events_go_to_standard_logging(self, caplog, capsys):
        structlog.reset_defaults()
        try:
            with caplog.at_level(logging.DEBUG, logger="model_filter.test"):
                get_logger("model_filter.test").debug("library_event", key="tickets")

            assert "library_event" in caplog.text
            assert capsys.readouterr().out == ""
        finally:
            structlog.reset_defaults()
