"""
Date normalization for range rules.

``from`` and ``to`` rules compare a column against the start or the end of
the submitted day:

    >>> start_of_day("2024-01-05 13:45")
    '2024-01-05 00:00:00'
    >>> end_of_day("2024-01-05")
    '2024-01-05 23:59:59'

Parsing is strict. A value that matches none of the accepted formats raises
:class:`~model_filter.errors.ParseError` instead of silently becoming "now".
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, time
from typing import Any

from model_filter.errors import ParseError

# Formats tried after ISO 8601
DEFAULT_DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%d-%m-%Y",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
)

DEFAULT_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

START_OF_DAY = time(0, 0, 0)
END_OF_DAY = time(23, 59, 59)


def parse_date(value: Any, formats: Sequence[str] = DEFAULT_DATE_FORMATS) -> date:
    """Parse a submitted value into a calendar date.

    Args:
        value: date, datetime or string
        formats: strptime formats tried after ISO 8601

    Returns:
        The date part of the value

    Raises:
        ParseError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ParseError(value)

    text = value.strip()
    if not text:
        raise ParseError(value)

    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass

    for fmt in formats:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    raise ParseError(value)


def start_of_day(
    value: Any,
    formats: Sequence[str] = DEFAULT_DATE_FORMATS,
    output_format: str = DEFAULT_DATETIME_FORMAT,
) -> str:
    """Format the first second of the value's day."""
    day = parse_date(value, formats)
    return datetime.combine(day, START_OF_DAY).strftime(output_format)


def end_of_day(
    value: Any,
    formats: Sequence[str] = DEFAULT_DATE_FORMATS,
    output_format: str = DEFAULT_DATETIME_FORMAT,
) -> str:
    """Format the last second of the value's day."""
    day = parse_date(value, formats)
    return datetime.combine(day, END_OF_DAY).strftime(output_format)
