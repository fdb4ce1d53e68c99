"""
Utility helpers for the model filter.

Logging:
- setup_logging(): Configure structured logging with structlog
- get_logger(name): Get a logger instance

Dates:
- parse_date(value): Strictly parse a submitted date
- start_of_day(value) / end_of_day(value): Day bounds for range rules
"""

from model_filter.utils.logging import bind_context, clear_context, get_logger, setup_logging
from model_filter.utils.time import end_of_day, parse_date, start_of_day

__all__ = [
    "bind_context",
    "clear_context",
    "end_of_day",
    "get_logger",
    "parse_date",
    "setup_logging",
    "start_of_day",
]
