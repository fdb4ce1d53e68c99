"""
Exceptions raised by the model filter.

All errors derive from :class:`FilterError` so callers can catch the whole
family at a request boundary:

- ConfigurationError: engine or rule set used in an invalid configuration
- ParseError: a date-like value for a ``from``/``to`` rule cannot be parsed
- MissingCollaboratorError: the query accumulator lacks a required method
"""

from __future__ import annotations

from typing import Any


class FilterError(Exception):
    """Base class for all model filter errors."""


class ConfigurationError(FilterError):
    """Raised when the engine is used before it is configured correctly."""


class ParseError(FilterError, ValueError):
    """Raised when a submitted date value cannot be parsed.

    Attributes:
        field: Form field the value was submitted under
        value: The offending value
    """

    def __init__(self, value: Any, field: str | None = None):
        self.value = value
        self.field = field
        where = f" for field '{field}'" if field else ""
        super().__init__(f"Cannot parse date value {value!r}{where}")


class MissingCollaboratorError(FilterError, TypeError):
    """Raised when a query accumulator does not support a rule's operation."""

    def __init__(self, query: Any, method: str):
        self.query = query
        self.method = method
        super().__init__(
            f"{type(query).__name__} does not implement '{method}' required by this rule"
        )
