"""
Model Filter

Declarative, session-remembered filtering for list pages: map filter form
fields to query conditions once, remember what the user submitted, and
apply it to a query on every request.

Features:
- Rule kinds: primary, in, from, to, like, equals
- Form data kept in any session-like state store (memory, SQLite, your
  web framework's session)
- Query accumulators for parameterized SQL and pandas DataFrames

Example:
    >>> from model_filter import FilterEngine, MemoryStore, SQLQuery
    >>>
    >>> engine = FilterEngine(MemoryStore(), "tickets")
    >>> engine.set_rules({"status": ("in",), "subject": ("like",)})
    >>> engine.set_form_data({"status": ["open", "pending"], "subject": "Print"})
    >>> sql, params = engine.filter(SQLQuery("tickets")).to_sql()
    >>> sql
    'SELECT * FROM tickets WHERE status IN (?, ?) AND subject LIKE ?'
"""

__version__ = "1.0.0"

from model_filter.config.settings import DateErrorPolicy, Settings, get_settings
from model_filter.engine import FilterEngine, is_empty_value
from model_filter.errors import (
    ConfigurationError,
    FilterError,
    MissingCollaboratorError,
    ParseError,
)
from model_filter.query import DataFrameQuery, QueryAccumulator, SQLQuery
from model_filter.rules import (
    Equals,
    From,
    In,
    Like,
    Primary,
    Rule,
    RuleSet,
    To,
    load_rules,
    parse_rule,
    parse_rules,
)
from model_filter.state import MemoryStore, SQLiteSessionStore, StateStore

__all__ = [
    "ConfigurationError",
    "DataFrameQuery",
    "DateErrorPolicy",
    "Equals",
    "FilterEngine",
    "FilterError",
    "From",
    "In",
    "Like",
    "MemoryStore",
    "MissingCollaboratorError",
    "ParseError",
    "Primary",
    "QueryAccumulator",
    "Rule",
    "RuleSet",
    "SQLQuery",
    "SQLiteSessionStore",
    "Settings",
    "StateStore",
    "To",
    "__version__",
    "get_settings",
    "is_empty_value",
    "load_rules",
    "parse_rule",
    "parse_rules",
]
