"""
State stores for submitted form data.

- StateStore: Protocol every store implements (has/get/set)
- MemoryStore: Dict-backed store, also wraps an existing session mapping
- SQLiteSessionStore: Persistent per-session store

Example:
    >>> from model_filter.state import MemoryStore
    >>>
    >>> store = MemoryStore(request.session)
    >>> engine = FilterEngine(store, "tickets")
"""

from model_filter.state.memory import MemoryStore
from model_filter.state.protocol import StateStore
from model_filter.state.sqlite import SQLiteSessionStore

__all__ = [
    "MemoryStore",
    "SQLiteSessionStore",
    "StateStore",
]
