"""
State store protocol.

The engine keeps submitted form data in a key-value store scoped to one
end-user session. Any object with ``has``/``get``/``set`` works, for example
a thin wrapper around a web framework's session:

    >>> class FlaskSessionStore:
    ...     def has(self, name: str) -> bool:
    ...         return name in flask.session
    ...
    ...     def get(self, name: str, default=None):
    ...         return flask.session.get(name, default)
    ...
    ...     def set(self, name: str, value) -> None:
    ...         flask.session[name] = value
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class StateStore(Protocol):
    """Session-scoped key-value store.

    Values are plain JSON-compatible mappings. Implementations must hand out
    values that the caller may mutate without affecting the stored copy;
    changes become visible only through ``set``.
    """

    def has(self, name: str) -> bool:
        """Whether an entry exists."""
        ...

    def get(self, name: str, default: Any = None) -> Any:
        """Get an entry, or ``default`` if it does not exist."""
        ...

    def set(self, name: str, value: Any) -> None:
        """Create or replace an entry."""
        ...
