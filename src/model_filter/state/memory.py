"""
In-memory state store.

Holds one session's state in a dict. Useful for tests, scripts and
frameworks that expose their session as a plain mapping.
"""

from __future__ import annotations

import copy
from collections.abc import MutableMapping
from typing import Any


class MemoryStore:
    """Dict-backed state store.

    Args:
        data: Optional backing mapping, e.g. an existing session dict. It is
            used directly, so writes are visible to its owner.

    Example:
        >>> store = MemoryStore()
        >>> store.set("filters", {"tickets": {}})
        >>> store.has("filters")
        True
    """

    def __init__(self, data: MutableMapping[str, Any] | None = None):
        self._data: MutableMapping[str, Any] = data if data is not None else {}

    def has(self, name: str) -> bool:
        return name in self._data

    def get(self, name: str, default: Any = None) -> Any:
        if name not in self._data:
            return default
        return copy.deepcopy(self._data[name])

    def set(self, name: str, value: Any) -> None:
        self._data[name] = copy.deepcopy(value)

    def __repr__(self) -> str:
        return f"MemoryStore(keys={sorted(self._data)!r})"
