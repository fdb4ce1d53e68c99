"""
Query accumulator protocol.

The engine never runs queries. It appends conditions to an accumulator the
caller owns and hands the same object back, so the caller can keep
chaining (ordering, pagination) and execute it however it likes.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, TypeVar, runtime_checkable

Q = TypeVar("Q", bound="QueryAccumulator")


@runtime_checkable
class QueryAccumulator(Protocol):
    """An in-progress query that accepts filter conditions.

    Each method adds one condition and returns the accumulator.
    """

    def where_equals(self: Q, field: str, value: Any) -> Q: ...

    def where_in(self: Q, field: str, values: Sequence[Any]) -> Q: ...

    def where_gte(self: Q, field: str, value: Any) -> Q: ...

    def where_lte(self: Q, field: str, value: Any) -> Q: ...

    def where_like(self: Q, field: str, pattern: str) -> Q: ...
