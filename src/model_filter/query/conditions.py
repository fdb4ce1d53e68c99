"""
Filter conditions.

A condition is one ``field <operator> value`` clause recorded by a query
accumulator. Conditions render to parameterized SQL.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class FilterOperator(Enum):
    """Comparison operators for filter conditions."""

    EQ = "="
    IN = "IN"
    GE = ">="
    LE = "<="
    LIKE = "LIKE"


@dataclass
class FilterCondition:
    """A single filter condition."""

    field: str
    operator: FilterOperator
    value: Any = None

    def to_sql(self) -> tuple[str, list[Any]]:
        """Convert to SQL clause and parameters.

        An empty IN list matches nothing and renders as ``0 = 1``.

        Returns:
            Tuple of (SQL string, list of parameters)
        """
        if self.operator == FilterOperator.IN:
            if not isinstance(self.value, (list, tuple)):
                raise ValueError(f"IN operator requires list, got {type(self.value)}")
            if not self.value:
                return "0 = 1", []
            placeholders = ", ".join("?" * len(self.value))
            return f"{self.field} IN ({placeholders})", list(self.value)
        return f"{self.field} {self.operator.value} ?", [self.value]

    @classmethod
    def eq(cls, field: str, value: Any) -> FilterCondition:
        """Create equality condition."""
        return cls(field, FilterOperator.EQ, value)

    @classmethod
    def in_list(cls, field: str, values: list[Any]) -> FilterCondition:
        """Create IN condition."""
        return cls(field, FilterOperator.IN, values)

    @classmethod
    def ge(cls, field: str, value: Any) -> FilterCondition:
        """Create greater-than-or-equal condition."""
        return cls(field, FilterOperator.GE, value)

    @classmethod
    def le(cls, field: str, value: Any) -> FilterCondition:
        """Create less-than-or-equal condition."""
        return cls(field, FilterOperator.LE, value)

    @classmethod
    def like(cls, field: str, pattern: str) -> FilterCondition:
        """Create LIKE condition."""
        return cls(field, FilterOperator.LIKE, pattern)

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "operator": self.operator.value, "value": self.value}
