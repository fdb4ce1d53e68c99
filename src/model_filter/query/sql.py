"""
SQL query accumulator.

Collects filter conditions and renders a parameterized SELECT statement
with ``?`` placeholders, ready for sqlite3 or any DB-API driver using the
qmark style.

Example:
    >>> query = SQLQuery("tickets")
    >>> engine.filter(query).order_by("created_at").paginate(page=2, per_page=30)
    >>> sql, params = query.to_sql()
    >>> rows = connection.execute(sql, params).fetchall()
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from model_filter.query.conditions import FilterCondition

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


def _check_identifier(name: str) -> str:
    if not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name


class SQLQuery:
    """Accumulates conditions for a single-table SELECT.

    Conditions are combined with AND in the order they were added.

    Attributes:
        table: Table (or view) to select from
        columns: Columns to select
        conditions: Conditions added so far
    """

    def __init__(self, table: str, columns: Sequence[str] = ("*",)):
        self.table = _check_identifier(table)
        self.columns = [c if c == "*" else _check_identifier(c) for c in columns]
        self.conditions: list[FilterCondition] = []
        self._order_by: list[tuple[str, bool]] = []
        self._limit: int | None = None
        self._offset: int | None = None

    def add(self, condition: FilterCondition) -> SQLQuery:
        """Add a condition (fluent interface)."""
        _check_identifier(condition.field)
        self.conditions.append(condition)
        return self

    def where_equals(self, field: str, value: Any) -> SQLQuery:
        return self.add(FilterCondition.eq(field, value))

    def where_in(self, field: str, values: Sequence[Any]) -> SQLQuery:
        if isinstance(values, (str, bytes)) or not isinstance(values, (list, tuple, set, frozenset)):
            values = [values]
        return self.add(FilterCondition.in_list(field, list(values)))

    def where_gte(self, field: str, value: Any) -> SQLQuery:
        return self.add(FilterCondition.ge(field, value))

    def where_lte(self, field: str, value: Any) -> SQLQuery:
        return self.add(FilterCondition.le(field, value))

    def where_like(self, field: str, pattern: str) -> SQLQuery:
        return self.add(FilterCondition.like(field, pattern))

    def order_by(self, field: str, desc: bool = False) -> SQLQuery:
        self._order_by.append((_check_identifier(field), desc))
        return self

    def limit(self, limit: int | None) -> SQLQuery:
        self._limit = limit
        return self

    def offset(self, offset: int | None) -> SQLQuery:
        self._offset = offset
        return self

    def paginate(self, page: int = 1, per_page: int = 30) -> SQLQuery:
        """Restrict to one page of results (pages start at 1)."""
        if page < 1 or per_page < 1:
            raise ValueError(f"Invalid page {page} / per_page {per_page}")
        return self.limit(per_page).offset((page - 1) * per_page)

    def where_sql(self) -> tuple[str, list[Any]]:
        """Render only the combined WHERE expression.

        Returns:
            Tuple of (SQL expression, parameters); the expression is empty
            when no conditions were added
        """
        clauses = []
        params: list[Any] = []

        for condition in self.conditions:
            clause, condition_params = condition.to_sql()
            clauses.append(clause)
            params.extend(condition_params)

        return " AND ".join(clauses), params

    def to_sql(self) -> tuple[str, list[Any]]:
        """Generate the SQL query.

        Returns:
            Tuple of (SQL query, parameters)
        """
        sql = f"SELECT {', '.join(self.columns)} FROM {self.table}"

        where, params = self.where_sql()
        if where:
            sql += f" WHERE {where}"

        if self._order_by:
            order = ", ".join(f"{field} {'DESC' if desc else 'ASC'}" for field, desc in self._order_by)
            sql += f" ORDER BY {order}"

        if self._limit is not None:
            sql += f" LIMIT {int(self._limit)}"
            if self._offset:
                sql += f" OFFSET {int(self._offset)}"

        return sql, params

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging or debugging."""
        return {
            "table": self.table,
            "columns": self.columns,
            "conditions": [c.to_dict() for c in self.conditions],
            "order_by": [[field, desc] for field, desc in self._order_by],
            "limit": self._limit,
            "offset": self._offset,
        }

    def __repr__(self) -> str:
        return f"SQLQuery({self.table!r}, conditions={len(self.conditions)})"
