"""
pandas query accumulator.

Applies filter conditions to an in-memory DataFrame, for data that has
already been loaded (e.g. from ``pd.read_sql`` or a CSV export).

Example:
    >>> query = engine.filter(DataFrameQuery(df))
    >>> filtered = query.result()
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

import pandas as pd

from model_filter.query.conditions import FilterCondition


def like_to_regex(pattern: str) -> str:
    """Translate a SQL LIKE pattern into an anchored regular expression."""
    parts = []
    for char in pattern:
        if char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return "^" + "".join(parts) + "$"


class DataFrameQuery:
    """Accumulates conditions as boolean masks over a DataFrame.

    LIKE matching is case-insensitive, as in SQLite and MySQL's default
    collations. Values compared against datetime columns are converted with
    ``pd.Timestamp``.
    """

    def __init__(self, df: pd.DataFrame):
        self.df = df
        self.conditions: list[FilterCondition] = []
        self._mask = pd.Series(True, index=df.index)

    def _column(self, field: str) -> pd.Series:
        if field not in self.df.columns:
            raise KeyError(f"Unknown column: {field}")
        return self.df[field]

    def _coerce(self, column: pd.Series, value: Any) -> Any:
        if pd.api.types.is_datetime64_any_dtype(column):
            return pd.Timestamp(value)
        return value

    def _apply(self, condition: FilterCondition, mask: pd.Series) -> DataFrameQuery:
        self.conditions.append(condition)
        self._mask &= mask.fillna(False).astype(bool)
        return self

    def where_equals(self, field: str, value: Any) -> DataFrameQuery:
        column = self._column(field)
        return self._apply(FilterCondition.eq(field, value), column == self._coerce(column, value))

    def where_in(self, field: str, values: Sequence[Any]) -> DataFrameQuery:
        if isinstance(values, (str, bytes)) or not isinstance(values, (list, tuple, set, frozenset)):
            values = [values]
        column = self._column(field)
        coerced = [self._coerce(column, v) for v in values]
        return self._apply(FilterCondition.in_list(field, list(values)), column.isin(coerced))

    def where_gte(self, field: str, value: Any) -> DataFrameQuery:
        column = self._column(field)
        return self._apply(FilterCondition.ge(field, value), column >= self._coerce(column, value))

    def where_lte(self, field: str, value: Any) -> DataFrameQuery:
        column = self._column(field)
        return self._apply(FilterCondition.le(field, value), column <= self._coerce(column, value))

    def where_like(self, field: str, pattern: str) -> DataFrameQuery:
        column = self._column(field)
        mask = column.astype("string").str.match(like_to_regex(pattern), case=False)
        return self._apply(FilterCondition.like(field, pattern), mask)

    def result(self) -> pd.DataFrame:
        """Rows matching every condition added so far."""
        return self.df[self._mask]

    def __len__(self) -> int:
        return int(self._mask.sum())

    def __repr__(self) -> str:
        return f"DataFrameQuery(rows={len(self.df)}, conditions={len(self.conditions)})"
