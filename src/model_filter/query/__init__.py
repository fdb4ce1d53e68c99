"""
Query accumulators.

The engine adds conditions to any object implementing
:class:`QueryAccumulator`. Two implementations are provided:

- SQLQuery: Renders a parameterized SELECT statement
- DataFrameQuery: Filters an in-memory pandas DataFrame

Example:
    >>> from model_filter.query import SQLQuery
    >>>
    >>> query = engine.filter(SQLQuery("tickets"))
    >>> sql, params = query.paginate(page=1, per_page=30).to_sql()
"""

from model_filter.query.conditions import FilterCondition, FilterOperator
from model_filter.query.dataframe import DataFrameQuery
from model_filter.query.protocol import QueryAccumulator
from model_filter.query.sql import SQLQuery

__all__ = [
    "DataFrameQuery",
    "FilterCondition",
    "FilterOperator",
    "QueryAccumulator",
    "SQLQuery",
]
