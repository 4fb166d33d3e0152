"""
SQL query construction for weather data searches.
"""
from typing import List, Tuple

from .models import SearchBounds


WEATHER_TABLE = "weather_data"

# Table names that may be substituted into a query template
ALLOWED_TABLES = frozenset({WEATHER_TABLE})

SELECT_TEMPLATE = "SELECT humidity, temperature, timestamp FROM {table}"
COUNT_TEMPLATE = "SELECT COUNT(*) FROM {table}"


def build_where_clause(bounds: SearchBounds) -> Tuple[str, List[str]]:
    """
    Build the WHERE clause for a set of search bounds.

    Args:
        bounds: SearchBounds with zero, one or both dates set

    Returns:
        Tuple of (clause, parameters). The clause is empty when no bound is set.
    """
    if bounds.has_start and bounds.has_end:
        return " WHERE timestamp BETWEEN ? AND ?", [bounds.start_date, bounds.end_date]

    if bounds.has_start:
        return " WHERE timestamp >= ?", [bounds.start_date]

    if bounds.has_end:
        return " WHERE timestamp <= ?", [bounds.end_date]

    return "", []


def build_search_query(bounds: SearchBounds) -> Tuple[str, List[str]]:
    """
    Build a parameterised search query for the given bounds.

    The returned template holds a single {table} substitution point and one
    ? placeholder per parameter, in the same order as the parameters.

    Args:
        bounds: SearchBounds with zero, one or both dates set

    Returns:
        Tuple of (query template, parameters)
    """
    clause, params = build_where_clause(bounds)
    return SELECT_TEMPLATE + clause, params


def build_count_query(bounds: SearchBounds) -> Tuple[str, List[str]]:
    """Same as build_search_query, counting rows instead of selecting them."""
    clause, params = build_where_clause(bounds)
    return COUNT_TEMPLATE + clause, params


def render_query(
    template: str,
    table: str = WEATHER_TABLE,
    order_by_timestamp: bool = False
) -> str:
    """
    Substitute an allow-listed table name into a query template.

    Args:
        template: Query template containing {table}
        table: Table name, must be in ALLOWED_TABLES
        order_by_timestamp: If True, sort results by timestamp ascending

    Returns:
        Executable SQL text

    Raises:
        ValueError: If the table name is not allowed
    """
    if table not in ALLOWED_TABLES:
        raise ValueError(f"Table not allowed in queries: {table!r}")

    query = template.format(table=table)

    if order_by_timestamp:
        query += " ORDER BY timestamp ASC"

    return query
