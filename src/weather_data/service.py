"""
Weather data query service.

Searches the weather_data table of an already-open SQL database and maps the
returned rows into WeatherReading records.
"""
import logging
import sqlite3
from contextlib import closing
from typing import List, Optional, Tuple

from .database import QueryError, RowDecodeError
from .models import SearchBounds, WeatherReading
from . import query as queries


logger = logging.getLogger(__name__)


class WeatherDataService:
    """
    Read-only access to weather readings through a caller-owned connection.

    The connection must use the qmark paramstyle (sqlite3 does). Any
    concurrency guarantees come from the connection itself.
    """

    def __init__(self, connection: sqlite3.Connection, order_by_timestamp: bool = False):
        """
        Args:
            connection: Open database connection
            order_by_timestamp: Sort results by timestamp instead of
                returning them in storage order

        Raises:
            ValueError: If no connection is given
        """
        if connection is None:
            raise ValueError("nil database connection")

        self.connection = connection
        self.order_by_timestamp = order_by_timestamp

    def build_search_query(self, bounds: SearchBounds) -> Tuple[str, List[str]]:
        """Return the query template and parameters for the given bounds."""
        return queries.build_search_query(bounds)

    def get_weather_data(self, bounds: Optional[SearchBounds] = None) -> List[WeatherReading]:
        """
        Fetch weather readings, optionally filtered by a date range.

        Rows that cannot be decoded are logged and skipped.

        Args:
            bounds: Optional start/end dates; None returns every reading

        Returns:
            List of WeatherReading in result-set order

        Raises:
            QueryError: If the query fails to execute
        """
        if bounds is None:
            bounds = SearchBounds()

        template, params = self.build_search_query(bounds)
        sql = queries.render_query(template, order_by_timestamp=self.order_by_timestamp)

        readings = []
        skipped = 0

        with closing(self._execute(sql, params)) as cursor:
            try:
                for row in cursor:
                    try:
                        readings.append(WeatherReading.from_row(row))
                    except RowDecodeError as e:
                        skipped += 1
                        logger.warning(f"Unable to add record: {e}")
            except sqlite3.Error as e:
                logger.error(f"Error reading weather data: {e}")
                raise QueryError(f"Failed to read weather data: {e}") from e

        if skipped:
            logger.info(f"Skipped {skipped} undecodable rows")
        logger.debug(f"Retrieved {len(readings)} readings")
        return readings

    def count_weather_data(self, bounds: Optional[SearchBounds] = None) -> int:
        """
        Count the stored rows matching the bounds.

        This is a raw row count: rows that get_weather_data skips as
        undecodable are included, so it can exceed the number of readings
        returned for the same bounds.

        Raises:
            QueryError: If the query fails to execute
        """
        if bounds is None:
            bounds = SearchBounds()

        template, params = queries.build_count_query(bounds)
        sql = queries.render_query(template)

        with closing(self._execute(sql, params)) as cursor:
            try:
                row = cursor.fetchone()
            except sqlite3.Error as e:
                logger.error(f"Error counting weather data: {e}")
                raise QueryError(f"Failed to count weather data: {e}") from e

        return row[0] if row else 0

    def _execute(self, sql: str, params: List[str]):
        """Open a cursor and run the query, closing the cursor if it fails."""
        logger.debug(f"Executing query: {sql} with {params}")

        try:
            cursor = self.connection.cursor()
        except sqlite3.Error as e:
            logger.error(f"Error opening cursor: {e}")
            raise QueryError(f"Failed to query weather data: {e}") from e

        try:
            cursor.execute(sql, params)
        except sqlite3.Error as e:
            cursor.close()
            logger.error(f"Error querying weather data: {e}")
            raise QueryError(f"Failed to query weather data: {e}") from e

        return cursor
