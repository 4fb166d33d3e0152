"""
SQLite database helpers for Weather Data.

The query service never opens connections itself; these helpers are for the
code that owns the database handle (applications, scripts and tests).
"""
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from .models import WeatherReading


logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"

# Text format used for stored timestamps; sorts the same as the datetimes
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class DatabaseError(Exception):
    """Base exception for database errors."""
    pass


class QueryError(DatabaseError):
    """Raised when a query cannot be executed."""
    pass


class RowDecodeError(DatabaseError):
    """Raised when a result row cannot be mapped to a reading."""
    pass


class WeatherDatabase:
    """
    SQLite database manager for the weather_data table.

    Handles connections, schema initialization and data insertion.
    """

    def __init__(self, db_path: str):
        """
        Initialize database manager.

        Args:
            db_path: Path to SQLite database file, or ":memory:"
        """
        self.db_path = db_path

        if db_path != MEMORY_DATABASE:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        logger.info(f"Initialized database at {db_path}")

    def connect(self) -> sqlite3.Connection:
        """
        Open a new connection. The caller is responsible for closing it.

        Raises:
            DatabaseError: If the database cannot be opened
        """
        try:
            return sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            logger.error(f"Database connection error: {e}")
            raise DatabaseError(f"Database connection error: {e}")

    @contextmanager
    def get_connection(self):
        """
        Context manager for database connections.

        Yields:
            sqlite3.Connection instance

        Example:
            with db.get_connection() as conn:
                service = WeatherDataService(conn)
                readings = service.get_weather_data()
        """
        conn = self.connect()
        try:
            yield conn
        except sqlite3.Error as e:
            logger.error(f"Database error: {e}")
            conn.rollback()
            raise DatabaseError(f"Database error: {e}")
        finally:
            conn.close()

    @staticmethod
    def initialize_schema(conn: sqlite3.Connection) -> None:
        """
        Create the weather_data table and its index if they don't exist.

        Raises:
            DatabaseError: If schema creation fails
        """
        logger.info("Initializing database schema")

        try:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS weather_data (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp DATETIME NOT NULL,
                    humidity REAL,
                    temperature REAL
                )
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_weather_data_timestamp
                ON weather_data(timestamp)
            """)
            conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Error initializing schema: {e}")
            raise DatabaseError(f"Failed to initialize schema: {e}")

        logger.info("Database schema initialized successfully")

    @staticmethod
    def insert_reading(conn: sqlite3.Connection, reading: "WeatherReading") -> int:
        """
        Insert a single reading.

        Returns:
            Row ID of the inserted reading

        Raises:
            DatabaseError: If insert fails
        """
        try:
            cursor = conn.execute(
                "INSERT INTO weather_data (timestamp, humidity, temperature) VALUES (?, ?, ?)",
                (
                    reading.timestamp.strftime(TIMESTAMP_FORMAT),
                    reading.humidity,
                    reading.temperature,
                ),
            )
            conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Error inserting reading: {e}")
            raise DatabaseError(f"Failed to insert reading: {e}")

        logger.debug(f"Inserted reading: {reading.timestamp}")
        return cursor.lastrowid

    @staticmethod
    def insert_readings(conn: sqlite3.Connection, readings: Iterable["WeatherReading"]) -> int:
        """
        Insert multiple readings in one transaction.

        Returns:
            Number of readings inserted

        Raises:
            DatabaseError: If batch insert fails
        """
        rows = [
            (r.timestamp.strftime(TIMESTAMP_FORMAT), r.humidity, r.temperature)
            for r in readings
        ]
        if not rows:
            return 0

        try:
            conn.executemany(
                "INSERT INTO weather_data (timestamp, humidity, temperature) VALUES (?, ?, ?)",
                rows,
            )
            conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Error in batch insert: {e}")
            conn.rollback()
            raise DatabaseError(f"Batch insert failed: {e}")

        logger.info(f"Batch inserted {len(rows)} readings")
        return len(rows)
