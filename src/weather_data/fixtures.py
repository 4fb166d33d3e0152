"""
Load weather readings from YAML fixture files.
"""
import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Any, List, Union

import yaml

from .database import DatabaseError, WeatherDatabase
from .models import WeatherReading, normalize_timestamp, parse_timestamp_text


logger = logging.getLogger(__name__)


def _to_datetime(value: Any) -> datetime:
    # PyYAML turns unquoted timestamps into datetime/date objects
    if isinstance(value, datetime):
        return normalize_timestamp(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        return parse_timestamp_text(value)
    raise ValueError(f"Invalid timestamp: {value!r}")


def read_fixtures(path: Union[str, Path]) -> List[WeatherReading]:
    """
    Parse a fixture file into readings.

    The file holds a list of mappings with timestamp, humidity and
    temperature keys.

    Raises:
        DatabaseError: If the file is missing or malformed
    """
    fixture_path = Path(path)

    try:
        with open(fixture_path, 'r') as f:
            entries = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise DatabaseError(f"Failed to parse fixture file {fixture_path}: {e}")
    except IOError as e:
        raise DatabaseError(f"Failed to read fixture file {fixture_path}: {e}")

    if entries is None:
        return []
    if not isinstance(entries, list):
        raise DatabaseError(f"Fixture file must contain a list: {fixture_path}")

    readings = []
    for index, entry in enumerate(entries):
        try:
            readings.append(WeatherReading(
                timestamp=_to_datetime(entry["timestamp"]),
                humidity=float(entry["humidity"]),
                temperature=float(entry["temperature"]),
            ))
        except (KeyError, TypeError, ValueError) as e:
            raise DatabaseError(f"Invalid fixture entry {index} in {fixture_path}: {e}")

    return readings


def load_fixtures(conn: sqlite3.Connection, path: Union[str, Path]) -> int:
    """
    Replace the contents of weather_data with the readings in a fixture file.

    Returns:
        Number of readings loaded

    Raises:
        DatabaseError: If the file is malformed or the load fails
    """
    readings = read_fixtures(path)

    WeatherDatabase.initialize_schema(conn)
    try:
        conn.execute("DELETE FROM weather_data")
    except sqlite3.Error as e:
        conn.rollback()
        raise DatabaseError(f"Failed to clear weather_data: {e}")

    count = WeatherDatabase.insert_readings(conn, readings)
    if not readings:
        conn.commit()

    logger.info(f"Loaded {count} fixture readings from {path}")
    return count
