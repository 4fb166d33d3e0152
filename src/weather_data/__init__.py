"""
Weather Data - read-only query access to stored weather readings.

Searches a SQL table of timestamped humidity and temperature readings,
optionally filtered by a start and end date.
"""

__version__ = "0.1.0"

from .config import Config, ConfigError
from .database import WeatherDatabase, DatabaseError, QueryError, RowDecodeError
from .models import SearchBounds, WeatherReading
from .query import WEATHER_TABLE, build_search_query
from .service import WeatherDataService

__all__ = [
    "Config",
    "ConfigError",
    "WeatherDatabase",
    "DatabaseError",
    "QueryError",
    "RowDecodeError",
    "SearchBounds",
    "WeatherReading",
    "WEATHER_TABLE",
    "build_search_query",
    "WeatherDataService",
]
