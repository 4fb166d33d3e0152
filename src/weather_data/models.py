"""
Data models for Weather Data.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

from .database import RowDecodeError


@dataclass(frozen=True)
class SearchBounds:
    """
    Optional start and end date used to filter weather data searches.

    Both values are sortable date/time strings, e.g. "2022-04-01" or
    "2022-04-01 23:59:59". An empty string or None leaves the bound unset.
    """

    start_date: Optional[str] = None
    end_date: Optional[str] = None

    @property
    def has_start(self) -> bool:
        return bool(self.start_date)

    @property
    def has_end(self) -> bool:
        return bool(self.end_date)


@dataclass(frozen=True)
class WeatherReading:
    """
    A single weather observation read back from the weather_data table.
    """

    # Naive, normalised to UTC when the stored value carries an offset
    timestamp: datetime
    # SQLite REAL values, kept at double precision
    humidity: float
    temperature: float

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> "WeatherReading":
        """
        Create a WeatherReading from a (humidity, temperature, timestamp) row.

        Args:
            row: Result row, a tuple or sqlite3.Row

        Returns:
            WeatherReading instance

        Raises:
            RowDecodeError: If any column cannot be converted
        """
        try:
            humidity, temperature, timestamp = row[0], row[1], row[2]
        except (IndexError, TypeError) as e:
            raise RowDecodeError(f"Unexpected row shape: {e}")

        return cls(
            timestamp=_parse_timestamp(timestamp),
            humidity=_parse_float("humidity", humidity),
            temperature=_parse_float("temperature", temperature),
        )

    def to_dict(self) -> Dict:
        """
        Convert WeatherReading to dictionary.

        Returns:
            Dictionary representation
        """
        return {
            "timestamp": self.timestamp.isoformat(),
            "humidity": self.humidity,
            "temperature": self.temperature,
        }


# Text layouts accepted for stored timestamps, all sortable as text
TIMESTAMP_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%d",
)


def normalize_timestamp(value: datetime) -> datetime:
    """Return a naive datetime, converting aware values to UTC."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_timestamp_text(text: str) -> datetime:
    """
    Parse a stored timestamp string into a naive UTC-normalised datetime.

    A trailing "Z" or a "+HH:MM" offset is applied and then dropped.

    Raises:
        ValueError: If the text matches none of TIMESTAMP_FORMATS
    """
    candidate = text.strip()
    if candidate.endswith(("Z", "z")):
        candidate = candidate[:-1] + "+00:00"

    for fmt in TIMESTAMP_FORMATS:
        for layout in (fmt, fmt + "%z"):
            try:
                return normalize_timestamp(datetime.strptime(candidate, layout))
            except ValueError:
                continue

    raise ValueError(f"Unrecognised timestamp: {text!r}")


def _parse_float(name: str, value: Any) -> float:
    if value is None or isinstance(value, bool):
        raise RowDecodeError(f"Invalid {name} value: {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise RowDecodeError(f"Invalid {name} value: {value!r}")


def _parse_timestamp(value: Any) -> datetime:
    """
    Accepts native datetimes and text. Numeric values are rejected: SQLite
    orders numbers before text, so they could not be filtered by date bounds.
    """
    if isinstance(value, datetime):
        return normalize_timestamp(value)

    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")

    if isinstance(value, str):
        try:
            return parse_timestamp_text(value)
        except ValueError:
            pass

    raise RowDecodeError(f"Invalid timestamp value: {value!r}")
