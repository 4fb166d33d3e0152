"""
Utility functions for Weather Data.
"""
import logging
from pathlib import Path
from typing import Optional

from .config import Config
from .database import WeatherDatabase
from .service import WeatherDataService


def setup_logging(log_file: str, log_level: str = "INFO", log_format: Optional[str] = None) -> None:
    """
    Setup logging configuration with file and console handlers.

    Args:
        log_file: Path to log file
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log message format string
    """
    if log_format is None:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    level = getattr(logging, log_level.upper(), logging.INFO)
    formatter = logging.Formatter(log_format)

    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)


def setup_logging_from_config(config: Config) -> None:
    """Configure logging from the logging section of a Config."""
    logging_config = config.get_logging_config()
    setup_logging(
        log_file=logging_config["file"],
        log_level=logging_config["level"],
        log_format=logging_config["format"],
    )


def create_service(config: Config, database: Optional[WeatherDatabase] = None):
    """
    Open the configured database and wrap the connection in a service.

    The returned connection belongs to the caller and must be closed by it.

    Returns:
        Tuple of (connection, WeatherDataService)
    """
    if database is None:
        database = WeatherDatabase(config.get("database.path"))

    conn = database.connect()
    service = WeatherDataService(
        conn,
        order_by_timestamp=config.get_query_config()["order_by_timestamp"],
    )
    return conn, service
