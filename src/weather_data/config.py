"""
Configuration management for Weather Data.
Supports loading from YAML files and environment variables.
"""
import os
from pathlib import Path
from typing import Any, Dict

import yaml


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""
    pass


class Config:
    """Configuration manager for Weather Data."""

    def __init__(self, config_dict: Dict[str, Any]):
        """
        Initialize Config with a dictionary.

        Args:
            config_dict: Configuration dictionary
        """
        self._config = config_dict
        self.validate()

    @classmethod
    def load_from_file(cls, path: str = "config.yaml") -> "Config":
        """
        Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            ConfigError: If file cannot be read or parsed
        """
        config_path = Path(path)

        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            with open(config_path, 'r') as f:
                config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse YAML configuration: {e}")
        except IOError as e:
            raise ConfigError(f"Failed to read configuration file: {e}")

        if config_dict is None:
            raise ConfigError(f"Configuration file is empty: {path}")
        if not isinstance(config_dict, dict):
            raise ConfigError(f"Configuration file must contain a mapping: {path}")

        return cls(config_dict)

    @classmethod
    def load_from_env(cls) -> "Config":
        """
        Load configuration from environment variables.

        Environment variables are prefixed with WEATHER_DATA_ and use
        underscores for nested keys.

        Example:
            WEATHER_DATA_DATABASE_PATH=data/weather_station.sqlite
            WEATHER_DATA_QUERY_ORDER_BY_TIMESTAMP=true

        Returns:
            Config instance
        """
        config_dict: Dict[str, Any] = {
            "database": {},
            "query": {},
            "logging": {}
        }

        if db_path := os.getenv("WEATHER_DATA_DATABASE_PATH"):
            config_dict["database"]["path"] = db_path

        if ordered := os.getenv("WEATHER_DATA_QUERY_ORDER_BY_TIMESTAMP"):
            config_dict["query"]["order_by_timestamp"] = cls._parse_bool(
                "WEATHER_DATA_QUERY_ORDER_BY_TIMESTAMP", ordered
            )

        if log_level := os.getenv("WEATHER_DATA_LOGGING_LEVEL"):
            config_dict["logging"]["level"] = log_level
        if log_file := os.getenv("WEATHER_DATA_LOGGING_FILE"):
            config_dict["logging"]["file"] = log_file
        if log_format := os.getenv("WEATHER_DATA_LOGGING_FORMAT"):
            config_dict["logging"]["format"] = log_format

        return cls(config_dict)

    @staticmethod
    def _parse_bool(name: str, value: str) -> bool:
        candidate = value.strip().lower()
        if candidate in _TRUE_VALUES:
            return True
        if candidate in _FALSE_VALUES:
            return False
        raise ConfigError(f"{name} must be a boolean, got {value!r}")

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ConfigError: If any required field is missing or invalid
        """
        if not isinstance(self._config.get("database"), dict):
            raise ConfigError("Missing 'database' section in configuration")

        if not self._config["database"].get("path"):
            raise ConfigError("Missing required field: database.path")

        query = self._config.get("query") or {}
        if not isinstance(query.get("order_by_timestamp", False), bool):
            raise ConfigError("query.order_by_timestamp must be true or false")

        # Logging section is optional, with defaults
        if "logging" in self._config:
            log_level = str(self._config["logging"].get("level", "INFO"))
            if log_level.upper() not in VALID_LOG_LEVELS:
                raise ConfigError(
                    f"Invalid log level: {log_level}. Must be one of {VALID_LOG_LEVELS}"
                )

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Configuration key (e.g., 'database.path')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def get_database_config(self) -> Dict[str, Any]:
        """Get database configuration section."""
        return self._config.get("database", {})

    def get_query_config(self) -> Dict[str, Any]:
        """Get query configuration section with defaults."""
        defaults = {"order_by_timestamp": False}
        config = self._config.get("query") or {}
        return {**defaults, **config}

    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration section with defaults."""
        defaults = {
            "level": "INFO",
            "file": "logs/weather_data.log",
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        }
        config = self._config.get("logging") or {}
        return {**defaults, **config}

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as a dictionary."""
        return {
            key: value.copy() if isinstance(value, dict) else value
            for key, value in self._config.items()
        }
