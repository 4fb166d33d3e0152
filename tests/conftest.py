"""
Shared fixtures: a fresh in-memory database per test.
"""
import sqlite3
from pathlib import Path

import pytest

from weather_data.fixtures import load_fixtures


FIXTURE_FILE = Path(__file__).parent / "fixtures" / "weather_data.yml"


@pytest.fixture
def conn():
    """Create an in-memory database loaded with the standard readings."""
    connection = sqlite3.connect(":memory:")
    load_fixtures(connection, FIXTURE_FILE)
    yield connection
    connection.close()
