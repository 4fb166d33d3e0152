"""
Tests for query module.
"""
import pytest
from weather_data.models import SearchBounds
from weather_data.query import (
    WEATHER_TABLE,
    build_count_query,
    build_search_query,
    render_query,
)


class TestBuildSearchQuery:
    """Tests for build_search_query."""

    def test_no_bounds(self):
        """Test that no WHERE clause is emitted without bounds."""
        template, params = build_search_query(SearchBounds())

        assert template == "SELECT humidity, temperature, timestamp FROM {table}"
        assert params == []

    def test_empty_strings_are_unset(self):
        """Test that empty strings behave like missing bounds."""
        template, params = build_search_query(SearchBounds(start_date="", end_date=""))

        assert "WHERE" not in template
        assert params == []

    def test_start_only(self):
        """Test start date only."""
        template, params = build_search_query(SearchBounds(start_date="2022-04-01"))

        assert template.endswith(" WHERE timestamp >= ?")
        assert params == ["2022-04-01"]

    def test_end_only(self):
        """Test end date only."""
        template, params = build_search_query(SearchBounds(end_date="2022-04-02 23:59:59"))

        assert template.endswith(" WHERE timestamp <= ?")
        assert params == ["2022-04-02 23:59:59"]

    def test_both_bounds_use_between(self):
        """Test that both dates produce a single BETWEEN clause."""
        template, params = build_search_query(
            SearchBounds(start_date="2022-04-01", end_date="2022-04-02 23:59:59")
        )

        assert template.endswith(" WHERE timestamp BETWEEN ? AND ?")
        assert ">=" not in template
        assert "<=" not in template
        assert template.count("WHERE") == 1
        assert params == ["2022-04-01", "2022-04-02 23:59:59"]

    @pytest.mark.parametrize("start,end,expected", [
        (None, None, 0),
        ("", "", 0),
        ("2020-01-01", None, 1),
        ("", "2020-01-03", 1),
        ("2020-01-01", "2020-01-03", 2),
    ])
    def test_placeholders_match_parameters(self, start, end, expected):
        """Test placeholder count equals parameter count and set bounds."""
        template, params = build_search_query(SearchBounds(start_date=start, end_date=end))

        assert template.count("?") == expected
        assert len(params) == expected
        assert template.count("{table}") == 1

    def test_count_query_shares_where_clause(self):
        """Test count query uses the same clause and parameters."""
        bounds = SearchBounds(start_date="2020-01-01", end_date="2020-01-03")
        search_template, search_params = build_search_query(bounds)
        count_template, count_params = build_count_query(bounds)

        assert count_template.startswith("SELECT COUNT(*) FROM {table}")
        assert count_template.split("{table}")[1] == search_template.split("{table}")[1]
        assert count_params == search_params


class TestRenderQuery:
    """Tests for render_query."""

    def test_substitutes_weather_table(self):
        """Test the default table is substituted."""
        template, _ = build_search_query(SearchBounds())

        assert render_query(template) == (
            f"SELECT humidity, temperature, timestamp FROM {WEATHER_TABLE}"
        )

    def test_rejects_unknown_table(self):
        """Test that tables outside the allow-list are rejected."""
        template, _ = build_search_query(SearchBounds())

        with pytest.raises(ValueError, match="not allowed"):
            render_query(template, table="weather_data; DROP TABLE weather_data")

    def test_order_by_timestamp(self):
        """Test ordering is appended after the WHERE clause."""
        template, _ = build_search_query(SearchBounds(start_date="2022-04-01"))

        sql = render_query(template, order_by_timestamp=True)

        assert sql.endswith("WHERE timestamp >= ? ORDER BY timestamp ASC")
