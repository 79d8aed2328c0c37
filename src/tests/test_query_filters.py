"""
Test suite for QueryFilterSet component
Following TDD approach with AAA pattern and descriptive naming
"""

import pytest
from datetime import datetime, timezone
from urllib.parse import parse_qs
from shopify_adapter.query_filters import QueryFilterSet, clamp_limit
from shopify_adapter.config_loader import ConfigurationError


class TestClampLimit:
    """Test suite for page size clamping"""

    @pytest.mark.parametrize("limit, expected", [(0, 1), (-5, 1), (1, 1), (50, 50), (250, 250), (1000, 250), ("75", 75)])
    def test_clamp_limit_keeps_values_between_1_and_250(self, limit, expected):
        """
        Test that limits are clamped into the accepted range
        """
        # Act & Assert
        assert clamp_limit(limit) == expected

    @pytest.mark.parametrize("limit", ["fifty", "", None, "12.5"])
    def test_clamp_limit_with_non_numeric_value_raises_configuration_error(self, limit):
        """
        Test that a limit that is not a whole number is a configuration error
        """
        # Act & Assert
        with pytest.raises(ConfigurationError, match="Invalid limit"):
            clamp_limit(limit)

    def test_to_params_with_non_numeric_limit_from_mapping_raises_configuration_error(self):
        """
        Test that a bad limit passed through a filter mapping surfaces as ConfigurationError
        """
        # Arrange
        filters = QueryFilterSet.from_mapping({'limit': 'fifty'})

        # Act & Assert
        with pytest.raises(ConfigurationError, match="fifty"):
            filters.to_params()


class TestQueryFilterSet:
    """Test suite for query string construction"""

    def test_to_params_omits_unset_and_blank_filters(self):
        """
        Test that only filters with a value are serialised
        """
        # Arrange
        filters = QueryFilterSet(status="any", vendor="  ", limit=None)

        # Act
        params = filters.to_params()

        # Assert
        assert params == {'status': 'any'}

    def test_to_params_clamps_limit(self):
        """
        Test that an oversize limit is clamped
        """
        # Act & Assert
        assert QueryFilterSet(limit=1000).to_params()['limit'] == '250'
        assert QueryFilterSet(limit=0).to_params()['limit'] == '1'

    def test_to_query_string_round_trips_every_set_filter(self):
        """
        Test that each set filter appears once with its value after URL decoding
        """
        # Arrange
        created_min = datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc)
        filters = QueryFilterSet(
            limit=50,
            since_id=123,
            financial_status="paid",
            created_at_min=created_min,
            fields="id,email",
            product_type="Shirts & Tops",
        )

        # Act
        decoded = parse_qs(filters.to_query_string())

        # Assert
        assert decoded == {
            'limit': ['50'],
            'since_id': ['123'],
            'financial_status': ['paid'],
            'created_at_min': ['2024-01-01T00:00:00+00:00'],
            'fields': ['id,email'],
            'product_type': ['Shirts & Tops'],
        }

    def test_apply_to_path_without_filters_returns_path_unchanged(self):
        """
        Test that no query string is appended when nothing is set
        """
        # Act & Assert
        assert QueryFilterSet().apply_to_path("/orders.json") == "/orders.json"

    def test_apply_to_path_appends_query_string(self):
        """
        Test that set filters are appended after a question mark
        """
        # Act & Assert
        assert QueryFilterSet(limit=5).apply_to_path("/products.json") == "/products.json?limit=5"

    def test_from_mapping_ignores_unknown_keys(self):
        """
        Test that non-filter keys in a mapping are ignored
        """
        # Act
        filters = QueryFilterSet.from_mapping({'limit': 10, 'status': 'open', 'colour': 'red'})

        # Assert
        assert filters == QueryFilterSet(limit=10, status='open')

    def test_with_overrides_returns_new_filter_set(self):
        """
        Test that overrides leave the original filter set untouched
        """
        # Arrange
        filters = QueryFilterSet(limit=10)

        # Act
        next_page = filters.with_overrides(page_info="abc")

        # Assert
        assert filters.page_info is None
        assert next_page.page_info == "abc"
        assert next_page.limit == 10
