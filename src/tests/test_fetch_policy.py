"""
Test suite for FetchPolicy component
Following TDD approach with AAA pattern and descriptive naming
"""

import pytest
import json
import tempfile
from pathlib import Path
from unittest.mock import Mock
from shopify_adapter.fetch_policy import FetchType, ListResult, FileEntityStore, apply_fetch_policy
from shopify_adapter.config_loader import ConfigurationError
from shopify_adapter.models import Order


class TestFetchType:
    """Test suite for fetch type parsing"""

    def test_parse_with_none_defaults_to_fetch(self):
        """
        Test that an absent fetch type means FETCH
        """
        # Act & Assert
        assert FetchType.parse(None) is FetchType.FETCH

    def test_parse_accepts_case_insensitive_names_and_members(self):
        """
        Test that names are matched case-insensitively and members pass through
        """
        # Act & Assert
        assert FetchType.parse("fetch_one") is FetchType.FETCH_ONE
        assert FetchType.parse(" Store ") is FetchType.STORE
        assert FetchType.parse(FetchType.FETCH) is FetchType.FETCH

    def test_parse_with_unknown_name_raises_configuration_error(self):
        """
        Test that unknown fetch types are rejected
        """
        # Act & Assert
        with pytest.raises(ConfigurationError, match="FETCH, FETCH_ONE, STORE"):
            FetchType.parse("ALL")


class TestApplyFetchPolicy:
    """Test suite for shaping list output"""

    def setup_method(self):
        """Set up test fixtures before each test method"""
        self.entities = [Order(id=1), Order(id=2), Order(id=3)]

    def test_fetch_returns_every_entity_with_count(self):
        """
        Test that FETCH returns all entities in order
        """
        # Act
        result = apply_fetch_policy(self.entities, FetchType.FETCH)

        # Assert
        assert [order.id for order in result.entities] == [1, 2, 3]
        assert result.count == 3
        assert result.uri is None

    def test_fetch_one_returns_first_entity(self):
        """
        Test that FETCH_ONE returns only the first entity in server order
        """
        # Act
        result = apply_fetch_policy(self.entities, FetchType.FETCH_ONE)

        # Assert
        assert result.entities == [Order(id=1)]
        assert result.count == 1

    def test_fetch_one_with_no_entities_returns_empty_result(self):
        """
        Test that FETCH_ONE on an empty list has count 0
        """
        # Act
        result = apply_fetch_policy([], FetchType.FETCH_ONE)

        # Assert
        assert result == ListResult(entities=[], count=0)

    def test_store_writes_through_store_and_returns_uri(self):
        """
        Test that STORE hands every entity to the store and returns its URI
        """
        # Arrange
        store = Mock()
        store.put_entities.return_value = "file:///tmp/orders.jsonl"

        # Act
        result = apply_fetch_policy(self.entities, FetchType.STORE, store=store, name="orders")

        # Assert
        store.put_entities.assert_called_once_with("orders", self.entities)
        assert result.entities == []
        assert result.count == 3
        assert result.uri == "file:///tmp/orders.jsonl"

    def test_store_without_store_raises_configuration_error(self):
        """
        Test that STORE requires an entity store
        """
        # Act & Assert
        with pytest.raises(ConfigurationError):
            apply_fetch_policy(self.entities, FetchType.STORE)


class TestFileEntityStore:
    """Test suite for JSON Lines storage"""

    def test_put_entities_writes_one_line_per_entity(self):
        """
        Test that a single JSON Lines file holds every entity
        """
        with tempfile.TemporaryDirectory() as temp_dir:
            # Arrange
            store = FileEntityStore(Path(temp_dir) / "storage")
            entities = [Order(id=1, email="a@example.com"), Order(id=2)]

            # Act
            uri = store.put_entities("orders", entities)

            # Assert
            files = list((Path(temp_dir) / "storage").iterdir())
            assert len(files) == 1
            assert files[0].name.startswith("orders_")
            assert files[0].suffix == ".jsonl"
            assert uri.startswith("file://")
            assert uri.endswith(files[0].name)

            lines = files[0].read_text(encoding='utf-8').splitlines()
            assert [json.loads(line) for line in lines] == [
                {'id': 1, 'email': 'a@example.com'},
                {'id': 2},
            ]

    def test_put_entities_with_empty_list_writes_empty_file(self):
        """
        Test that storing zero entities still produces a file
        """
        with tempfile.TemporaryDirectory() as temp_dir:
            # Arrange
            store = FileEntityStore(Path(temp_dir))

            # Act
            store.put_entities("products", [])

            # Assert
            files = list(Path(temp_dir).glob("*.jsonl"))
            assert len(files) == 1
            assert files[0].read_text(encoding='utf-8') == ""

    def test_put_entities_removes_temporary_file_when_serialisation_fails(self):
        """
        Test that a failed write leaves neither a partial nor a temporary file behind
        """
        with tempfile.TemporaryDirectory() as temp_dir:
            # Arrange
            store = FileEntityStore(Path(temp_dir))
            entities = [Order(id=1), object()]

            # Act & Assert
            with pytest.raises(TypeError):
                store.put_entities("orders", entities)
            assert list(Path(temp_dir).iterdir()) == []
