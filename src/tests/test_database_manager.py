"""
Test suite for DatabaseManager component
Following TDD approach with AAA pattern and descriptive naming
"""

import pytest
import tempfile
from pathlib import Path
from shopify_adapter.database_manager import DatabaseManager, DatabaseConnectionError


class TestDatabaseManager:
    """Test suite for DuckDB connection and transaction handling"""

    def test_create_connection_creates_database_file_and_parent_directory(self):
        """
        Test that connecting creates missing directories and the database file
        """
        with tempfile.TemporaryDirectory() as temp_dir:
            # Arrange
            db_path = Path(temp_dir) / "nested" / "state.db"
            db_manager = DatabaseManager()

            try:
                # Act
                connection = db_manager.create_connection(db_path)

                # Assert
                assert connection is not None
                assert db_path.exists()
            finally:
                db_manager.close_connection()

    def test_create_connection_twice_raises_error(self):
        """
        Test that a second connection requires closing the first
        """
        with tempfile.TemporaryDirectory() as temp_dir:
            # Arrange
            db_manager = DatabaseManager()
            db_manager.create_connection(Path(temp_dir) / "state.db")

            try:
                # Act & Assert
                with pytest.raises(DatabaseConnectionError, match="already open"):
                    db_manager.create_connection(Path(temp_dir) / "other.db")
            finally:
                db_manager.close_connection()

    def test_create_tables_creates_trigger_state_table(self):
        """
        Test that the trigger state table exists after schema creation
        """
        with tempfile.TemporaryDirectory() as temp_dir:
            # Arrange
            db_manager = DatabaseManager()
            db_manager.create_connection(Path(temp_dir) / "state.db")

            try:
                # Act
                db_manager.create_tables()
                db_manager.create_tables()

                # Assert
                row = db_manager.fetch_one(
                    "SELECT COUNT(*) FROM information_schema.tables WHERE table_name = ?",
                    ('trigger_state',)
                )
                assert row[0] == 1
            finally:
                db_manager.close_connection()

    def test_execute_with_transaction_rolls_back_on_failure(self):
        """
        Test that a failing statement is rolled back and re-raised
        """
        with tempfile.TemporaryDirectory() as temp_dir:
            # Arrange
            db_manager = DatabaseManager()
            db_manager.create_connection(Path(temp_dir) / "state.db")

            try:
                db_manager.create_tables()

                # Act & Assert
                with pytest.raises(Exception):
                    db_manager.execute_with_transaction(
                        "INSERT INTO trigger_state (trigger_id, watermark) VALUES (?, ?)",
                        ('order_created', None)
                    )

                row = db_manager.fetch_one("SELECT COUNT(*) FROM trigger_state")
                assert row[0] == 0
            finally:
                db_manager.close_connection()

    def test_operations_without_connection_raise_error(self):
        """
        Test that operations require an active connection
        """
        # Arrange
        db_manager = DatabaseManager()

        # Act & Assert
        with pytest.raises(DatabaseConnectionError):
            db_manager.create_tables()
        with pytest.raises(DatabaseConnectionError):
            db_manager.execute_with_transaction("SELECT 1")
        with pytest.raises(DatabaseConnectionError):
            db_manager.fetch_one("SELECT 1")
