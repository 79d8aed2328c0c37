"""
DatabaseManager module owning the DuckDB connection behind trigger state persistence
"""

import duckdb
from pathlib import Path
from typing import Any, Optional, Tuple

TRIGGER_STATE_DDL = """
CREATE TABLE IF NOT EXISTS trigger_state (
    trigger_id VARCHAR PRIMARY KEY,
    watermark VARCHAR NOT NULL,
    last_updated TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""


class DatabaseConnectionError(Exception):
    """Raised when the trigger state database cannot be opened or used"""
    pass


class DatabaseManager:
    """Single DuckDB connection with transactional writes"""

    def __init__(self):
        self._connection: Optional[duckdb.DuckDBPyConnection] = None

    def _require_connection(self) -> duckdb.DuckDBPyConnection:
        if self._connection is None:
            raise DatabaseConnectionError("Trigger state database is not open")
        return self._connection

    def create_connection(self, db_path: Path) -> duckdb.DuckDBPyConnection:
        """
        Open the state database, creating its directory when needed

        Args:
            db_path: DuckDB file location

        Returns:
            The open connection

        Raises:
            DatabaseConnectionError: If a connection is already open or DuckDB cannot open the file
        """
        if self._connection is not None:
            raise DatabaseConnectionError(f"Trigger state database already open; close it before opening {db_path}")

        try:
            db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = duckdb.connect(str(db_path))
        except Exception as e:
            raise DatabaseConnectionError(f"Could not open trigger state database {db_path}: {e}")

        return self._connection

    def close_connection(self) -> None:
        connection, self._connection = self._connection, None
        if connection is not None:
            connection.close()

    def create_tables(self) -> None:
        """
        Ensure the trigger_state table exists

        Watermarks are kept as ISO 8601 text so UTC offsets round-trip unchanged.
        """
        connection = self._require_connection()
        try:
            connection.execute(TRIGGER_STATE_DDL)
        except Exception as e:
            raise DatabaseConnectionError(f"Could not create trigger_state table: {e}")

    def execute_with_transaction(self, query: str, params: Tuple = ()) -> Any:
        """
        Run a write inside its own transaction

        A failing statement is rolled back and its exception re-raised.

        Raises:
            DatabaseConnectionError: If the database is not open
        """
        connection = self._require_connection()
        connection.begin()
        try:
            result = connection.execute(query, params)
        except Exception:
            connection.rollback()
            raise
        connection.commit()
        return result

    def fetch_one(self, query: str, params: Tuple = ()) -> Optional[Tuple]:
        """First row of a read query, or None"""
        return self._require_connection().execute(query, params).fetchone()
