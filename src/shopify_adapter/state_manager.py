"""
StateManager module for persisting change-detection watermarks between polling cycles
"""

from datetime import datetime, timezone
from typing import Optional

from shopify_adapter.database_manager import DatabaseManager


class StateManager:
    """Reads and writes per-trigger watermarks in DuckDB"""

    def __init__(self, database_manager: DatabaseManager):
        self.db_manager = database_manager

    def load_watermark(self, trigger_id: str) -> Optional[datetime]:
        """
        Load the last persisted watermark for a trigger

        Args:
            trigger_id: Trigger identifier

        Returns:
            Timezone-aware watermark, or None if the trigger has never fired
        """
        query = """
        SELECT watermark FROM trigger_state
        WHERE trigger_id = ?
        """

        row = self.db_manager.fetch_one(query, (trigger_id,))
        if row is None:
            return None

        watermark = row[0]
        if isinstance(watermark, str):
            watermark = datetime.fromisoformat(watermark)
        if watermark.tzinfo is None:
            watermark = watermark.replace(tzinfo=timezone.utc)
        return watermark

    def save_watermark(self, trigger_id: str, watermark: datetime) -> None:
        """
        Save or update a trigger's watermark using UPSERT pattern

        Args:
            trigger_id: Trigger identifier
            watermark: New watermark; naive values are taken as UTC
        """
        if watermark.tzinfo is None:
            watermark = watermark.replace(tzinfo=timezone.utc)

        upsert_sql = """
        INSERT INTO trigger_state (trigger_id, watermark, last_updated)
        VALUES (?, ?, ?)
        ON CONFLICT (trigger_id) DO UPDATE SET
            watermark = EXCLUDED.watermark,
            last_updated = EXCLUDED.last_updated
        """

        params = (trigger_id, watermark.isoformat(), datetime.now())
        self.db_manager.execute_with_transaction(upsert_sql, params)

    def clear_state(self, trigger_id: str) -> None:
        """Forget a trigger's watermark so the next cycle starts from the lookback window"""
        self.db_manager.execute_with_transaction(
            "DELETE FROM trigger_state WHERE trigger_id = ?",
            (trigger_id,)
        )
