"""
SQLite-backed durable key/value storage.
Each key holds one JSON document, read and written whole.
"""

import aiosqlite
import json
from datetime import datetime, timezone
from typing import Any, Optional
import os


class SQLiteDatabase:
    """Local storage for every store, the settings record and the action queue."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._connection: Optional[aiosqlite.Connection] = None

    async def _get_connection(self) -> aiosqlite.Connection:
        """Get or create database connection."""
        if self._connection is None:
            os.makedirs(os.path.dirname(self.db_path) or ".", exist_ok=True)
            self._connection = await aiosqlite.connect(self.db_path)
            self._connection.row_factory = aiosqlite.Row
        return self._connection

    async def initialize(self) -> None:
        """Create database tables."""
        conn = await self._get_connection()

        await conn.executescript("""
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL
            );
        """)
        await conn.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    # ===== Raw Operations =====

    async def get_item(self, key: str) -> Optional[str]:
        conn = await self._get_connection()
        cursor = await conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
        row = await cursor.fetchone()
        return row["value"] if row else None

    async def set_item(self, key: str, value: str) -> None:
        conn = await self._get_connection()
        await conn.execute(
            """
            INSERT INTO kv_store (key, value, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at = excluded.updated_at
            """,
            (key, value, datetime.now(timezone.utc).isoformat())
        )
        await conn.commit()

    async def remove_item(self, key: str) -> bool:
        conn = await self._get_connection()
        cursor = await conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        await conn.commit()
        return cursor.rowcount > 0

    # ===== JSON Helpers =====

    async def get_json(self, key: str) -> Any:
        """
        Read and decode a JSON value.

        Returns None when the key is absent. Raises ValueError
        (json.JSONDecodeError) when the stored text is not valid JSON.
        """
        raw = await self.get_item(key)
        if raw is None:
            return None
        return json.loads(raw)

    async def set_json(self, key: str, value: Any) -> None:
        await self.set_item(key, json.dumps(value, default=str))
