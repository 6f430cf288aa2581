"""SQLite-backed key-value store.

One ``preferences`` table holds every key; each value is replaced as a whole,
so a read never observes a partially written value.
"""

from __future__ import annotations

import os
import sqlite3

from signalnoise.domain.store_errors import StoreError


class SqliteKeyValueStore:
    def __init__(self, db_path: str):
        self.db_path = db_path
        self._init_db()

    def _get_connection(self) -> sqlite3.Connection:
        directory = os.path.dirname(self.db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_db(self) -> None:
        try:
            conn = self._get_connection()
            try:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS preferences (
                        key   TEXT PRIMARY KEY,
                        value TEXT NOT NULL
                    )
                    """
                )
                conn.commit()
            finally:
                conn.close()
        except (OSError, sqlite3.Error) as exc:
            raise StoreError(f"Cannot open {self.db_path}: {exc}") from exc

    def get(self, key: str) -> str | None:
        try:
            conn = self._get_connection()
            try:
                row = conn.execute("SELECT value FROM preferences WHERE key = ?", (key,)).fetchone()
            finally:
                conn.close()
        except (OSError, sqlite3.Error) as exc:
            raise StoreError(f"Failed to read {key!r}: {exc}") from exc
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        try:
            conn = self._get_connection()
            try:
                conn.execute(
                    "INSERT INTO preferences (key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    (key, value),
                )
                conn.commit()
            finally:
                conn.close()
        except (OSError, sqlite3.Error) as exc:
            raise StoreError(f"Failed to write {key!r}: {exc}") from exc
