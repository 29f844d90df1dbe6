"""Database connection helpers and schema management."""

from __future__ import annotations

import sqlite3


class DatabaseManager:
    """Manage SQLite connections and schema lifecycle for the application."""

    def __init__(self, db_path: str):
        """Store the initial database path."""
        self._db_path = db_path

    def set_path(self, db_path: str) -> None:
        """Update the database path (used by tests to point to temporary files)."""
        self._db_path = db_path

    def connect(self) -> sqlite3.Connection:
        """Create a new SQLite connection returning rows addressable by column name."""
        conn_obj = sqlite3.connect(self._db_path)
        conn_obj.row_factory = sqlite3.Row
        return conn_obj

    def initialize(self) -> None:
        """Ensure the results table and its indexes are present."""
        with self.connect() as connection:
            self._ensure_results_table(connection)
            self._ensure_indexes(connection)

    @staticmethod
    def _ensure_results_table(conn_obj: sqlite3.Connection) -> None:
        """Create the performance_results table when missing."""
        conn_obj.execute(
            """
            CREATE TABLE IF NOT EXISTS performance_results (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                public_id TEXT NOT NULL UNIQUE,
                created_at TEXT NOT NULL,
                prompt TEXT NOT NULL,
                metrics TEXT NOT NULL,
                feedback TEXT NOT NULL,
                audio_file_name TEXT NOT NULL DEFAULT ''
            );
            """
        )

    @staticmethod
    def _ensure_indexes(conn_obj: sqlite3.Connection) -> None:
        """Create the index used by period queries and the expiry sweep."""
        conn_obj.execute(
            "CREATE INDEX IF NOT EXISTS idx_results_created_at ON performance_results(created_at);"
        )
