"""Repository layer encapsulating raw database interactions."""

from __future__ import annotations

import logging
import threading
from typing import List, Optional
import sqlite3

from .db import DatabaseManager

logger = logging.getLogger(__name__)

# Serialises insert-and-trim so concurrent saves cannot lose an update.
_SAVE_LOCK = threading.Lock()


class ResultRepository:
    """Persistence layer for the newest-first, size-capped list of performance results."""

    def __init__(self, db: DatabaseManager, max_results: int):
        self._db = db
        self._max_results = max_results

    def save(
        self,
        *,
        public_id: str,
        created_at_iso: str,
        prompt: str,
        metrics_json: str,
        feedback_json: str,
        audio_file_name: str,
    ) -> sqlite3.Row:
        """Insert a record and drop the oldest ones beyond the cap in a single transaction."""
        with _SAVE_LOCK, self._db.connect() as connection:
            cursor = connection.execute(
                """
                INSERT INTO performance_results(
                    public_id, created_at, prompt, metrics, feedback, audio_file_name
                )
                VALUES(?, ?, ?, ?, ?, ?)
                """,
                (public_id, created_at_iso, prompt, metrics_json, feedback_json, audio_file_name),
            )
            trimmed = connection.execute(
                """
                DELETE FROM performance_results
                WHERE id NOT IN (
                    SELECT id FROM performance_results ORDER BY id DESC LIMIT ?
                )
                """,
                (self._max_results,),
            ).rowcount
            if trimmed:
                logger.info("Dropped %d result(s) beyond the %d-record cap", trimmed, self._max_results)
            return connection.execute(
                "SELECT * FROM performance_results WHERE id=?", (cursor.lastrowid,)
            ).fetchone()

    def list_all(self) -> List[sqlite3.Row]:
        with self._db.connect() as connection:
            return connection.execute(
                "SELECT * FROM performance_results ORDER BY id DESC"
            ).fetchall()

    def get_recent(self, limit: int) -> List[sqlite3.Row]:
        with self._db.connect() as connection:
            return connection.execute(
                "SELECT * FROM performance_results ORDER BY id DESC LIMIT ?", (limit,)
            ).fetchall()

    def get(self, public_id: str) -> Optional[sqlite3.Row]:
        with self._db.connect() as connection:
            return connection.execute(
                "SELECT * FROM performance_results WHERE public_id=?", (public_id,)
            ).fetchone()

    def get_for_period(self, start_iso: str, end_iso: str) -> List[sqlite3.Row]:
        """Return records whose timestamp lies in [start, end], newest first."""
        with self._db.connect() as connection:
            return connection.execute(
                """
                SELECT * FROM performance_results
                WHERE created_at >= ? AND created_at <= ?
                ORDER BY id DESC
                """,
                (start_iso, end_iso),
            ).fetchall()

    def delete(self, public_id: str) -> int:
        with self._db.connect() as connection:
            cursor = connection.execute(
                "DELETE FROM performance_results WHERE public_id=?", (public_id,)
            )
        return cursor.rowcount

    def clear(self) -> int:
        with self._db.connect() as connection:
            cursor = connection.execute("DELETE FROM performance_results")
        return cursor.rowcount

    def expire_older_than(self, cutoff_iso: str) -> int:
        with self._db.connect() as connection:
            cursor = connection.execute(
                "DELETE FROM performance_results WHERE created_at < ?", (cutoff_iso,)
            )
        return cursor.rowcount
