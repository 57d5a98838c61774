"""
Key/Value Storage - Durable JSON values in a small SQLite database.

Launch history only needs two values (a count map and a recency list), so
the schema is a single key/value table. Values are JSON-encoded and the
last write wins.

Storage is best-effort: read failures return the caller's default and
write failures are logged, so a broken database never blocks startup or
an app launch.
"""

import json
import sqlite3
from pathlib import Path
from typing import Any

from loguru import logger


class KeyValueStore:
    """
    SQLite-backed key/value store.

    Methods:
        get(key, default): Read a JSON value, or default if missing/corrupt
        set(key, value): Write a JSON value
        set_many(values): Write several values atomically
        close(): Close the connection
    """

    def __init__(self, db_path: Path | str = ":memory:"):
        self.db_path = db_path

        try:
            self._conn = self._open(db_path)
        except (sqlite3.Error, OSError):
            # Unreadable file or data directory: keep running with nothing persisted
            logger.exception(f"Could not open {db_path}, history will not be saved")
            self._conn = self._open(":memory:")

        logger.debug(f"KeyValueStore initialized with db at {db_path}")

    @staticmethod
    def _open(db_path: Path | str) -> sqlite3.Connection:
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(db_path))
        try:
            # Persistent connection with WAL mode, as the app only keeps one
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)
            conn.commit()
        except sqlite3.Error:
            conn.close()
            raise
        return conn

    def get(self, key: str, default: Any = None) -> Any:
        try:
            row = self._conn.execute(
                "SELECT value FROM kv WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error:
            logger.exception(f"Failed to read '{key}'")
            return default

        if row is None:
            return default

        try:
            return json.loads(row[0])
        except ValueError:
            logger.warning(f"Ignoring corrupt value stored under '{key}'")
            return default

    def set(self, key: str, value: Any) -> None:
        try:
            self._conn.execute("""
                INSERT INTO kv (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
            """, (key, json.dumps(value)))
            self._conn.commit()
        except sqlite3.Error:
            logger.exception(f"Failed to write '{key}'")

    def set_many(self, values: dict[str, Any]) -> None:
        """Write several values in one transaction; all or none are stored."""
        rows = [(key, json.dumps(value)) for key, value in values.items()]
        try:
            with self._conn:
                self._conn.executemany("""
                    INSERT INTO kv (key, value) VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """, rows)
        except sqlite3.Error:
            logger.exception(f"Failed to write {', '.join(values)}")

    def close(self) -> None:
        self._conn.close()
