"""Local key-value storage for the calendar (the fast sink).

A small SQLite database in the profile directory behaving like a browser's
``localStorage``: synchronous, string keys, string values.
"""
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional

from config import get_logger
from config.exceptions import StorageError

logger = get_logger(__name__)


class LocalStorage:
    """String key/value persistence backed by SQLite.

    Attributes:
        db_path: Location of the database file.
    """

    SCHEMA = """
    CREATE TABLE IF NOT EXISTS items (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );
    """

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self._lock = threading.Lock()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()
        logger.info(f"LocalStorage initialized at {self.db_path}")

    @contextmanager
    def _connection(self):
        """Open a connection, translating sqlite failures to StorageError."""
        try:
            conn = sqlite3.connect(self.db_path, timeout=10.0)
        except sqlite3.Error as e:
            raise StorageError(f"Could not open local storage: {e}", {"path": str(self.db_path)})
        try:
            with conn:
                yield conn
        except sqlite3.Error as e:
            raise StorageError(f"Local storage error: {e}", {"path": str(self.db_path)})
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._connection() as conn:
            conn.executescript(self.SCHEMA)

    def get_item(self, key: str) -> Optional[str]:
        """Value stored under ``key`` or None."""
        with self._lock, self._connection() as conn:
            row = conn.execute("SELECT value FROM items WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        with self._lock, self._connection() as conn:
            conn.execute(
                """
                INSERT INTO items (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (key, value),
            )
        logger.debug(f"Stored {len(value)} chars under {key}")

    def remove_item(self, key: str) -> None:
        with self._lock, self._connection() as conn:
            conn.execute("DELETE FROM items WHERE key = ?", (key,))

    def keys(self) -> List[str]:
        with self._lock, self._connection() as conn:
            return [row[0] for row in conn.execute("SELECT key FROM items ORDER BY key")]

