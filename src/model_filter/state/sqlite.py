"""
SQLite-backed session store.

Persists each session's state entries as JSON so submitted filters survive
across processes, the way a server-side session survives across requests.

Example:
    >>> with SQLiteSessionStore("data/sessions.db", session_id="alice") as store:
    ...     engine = FilterEngine(store, "tickets")
    ...     engine.set_form_data({"status": "open"})
"""

from __future__ import annotations

import json
import sqlite3
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from model_filter.utils.logging import get_logger

logger = get_logger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS session_state (
    session_id TEXT NOT NULL,
    name TEXT NOT NULL,
    value_json TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    PRIMARY KEY (session_id, name)
)
"""


class SQLiteSessionStore:
    """State store for one session in a SQLite database.

    Concurrent writers to the same session and name are not coordinated;
    the last write wins.

    Attributes:
        db_path: Path to the SQLite database file
        session_id: Session whose entries this store reads and writes
    """

    def __init__(
        self,
        db_path: str | Path,
        session_id: str = "default",
        *,
        timeout: float = 30.0,
    ):
        """Initialize the store. The connection is opened on first use.

        Args:
            db_path: Path to SQLite database file (":memory:" for a private db)
            session_id: Session identifier
            timeout: Connection timeout in seconds
        """
        self.db_path = db_path if db_path == ":memory:" else Path(db_path)
        self.session_id = session_id
        self._timeout = timeout
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get active database connection, creating if needed."""
        if self._connection is None:
            self._connect()
        return self._connection  # type: ignore

    def _connect(self) -> None:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._connection = sqlite3.connect(self.db_path, timeout=self._timeout)
        self._connection.row_factory = sqlite3.Row
        self._connection.execute(SCHEMA)
        self._connection.commit()

        logger.debug("session_store_opened", path=str(self.db_path), session_id=self.session_id)

    def has(self, name: str) -> bool:
        row = self.connection.execute(
            "SELECT 1 FROM session_state WHERE session_id = ? AND name = ?",
            (self.session_id, name),
        ).fetchone()
        return row is not None

    def get(self, name: str, default: Any = None) -> Any:
        row = self.connection.execute(
            "SELECT value_json FROM session_state WHERE session_id = ? AND name = ?",
            (self.session_id, name),
        ).fetchone()
        if row is None:
            return default
        return json.loads(row["value_json"])

    def set(self, name: str, value: Any) -> None:
        value_json = json.dumps(value)
        now = datetime.now(UTC).isoformat()

        with self.connection:
            self.connection.execute(
                """
                INSERT INTO session_state (session_id, name, value_json, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT (session_id, name) DO UPDATE SET
                    value_json = excluded.value_json,
                    updated_at = excluded.updated_at
                """,
                (self.session_id, name, value_json, now),
            )

        logger.debug("session_state_saved", session_id=self.session_id, name=name)

    def close(self) -> None:
        """Close the database connection."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def __enter__(self) -> SQLiteSessionStore:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"SQLiteSessionStore({str(self.db_path)!r}, session_id={self.session_id!r})"
