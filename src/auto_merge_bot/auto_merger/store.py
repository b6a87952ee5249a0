"""SQLite storage for tracked pull requests.

Each row is a pull request URL waiting to be evaluated for auto-merge.
Rows are added when a pull request starts being watched and removed once it
is closed, merged, or about to be merged.
"""

import sqlite3
from contextlib import closing
from datetime import UTC, datetime
from pathlib import Path

from ..utils.logging import log_debug


class PullRequestStore:
    """Persistent list of tracked pull request URLs.

    Parameters
    ----------
    db_path : str
        Path to the SQLite database file. Parent directories are created.

    """

    def __init__(self, db_path: str):
        self._db_path = db_path
        Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _get_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.execute("PRAGMA busy_timeout=5000")
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self) -> None:
        with closing(self._get_connection()) as conn, conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS pull_requests (
                    id       INTEGER PRIMARY KEY AUTOINCREMENT,
                    url      TEXT    NOT NULL UNIQUE,
                    added_at TEXT    NOT NULL
                )
            """)
        log_debug(f"Pull request store initialized at {self._db_path}")

    def add(self, url: str) -> bool:
        """Start tracking a pull request URL.

        Returns
        -------
        bool
            True if the URL was added, False if it was already tracked.

        """
        with closing(self._get_connection()) as conn, conn:
            cursor = conn.execute(
                "INSERT OR IGNORE INTO pull_requests (url, added_at) VALUES (?, ?)",
                (url, datetime.now(UTC).isoformat()),
            )
            return cursor.rowcount > 0

    def delete(self, url: str) -> bool:
        """Stop tracking a pull request URL.

        Returns
        -------
        bool
            True if a row was removed.

        """
        with closing(self._get_connection()) as conn, conn:
            cursor = conn.execute("DELETE FROM pull_requests WHERE url = ?", (url,))
            return cursor.rowcount > 0

    def list_urls(self) -> list[str]:
        """Return all tracked URLs in the order they were added."""
        with closing(self._get_connection()) as conn:
            rows = conn.execute("SELECT url FROM pull_requests ORDER BY id").fetchall()
        return [row["url"] for row in rows]

    def __contains__(self, url: object) -> bool:
        with closing(self._get_connection()) as conn:
            row = conn.execute(
                "SELECT 1 FROM pull_requests WHERE url = ?", (url,)
            ).fetchone()
        return row is not None

    def __len__(self) -> int:
        with closing(self._get_connection()) as conn:
            row = conn.execute("SELECT COUNT(*) AS total FROM pull_requests").fetchone()
        return int(row["total"])
