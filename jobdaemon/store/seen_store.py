"""
Durable record of every listing identifier the daemon has already processed.

One row per id, written once on first observation and never updated or
deleted. Existence of a row is the only memory the daemon has of prior runs.
"""

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from jobdaemon.core.models import JobListing

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS jobs (
    id TEXT PRIMARY KEY,
    title TEXT,
    company TEXT,
    location TEXT,
    date TEXT,
    salary TEXT,
    work_model TEXT,
    source TEXT,
    link TEXT,
    first_seen_at TEXT
)
"""

INSERT_SQL = """
INSERT OR IGNORE INTO jobs
    (id, title, company, location, date, salary, work_model, source, link, first_seen_at)
VALUES
    (:id, :title, :company, :location, :date, :salary, :work_model, :source, :link, :first_seen_at)
"""


class SeenStoreError(RuntimeError):
    """The store is unavailable; fatal for the current run."""


class SeenStore:
    """
    SQLite-backed seen set.
    Not internally locked: the orchestrator is the only caller and never
    calls it concurrently.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        self._conn: Optional[sqlite3.Connection] = None

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            try:
                if self.path != ":memory:":
                    Path(self.path).parent.mkdir(parents=True, exist_ok=True)
                conn = sqlite3.connect(self.path, check_same_thread=False)
                with conn:
                    conn.execute(SCHEMA)
            except (sqlite3.Error, OSError) as e:
                raise SeenStoreError(f"Cannot open seen-store at {self.path}: {e}") from e
            self._conn = conn
            logger.info(f"Seen-store opened at {self.path}")
        return self._conn

    def has(self, listing_id: str) -> bool:
        try:
            row = (
                self._connection()
                .execute("SELECT 1 FROM jobs WHERE id = ?", (listing_id,))
                .fetchone()
            )
        except sqlite3.Error as e:
            raise SeenStoreError(f"Lookup failed for {listing_id}: {e}") from e
        return row is not None

    def record(self, listing: JobListing) -> None:
        """Insert if absent; recording a known id again is a no-op."""
        params = listing.to_record()
        params["first_seen_at"] = datetime.now(timezone.utc).isoformat()
        conn = self._connection()
        try:
            with conn:
                conn.execute(INSERT_SQL, params)
        except sqlite3.Error as e:
            raise SeenStoreError(f"Insert failed for {listing.id}: {e}") from e

    def count(self) -> int:
        try:
            return self._connection().execute("SELECT COUNT(*) FROM jobs").fetchone()[0]
        except sqlite3.Error as e:
            raise SeenStoreError(f"Count failed: {e}") from e

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.info("Seen-store closed.")
