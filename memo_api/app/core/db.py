"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), a cursor context manager (``get_cursor``) and
``init_db`` which applies migrations on application start.  SQLite is
used as a lightweight embedded database; to switch to another DBMS you
would replace connection logic and adapt SQL syntax accordingly.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings

logger = logging.getLogger(__name__)


# Timestamps are stored as ISO‑8601 text with millisecond precision so
# that memos created within the same second still sort newest first.
TIMESTAMP_DEFAULT = "(strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))"


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: principals and memos
    (
        1,
        f"""
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            email TEXT NOT NULL UNIQUE,
            created_at TEXT NOT NULL DEFAULT {TIMESTAMP_DEFAULT}
        );

        -- author_id is written once by INSERT and never appears in an
        -- UPDATE statement.  Removing a user removes their memos.
        CREATE TABLE IF NOT EXISTS memos (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            content TEXT NOT NULL DEFAULT '',
            author_id INTEGER NOT NULL,
            created_at TEXT NOT NULL DEFAULT {TIMESTAMP_DEFAULT},
            updated_at TEXT NOT NULL DEFAULT {TIMESTAMP_DEFAULT},
            FOREIGN KEY(author_id) REFERENCES users(id) ON DELETE CASCADE
        );
        """,
    ),
    # Migration 2: index backing the per‑owner listing
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_memos_author_created
            ON memos(author_id, created_at DESC);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # memo_api/
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name and has
    foreign key enforcement switched on, which SQLite leaves disabled
    by default.  Without it the ``ON DELETE CASCADE`` clause on
    ``memos.author_id`` would be ignored.
    """
    db_path = get_database_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit.

    The transaction is committed when the block exits normally and
    rolled back (by closing without commit) when it raises.
    """
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  If you add a new migration, append it with an
    incremented version number.
    """
    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                logger.info("Applying migration %s", version)
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
