"""
Storage primitives for the ``memos`` table.

Every function takes an open cursor so the caller decides the
transaction boundary (see ``core.db.get_cursor``).  The write helpers
filter on both ``id`` and ``author_id`` in a single statement and
return the number of affected rows: ``1`` when the caller owns the
memo, ``0`` when it does not exist or belongs to someone else.  An id
outside the SQLite INTEGER range cannot name a stored row, so it is
reported as missing without reaching the database.
"""

from __future__ import annotations

import sqlite3
from typing import List, Optional

from memo_api.app.core.db import TIMESTAMP_DEFAULT

SQLITE_INTEGER_MIN = -(2 ** 63)
SQLITE_INTEGER_MAX = 2 ** 63 - 1


def _storable_id(memo_id: int) -> bool:
    return SQLITE_INTEGER_MIN <= memo_id <= SQLITE_INTEGER_MAX


def find_memos_by_author(cursor: sqlite3.Cursor, author_id: int) -> List[sqlite3.Row]:
    """Return all memos of ``author_id``, newest first."""
    return cursor.execute(
        """
        SELECT * FROM memos
        WHERE author_id = ?
        ORDER BY created_at DESC, id DESC
        """,
        (author_id,),
    ).fetchall()


def insert_memo(cursor: sqlite3.Cursor, title: str, content: str, author_id: int) -> sqlite3.Row:
    """Insert a memo and return the stored row (with id and timestamps)."""
    cursor.execute(
        "INSERT INTO memos (title, content, author_id) VALUES (?, ?, ?)",
        (title, content, author_id),
    )
    return find_memo_by_id(cursor, cursor.lastrowid)


def find_memo_by_id(cursor: sqlite3.Cursor, memo_id: int) -> Optional[sqlite3.Row]:
    if not _storable_id(memo_id):
        return None
    return cursor.execute("SELECT * FROM memos WHERE id = ?", (memo_id,)).fetchone()


def update_memos_by_author(
    cursor: sqlite3.Cursor,
    memo_id: int,
    author_id: int,
    title: str,
    content: str,
) -> int:
    """Update title and content of a memo only if ``author_id`` owns it.

    Returns the affected row count.
    """
    if not _storable_id(memo_id):
        return 0
    cursor.execute(
        f"""
        UPDATE memos
        SET title = ?, content = ?, updated_at = {TIMESTAMP_DEFAULT}
        WHERE id = ? AND author_id = ?
        """,
        (title, content, memo_id, author_id),
    )
    return cursor.rowcount


def delete_memos_by_author(cursor: sqlite3.Cursor, memo_id: int, author_id: int) -> int:
    """Delete a memo only if ``author_id`` owns it.

    Returns the affected row count.
    """
    if not _storable_id(memo_id):
        return 0
    cursor.execute(
        "DELETE FROM memos WHERE id = ? AND author_id = ?",
        (memo_id, author_id),
    )
    return cursor.rowcount
