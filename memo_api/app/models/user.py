"""Storage primitives for the ``users`` table."""

from __future__ import annotations

import sqlite3
from typing import Optional


def find_user_by_email(cursor: sqlite3.Cursor, email: str) -> Optional[sqlite3.Row]:
    return cursor.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()


def find_user_by_id(cursor: sqlite3.Cursor, user_id: int) -> Optional[sqlite3.Row]:
    return cursor.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()


def insert_user(cursor: sqlite3.Cursor, email: str) -> sqlite3.Row:
    cursor.execute("INSERT INTO users (email) VALUES (?)", (email,))
    return find_user_by_id(cursor, cursor.lastrowid)


def delete_user(cursor: sqlite3.Cursor, user_id: int) -> int:
    """Delete a user; their memos go with them through ``ON DELETE CASCADE``."""
    cursor.execute("DELETE FROM users WHERE id = ?", (user_id,))
    return cursor.rowcount
