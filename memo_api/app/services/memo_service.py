"""
Service layer for memos.

Every operation is scoped to the acting user.  Reads check existence
and ownership separately so the API can answer 404 or 403.  Writes
never read first: ``update`` and ``delete`` run a single statement
filtered on ``id`` and ``author_id`` and treat zero affected rows as
the opaque ``MemoNotFoundOrForbiddenError``.  Because the check and
the write are one statement, a concurrent delete cannot slip between
them.

Errors from ``sqlite3`` are not caught here; they propagate to the
API layer unchanged.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List

from memo_api.app.core.db import get_cursor
from memo_api.app.core.errors import (
    MemoForbiddenError,
    MemoNotFoundError,
    MemoNotFoundOrForbiddenError,
)
from memo_api.app.models import memo as memo_model
from memo_api.app.schemas.memo import MemoRead

logger = logging.getLogger(__name__)


class MemoService:
    """Service class for ownership‑scoped memo operations."""

    @classmethod
    async def list_memos_for_user(cls, user_id: int) -> List[MemoRead]:
        """Return the memos owned by ``user_id``, newest first.

        An empty list is returned when the user owns nothing.
        """
        with get_cursor() as cursor:
            rows = memo_model.find_memos_by_author(cursor, user_id)
            return [cls._row_to_memo_read(row) for row in rows]

    @classmethod
    async def create_memo_for_user(cls, user_id: int, title: str, content: str) -> MemoRead:
        """Insert a memo owned by ``user_id`` and return it.

        Title and content are stored as given; input validation happens
        in the request schema.
        """
        with get_cursor() as cursor:
            row = memo_model.insert_memo(cursor, title, content, user_id)
            memo = cls._row_to_memo_read(row)
        logger.info("User %s created memo %s", user_id, memo.id)
        return memo

    @classmethod
    async def get_memo_for_user(cls, user_id: int, memo_id: int) -> MemoRead:
        """Return a single memo if it exists and belongs to ``user_id``.

        Raises
        ------
        MemoNotFoundError
            No memo with ``memo_id`` exists.
        MemoForbiddenError
            The memo exists but is owned by another user.
        """
        with get_cursor() as cursor:
            row = memo_model.find_memo_by_id(cursor, memo_id)
        if row is None:
            raise MemoNotFoundError()
        if row["author_id"] != user_id:
            logger.warning("User %s denied read access to memo %s", user_id, memo_id)
            raise MemoForbiddenError()
        return cls._row_to_memo_read(row)

    @classmethod
    async def update_memo_for_user(
        cls,
        user_id: int,
        memo_id: int,
        title: str,
        content: str,
    ) -> MemoRead:
        """Replace title and content of a memo owned by ``user_id``.

        The memo is re‑read inside the same transaction after the write,
        so the returned value is exactly what was stored.

        Raises
        ------
        MemoNotFoundOrForbiddenError
            The scoped update touched no row.
        """
        with get_cursor() as cursor:
            affected = memo_model.update_memos_by_author(cursor, memo_id, user_id, title, content)
            if affected == 0:
                logger.warning("User %s: update of memo %s matched no owned row", user_id, memo_id)
                raise MemoNotFoundOrForbiddenError()
            row = memo_model.find_memo_by_id(cursor, memo_id)
            if row is None:
                raise MemoNotFoundOrForbiddenError()
            memo = cls._row_to_memo_read(row)
        logger.info("User %s updated memo %s", user_id, memo_id)
        return memo

    @classmethod
    async def delete_memo_for_user(cls, user_id: int, memo_id: int) -> None:
        """Delete a memo owned by ``user_id``.

        Raises
        ------
        MemoNotFoundOrForbiddenError
            The scoped delete touched no row.
        """
        with get_cursor() as cursor:
            affected = memo_model.delete_memos_by_author(cursor, memo_id, user_id)
            if affected == 0:
                logger.warning("User %s: delete of memo %s matched no owned row", user_id, memo_id)
                raise MemoNotFoundOrForbiddenError()
        logger.info("User %s deleted memo %s", user_id, memo_id)

    @staticmethod
    def _row_to_memo_read(row: sqlite3.Row) -> MemoRead:
        """Convert a database row to a MemoRead schema instance."""
        return MemoRead(
            id=row["id"],
            title=row["title"],
            content=row["content"],
            author_id=row["author_id"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
