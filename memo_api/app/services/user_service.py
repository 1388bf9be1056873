"""
Business logic for users.

Users are the principals memos belong to.  Registration and login are
handled by a separate authentication service; this module only offers
what the memo API needs: resolving a token subject to a user, and
creating or removing users for tooling and tests.
"""

import logging
from typing import Optional

from memo_api.app.core.db import get_cursor
from memo_api.app.models import user as user_model
from memo_api.app.schemas.user import UserRead


class UserService:
    """Service for looking up and managing memo owners."""

    @classmethod
    async def get_user_by_email(cls, email: str) -> Optional[UserRead]:
        """Return the user with ``email`` or ``None``."""
        with get_cursor() as cursor:
            row = user_model.find_user_by_email(cursor, email)
        if row is None:
            return None
        return UserRead(id=row["id"], email=row["email"], created_at=row["created_at"])

    @classmethod
    async def create_user(cls, email: str) -> UserRead:
        """Create a user.

        Raises ``sqlite3.IntegrityError`` if the email is already taken.
        """
        logger = logging.getLogger(__name__)
        with get_cursor() as cursor:
            row = user_model.insert_user(cursor, email)
        logger.info("Registered user %s as id %s", email, row["id"])
        return UserRead(id=row["id"], email=row["email"], created_at=row["created_at"])

    @classmethod
    async def get_or_create_user(cls, email: str) -> UserRead:
        user = await cls.get_user_by_email(email)
        if user is not None:
            return user
        return await cls.create_user(email)

    @classmethod
    async def delete_user(cls, user_id: int) -> bool:
        """Delete a user and, by cascade, all of their memos.

        Returns ``True`` if a user was deleted, ``False`` otherwise.
        """
        logger = logging.getLogger(__name__)
        with get_cursor() as cursor:
            affected = user_model.delete_user(cursor, user_id)
        if affected:
            logger.info("Deleted user %s", user_id)
        return affected > 0
