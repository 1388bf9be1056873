"""
Pydantic schemas for memos.

A memo is a short note with a title and free‑text content that belongs
to exactly one user.  Responses use camelCase field names
(``authorId``, ``createdAt``) because that is what the browser client
consumes; the Python attributes stay snake_case.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class MemoCreate(BaseModel):
    """Schema for creating a new memo."""

    title: str = Field(..., min_length=1, description="Memo title; must not be empty")
    content: str = Field("", description="Memo body text")


class MemoUpdate(BaseModel):
    """Schema for replacing the title and content of a memo.

    Both fields are required; the owner is never part of the payload.
    """

    title: str = Field(..., min_length=1)
    content: str = Field("")


class MemoRead(BaseModel):
    """Schema for a memo returned by the API."""

    id: int
    title: str
    content: str
    author_id: int
    created_at: str
    updated_at: Optional[str] = None

    model_config = {
        "from_attributes": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }
