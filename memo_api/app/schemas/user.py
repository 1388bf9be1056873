"""
Pydantic model for the principals that own memos.

Users are registered by the external login service; this API only
needs their id and email to resolve a session token to an owner.
"""

from pydantic import BaseModel, Field


class UserRead(BaseModel):
    """Schema for reading a user record."""

    id: int
    email: str = Field(..., examples=["user@example.com"])
    created_at: str

    model_config = {
        "from_attributes": True,
    }
