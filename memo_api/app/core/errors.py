"""
Typed failures raised by the service layer.

Each error carries the HTTP status code the API layer should answer
with and a human readable message.  ``main.py`` registers a handler
that renders any ``ServiceError`` as ``{"message": ...}``.

The read path distinguishes a missing memo from a memo owned by
somebody else.  The owner‑scoped write path cannot tell the two apart
(zero affected rows) and reports a single ``MemoNotFoundOrForbiddenError``
so a non‑owner learns nothing about which ids exist.
"""

from __future__ import annotations

from fastapi import status


class ServiceError(Exception):
    """Base class for errors that map onto an HTTP status code."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MemoNotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Memo not found"


class MemoForbiddenError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You do not have access to this memo"


class MemoNotFoundOrForbiddenError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Memo not found or you do not have permission to modify it"
