"""Memo API client.

This module defines a thin asynchronous wrapper around the memo REST
API.  It plays the role of the browser's ``fetch`` helper:

* every request carries the session cookie (the API authenticates by
  cookie, the same as the browser does with ``credentials: "include"``);
* a JSON ``Content-Type`` header is merged with any caller supplied
  headers, the caller's values winning;
* any non‑2xx response becomes an :class:`ApiError`.  The message is
  taken from the JSON body (``{"message": ...}``) when the response is
  JSON, otherwise it is built from the status line;
* a ``204 No Content`` response yields ``None``.

The client uses ``httpx`` so that it can be awaited from the asyncio
loop that drives :mod:`memo_store`.

High‑level methods:

* :meth:`MemoAPI.list_memos` – return the caller's memos.
* :meth:`MemoAPI.get_memo` – fetch a single memo.
* :meth:`MemoAPI.create_memo` – create a memo.
* :meth:`MemoAPI.update_memo` – replace title and content.
* :meth:`MemoAPI.delete_memo` – delete a memo.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api"
DEFAULT_COOKIE_NAME = "token"


class ApiError(Exception):
    """Raised for every failed request.

    Attributes:
        message: Human readable text suitable for showing to the user.
        status_code: HTTP status of the response, or ``None`` when the
            request never produced a response (connection refused,
            timeout, ...).
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass
class Memo:
    """A memo as seen by the client.

    ``id`` is negative for a memo that was added optimistically and
    has not been confirmed by the server yet.
    """

    id: int
    title: str
    content: str = ""
    author_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Memo":
        return cls(
            id=int(data["id"]),
            title=data.get("title", ""),
            content=data.get("content") or "",
            author_id=data.get("authorId", data.get("author_id")),
            created_at=data.get("createdAt", data.get("created_at")),
            updated_at=data.get("updatedAt", data.get("updated_at")),
        )

    @property
    def is_provisional(self) -> bool:
        return self.id < 0


@dataclass
class MemoAPI:
    """Client for the memo endpoints.

    Args:
        base_url: Base URL including the API prefix, e.g.
            ``http://localhost:8000/api``.
        token: Session token sent as the ``cookie_name`` cookie.
        cookie_name: Name of the session cookie.
        timeout: Transport timeout in seconds.
        transport: Optional ``httpx`` transport, used by tests to plug
            in ``httpx.MockTransport`` or ``httpx.ASGITransport``.
    """

    base_url: str = DEFAULT_BASE_URL
    token: Optional[str] = None
    cookie_name: str = DEFAULT_COOKIE_NAME
    timeout: float = 15.0
    transport: Optional[httpx.AsyncBaseTransport] = None
    _client: Optional[httpx.AsyncClient] = field(default=None, init=False, repr=False)

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            cookies = {self.cookie_name: self.token} if self.token else None
            self._client = httpx.AsyncClient(
                base_url=self.base_url.rstrip("/"),
                cookies=cookies,
                timeout=self.timeout,
                transport=self.transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "MemoAPI":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    async def request(
        self,
        method: str,
        path: str,
        *,
        json_body: Any | None = None,
        headers: Dict[str, str] | None = None,
    ) -> Any:
        """Perform an HTTP request and return the decoded JSON body.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/memos``).
            json_body: Value serialised as the JSON request body.
            headers: Extra headers; they override the defaults.
        Returns:
            The parsed JSON response, or ``None`` for ``204``.
        Raises:
            ApiError: on any transport failure or non‑2xx status.
        """
        merged_headers = {"Content-Type": "application/json", **(headers or {})}
        logger.debug("Sending %s request to %s", method, path)
        try:
            response = await self.client.request(
                method,
                path,
                json=json_body,
                headers=merged_headers,
            )
        except httpx.HTTPError as exc:
            logger.error("API request %s %s failed: %s", method, path, exc)
            raise ApiError(str(exc) or exc.__class__.__name__) from exc

        if not response.is_success:
            message = self._error_message(response)
            logger.error("API request %s %s failed (%s): %s", method, path, response.status_code, message)
            raise ApiError(message, response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.error("API request %s %s returned invalid JSON", method, path)
            raise ApiError("The server returned an invalid response", response.status_code) from exc

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        status_line = f"Server error: {response.status_code} {response.reason_phrase}".rstrip()
        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            return status_line
        try:
            body = response.json()
        except ValueError:
            return status_line
        if isinstance(body, dict):
            message = body.get("message") or body.get("detail")
            if message:
                return str(message)
        return status_line

    # ------------------------------------------------------------------
    # Memo operations
    # ------------------------------------------------------------------
    async def list_memos(self) -> List[Memo]:
        data = await self.request("GET", "/memos")
        if not isinstance(data, list):
            raise ApiError("The server returned an invalid response")
        return [self._parse_memo(item) for item in data]

    async def get_memo(self, memo_id: int) -> Memo:
        data = await self.request("GET", f"/memos/{memo_id}")
        return self._parse_memo(data)

    async def create_memo(self, title: str, content: str) -> Memo:
        data = await self.request("POST", "/memos", json_body={"title": title, "content": content})
        return self._parse_memo(data)

    async def update_memo(self, memo_id: int, title: str, content: str) -> Memo:
        data = await self.request(
            "PUT", f"/memos/{memo_id}", json_body={"title": title, "content": content}
        )
        return self._parse_memo(data)

    async def delete_memo(self, memo_id: int) -> None:
        await self.request("DELETE", f"/memos/{memo_id}")

    @staticmethod
    def _parse_memo(data: Any) -> Memo:
        try:
            return Memo.from_json(data)
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("Unexpected memo payload: %r", data)
            raise ApiError("The server returned an invalid response") from exc
