"""Optimistic memo store.

``MemoStore`` owns the client side list of memos.  User actions change
the list immediately and are then sent to the API through
:class:`memo_api_client.MemoAPI`:

* ``create`` prepends a provisional memo with a negative temporary id,
  clears the draft, and replaces the provisional memo in place with
  the server's memo once the request succeeds;
* ``delete`` removes the memo at once and leaves it removed when the
  request succeeds.

Each write is tracked as a :class:`MemoOperation` that moves from
``pending`` to ``confirmed`` or ``reverted``.  On failure the store
goes back to the snapshot taken before the change.  If another
operation changed the list in the meantime, only the failed
operation's own change is undone so the other one is not lost.

Store methods never raise on API failures; the error text is left in
:attr:`MemoStore.message` for the UI to show.
"""

from __future__ import annotations

import enum
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from memo_api_client import ApiError, Memo, MemoAPI


logger = logging.getLogger(__name__)

TITLE_REQUIRED_MESSAGE = "Title is required"

# Finished operations kept in ``MemoStore.operations``; pending ones
# are always kept.
HISTORY_LIMIT = 20


class OperationKind(str, enum.Enum):
    CREATE = "create"
    DELETE = "delete"


class OperationStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    REVERTED = "reverted"


@dataclass
class MemoOperation:
    """Lifecycle record of one optimistic write.

    Attributes:
        kind: ``create`` or ``delete``.
        memo_id: Temporary id of the provisional memo for a create, the
            target id for a delete.
        snapshot: The memo list as it was before the change was applied.
        status: ``pending`` until the request resolves.
        index: Position the deleted memo had in the list.
        removed: The memo taken out by a delete.
        result: The server's memo for a confirmed create.
        error: Failure message for a reverted operation.
    """

    kind: OperationKind
    memo_id: int
    snapshot: List[Memo]
    status: OperationStatus = OperationStatus.PENDING
    index: int = -1
    removed: Optional[Memo] = None
    result: Optional[Memo] = None
    error: Optional[str] = None
    applied_version: int = 0


@dataclass
class MemoDraft:
    """Contents of the "new memo" input fields."""

    title: str = ""
    content: str = ""

    def clear(self) -> None:
        self.title = ""
        self.content = ""


class MemoStore:
    """Single owner of the client side memo list."""

    def __init__(self, api: MemoAPI) -> None:
        self.api = api
        self.message: Optional[str] = None
        self.draft = MemoDraft()
        self.operations: List[MemoOperation] = []
        self._memos: List[Memo] = []
        # Bumped on every change of ``_memos``; lets a failing operation
        # tell whether anything else touched the list after it did.
        self._version = 0
        self._last_temp_id = 0
        self._pending: Dict[str, int] = {"load": 0, "create": 0, "delete": 0}

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def memos(self) -> List[Memo]:
        return list(self._memos)

    @property
    def is_loading(self) -> bool:
        return self._pending["load"] > 0

    @property
    def is_creating(self) -> bool:
        return self._pending["create"] > 0

    @property
    def is_deleting(self) -> bool:
        return self._pending["delete"] > 0

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    async def load(self) -> None:
        """Replace the local list with the server's list.

        On failure the local list is left as it is.
        """
        with self._pending_request("load"):
            try:
                memos = await self.api.list_memos()
            except ApiError as exc:
                self.message = exc.message or "Failed to load memos"
                return
        self._set_memos(memos)

    async def create(self, title: str, content: str = "") -> Optional[MemoOperation]:
        """Optimistically create a memo.

        Returns the operation record, or ``None`` when the title is
        empty; in that case no request is sent and the list is not
        touched.
        """
        self.message = None
        if not title:
            self.message = TITLE_REQUIRED_MESSAGE
            return None

        temp_id = self._next_temp_id()
        op = MemoOperation(kind=OperationKind.CREATE, memo_id=temp_id, snapshot=self.memos)
        self.operations.append(op)
        self._set_memos([Memo(id=temp_id, title=title, content=content)] + self._memos)
        op.applied_version = self._version
        self.draft.clear()

        with self._pending_request("create"):
            try:
                created = await self.api.create_memo(title, content)
            except ApiError as exc:
                self._revert(op, exc.message or "Failed to create memo")
                return op
        self._confirm_create(op, created)
        self.message = "Memo created"
        return op

    async def submit_draft(self) -> Optional[MemoOperation]:
        """Create a memo from the current draft."""
        return await self.create(self.draft.title, self.draft.content)

    async def delete(self, memo_id: int) -> MemoOperation:
        """Optimistically delete a memo."""
        self.message = None
        op = MemoOperation(kind=OperationKind.DELETE, memo_id=memo_id, snapshot=self.memos)
        self.operations.append(op)
        for index, memo in enumerate(self._memos):
            if memo.id == memo_id:
                op.index, op.removed = index, memo
                break
        self._set_memos([m for m in self._memos if m.id != memo_id])
        op.applied_version = self._version

        with self._pending_request("delete"):
            try:
                await self.api.delete_memo(memo_id)
            except ApiError as exc:
                self._revert(op, exc.message or "Failed to delete memo")
                return op
        op.status = OperationStatus.CONFIRMED
        self._prune_operations()
        self.message = "Memo deleted"
        return op

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _set_memos(self, memos: List[Memo]) -> None:
        self._memos = list(memos)
        self._version += 1

    def _next_temp_id(self) -> int:
        # Negative, so it can never equal a server id; strictly
        # decreasing so two creates in the same tick still differ.
        temp_id = -time.time_ns()
        if temp_id >= self._last_temp_id:
            temp_id = self._last_temp_id - 1
        self._last_temp_id = temp_id
        return temp_id

    def _confirm_create(self, op: MemoOperation, created: Memo) -> None:
        ids = [m.id for m in self._memos]
        if op.memo_id in ids:
            self._set_memos([created if m.id == op.memo_id else m for m in self._memos])
        elif created.id not in ids:
            # A load replaced the list before the server had the memo.
            self._set_memos([created] + self._memos)
        op.result = created
        op.status = OperationStatus.CONFIRMED
        self._prune_operations()

    def _revert(self, op: MemoOperation, message: str) -> None:
        if self._version == op.applied_version:
            self._set_memos(op.snapshot)
        elif op.kind is OperationKind.CREATE:
            self._set_memos([m for m in self._memos if m.id != op.memo_id])
        elif op.removed is not None and all(m.id != op.memo_id for m in self._memos):
            memos = list(self._memos)
            memos.insert(min(op.index, len(memos)), op.removed)
            self._set_memos(memos)
        op.status = OperationStatus.REVERTED
        op.error = message
        self._prune_operations()
        self.message = message
        logger.warning("Reverted optimistic %s of memo %s: %s", op.kind.value, op.memo_id, message)

    def _prune_operations(self) -> None:
        finished = [op for op in self.operations if op.status is not OperationStatus.PENDING]
        excess = len(finished) - HISTORY_LIMIT
        if excess > 0:
            stale = {id(op) for op in finished[:excess]}
            self.operations = [op for op in self.operations if id(op) not in stale]

    @contextmanager
    def _pending_request(self, category: str) -> Iterator[None]:
        self._pending[category] += 1
        try:
            yield
        finally:
            self._pending[category] -= 1
