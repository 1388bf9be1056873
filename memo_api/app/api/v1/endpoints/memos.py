"""
Memo endpoints for API v1.

All routes require an authenticated user and only ever touch that
user's memos.  Failures raised by ``MemoService`` are turned into
``{"message": ...}`` responses by the handler registered in
``main.py``:

* ``GET /memos/{id}`` answers 404 for a missing memo and 403 for a
  memo owned by someone else.
* ``PUT`` and ``DELETE`` answer 404 in both cases.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from memo_api.app.core.security import get_current_user_id
from memo_api.app.schemas.memo import MemoCreate, MemoRead, MemoUpdate
from memo_api.app.services.memo_service import MemoService

router = APIRouter()


@router.get("", response_model=List[MemoRead])
async def list_memos(user_id: int = Depends(get_current_user_id)) -> List[MemoRead]:
    """Return the caller's memos, newest first."""
    return await MemoService.list_memos_for_user(user_id)


@router.post("", response_model=MemoRead, status_code=status.HTTP_201_CREATED)
async def create_memo(
    memo_in: MemoCreate,
    user_id: int = Depends(get_current_user_id),
) -> MemoRead:
    """Create a memo owned by the caller."""
    return await MemoService.create_memo_for_user(user_id, memo_in.title, memo_in.content)


@router.get("/{memo_id}", response_model=MemoRead)
async def get_memo(memo_id: int, user_id: int = Depends(get_current_user_id)) -> MemoRead:
    return await MemoService.get_memo_for_user(user_id, memo_id)


@router.put("/{memo_id}", response_model=MemoRead)
async def update_memo(
    memo_id: int,
    memo_in: MemoUpdate,
    user_id: int = Depends(get_current_user_id),
) -> MemoRead:
    """Replace title and content of one of the caller's memos."""
    return await MemoService.update_memo_for_user(user_id, memo_id, memo_in.title, memo_in.content)


@router.delete("/{memo_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_memo(memo_id: int, user_id: int = Depends(get_current_user_id)) -> Response:
    """Delete one of the caller's memos."""
    await MemoService.delete_memo_for_user(user_id, memo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
