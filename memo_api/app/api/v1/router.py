"""
Top‑level router for version 1 of the API.

This router aggregates domain‑specific routers under a unified prefix.
When new domains are introduced, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import memos

router = APIRouter()

router.include_router(memos.router, prefix="/memos", tags=["memos"])
