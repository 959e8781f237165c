"""
Icon API endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Response

from . import service
from .dependencies import get_store
from .store import IconStore

router = APIRouter()


@router.get("/icons")
async def list_icons(store: IconStore = Depends(get_store)) -> dict:
    """
    Baseline icons followed by hosted-store icons, one entry per id.
    """
    return await service.list_icons(store)


@router.post("/icons")
async def create_icon(
    payload: Any = Body(default=None),
    store: IconStore = Depends(get_store),
) -> dict:
    # Shape is checked by the service so every bad body gets the same message.
    return await service.create_icon(payload, store)


@router.options("/icons")
async def icons_options() -> Response:
    return Response(status_code=200)
