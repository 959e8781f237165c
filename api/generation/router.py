"""
Generation API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Response
from pydantic import BaseModel

from core.anthropic import AnthropicClient
from icons.dependencies import get_store
from icons.store import IconStore

from . import service
from .dependencies import get_client

router = APIRouter()


class GenerateRequest(BaseModel):
    name: str | None = None
    category: str | None = None
    style: str | None = None


@router.post("/generate")
async def generate(
    request: GenerateRequest | None = Body(default=None),
    client: AnthropicClient = Depends(get_client),
    store: IconStore = Depends(get_store),
) -> dict:
    request = request or GenerateRequest()
    return await service.generate_icon(
        request.name,
        category=request.category,
        style=request.style,
        client=client,
        store=store,
    )


@router.options("/generate")
async def generate_options() -> Response:
    return Response(status_code=200)
