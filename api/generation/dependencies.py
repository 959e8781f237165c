"""
FastAPI dependencies for the generation endpoint.
"""

from __future__ import annotations

from fastapi import Request

from core.anthropic import AnthropicClient


def get_client(request: Request) -> AnthropicClient:
    return request.app.state.anthropic_client
