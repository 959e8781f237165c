"""
FastAPI dependencies for the icon store built at startup.
"""

from __future__ import annotations

from fastapi import Request

from .store import IconStore


def get_store(request: Request) -> IconStore:
    return request.app.state.icon_store
