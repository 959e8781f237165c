"""
Icon listing and manual icon submission.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from core.errors import ClientInputError

from .schemas import CreateIconRequest, Icon
from .store import IconStore


async def list_icons(store: IconStore) -> dict[str, Any]:
    icons = await store.fetch_all()
    return {"icons": [icon.to_json() for icon in icons]}


def _icon_from_request(payload: Any) -> Icon:
    if not isinstance(payload, dict):
        raise ClientInputError("Invalid icon data.")
    try:
        request = CreateIconRequest.model_validate(payload)
    except ValidationError as exc:
        raise ClientInputError("Invalid icon data.") from exc

    if not (request.id or "").strip() or not (request.path or "").strip():
        raise ClientInputError("Invalid icon data.")
    try:
        return Icon.model_validate(request.model_dump(by_alias=True, exclude_none=True))
    except ValidationError as exc:
        raise ClientInputError("Invalid icon data.") from exc


async def create_icon(payload: Any, store: IconStore) -> dict[str, Any]:
    icon = _icon_from_request(payload)
    saved = await store.save(icon)
    if not saved:
        raise ClientInputError("Icon already exists or failed to save.")
    return {"success": True, "icon": icon.to_json()}
