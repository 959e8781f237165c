"""
Icon generation orchestration.

Flow:
1) Validate the request (name present, API key configured)
2) Build the prompt for the requested style
3) Ask the Anthropic Messages API for {"path": ..., "tags": [...]}
4) Parse the answer into an icon record
5) Save it to the icon store (outcome is logged, never fails the request)
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from core.anthropic import AnthropicClient
from core.errors import ClientInputError, ConfigurationError, GenerationError
from icons.schemas import DEFAULT_CATEGORY, Icon, display_name, now_ms, slugify
from icons.store import IconStore

from . import prompts

logger = logging.getLogger(__name__)

_FENCE_OPEN_RE = re.compile(r"```json\s*", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    text = _FENCE_OPEN_RE.sub("", (text or "").strip())
    return text.replace("```", "").strip()


def parse_icon_payload(text: str) -> dict[str, Any]:
    """
    Decode the model answer. Raises GenerationError unless it is a JSON
    object with a non-empty string `path`.
    """
    try:
        data = json.loads(strip_code_fences(text))
    except ValueError as exc:
        raise GenerationError() from exc

    if not isinstance(data, dict):
        raise GenerationError()
    path = data.get("path")
    if not isinstance(path, str) or not path.strip():
        raise GenerationError()
    return data


def _tags(payload: dict[str, Any], name: str) -> list[str]:
    tags = payload.get("tags")
    if not isinstance(tags, list):
        return [name.lower()]
    return [t.strip() for t in tags if isinstance(t, str) and t.strip()]


def build_icon(name: str, category: str, payload: dict[str, Any]) -> Icon:
    slug = slugify(name)
    if not slug:
        raise ClientInputError("Icon name must contain letters or digits.")

    return Icon(
        id=slug,
        name=display_name(name),
        category=category,
        tags=_tags(payload, name),
        path=payload["path"].strip(),
        generated=True,
        generated_at=now_ms(),
    )


async def generate_icon(
    name: str | None,
    *,
    category: str | None = None,
    style: str | None = None,
    client: AnthropicClient,
    store: IconStore,
) -> dict[str, Any]:
    if not client.configured:
        raise ConfigurationError("API key not configured on server.")

    name = name.strip() if isinstance(name, str) else ""
    if not name:
        raise ClientInputError("Missing icon name.")
    category = (category or "").strip() or DEFAULT_CATEGORY
    icon_style = prompts.IconStyle.parse(style)

    text = await client.complete(prompts.icon_prompt(name, category, icon_style))
    try:
        payload = parse_icon_payload(text)
    except GenerationError:
        logger.error("icon_generation_unparseable name=%s snippet=%s", name, text[:200])
        raise

    icon = build_icon(name, category, payload)

    result = await store.save_result(icon)
    if not result.accepted:
        logger.warning("icon_generation_not_persisted id=%s duplicate=%s", icon.id, result.duplicate)
    else:
        logger.info("icon_generated id=%s style=%s destination=%s", icon.id, icon_style.value, result.destination)

    return {"icon": icon.to_json()}
