"""
Anthropic Messages API client.

Used endpoint:
- POST /v1/messages  -> {"content": [{"type": "text", "text": "..."}], ...}

One request per call: no streaming, no retries.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from .errors import GENERIC_GENERATION_MESSAGE, ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_UPSTREAM_MESSAGE = "Upstream API error."


def _normalize_base_url(base_url: str) -> str:
    base_url = (base_url or "").strip()
    if not base_url:
        raise ConfigurationError("ANTHROPIC_BASE_URL is empty.")
    return base_url.rstrip("/")


def upstream_error_message(body: str) -> str:
    """
    Pull `error.message` out of an Anthropic error body, if there is one.
    """
    try:
        data = json.loads(body)
    except ValueError:
        return DEFAULT_UPSTREAM_MESSAGE
    if not isinstance(data, dict):
        return DEFAULT_UPSTREAM_MESSAGE
    error = data.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message.strip():
            return f"Anthropic Error: {message.strip()}"
    return DEFAULT_UPSTREAM_MESSAGE


def response_text(data: dict[str, Any]) -> str:
    """
    Concatenate every text fragment of a Messages API response.
    """
    content = data.get("content")
    if not isinstance(content, list):
        return ""
    parts: list[str] = []
    for block in content:
        if isinstance(block, dict):
            text = block.get("text")
            if isinstance(text, str):
                parts.append(text)
    return "".join(parts).strip()


class AnthropicClient:
    def __init__(
        self,
        *,
        api_key: str | None,
        base_url: str,
        model: str,
        version: str,
        max_tokens: int = 512,
        timeout_s: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = (api_key or "").strip() or None
        self.base_url = _normalize_base_url(base_url)
        self.model = model
        self.version = version
        self.max_tokens = max_tokens
        self.timeout_s = timeout_s
        # Tests pass an httpx.MockTransport here.
        self._transport = transport

    @property
    def configured(self) -> bool:
        return self.api_key is not None

    def _headers(self) -> dict[str, str]:
        if self.api_key is None:
            raise ConfigurationError("API key not configured on server.")
        return {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": self.version,
        }

    async def complete(self, prompt: str, *, max_tokens: int | None = None) -> str:
        """
        Send one user message and return the concatenated response text.
        """
        headers = self._headers()
        payload: dict[str, Any] = {
            "model": self.model,
            "max_tokens": int(max_tokens or self.max_tokens),
            "messages": [{"role": "user", "content": prompt}],
        }

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout_s,
                transport=self._transport,
            ) as client:
                resp = await client.post("/v1/messages", headers=headers, json=payload)
        except httpx.HTTPError as exc:
            logger.error("anthropic_request_failed model=%s error=%s", self.model, exc)
            raise UpstreamError(GENERIC_GENERATION_MESSAGE, status_code=500) from exc

        if resp.status_code < 200 or resp.status_code >= 300:
            # Avoid dumping huge bodies; include a small snippet.
            body = resp.text
            logger.error("anthropic_api_error status=%s body=%s", resp.status_code, body[:500])
            raise UpstreamError(upstream_error_message(body), status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as exc:
            logger.error("anthropic_response_not_json status=%s", resp.status_code)
            raise UpstreamError(GENERIC_GENERATION_MESSAGE, status_code=500) from exc
        if not isinstance(data, dict):
            raise UpstreamError(GENERIC_GENERATION_MESSAGE, status_code=500)
        return response_text(data)
