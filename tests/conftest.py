"""
Shared fixtures: an in-memory stand-in for the hosted icons table, snapshot
files under tmp_path, and an app wired with overridden dependencies.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from core.anthropic import AnthropicClient
from core.settings import Settings
from icons.snapshot import LocalSnapshot
from icons.store import IconStore

COLUMNS = ["id", "name", "category", "tags", "path", "generated", "generatedAt"]


class FakeDatabase:
    """
    Answers the statements issued by `icons.repository` from a dict.
    """

    def __init__(self, rows: list[dict[str, Any]] | None = None, *, fail: bool = False) -> None:
        self.rows: dict[str, dict[str, Any]] = {r["id"]: dict(r) for r in rows or []}
        self.fail = fail
        self.fail_ids: set[str] = set()
        self.fail_insert = False
        self.inserted: list[str] = []

    def _check(self) -> None:
        if self.fail:
            raise OSError("connection refused")

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        self._check()
        return sorted(self.rows.values(), key=lambda r: bool(r.get("generated")))

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        self._check()
        if self.fail_insert:
            raise OSError("insert rejected")
        row = dict(zip(COLUMNS, args))
        if row["id"] in self.rows:
            return None
        self.rows[row["id"]] = row
        self.inserted.append(row["id"])
        return {"id": row["id"]}

    async def execute(self, sql: str, *args: Any) -> None:
        self._check()

    async def execute_many(self, sql: str, args: list[tuple[Any, ...]]) -> None:
        self._check()
        batch = [dict(zip(COLUMNS, a)) for a in args]
        if any(r["id"] in self.fail_ids for r in batch):
            raise OSError("batch rejected")
        for row in batch:
            self.rows[row["id"]] = row


def icon_dict(icon_id: str, **overrides: Any) -> dict[str, Any]:
    data = {
        "id": icon_id,
        "name": icon_id.capitalize(),
        "category": "objects",
        "tags": [icon_id],
        "path": "M2 2 L22 22",
        "generated": False,
    }
    data.update(overrides)
    return data


@pytest.fixture
def snapshot_path(tmp_path):
    path = tmp_path / "icons-data.json"
    path.write_text(json.dumps([icon_dict("home"), icon_dict("search")]), encoding="utf-8")
    return path


@pytest.fixture
def snapshot(snapshot_path) -> LocalSnapshot:
    return LocalSnapshot(snapshot_path, writable=True)


@pytest.fixture
def local_store(snapshot) -> IconStore:
    return IconStore(snapshot=snapshot)


def anthropic_reply(text: str) -> dict[str, Any]:
    return {
        "id": "msg_test",
        "type": "message",
        "role": "assistant",
        "content": [{"type": "text", "text": text}],
    }


def make_client(handler, *, api_key: str | None = "test-key") -> AnthropicClient:
    return AnthropicClient(
        api_key=api_key,
        base_url="https://anthropic.test",
        model="claude-test",
        version="2023-06-01",
        max_tokens=512,
        timeout_s=5.0,
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture
def settings(snapshot_path) -> Settings:
    return Settings(
        database_url=None,
        anthropic_api_key="test-key",
        anthropic_base_url="https://anthropic.test",
        anthropic_model="claude-test",
        anthropic_version="2023-06-01",
        anthropic_max_tokens=512,
        anthropic_timeout_s=5.0,
        icons_data_path=snapshot_path,
        app_env="development",
        cors_allow_origins=["*"],
        log_level="INFO",
    )
