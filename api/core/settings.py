"""
Process configuration read from environment variables.

Settings are read once by the app lifespan (see `api/main.py`) and passed
to the pieces that need them; nothing else reads `os.environ` directly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_ANTHROPIC_BASE_URL = "https://api.anthropic.com"
DEFAULT_ANTHROPIC_MODEL = "claude-3-5-haiku-latest"
DEFAULT_ANTHROPIC_VERSION = "2023-06-01"
DEFAULT_ICONS_DATA_PATH = Path(__file__).resolve().parent.parent / "icons-data.json"


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    items = [x.strip() for x in raw.split(",") if x.strip()]
    return items or default


@dataclass(frozen=True)
class Settings:
    database_url: str | None
    anthropic_api_key: str | None
    anthropic_base_url: str
    anthropic_model: str
    anthropic_version: str
    anthropic_max_tokens: int
    anthropic_timeout_s: float
    icons_data_path: Path
    app_env: str
    cors_allow_origins: list[str]
    log_level: str

    @property
    def is_development(self) -> bool:
        return self.app_env != "production"

    @property
    def remote_store_enabled(self) -> bool:
        return bool(self.database_url)


def load_settings() -> Settings:
    max_tokens = _env_int("ANTHROPIC_MAX_TOKENS", 512)
    if max_tokens <= 0:
        max_tokens = 512
    timeout_s = _env_float("ANTHROPIC_TIMEOUT_S", 60.0)
    if timeout_s <= 0:
        timeout_s = 60.0

    return Settings(
        database_url=_env_str("DATABASE_URL") or None,
        anthropic_api_key=_env_str("ANTHROPIC_API_KEY") or None,
        anthropic_base_url=_env_str("ANTHROPIC_BASE_URL", DEFAULT_ANTHROPIC_BASE_URL),
        anthropic_model=_env_str("ANTHROPIC_MODEL", DEFAULT_ANTHROPIC_MODEL),
        anthropic_version=_env_str("ANTHROPIC_VERSION", DEFAULT_ANTHROPIC_VERSION),
        anthropic_max_tokens=max_tokens,
        anthropic_timeout_s=timeout_s,
        icons_data_path=Path(_env_str("ICONS_DATA_PATH") or DEFAULT_ICONS_DATA_PATH),
        app_env=_env_str("APP_ENV", "development").lower(),
        cors_allow_origins=_env_list("CORS_ALLOW_ORIGINS", ["*"]),
        log_level=_env_str("LOG_LEVEL", "INFO").upper(),
    )
