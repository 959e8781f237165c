"""
Local JSON snapshot of icon records.

The file holds a JSON array of icon objects. It is the baseline dataset on
reads and the fallback destination on writes. A write appends one record to
the array exactly as it was read back from disk, so entries this service does
not understand (extra keys, records it skips on read) are left untouched.
Writes are only performed in development; on a serverless deployment the file
system is not durable.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from core.errors import PersistenceError

from .results import StoreResult
from .schemas import Icon

logger = logging.getLogger(__name__)


class LocalSnapshot:
    def __init__(self, path: Path | str, *, writable: bool = True) -> None:
        self.path = Path(path)
        self.writable = writable

    def _load_raw(self) -> StoreResult[list[Any]]:
        if not self.path.exists():
            return StoreResult([])

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("snapshot_read_failed path=%s error=%s", self.path, exc)
            return StoreResult([], PersistenceError(f"Local read error: {exc}", source="snapshot"))

        if not isinstance(raw, list):
            logger.error("snapshot_not_a_list path=%s", self.path)
            return StoreResult([], PersistenceError("Local snapshot is not a JSON array.", source="snapshot"))
        return StoreResult(raw)

    def read(self) -> StoreResult[list[Icon]]:
        """
        Load the baseline list. A missing file is an empty baseline, not an error.
        """
        raw = self._load_raw()
        icons: list[Icon] = []
        for i, item in enumerate(raw.value):
            try:
                icons.append(Icon.model_validate(item))
            except ValidationError:
                logger.warning("snapshot_entry_skipped path=%s index=%s", self.path, i)
        return StoreResult(icons, raw.error)

    def append(self, icon: Icon) -> StoreResult[bool]:
        """
        Add `icon` to the end of the file. Returns False (no error) when
        writes are disabled for this deployment, and False with an error when
        the file cannot be read back, already holds the id, or cannot be
        written. The file is never rewritten from a failed read.
        """
        if not self.writable:
            logger.warning("snapshot_write_skipped path=%s reason=not_development", self.path)
            return StoreResult(False)

        raw = self._load_raw()
        if raw.error is not None:
            logger.warning("snapshot_write_skipped path=%s reason=unreadable", self.path)
            return StoreResult(False, raw.error)

        items = raw.value
        if any(isinstance(item, dict) and item.get("id") == icon.id for item in items):
            logger.info("snapshot_write_skipped path=%s id=%s reason=duplicate", self.path, icon.id)
            return StoreResult(
                False,
                PersistenceError(f"Icon '{icon.id}' already exists.", source="snapshot", duplicate=True),
            )

        items.append(icon.to_json())
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(items, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.error("snapshot_write_failed path=%s error=%s", self.path, exc)
            return StoreResult(False, PersistenceError(f"Local save error: {exc}", source="snapshot"))
        return StoreResult(True)
