"""
Icon store: hosted table first, local snapshot as fallback.

Reads return the baseline snapshot merged with the hosted rows. Writes go to
the hosted table; if that is unconfigured, unreachable or already holds the
id, the record is checked against the merged view and appended to the
snapshot instead.
"""

from __future__ import annotations

import asyncio
import logging

from pydantic import ValidationError

from core.db import Database
from core.errors import PersistenceError

from . import repository
from .reconcile import reconcile
from .results import SaveResult, StoreResult
from .schemas import Icon
from .snapshot import LocalSnapshot

logger = logging.getLogger(__name__)


class IconStore:
    def __init__(self, *, snapshot: LocalSnapshot, db: Database | None = None) -> None:
        self.snapshot = snapshot
        self.db = db

    @property
    def remote_enabled(self) -> bool:
        return self.db is not None

    async def fetch_remote(self) -> StoreResult[list[Icon]]:
        if self.db is None:
            return StoreResult([])

        try:
            rows = await repository.list_icons(self.db)
        except Exception as exc:
            logger.error("icon_fetch_remote_failed error=%s", exc)
            return StoreResult([], PersistenceError(f"Remote fetch error: {exc}", source="remote"))

        icons: list[Icon] = []
        for row in rows:
            try:
                icons.append(Icon.model_validate(row))
            except ValidationError:
                logger.warning("icon_remote_row_skipped id=%s", row.get("id"))
        return StoreResult(icons)

    async def fetch_view(self) -> tuple[list[Icon], list[PersistenceError]]:
        """
        Merged view plus whatever went wrong while building it.
        """
        baseline = await asyncio.to_thread(self.snapshot.read)
        remote = await self.fetch_remote()
        errors = [r.error for r in (baseline, remote) if r.error is not None]
        return reconcile(baseline.value, remote.value), errors

    async def fetch_all(self) -> list[Icon]:
        icons, _ = await self.fetch_view()
        return icons

    async def _insert_remote(self, db: Database, record: Icon) -> StoreResult[bool]:
        try:
            inserted = await repository.insert_icon(db, record)
        except Exception as exc:
            logger.error("icon_save_remote_failed id=%s error=%s", record.id, exc)
            return StoreResult(False, PersistenceError(f"Remote save error: {exc}", source="remote"))

        if not inserted:
            logger.info("icon_save_remote_duplicate id=%s", record.id)
            return StoreResult(
                False,
                PersistenceError(f"Icon '{record.id}' already exists.", source="remote", duplicate=True),
            )
        return StoreResult(True)

    async def save_result(self, icon: Icon) -> SaveResult:
        errors: list[PersistenceError] = []
        record = icon.as_generated()

        if self.db is not None:
            remote = await self._insert_remote(self.db, record)
            if remote.value:
                logger.info("icon_saved id=%s destination=remote", icon.id)
                return SaveResult(accepted=True, destination="remote")
            if remote.error is not None:
                errors.append(remote.error)

        icons, view_errors = await self.fetch_view()
        errors.extend(view_errors)
        if any(existing.id == icon.id for existing in icons):
            logger.info("icon_save_rejected id=%s reason=duplicate", icon.id)
            return SaveResult(accepted=False, duplicate=True, errors=errors)

        # An unreadable snapshot is left exactly as it is on disk.
        if any(e.source == "snapshot" for e in view_errors):
            logger.warning("icon_saved id=%s destination=memory reason=snapshot_unreadable", icon.id)
            return SaveResult(accepted=True, destination="memory", errors=errors)

        written = await asyncio.to_thread(self.snapshot.append, record)
        if written.error is not None:
            errors.append(written.error)
            if written.error.duplicate:
                return SaveResult(accepted=False, duplicate=True, errors=errors)

        destination = "snapshot" if written.value else "memory"
        logger.info("icon_saved id=%s destination=%s", icon.id, destination)
        return SaveResult(accepted=True, destination=destination, errors=errors)

    async def save(self, icon: Icon) -> bool:
        """
        True when the record was accepted, False only when its id already exists.
        """
        result = await self.save_result(icon)
        return result.accepted
