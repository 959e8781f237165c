"""
Push a local icon dataset into the hosted `icons` table.

Rows are upserted on `id` in fixed-size batches; a failing batch is logged
and the loader moves on to the next one.

Usage (from `api/`):
    DATABASE_URL=postgresql://... python -m scripts.seed_icons --file icons.json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from core.db import Database
from core.settings import load_settings
from icons import repository
from icons.schemas import Icon

DEFAULT_BATCH_SIZE = 50
SCHEMA_PATH = Path(__file__).resolve().parent.parent / "sql" / "icons.sql"

logger = logging.getLogger("seed_icons")


@dataclass(frozen=True)
class SeedStats:
    total: int
    uploaded: int
    failed_batches: int
    skipped: int


def normalize_record(item: dict[str, Any]) -> Icon:
    return Icon.model_validate(
        {
            "id": item.get("id"),
            "name": item.get("name") or "",
            "category": item.get("category"),
            "tags": item.get("tags") or [],
            "path": item.get("path"),
            "generated": bool(item.get("generated") or False),
            "generatedAt": item.get("generatedAt") or None,
        }
    )


def load_dataset(path: Path) -> tuple[list[Icon], int]:
    """
    Read and normalize the dataset. Returns (icons, skipped_count).
    """
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError(f"{path} does not hold a JSON array.")

    icons: list[Icon] = []
    skipped = 0
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            skipped += 1
            continue
        try:
            icons.append(normalize_record(item))
        except ValidationError:
            logger.warning("seed_record_skipped index=%s id=%s", i, item.get("id"))
            skipped += 1
    return icons, skipped


def batches(items: list[Icon], size: int) -> list[list[Icon]]:
    if size <= 0:
        size = DEFAULT_BATCH_SIZE
    return [items[i : i + size] for i in range(0, len(items), size)]


async def seed(db: Database, icons: list[Icon], *, batch_size: int = DEFAULT_BATCH_SIZE, skipped: int = 0) -> SeedStats:
    uploaded = 0
    failed = 0
    start = 0
    for chunk in batches(icons, batch_size):
        end = start + len(chunk)
        try:
            await repository.upsert_icons(db, chunk)
        except Exception as exc:
            failed += 1
            logger.error("seed_batch_failed start=%s end=%s error=%s", start, end, exc)
        else:
            uploaded += len(chunk)
            logger.info("seed_batch_uploaded start=%s end=%s", start, end)
        start = end
    return SeedStats(total=len(icons), uploaded=uploaded, failed_batches=failed, skipped=skipped)


async def create_table(db: Database) -> None:
    await db.execute(SCHEMA_PATH.read_text(encoding="utf-8"))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Upsert a JSON icon dataset into the hosted icons table.")
    parser.add_argument("--file", type=Path, default=None, help="JSON array of icons (default: ICONS_DATA_PATH)")
    parser.add_argument("--batch-size", type=int, default=DEFAULT_BATCH_SIZE)
    parser.add_argument("--create-table", action="store_true", help="apply sql/icons.sql before seeding")
    return parser.parse_args(argv)


async def run(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    if not settings.database_url:
        logger.error("seed_aborted reason=DATABASE_URL_not_set")
        return 1

    path = args.file or settings.icons_data_path
    try:
        icons, skipped = load_dataset(path)
    except (OSError, ValueError) as exc:
        logger.error("seed_aborted reason=unreadable_dataset path=%s error=%s", path, exc)
        return 1
    logger.info("seed_started path=%s icons=%s", path, len(icons))

    db = Database(settings.database_url)
    await db.connect()
    try:
        if args.create_table:
            await create_table(db)
        stats = await seed(db, icons, batch_size=args.batch_size, skipped=skipped)
    finally:
        await db.close()

    logger.info(
        "seed_completed total=%s uploaded=%s failed_batches=%s skipped=%s",
        stats.total,
        stats.uploaded,
        stats.failed_batches,
        stats.skipped,
    )
    return 0


def main() -> None:
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
