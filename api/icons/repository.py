"""
Icon persistence against the hosted `icons` table (raw SQL).

Every function takes the `Database` explicitly; the store decides what to do
with failures.
"""

from __future__ import annotations

from typing import Any

from core.db import Database

from .schemas import Icon

ICON_COLUMNS = 'id, name, category, tags, path, generated, "generatedAt"'


def _row_to_icon_dict(row: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": row.get("id"),
        "name": row.get("name") or "",
        "category": row.get("category"),
        "tags": list(row.get("tags") or []),
        "path": row.get("path"),
        "generated": bool(row.get("generated")),
        "generatedAt": row.get("generatedAt"),
    }


def _icon_args(icon: Icon) -> tuple[Any, ...]:
    return (
        icon.id,
        icon.name,
        icon.category,
        list(icon.tags),
        icon.path,
        icon.generated,
        icon.generated_at,
    )


async def list_icons(db: Database) -> list[dict[str, Any]]:
    """
    All rows, non-generated ones first.
    """
    rows = await db.fetch_all(
        f"""
        SELECT {ICON_COLUMNS}
        FROM icons
        ORDER BY generated ASC
        """
    )
    return [_row_to_icon_dict(r) for r in rows]


async def insert_icon(db: Database, icon: Icon) -> bool:
    """
    Insert one row. Returns False when the primary key already exists.
    """
    row = await db.fetch_one(
        f"""
        INSERT INTO icons ({ICON_COLUMNS})
        VALUES ($1, $2, $3, $4, $5, $6, $7)
        ON CONFLICT (id) DO NOTHING
        RETURNING id
        """,
        *_icon_args(icon),
    )
    return row is not None


async def upsert_icons(db: Database, icons: list[Icon]) -> None:
    """
    Insert or overwrite a batch of rows in one transaction. Seeding only.
    """
    if not icons:
        return None
    await db.execute_many(
        f"""
        INSERT INTO icons ({ICON_COLUMNS})
        VALUES ($1, $2, $3, $4, $5, $6, $7)
        ON CONFLICT (id) DO UPDATE
        SET name = EXCLUDED.name,
            category = EXCLUDED.category,
            tags = EXCLUDED.tags,
            path = EXCLUDED.path,
            generated = EXCLUDED.generated,
            "generatedAt" = EXCLUDED."generatedAt"
        """,
        [_icon_args(icon) for icon in icons],
    )
