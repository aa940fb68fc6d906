"""Fridge item persistence."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from ..models import FoodItem
from .schema import ensure_schema

logger = logging.getLogger(__name__)

_UPSERT = """INSERT INTO fridge_items
   (id, name, category, expiration_date, image_url, fresh_status)
   VALUES (?, ?, ?, ?, ?, ?)
   ON CONFLICT(id) DO UPDATE SET
       name = excluded.name,
       category = excluded.category,
       expiration_date = excluded.expiration_date,
       image_url = excluded.image_url,
       fresh_status = excluded.fresh_status,
       updated_at = datetime('now', 'localtime')"""


def _row_params(item: FoodItem) -> tuple:
    data = item.to_dict()
    return (
        data["id"],
        data["name"],
        data["category"],
        data["expiration_date"],
        data["image_url"] or "",
        data["fresh_status"],
    )


class InventoryDB:
    """Manages the fridge_items table."""

    def __init__(self, db_path: str | Path = "~/.config/cookly/fridge.db") -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = ensure_schema(self._db_path)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def save_item(self, item: FoodItem) -> None:
        """Insert or update a single item by id."""
        conn = self._get_conn()
        conn.execute(_UPSERT, _row_params(item))
        conn.commit()

    def save_snapshot(self, items: list[FoodItem]) -> None:
        """Replace the stored inventory with ``items`` in one transaction."""
        conn = self._get_conn()
        with conn:
            conn.execute("DELETE FROM fridge_items")
            conn.executemany(_UPSERT, [_row_params(i) for i in items])
        logger.debug("Saved snapshot of %d items", len(items))

    def load_items(self) -> list[FoodItem]:
        """Return all stored items in insertion order.

        Rows that can't be decoded are skipped.
        """
        conn = self._get_conn()
        rows = conn.execute(
            "SELECT * FROM fridge_items ORDER BY rowid"
        ).fetchall()

        items: list[FoodItem] = []
        for row in rows:
            try:
                items.append(FoodItem.from_dict(dict(row)))
            except (KeyError, ValueError):
                logger.warning("Skipping unreadable fridge item %s", row["id"])
        return items

    def delete_item(self, item_id: str) -> None:
        """Delete an item by ID."""
        conn = self._get_conn()
        conn.execute("DELETE FROM fridge_items WHERE id = ?", (item_id,))
        conn.commit()
