"""In-memory fridge inventory with name-based merging."""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import date, timedelta
from typing import Callable, Iterable

from .freshness import classify_freshness, local_today
from .models import FoodCategory, FoodItem, FreshStatus

logger = logging.getLogger(__name__)


class InventoryStore:
    """Holds the authoritative list of tracked food items.

    The collection is an immutable tuple. Every mutation builds a new tuple
    under ``_lock`` and swaps it in, so readers always see a complete
    snapshot. Nothing here raises for missing ids or odd categories: those
    are no-ops or get normalized.

    Freshness is recomputed on each write only. A long-lived store can hold
    stale statuses until the next write touches the item.
    """

    def __init__(self, clock: Callable[[], date] = local_today) -> None:
        self._clock = clock
        self._items: tuple[FoodItem, ...] = ()
        self._lock = threading.Lock()

    def _with_status(self, item: FoodItem) -> FoodItem:
        return replace(
            item, fresh_status=classify_freshness(item.expiration_date, self._clock())
        )

    # ── writes ──

    def add_item(self, item: FoodItem) -> None:
        """Insert an item, merging into an existing one with the same name.

        A match keeps the stored id, name, category and image. The stored
        expiration date is only replaced when the incoming item has one.
        """
        with self._lock:
            self._items = self._merged(self._items, item)

    def add_items(self, items: Iterable[FoodItem]) -> None:
        """Add items in order; later duplicates merge into earlier ones."""
        with self._lock:
            current = self._items
            for item in items:
                current = self._merged(current, item)
            self._items = current

    def _merged(
        self, current: tuple[FoodItem, ...], item: FoodItem
    ) -> tuple[FoodItem, ...]:
        key = item.name.casefold()
        for idx, existing in enumerate(current):
            if existing.name.casefold() == key:
                merged = self._with_status(
                    replace(
                        existing,
                        expiration_date=item.expiration_date or existing.expiration_date,
                    )
                )
                logger.debug("Merged %r into item %s", item.name, existing.id)
                return current[:idx] + (merged,) + current[idx + 1 :]

        logger.debug("Added item %r (%s)", item.name, item.id)
        return current + (self._with_status(item),)

    def set_items(self, items: Iterable[FoodItem]) -> None:
        """Replace the whole collection without merging."""
        fresh = tuple(self._with_status(item) for item in items)
        with self._lock:
            self._items = fresh
        logger.debug("Loaded %d items", len(fresh))

    def update_item(self, item: FoodItem) -> None:
        """Replace the item with the same id. Unknown ids are ignored."""
        with self._lock:
            for idx, existing in enumerate(self._items):
                if existing.id == item.id:
                    self._items = (
                        self._items[:idx]
                        + (self._with_status(item),)
                        + self._items[idx + 1 :]
                    )
                    logger.debug("Updated item %s", item.id)
                    return

    def delete_item(self, item_id: str) -> None:
        """Remove the item with the given id, if any."""
        with self._lock:
            remaining = tuple(i for i in self._items if i.id != item_id)
            if len(remaining) != len(self._items):
                logger.debug("Deleted item %s", item_id)
            self._items = remaining

    # ── reads ──

    def get_all_items(self) -> list[FoodItem]:
        return list(self._items)

    def get_items_by_category(
        self, category: FoodCategory | str | None
    ) -> list[FoodItem]:
        if category is None:
            return list(self._items)
        category = FoodCategory.from_legacy_value(category)
        return [i for i in self._items if i.category == category]

    def get_items_grouped_by_category(self) -> dict[FoodCategory, list[FoodItem]]:
        """Group items by category. Categories without items are left out."""
        grouped: dict[FoodCategory, list[FoodItem]] = {}
        for item in self._items:
            grouped.setdefault(item.category, []).append(item)
        return grouped

    def get_item_count(self) -> int:
        return len(self._items)

    def get_item_count_by_category(self, category: FoodCategory | str) -> int:
        category = FoodCategory.from_legacy_value(category)
        return sum(1 for i in self._items if i.category == category)

    def get_expiring_items(self, within_days: int = 2) -> list[FoodItem]:
        """Return items that are urgent, expired or expire within ``within_days``.

        Sorted by expiration date, soonest first.
        """
        limit = self._clock() + timedelta(days=within_days)
        expiring = [
            i
            for i in self._items
            if i.fresh_status in (FreshStatus.URGENT, FreshStatus.EXPIRED)
            or (i.expiration_date is not None and i.expiration_date <= limit)
        ]
        return sorted(expiring, key=lambda i: i.expiration_date or date.max)
