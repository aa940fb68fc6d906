"""Data models for tracked fridge items."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class FoodCategory(str, Enum):
    VEGETABLES = "VEGETABLES"
    FRUITS = "FRUITS"
    PROTEINS = "PROTEINS"
    DAIRY = "DAIRY"
    GRAINS = "GRAINS"
    LEGUMES = "LEGUMES"
    NUTS_SEEDS = "NUTS_SEEDS"
    OILS_FATS = "OILS_FATS"
    HERBS_SPICES = "HERBS_SPICES"
    SAUCES_CONDIMENTS = "SAUCES_CONDIMENTS"
    OTHER = "OTHER"

    @classmethod
    def from_legacy_value(cls, value: str | FoodCategory | None) -> FoodCategory:
        """Map any category label onto the closed set.

        Older data and model output use labels such as ``MEAT`` or
        ``Condiments``; those are remapped through ``_LEGACY_CATEGORIES``.
        Unknown labels fall back to ``OTHER``.
        """
        if isinstance(value, FoodCategory):
            return value
        if not value:
            return cls.OTHER
        key = str(value).strip().upper().replace("-", "_").replace(" ", "_")
        if key in cls.__members__:
            return cls[key]
        return _LEGACY_CATEGORIES.get(key, cls.OTHER)


_LEGACY_CATEGORIES: dict[str, FoodCategory] = {
    "MEAT": FoodCategory.PROTEINS,
    "POULTRY": FoodCategory.PROTEINS,
    "SEAFOOD": FoodCategory.PROTEINS,
    "FISH": FoodCategory.PROTEINS,
    "EGGS": FoodCategory.PROTEINS,
    "CONDIMENTS": FoodCategory.SAUCES_CONDIMENTS,
    "SAUCES": FoodCategory.SAUCES_CONDIMENTS,
    "SPICES": FoodCategory.HERBS_SPICES,
    "HERBS": FoodCategory.HERBS_SPICES,
    "NUTS": FoodCategory.NUTS_SEEDS,
    "SEEDS": FoodCategory.NUTS_SEEDS,
    "OILS": FoodCategory.OILS_FATS,
    "FATS": FoodCategory.OILS_FATS,
    "BEANS": FoodCategory.LEGUMES,
    "PULSES": FoodCategory.LEGUMES,
    "FRUIT": FoodCategory.FRUITS,
    "VEGETABLE": FoodCategory.VEGETABLES,
    "GRAIN": FoodCategory.GRAINS,
    "BREAD": FoodCategory.GRAINS,
    "PASTA": FoodCategory.GRAINS,
    "BEVERAGES": FoodCategory.OTHER,
    "DRINKS": FoodCategory.OTHER,
    "SNACKS": FoodCategory.OTHER,
    "FROZEN": FoodCategory.OTHER,
    "FROZEN_FOODS": FoodCategory.OTHER,
}


class FreshStatus(str, Enum):
    FRESH = "FRESH"
    GOOD = "GOOD"
    URGENT = "URGENT"
    EXPIRED = "EXPIRED"


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class FoodItem:
    """A single tracked item in the fridge.

    Items are immutable; use ``dataclasses.replace`` to derive a changed copy.
    ``fresh_status`` is owned by the inventory store: whatever a caller
    passes in is overwritten on every write.
    """

    name: str
    category: FoodCategory = FoodCategory.OTHER
    expiration_date: date | None = None
    image_url: str | None = None
    id: str = field(default_factory=_new_id)
    fresh_status: FreshStatus = FreshStatus.GOOD

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "category", FoodCategory.from_legacy_value(self.category)
        )
        if not self.id:
            object.__setattr__(self, "id", _new_id())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "expiration_date": (
                self.expiration_date.isoformat() if self.expiration_date else None
            ),
            "image_url": self.image_url,
            "fresh_status": self.fresh_status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> FoodItem:
        """Build an item from its stored form.

        Unknown categories become ``OTHER``, unknown statuses ``GOOD`` and
        unparsable dates ``None``. Only a missing ``name`` is an error.
        """
        name = data["name"]
        if not isinstance(name, str) or not name:
            raise ValueError(f"invalid item name: {name!r}")

        try:
            status = FreshStatus(data.get("fresh_status") or "GOOD")
        except ValueError:
            status = FreshStatus.GOOD

        return cls(
            name=name,
            category=FoodCategory.from_legacy_value(data.get("category")),
            expiration_date=parse_date(data.get("expiration_date")),
            image_url=data.get("image_url") or None,
            id=data.get("id") or "",
            fresh_status=status,
        )


def parse_date(value: str | date | None) -> date | None:
    """Parse an ISO ``YYYY-MM-DD`` string, returning None when it isn't one."""
    if value is None or isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None
