"""Recipe discovery from fridge contents and user preferences."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING

from .models import FoodItem, FreshStatus
from .network import ApiError
from .preferences import RecipePreferences
from .vision.parsing import load_json_array

if TYPE_CHECKING:
    from .pexels import PexelsClient
    from .vision import VisionBackend

logger = logging.getLogger(__name__)


class DiscoveryMode(str, Enum):
    PREFERENCES = "preferences"
    FRIDGE = "fridge"
    BOTH = "both"


_MODE_DESCRIPTIONS: dict[DiscoveryMode, str] = {
    DiscoveryMode.PREFERENCES: "Suggest recipes based on user preferences and cuisines.",
    DiscoveryMode.FRIDGE: "Suggest recipes using ingredients available in the fridge.",
    DiscoveryMode.BOTH: "Suggest recipes that use fridge ingredients AND match preferences.",
}


@dataclass
class Recipe:
    id: str
    name: str
    cuisine: str = "Unknown"
    image_url: str = ""
    cooking_time_minutes: int = 0
    ingredients: list[str] = field(default_factory=list)
    missing_ingredients: list[str] = field(default_factory=list)
    fit_percentage: int = 0  # 0-100
    rating: float = 0.0
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "cuisine": self.cuisine,
            "image_url": self.image_url,
            "cooking_time_minutes": self.cooking_time_minutes,
            "ingredients": self.ingredients,
            "missing_ingredients": self.missing_ingredients,
            "fit_percentage": self.fit_percentage,
            "rating": self.rating,
            "description": self.description,
        }


@dataclass
class RecipeParseResult:
    recipes: list[Recipe] = field(default_factory=list)
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None


def _join(values: list[str], empty: str) -> str:
    return ", ".join(values) if values else empty


def build_discovery_prompt(
    mode: DiscoveryMode,
    preferences: RecipePreferences,
    fridge_items: list[FoodItem],
    max_recipes: int = 5,
) -> str:
    """Build the recipe suggestion prompt.

    Fridge items that are about to expire are listed first so the model
    favours them.
    """
    ordered = sorted(fridge_items, key=_urgency_rank)
    fridge = _join([i.name for i in ordered], "None specified")
    avoided = _join(sorted(a.display_name for a in preferences.avoided), "None")
    disliked = _join(sorted(d.display_name for d in preferences.disliked), "None")
    level = preferences.cooking_level.display_name if preferences.cooking_level else "Any"

    return (
        f"Suggest up to {max_recipes} recipes. {_MODE_DESCRIPTIONS[mode]}\n"
        "\n"
        "Preferences:\n"
        f"- Dietary: {preferences.diet_label() or 'Any'}\n"
        f"- Avoid: {avoided}\n"
        f"- Dislike: {disliked}\n"
        f"- Skill: {level}\n"
        "\n"
        f"Fridge: {fridge}\n"
        f"Cuisines: {_join(preferences.cuisine_labels(), 'Any')}\n"
        "\n"
        "Return ONLY a JSON array:\n"
        '[{"name":"Dish Name","cuisine":"Italian","cooking_time_minutes":30,'
        '"ingredients":["item1","item2"],"fit_percentage":85,"rating":4.5,'
        '"description":"Brief description"}]'
    )


_URGENCY_ORDER: dict[FreshStatus, int] = {
    FreshStatus.EXPIRED: 0,
    FreshStatus.URGENT: 1,
    FreshStatus.GOOD: 2,
    FreshStatus.FRESH: 3,
}


def _urgency_rank(item: FoodItem) -> int:
    return _URGENCY_ORDER[item.fresh_status]


def find_missing_ingredients(
    ingredients: list[str], fridge_items: list[FoodItem]
) -> list[str]:
    """Return recipe ingredients that no fridge item covers.

    An ingredient is covered when its name contains a fridge item name or the
    other way round, ignoring case ("chicken breast" is covered by "chicken").
    """
    names = {i.name.strip().casefold() for i in fridge_items if i.name.strip()}
    missing: list[str] = []
    for ingredient in ingredients:
        key = ingredient.casefold()
        if not any(name in key or key in name for name in names):
            missing.append(ingredient)
    return missing


def _as_int(value: object, default: int = 0) -> int:
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default


def _as_float(value: object, default: float = 0.0) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default


def parse_recipes(text: str | None, fridge_items: list[FoodItem]) -> RecipeParseResult:
    """Parse a JSON array of recipes out of a model response.

    Entries without a name are skipped; other fields fall back to defaults.
    """
    entries, reason = load_json_array(text)
    if entries is None:
        logger.info("No recipes parsed from response: %s", reason)
        return RecipeParseResult(reason=reason)

    recipes: list[Recipe] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            continue
        name = entry.get("name")
        if not isinstance(name, str) or not name.strip():
            logger.debug("Skipping recipe %d without a name", index)
            continue

        raw_ingredients = entry.get("ingredients")
        ingredients = (
            [str(i) for i in raw_ingredients if i is not None]
            if isinstance(raw_ingredients, list)
            else []
        )

        recipes.append(
            Recipe(
                id=f"recipe_{index}",
                name=name.strip(),
                cuisine=entry.get("cuisine") or "Unknown",
                image_url=entry.get("image_url") or "",
                cooking_time_minutes=_as_int(entry.get("cooking_time_minutes")),
                ingredients=ingredients,
                missing_ingredients=find_missing_ingredients(ingredients, fridge_items),
                fit_percentage=max(0, min(100, _as_int(entry.get("fit_percentage")))),
                rating=_as_float(entry.get("rating")),
                description=entry.get("description") or "",
            )
        )

    logger.debug("Parsed %d recipes", len(recipes))
    return RecipeParseResult(recipes=recipes)


class RecipeFinder:
    """Suggest recipes with a model backend and decorate them with photos."""

    def __init__(
        self,
        backend: VisionBackend,
        images: PexelsClient | None = None,
        max_recipes: int = 5,
    ) -> None:
        self._backend = backend
        self._images = images
        self._max_recipes = max_recipes

    async def discover(
        self,
        mode: DiscoveryMode,
        preferences: RecipePreferences,
        fridge_items: list[FoodItem],
    ) -> RecipeParseResult:
        prompt = build_discovery_prompt(
            mode, preferences, fridge_items, max_recipes=self._max_recipes
        )
        logger.info("Requesting recipes (mode=%s, %d fridge items)", mode.value, len(fridge_items))
        text = await self._backend.complete(prompt, max_tokens=4000)
        result = parse_recipes(text, fridge_items)

        if self._images is not None and result.recipes:
            result.recipes = list(
                await asyncio.gather(*(self._with_image(r) for r in result.recipes))
            )
        return result

    async def _with_image(self, recipe: Recipe) -> Recipe:
        try:
            url = await self._images.search_food_image(recipe.name)
        except ApiError as e:
            logger.warning("Image lookup failed for %r: %s", recipe.name, e)
            return recipe
        return replace(recipe, image_url=url) if url else recipe
