"""User cooking preferences passed explicitly to recipe discovery."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class _Labeled(Enum):
    """Enum whose value is a human-readable label."""

    @property
    def display_name(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str):
        """Look a member up by name or label, case-insensitively."""
        key = value.strip().casefold()
        for member in cls:
            if key in (member.name.casefold(), member.value.casefold()):
                return member
        raise ValueError(f"unknown {cls.__name__}: {value!r}")


class Cuisine(_Labeled):
    ITALIAN = "Italian"
    AMERICAN = "American"
    MEXICAN = "Mexican"
    CHINESE = "Chinese"
    JAPANESE = "Japanese"
    INDIAN = "Indian"
    THAI = "Thai"
    ARABIC = "Arabic"
    TURKISH = "Turkish"
    MEDITERRANEAN = "Mediterranean"
    FRENCH = "French"
    KOREAN = "Korean"
    OTHER = "Other"


class DietaryStyle(_Labeled):
    OMNIVORE = "Omnivore"
    VEGETARIAN = "Vegetarian"
    VEGAN = "Vegan"
    PESCATARIAN = "Pescatarian"
    KETO = "Keto"
    LOW_CARB = "Low-Carb"
    HIGH_PROTEIN = "High-Protein"
    MEDITERRANEAN = "Mediterranean"
    OTHER = "Other"


class CookingLevel(_Labeled):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class Allergen(_Labeled):
    PEANUTS = "Peanuts"
    TREE_NUTS = "Tree Nuts"
    MILK = "Milk (Dairy)"
    EGGS = "Eggs"
    FISH = "Fish"
    SHELLFISH = "Shellfish"
    SOY = "Soy"
    WHEAT = "Wheat (Gluten)"
    SESAME = "Sesame"
    MUSTARD = "Mustard"
    CELERY = "Celery"
    LUPIN = "Lupin"
    SULFITES = "Sulfites"
    CORN = "Corn"


class DislikedIngredient(_Labeled):
    PORK = "Pork"
    ONIONS = "Onions"
    GARLIC = "Garlic"
    MUSHROOMS = "Mushrooms"
    OLIVES = "Olives"
    BELL_PEPPERS = "Bell Peppers"
    CILANTRO = "Cilantro"
    GINGER = "Ginger"
    CHILI = "Chili"
    EGGPLANT = "Eggplant"
    ZUCCHINI = "Zucchini"
    BLUE_CHEESE = "Blue Cheese"
    SPINACH = "Spinach"
    BROCCOLI = "Broccoli"


@dataclass
class RecipePreferences:
    """Preferences collected from the user, owned by the caller.

    ``other_cuisine`` and ``other_diet`` hold free text typed next to the
    OTHER choices.
    """

    cuisines: set[Cuisine] = field(default_factory=set)
    dietary_style: DietaryStyle | None = None
    avoided: set[Allergen] = field(default_factory=set)
    disliked: set[DislikedIngredient] = field(default_factory=set)
    cooking_level: CookingLevel | None = None
    other_cuisine: str | None = None
    other_diet: str | None = None

    def cuisine_labels(self) -> list[str]:
        labels = sorted(c.display_name for c in self.cuisines if c is not Cuisine.OTHER)
        if Cuisine.OTHER in self.cuisines and self.other_cuisine:
            labels.append(self.other_cuisine)
        return labels

    def diet_label(self) -> str | None:
        if self.dietary_style is DietaryStyle.OTHER and self.other_diet:
            return self.other_diet
        return self.dietary_style.display_name if self.dietary_style else None
