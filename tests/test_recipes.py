"""Tests for recipe discovery and preferences."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from cookly.fridge.models import FoodCategory, FoodItem, FreshStatus
from cookly.fridge.network import ApiError, NetworkError
from cookly.fridge.preferences import (
    Allergen,
    CookingLevel,
    Cuisine,
    DietaryStyle,
    DislikedIngredient,
    RecipePreferences,
)
from cookly.fridge.recipes import (
    DiscoveryMode,
    RecipeFinder,
    build_discovery_prompt,
    find_missing_ingredients,
    parse_recipes,
)


@pytest.fixture
def fridge():
    return [
        FoodItem(name="Tomato", category=FoodCategory.VEGETABLES, fresh_status=FreshStatus.FRESH),
        FoodItem(name="Chicken", category=FoodCategory.PROTEINS, fresh_status=FreshStatus.URGENT),
        FoodItem(name="Basil", category=FoodCategory.HERBS_SPICES, fresh_status=FreshStatus.GOOD),
    ]


class TestPreferences:
    def test_parse_by_name_or_label(self):
        assert Cuisine.parse("italian") is Cuisine.ITALIAN
        assert DietaryStyle.parse("Low-Carb") is DietaryStyle.LOW_CARB
        assert DietaryStyle.parse("low_carb") is DietaryStyle.LOW_CARB
        with pytest.raises(ValueError, match="unknown Cuisine"):
            Cuisine.parse("martian")

    def test_other_free_text(self):
        prefs = RecipePreferences(
            cuisines={Cuisine.OTHER, Cuisine.THAI},
            other_cuisine="Peruvian",
            dietary_style=DietaryStyle.OTHER,
            other_diet="Paleo",
        )
        assert prefs.cuisine_labels() == ["Thai", "Peruvian"]
        assert prefs.diet_label() == "Paleo"

    def test_instances_do_not_share_state(self):
        a = RecipePreferences()
        b = RecipePreferences()
        a.cuisines.add(Cuisine.FRENCH)
        assert b.cuisines == set()


class TestBuildPrompt:
    def test_defaults(self):
        prompt = build_discovery_prompt(DiscoveryMode.PREFERENCES, RecipePreferences(), [])
        assert "Suggest up to 5 recipes." in prompt
        assert "based on user preferences" in prompt
        assert "- Dietary: Any" in prompt
        assert "- Avoid: None" in prompt
        assert "- Skill: Any" in prompt
        assert "Fridge: None specified" in prompt
        assert "Cuisines: Any" in prompt

    def test_full_preferences(self, fridge):
        prefs = RecipePreferences(
            cuisines={Cuisine.ITALIAN, Cuisine.MEXICAN},
            dietary_style=DietaryStyle.VEGETARIAN,
            avoided={Allergen.PEANUTS},
            disliked={DislikedIngredient.OLIVES, DislikedIngredient.GARLIC},
            cooking_level=CookingLevel.BEGINNER,
        )
        prompt = build_discovery_prompt(DiscoveryMode.BOTH, prefs, fridge, max_recipes=3)

        assert "Suggest up to 3 recipes." in prompt
        assert "fridge ingredients AND match preferences" in prompt
        assert "- Dietary: Vegetarian" in prompt
        assert "- Avoid: Peanuts" in prompt
        assert "- Dislike: Garlic, Olives" in prompt
        assert "- Skill: Beginner" in prompt
        assert "Cuisines: Italian, Mexican" in prompt

    def test_urgent_items_listed_first(self, fridge):
        prompt = build_discovery_prompt(DiscoveryMode.FRIDGE, RecipePreferences(), fridge)
        assert "Fridge: Chicken, Basil, Tomato" in prompt


def test_find_missing_ingredients(fridge):
    missing = find_missing_ingredients(
        ["Chicken breast", "tomatoes", "basil", "Parmesan", "Pasta"], fridge
    )
    assert missing == ["Parmesan", "Pasta"]


def test_find_missing_ingredients_substring_of_fridge_name():
    fridge = [FoodItem(name="Whole Milk")]
    assert find_missing_ingredients(["milk", "flour"], fridge) == ["flour"]


def test_find_missing_ingredients_ignores_blank_fridge_names():
    fridge = [FoodItem(name=""), FoodItem(name="  "), FoodItem(name="Egg")]
    assert find_missing_ingredients(["eggs", "flour"], fridge) == ["flour"]


class TestParseRecipes:
    def test_parse(self, fridge):
        text = "Here are some ideas:\n" + json.dumps([
            {
                "name": "Chicken Cacciatore",
                "cuisine": "Italian",
                "cooking_time_minutes": 45,
                "ingredients": ["chicken", "tomato", "onion"],
                "fit_percentage": 90,
                "rating": 4.6,
                "description": "Rustic stew",
            },
            {"name": "Caprese", "fit_percentage": "150", "rating": "great"},
        ])
        result = parse_recipes(text, fridge)

        assert result.ok
        first, second = result.recipes
        assert first.id == "recipe_0"
        assert first.cooking_time_minutes == 45
        assert first.missing_ingredients == ["onion"]
        assert first.rating == pytest.approx(4.6)
        assert second.id == "recipe_1"
        assert second.cuisine == "Unknown"
        assert second.fit_percentage == 100
        assert second.rating == 0.0
        assert second.ingredients == []

    def test_nameless_entries_skipped_but_index_kept(self, fridge):
        text = json.dumps([{"cuisine": "Thai"}, {"name": "Pad Thai"}])
        result = parse_recipes(text, fridge)
        assert [(r.id, r.name) for r in result.recipes] == [("recipe_1", "Pad Thai")]

    def test_unparseable(self, fridge):
        result = parse_recipes("Sorry, I can't help with that.", fridge)
        assert result.recipes == []
        assert result.reason == "no JSON array in response"


class TestRecipeFinder:
    @pytest.mark.asyncio
    async def test_discover_with_images(self, fridge):
        backend = MagicMock()
        backend.complete = AsyncMock(return_value=json.dumps([
            {"name": "Soup", "ingredients": ["tomato"]},
            {"name": "Stew", "ingredients": ["beef"]},
            {"name": "Salad"},
        ]))

        async def fake_search(query):
            if query == "Stew":
                raise ApiError(NetworkError.TOO_MANY_REQUESTS, 429)
            return "soup.jpg" if query == "Soup" else ""

        images = MagicMock()
        images.search_food_image = AsyncMock(side_effect=fake_search)

        finder = RecipeFinder(backend, images=images, max_recipes=3)
        result = await finder.discover(DiscoveryMode.FRIDGE, RecipePreferences(), fridge)

        assert [r.name for r in result.recipes] == ["Soup", "Stew", "Salad"]
        assert [r.image_url for r in result.recipes] == ["soup.jpg", "", ""]
        assert result.recipes[1].missing_ingredients == ["beef"]

        prompt = backend.complete.call_args.args[0]
        assert "Suggest up to 3 recipes." in prompt
        assert backend.complete.call_args.kwargs["max_tokens"] == 4000

    @pytest.mark.asyncio
    async def test_discover_without_images(self):
        backend = MagicMock()
        backend.complete = AsyncMock(return_value="no recipes, sorry")

        result = await RecipeFinder(backend).discover(
            DiscoveryMode.PREFERENCES, RecipePreferences(), []
        )
        assert result.recipes == []
        assert result.reason == "no JSON array in response"
