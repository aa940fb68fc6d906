"""Fridge inventory, freshness tracking and recipe discovery."""

from .config import (
    DatabaseConfig,
    FridgeConfig,
    PexelsConfig,
    RecipesConfig,
    VisionConfig,
    load_config,
)
from .freshness import classify_freshness, local_today
from .models import FoodCategory, FoodItem, FreshStatus
from .network import ApiError, NetworkError
from .preferences import RecipePreferences
from .recipes import DiscoveryMode, Recipe, RecipeFinder
from .store import InventoryStore
from .vision import DetectionResult, VisionBackend, create_backend

__all__ = [
    "FoodCategory",
    "FoodItem",
    "FreshStatus",
    "classify_freshness",
    "local_today",
    "InventoryStore",
    "VisionBackend",
    "DetectionResult",
    "create_backend",
    "RecipePreferences",
    "DiscoveryMode",
    "Recipe",
    "RecipeFinder",
    "ApiError",
    "NetworkError",
    "FridgeConfig",
    "VisionConfig",
    "PexelsConfig",
    "DatabaseConfig",
    "RecipesConfig",
    "load_config",
]
