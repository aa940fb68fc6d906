"""Vision backend base class, prompts, and factory."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .parsing import DetectionResult, parse_detected_items

if TYPE_CHECKING:
    from ..config import FridgeConfig

DETECTION_PROMPT = """\
Analyze this image and identify all food items visible.
For each item, return a JSON array with objects containing:
- name: the food item name
- category: one of VEGETABLES, FRUITS, PROTEINS, DAIRY, GRAINS, LEGUMES,
  NUTS_SEEDS, OILS_FATS, HERBS_SPICES, SAUCES_CONDIMENTS, OTHER
- estimated_days_until_expiration: estimated days until expiration (or null if unknown)

Return ONLY a valid JSON array, no other text. Example format:
[
  {"name": "Spinach", "category": "VEGETABLES", "estimated_days_until_expiration": 5},
  {"name": "Whole Milk", "category": "DAIRY", "estimated_days_until_expiration": 3}
]
If you could not recognize any food, return an empty list.
"""

SYSTEM_PROMPT = """\
You are an expert food recognition and inventory assistant.

Detect all visible food items and ingredients as accurately as possible.
Use a standardized ingredient name (e.g. "chicken breast", "tomato",
"cheddar cheese") and estimate the days until expiration from the visual
condition, whether the item is sealed, opened or frozen, and typical shelf
life. If a date is printed on visible packaging, use it. Be conservative:
prefer shorter shelf life estimates if freshness is unclear. Do not include
non-food objects. Return valid JSON only.
"""


class VisionBackend(ABC):
    """Abstract base for multimodal model backends.

    Subclasses only implement :meth:`complete`; detection and recipe
    discovery are built on top of it.
    """

    @abstractmethod
    async def complete(
        self,
        prompt: str,
        image_paths: list[str] | None = None,
        *,
        system: str | None = None,
        max_tokens: int = 2000,
    ) -> str:
        """Send a prompt (optionally with images) and return the text reply."""
        ...

    async def detect_items(self, image_paths: list[str]) -> DetectionResult:
        """Detect food items in one or more fridge images."""
        text = await self.complete(
            DETECTION_PROMPT, image_paths, system=SYSTEM_PROMPT
        )
        return parse_detected_items(text)


def create_backend(config: FridgeConfig) -> VisionBackend:
    """Create a vision backend based on configuration."""
    backend_name = config.vision.backend

    match backend_name:
        case "claude":
            from .claude import ClaudeVisionBackend

            return ClaudeVisionBackend(
                api_key=config.vision.claude.api_key,
                model=config.vision.claude.model,
            )
        case "gemini":
            from .gemini import GeminiVisionBackend

            return GeminiVisionBackend(
                api_key=config.vision.gemini.api_key,
                model=config.vision.gemini.model,
            )
        case "openai":
            from .openai import OpenAIVisionBackend

            return OpenAIVisionBackend(
                api_key=config.vision.openai.api_key,
                model=config.vision.openai.model,
                base_url=config.vision.openai.base_url,
            )
        case _:
            raise ValueError(
                f"Unknown vision backend: {backend_name!r} "
                f"(choose one of claude / gemini / openai)"
            )


__all__ = [
    "DETECTION_PROMPT",
    "SYSTEM_PROMPT",
    "DetectionResult",
    "VisionBackend",
    "create_backend",
    "parse_detected_items",
]
