"""Best-effort extraction of food items from free-form model output."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field, replace
from datetime import date, timedelta

from ..freshness import local_today
from ..models import FoodCategory, FoodItem

logger = logging.getLogger(__name__)


@dataclass
class DetectionResult:
    """Items parsed from a model response.

    ``reason`` is None when a JSON array was found, otherwise it says why the
    result is empty. Dropped entries inside a valid array don't set a reason.
    """

    items: list[FoodItem] = field(default_factory=list)
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None


def extract_json_array(text: str | None) -> str | None:
    """Return the text between the first ``[`` and the last ``]``."""
    if not text:
        return None
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end < start:
        return None
    return text[start : end + 1]


def load_json_array(text: str | None) -> tuple[list | None, str | None]:
    """Decode the JSON array embedded in ``text``.

    Returns:
        ``(entries, None)`` on success or ``(None, reason)``.
    """
    if not text or not text.strip():
        return None, "empty response"

    raw = extract_json_array(text)
    if raw is None:
        return None, "no JSON array in response"

    try:
        entries = json.loads(raw)
    except json.JSONDecodeError as e:
        return None, f"invalid JSON: {e.msg}"

    if not isinstance(entries, list):
        return None, "no JSON array in response"
    return entries, None


def _to_days(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _expiration_from(today: date, days: int | None) -> date | None:
    if days is None:
        return None
    try:
        return today + timedelta(days=days)
    except (OverflowError, ValueError):
        logger.debug("Ignoring out-of-range shelf life: %r days", days)
        return None


def parse_detected_items(
    text: str | None, today: date | None = None
) -> DetectionResult:
    """Parse a JSON array of detected foods out of a model response.

    Each entry looks like
    ``{"name": ..., "category": ..., "estimated_days_until_expiration": N}``.
    Entries without a usable name are dropped, the rest of the batch is kept.
    Duplicate names keep the first entry; a later date is only taken when the
    first entry had none.
    """
    entries, reason = load_json_array(text)
    if entries is None:
        logger.info("No items parsed from vision response: %s", reason)
        return DetectionResult(reason=reason)

    if today is None:
        today = local_today()

    seen: dict[str, FoodItem] = {}
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        name = entry.get("name")
        if not isinstance(name, str) or not name.strip():
            logger.debug("Dropping entry without a name: %r", entry)
            continue
        name = name.strip()

        expiration = _expiration_from(
            today, _to_days(entry.get("estimated_days_until_expiration"))
        )

        key = name.casefold()
        if key in seen:
            if seen[key].expiration_date is None and expiration is not None:
                seen[key] = replace(seen[key], expiration_date=expiration)
            continue

        seen[key] = FoodItem(
            name=name,
            category=FoodCategory.from_legacy_value(entry.get("category")),
            expiration_date=expiration,
        )

    return DetectionResult(items=list(seen.values()))
