"""CLI entry point for the fridge module."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import timedelta

from .config import FridgeConfig, load_config
from .db import InventoryDB
from .freshness import local_today
from .models import FoodCategory, FoodItem, FreshStatus, parse_date
from .network import ApiError
from .preferences import CookingLevel, Cuisine, DietaryStyle, RecipePreferences
from .recipes import DiscoveryMode, RecipeFinder
from .store import InventoryStore
from .vision import create_backend

logger = logging.getLogger(__name__)

_STATUS_MARKS = {
    FreshStatus.FRESH: "🟢",
    FreshStatus.GOOD: "🟡",
    FreshStatus.URGENT: "🟠",
    FreshStatus.EXPIRED: "🔴",
}


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="cookly-fridge",
        description="Track what's in your fridge and find recipes for it",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to the config file (TOML)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # scan
    scan_parser = sub.add_parser("scan", help="Detect food items in fridge photos")
    scan_parser.add_argument(
        "--image", type=str, nargs="+", required=True, help="Image files to analyze"
    )
    scan_parser.add_argument("--json", action="store_true", help="Output as JSON")
    scan_parser.add_argument(
        "--save", action="store_true", help="Add detected items to the inventory"
    )

    # list
    list_parser = sub.add_parser("list", help="Show the inventory")
    list_parser.add_argument("--category", type=str, default=None)
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # add
    add_parser = sub.add_parser("add", help="Add an item by hand")
    add_parser.add_argument("name", type=str)
    add_parser.add_argument("--category", type=str, default="OTHER")
    when = add_parser.add_mutually_exclusive_group()
    when.add_argument("--days", type=int, default=None, help="Days until it expires")
    when.add_argument("--expires", type=str, default=None, metavar="YYYY-MM-DD")

    # delete
    delete_parser = sub.add_parser("delete", help="Remove an item by ID")
    delete_parser.add_argument("id", type=str)

    # expiring
    expiring_parser = sub.add_parser("expiring", help="Show items that expire soon")
    expiring_parser.add_argument("--days", type=int, default=2)

    # recipes
    recipes_parser = sub.add_parser("recipes", help="Suggest recipes")
    recipes_parser.add_argument(
        "--mode",
        choices=[m.value for m in DiscoveryMode],
        default=None,
    )
    recipes_parser.add_argument("--cuisine", type=str, nargs="*", default=[])
    recipes_parser.add_argument("--diet", type=str, default=None)
    recipes_parser.add_argument("--level", type=str, default=None)
    recipes_parser.add_argument("--json", action="store_true", help="Output as JSON")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    config = load_config(args.config)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.logging.level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    db = InventoryDB(config.database.path)
    store = InventoryStore()
    store.set_items(db.load_items())

    try:
        match args.command:
            case "scan":
                asyncio.run(_cmd_scan(config, store, args))
            case "list":
                _cmd_list(store, args)
            case "add":
                _cmd_add(store, args)
            case "delete":
                store.delete_item(args.id)
            case "expiring":
                _cmd_expiring(store, args)
            case "recipes":
                asyncio.run(_cmd_recipes(config, store, args))
        db.save_snapshot(store.get_all_items())
    except (ValueError, ImportError, OSError, OverflowError, ApiError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()


def _format_item(item: FoodItem) -> str:
    mark = _STATUS_MARKS[item.fresh_status]
    expires = item.expiration_date.isoformat() if item.expiration_date else "-"
    return f"  {mark} {item.name:<20} {expires:<10}  [{item.category.value}]  {item.id}"


async def _cmd_scan(config: FridgeConfig, store: InventoryStore, args) -> None:
    backend = create_backend(config)
    print("🔍 Detecting food items...")
    result = await backend.detect_items(args.image)

    if args.json:
        print(json.dumps([i.to_dict() for i in result.items], indent=2))
    elif not result.items:
        print(f"No food items detected ({result.reason or 'empty list'}).")
    else:
        print(f"\n🥬 Detected items ({len(result.items)}):")
        for item in result.items:
            print(_format_item(item))

    if args.save and result.items:
        store.add_items(result.items)
        logger.info("Saved %d detected items", len(result.items))


def _cmd_list(store: InventoryStore, args) -> None:
    category = FoodCategory.from_legacy_value(args.category) if args.category else None
    items = store.get_items_by_category(category)

    if args.json:
        print(json.dumps([i.to_dict() for i in items], indent=2))
        return
    if not items:
        print("The fridge is empty.")
        return

    for cat, group in store.get_items_grouped_by_category().items():
        if category is not None and cat != category:
            continue
        print(f"{cat.value} ({len(group)})")
        for item in group:
            print(_format_item(item))


def _cmd_add(store: InventoryStore, args) -> None:
    expiration = None
    if args.days is not None:
        expiration = local_today() + timedelta(days=args.days)
    elif args.expires:
        expiration = parse_date(args.expires)
        if expiration is None:
            raise ValueError(f"Invalid date: {args.expires!r} (expected YYYY-MM-DD)")

    store.add_item(
        FoodItem(name=args.name, category=args.category, expiration_date=expiration)
    )
    print(f"Added {args.name}. {store.get_item_count()} items in the fridge.")


def _cmd_expiring(store: InventoryStore, args) -> None:
    items = store.get_expiring_items(within_days=args.days)
    if not items:
        print("Nothing is about to expire.")
        return
    print(f"⏰ Use soon ({len(items)}):")
    for item in items:
        print(_format_item(item))


async def _cmd_recipes(config: FridgeConfig, store: InventoryStore, args) -> None:
    preferences = RecipePreferences(
        cuisines={Cuisine.parse(c) for c in args.cuisine},
        dietary_style=DietaryStyle.parse(args.diet) if args.diet else None,
        cooking_level=CookingLevel.parse(args.level) if args.level else None,
    )
    mode = DiscoveryMode(args.mode or config.recipes.mode)

    images = None
    if config.pexels.enabled and config.pexels.api_key:
        from .pexels import PexelsClient

        images = PexelsClient(api_key=config.pexels.api_key)

    finder = RecipeFinder(
        create_backend(config), images=images, max_recipes=config.recipes.max_recipes
    )
    print("🍳 Looking for recipes...")
    result = await finder.discover(mode, preferences, store.get_all_items())

    if args.json:
        print(json.dumps([r.to_dict() for r in result.recipes], indent=2))
        return
    if not result.recipes:
        print(f"No recipes found ({result.reason or 'empty list'}).")
        return

    for recipe in result.recipes:
        print(
            f"\n{recipe.name}  ({recipe.cuisine}, {recipe.cooking_time_minutes} min, "
            f"fit {recipe.fit_percentage}%)"
        )
        if recipe.description:
            print(f"  {recipe.description}")
        if recipe.missing_ingredients:
            print(f"  🛒 Missing: {', '.join(recipe.missing_ingredients)}")
