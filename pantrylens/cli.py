"""CLI entry point for pantrylens."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from datetime import datetime

from dotenv import load_dotenv

from .catalog import RecipeCatalog
from .config import PantryLensConfig, load_config
from .db import ScanHistoryDB
from .errors import NoIngredientsError, PantryLensError
from .llm import create_backend as create_llm_backend
from .matcher import RecipeMatcher, quick_suggestions
from .ocr import create_backend as create_ocr_backend
from .parser import parse_text
from .pipeline import ScanPipeline
from .types import Ingredient, RecipeMatch

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    load_dotenv()

    parser = argparse.ArgumentParser(
        prog="pantrylens",
        description="Read ingredient lists from photos and suggest recipes",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to the configuration file (TOML)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # scan
    scan_parser = sub.add_parser("scan", help="OCR a photo and list its ingredients")
    scan_parser.add_argument("image", type=str, help="Image file to scan")
    scan_parser.add_argument(
        "--no-save", action="store_true", help="Do not save the scan to history"
    )
    scan_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # parse
    parse_parser = sub.add_parser("parse", help="Parse ingredient text without OCR")
    parse_parser.add_argument(
        "file", type=str, nargs="?", default=None,
        help="Text file to parse (reads stdin if omitted)",
    )
    parse_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # match
    match_parser = sub.add_parser("match", help="Rank catalog recipes for an ingredient list")
    _add_source_arguments(match_parser)
    match_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # suggest
    suggest_parser = sub.add_parser("suggest", help="Suggest dishes for an ingredient list")
    _add_source_arguments(suggest_parser)
    suggest_parser.add_argument(
        "--ai", action="store_true", help="Generate full recipes with an LLM"
    )

    # history
    history_parser = sub.add_parser("history", help="List recent scans")
    history_parser.add_argument(
        "--limit", type=int, default=10, help="Number of scans to show"
    )

    # show / delete
    show_parser = sub.add_parser("show", help="Show a saved scan")
    show_parser.add_argument("scan_id", type=int)
    delete_parser = sub.add_parser("delete", help="Delete a saved scan")
    delete_parser.add_argument("scan_id", type=int)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    logger.debug("Running %s with OCR backend %s", args.command, config.ocr.backend)

    try:
        match args.command:
            case "scan":
                asyncio.run(_cmd_scan(config, args))
            case "parse":
                _cmd_parse(args)
            case "match":
                asyncio.run(_cmd_match(config, args))
            case "suggest":
                asyncio.run(_cmd_suggest(config, args))
            case "history":
                _cmd_history(config, args)
            case "show":
                _cmd_show(config, args)
            case "delete":
                _cmd_delete(config, args)
    except NoIngredientsError as e:
        print(f"{e}", file=sys.stderr)
        sys.exit(1)
    except (PantryLensError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--image", type=str, help="Scan this image first")
    source.add_argument(
        "--text", type=str, help="Read ingredients from a text file ('-' for stdin)"
    )
    source.add_argument("--scan", type=int, help="Use a saved scan by id")


def _read_text(path: str | None) -> str:
    if path is None or path == "-":
        return sys.stdin.read()
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        raise PantryLensError(f"Cannot read {path}: {e}") from e


def _open_history(config: PantryLensConfig) -> ScanHistoryDB:
    return ScanHistoryDB(config.database.path)


def _open_catalog(config: PantryLensConfig) -> RecipeCatalog:
    if config.catalog.path:
        return RecipeCatalog(config.catalog.path)
    return RecipeCatalog.default()


async def _load_ingredients(config: PantryLensConfig, args) -> list[Ingredient]:
    """Resolve --image / --text / --scan into an ingredient list."""
    if args.image:
        pipeline = ScanPipeline(create_ocr_backend(config))
        scan = await pipeline.process_image(args.image, save_to_history=False)
        return scan.ingredients

    if args.text:
        ingredients = parse_text(_read_text(args.text))
        if not ingredients:
            raise NoIngredientsError(f"No ingredients found in {args.text}")
        return ingredients

    db = _open_history(config)
    try:
        scan = db.get_scan(args.scan)
    finally:
        db.close()
    if scan is None:
        raise PantryLensError(f"Scan {args.scan} not found")
    return scan.ingredients


def _print_ingredients(ingredients: list[Ingredient]) -> None:
    print(f"Ingredients ({len(ingredients)}):")
    for i in ingredients:
        print(f"  {i.name:<20} {i.quantity} {i.unit}")


def _match_to_dict(m: RecipeMatch) -> dict:
    return {
        "id": m.recipe.id,
        "name": m.recipe.name,
        "match_score": round(m.match_score, 3),
        "matched_ingredients": m.matched_ingredients,
        "missing_ingredients": m.missing_ingredients,
    }


async def _cmd_scan(config: PantryLensConfig, args) -> None:
    history = None if args.no_save else _open_history(config)
    pipeline = ScanPipeline(create_ocr_backend(config), history=history)
    try:
        scan = await pipeline.process_image(args.image, save_to_history=not args.no_save)
    finally:
        if history is not None:
            history.close()

    if args.json:
        print(json.dumps(asdict(scan), ensure_ascii=False, indent=2))
        return

    if scan.id:
        print(f"Saved as scan {scan.id}")
    _print_ingredients(scan.ingredients)


def _cmd_parse(args) -> None:
    ingredients = parse_text(_read_text(args.file))

    if args.json:
        data = [asdict(i) for i in ingredients]
        print(json.dumps(data, ensure_ascii=False, indent=2))
        return

    if not ingredients:
        print("No ingredients found.")
        return
    _print_ingredients(ingredients)


async def _cmd_match(config: PantryLensConfig, args) -> None:
    ingredients = await _load_ingredients(config, args)
    matcher = RecipeMatcher(_open_catalog(config), min_score=config.matcher.min_score)
    matches = matcher.match_recipes(ingredients)

    if args.json:
        data = [_match_to_dict(m) for m in matches]
        print(json.dumps(data, ensure_ascii=False, indent=2))
        return

    if not matches:
        print("No recipes matched. Try adding more ingredients.")
        return

    print(f"Recipes ({len(matches)}):")
    for m in matches:
        r = m.recipe
        print(
            f"\n  {r.name}  {m.match_score:.0%}  "
            f"[{r.category.value}, {r.difficulty.value}, {r.prep_time_minutes} min]"
        )
        print(f"    have:    {', '.join(m.matched_ingredients) or '-'}")
        print(f"    missing: {', '.join(m.missing_ingredients) or '-'}")


async def _cmd_suggest(config: PantryLensConfig, args) -> None:
    ingredients = await _load_ingredients(config, args)

    if not args.ai:
        suggestions = quick_suggestions(ingredients)
        if not suggestions:
            print("No quick suggestions for these ingredients.")
            return
        for s in suggestions:
            print(f"  - {s}")
        return

    backend = create_llm_backend(config)
    recipes = await backend.generate_recipes([i.name for i in ingredients])
    for recipe in recipes:
        print(f"\n## {recipe.title}")
        if recipe.cooking_time_minutes is not None:
            print(f"Cooking time: {recipe.cooking_time_minutes} min")
        if recipe.ingredients:
            print("Ingredients:")
            for line in recipe.ingredients:
                print(f"  - {line}")
        if recipe.instructions:
            print("Instructions:")
            for n, step in enumerate(recipe.instructions, 1):
                print(f"  {n}. {step}")
        for tip in recipe.tips:
            print(f"Tip: {tip}")


def _cmd_history(config: PantryLensConfig, args) -> None:
    db = _open_history(config)
    try:
        scans = db.get_recent(args.limit)
    finally:
        db.close()

    if not scans:
        print("No scans yet.")
        return
    for scan in scans:
        when = datetime.fromtimestamp(scan.timestamp).strftime("%Y-%m-%d %H:%M")
        names = ", ".join(i.name for i in scan.ingredients)
        print(f"  #{scan.id:<4} {when}  {names}")


def _cmd_show(config: PantryLensConfig, args) -> None:
    db = _open_history(config)
    try:
        scan = db.get_scan(args.scan_id)
    finally:
        db.close()

    if scan is None:
        raise PantryLensError(f"Scan {args.scan_id} not found")

    when = datetime.fromtimestamp(scan.timestamp).strftime("%Y-%m-%d %H:%M")
    print(f"Scan #{scan.id} ({when})")
    if scan.image_path:
        print(f"Image: {scan.image_path}")
    _print_ingredients(scan.ingredients)
    if scan.raw_text:
        print("\nRecognized text:")
        print(scan.raw_text)


def _cmd_delete(config: PantryLensConfig, args) -> None:
    db = _open_history(config)
    try:
        if db.get_scan(args.scan_id) is None:
            raise PantryLensError(f"Scan {args.scan_id} not found")
        db.delete_scan(args.scan_id)
    finally:
        db.close()
    print(f"Deleted scan {args.scan_id}")
