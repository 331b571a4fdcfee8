# weemeal/scripts/import_recipes.py
# Import recipes exported from the previous backend (JSON array).
# Records are normalized, validated like a POST /recipes body and inserted;
# names already stored are skipped, so the import can be re-run.
#   python -m weemeal.scripts.import_recipes recipes.json
import argparse
import asyncio
import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from weemeal.db.indexes import RECIPES, ensure_indexes
from weemeal.db.init import close_db, init_db
from weemeal.db.repository import RecipeRepository
from weemeal.models.recipe import INGREDIENT, MAX_YIELD, MIN_YIELD, SECTION_CAPTION, RecipeIn
from weemeal.services.utils import parse_amount

log = logging.getLogger(__name__)


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _position(item: Dict[str, Any]) -> float:
    # unreadable positions sort after every numbered entry
    pos = parse_amount(item.get("position"))
    return pos if pos is not None else float("inf")


def _content_id(item: Dict[str, Any]) -> str:
    # older exports call it "id"
    cid = item.get("contentId") or item.get("id")
    return str(cid) if cid else uuid.uuid4().hex


def normalize_content(items: Any) -> List[Dict[str, Any]]:
    """
    Legacy ingredient list -> current shape.
    Entries are ordered by their old position (stable) and renumbered 0..n-1.
    Amounts are parsed leniently; negative or unreadable amounts are dropped.
    Entries without a name carry nothing to show and are left out.
    """
    if not isinstance(items, list):
        return []

    out: List[Dict[str, Any]] = []
    for item in sorted((i for i in items if isinstance(i, dict)), key=_position):
        if item.get("contentType") == SECTION_CAPTION:
            name = _text(item.get("sectionName"))
            if not name:
                continue
            out.append({"contentId": _content_id(item), "contentType": SECTION_CAPTION, "sectionName": name})
            continue

        name = _text(item.get("ingredientName"))
        if not name:
            continue
        amount = parse_amount(item.get("amount"))
        out.append({
            "contentId": _content_id(item),
            "contentType": INGREDIENT,
            "ingredientName": name,
            "amount": amount if amount is not None and amount >= 0 else None,
            "unit": _text(item.get("unit")) or None,
        })

    for pos, entry in enumerate(out):
        entry["position"] = pos
    return out


def _recipe_yield(value: Any) -> Optional[int]:
    n = parse_amount(value)
    if n is None:
        return None
    return min(max(round(n), MIN_YIELD), MAX_YIELD)


def normalize_recipe(record: Dict[str, Any]) -> Dict[str, Any]:
    data = {
        "name": _text(record.get("name")),
        "recipeYield": _recipe_yield(record.get("recipeYield")),
        "recipeInstructions": record.get("recipeInstructions") or "",
        "ingredientListContent": normalize_content(record.get("ingredientListContent")),
    }
    for key in ("imageUrl", "tags", "notes", "source", "userId"):
        if record.get(key):
            data[key] = record[key]
    return data


async def import_recipes(repo: RecipeRepository, records: List[Any]) -> Dict[str, Any]:
    """Returns counts of imported / skipped / failed records plus one message per failure."""
    result: Dict[str, Any] = {"imported": 0, "skipped": 0, "failed": 0, "errors": []}
    for i, record in enumerate(records):
        if not isinstance(record, dict):
            result["failed"] += 1
            result["errors"].append(f"#{i}: not an object")
            continue
        try:
            payload = RecipeIn.model_validate(normalize_recipe(record))
        except ValidationError as e:
            label = _text(record.get("name")) or f"#{i}"
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            result["failed"] += 1
            result["errors"].append(f"{label}: invalid {fields}")
            log.warning("[import] %s: invalid %s", label, fields)
            continue

        existing = await repo.find_by_name(payload.name)
        if any(d.get("name") == payload.name for d in existing):
            log.info("[import] skip %r (exists)", payload.name)
            result["skipped"] += 1
            continue

        doc = await repo.create(payload.model_dump(mode="json"))
        log.info("[import] %r -> %s", payload.name, doc["_id"])
        result["imported"] += 1
    return result


def load_records(path: Path) -> List[Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of recipes")
    return data


async def main(path: Path):
    records = load_records(path)
    log.info("[import] %d records in %s", len(records), path)
    db = await init_db()
    await ensure_indexes()
    try:
        result = await import_recipes(RecipeRepository(db[RECIPES]), records)
        log.info("[import] done. imported=%d skipped=%d failed=%d",
                 result["imported"], result["skipped"], result["failed"])
        for msg in result["errors"]:
            log.info("[import]   %s", msg)
    finally:
        await close_db()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Import recipes from a legacy JSON export")
    parser.add_argument("path", type=Path)
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main(parser.parse_args().path))
