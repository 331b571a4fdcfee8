# weemeal/scripts/seed_recipes.py
# Sample recipes for a fresh dev database.
# Recipes whose name already exists are skipped, so the script can be re-run.
#   python -m weemeal.scripts.seed_recipes
import asyncio
import logging
from typing import Any, Dict, List, Optional

from weemeal.db.indexes import RECIPES, ensure_indexes
from weemeal.db.init import close_db, init_db
from weemeal.db.repository import RecipeRepository
from weemeal.models.recipe import RecipeIn

log = logging.getLogger(__name__)


def _ing(cid: str, pos: int, name: str, amount: Optional[float] = None, unit: Optional[str] = None) -> Dict[str, Any]:
    return {
        "contentId": cid,
        "contentType": "INGREDIENT",
        "position": pos,
        "ingredientName": name,
        "amount": amount,
        "unit": unit,
    }


def _section(cid: str, pos: int, name: str) -> Dict[str, Any]:
    return {"contentId": cid, "contentType": "SECTION_CAPTION", "position": pos, "sectionName": name}


SAMPLE_RECIPES: List[Dict[str, Any]] = [
    {
        "name": "Spaghetti Bolognese",
        "recipeYield": 4,
        "tags": ["Pasta", "Fleisch", "Italienisch"],
        "recipeInstructions": (
            "## Zubereitung\n\n"
            "1. Zwiebeln und Knoblauch fein hacken und in Olivenöl anbraten\n"
            "2. Hackfleisch hinzufügen und krümelig braten\n"
            "3. Tomatenmark einrühren und kurz mitrösten\n"
            "4. Passierte Tomaten und Brühe hinzugeben\n"
            "5. Mit Salz, Pfeffer und italienischen Kräutern würzen\n"
            "6. 30 Minuten köcheln lassen\n"
            "7. Spaghetti nach Packungsanleitung kochen\n"
            "8. Sauce über die Pasta geben und mit Parmesan servieren"
        ),
        "ingredientListContent": [
            _ing("i1", 0, "Spaghetti", 500, "g"),
            _ing("i2", 1, "Rinderhackfleisch", 400, "g"),
            _ing("i3", 2, "Zwiebeln", 2, "Stück"),
            _ing("i4", 3, "Knoblauchzehen", 3, "Stück"),
            _ing("i5", 4, "Passierte Tomaten", 400, "ml"),
            _ing("i6", 5, "Tomatenmark", 2, "EL"),
            _ing("i7", 6, "Gemüsebrühe", 100, "ml"),
            _ing("i8", 7, "Olivenöl", 3, "EL"),
            _ing("i9", 8, "Parmesan", 50, "g"),
        ],
    },
    {
        "name": "Klassischer Kaiserschmarrn",
        "recipeYield": 2,
        "tags": ["Dessert", "Vegetarisch"],
        "recipeInstructions": (
            "## Zubereitung\n\n"
            "1. Eier trennen. Eigelb mit Milch, Mehl und einer Prise Salz verrühren\n"
            "2. Eiweiß steif schlagen und unter den Teig heben\n"
            "3. Butter in einer Pfanne erhitzen\n"
            "4. Teig eingießen und bei mittlerer Hitze stocken lassen\n"
            "5. Mit zwei Gabeln in Stücke reißen\n"
            "6. Rosinen hinzufügen und mit Puderzucker bestreuen\n"
            "7. Mit Apfelmus servieren"
        ),
        "ingredientListContent": [
            _ing("k1", 0, "Eier", 4, "Stück"),
            _ing("k2", 1, "Mehl", 150, "g"),
            _ing("k3", 2, "Milch", 200, "ml"),
            _ing("k4", 3, "Butter", 50, "g"),
            _ing("k5", 4, "Puderzucker", 30, "g"),
            _ing("k6", 5, "Rosinen", 50, "g"),
            _ing("k7", 6, "Salz", 1, "Prise"),
        ],
    },
    {
        "name": "Thai Curry mit Hähnchen",
        "recipeYield": 4,
        "tags": ["Fleisch", "Asiatisch", "Hauptgericht"],
        "recipeInstructions": (
            "## Zubereitung\n\n"
            "1. Hähnchenbrust in Streifen schneiden\n"
            "2. Gemüse vorbereiten: Paprika in Streifen, Zucchini in Halbmonde\n"
            "3. Öl im Wok erhitzen, Hähnchen anbraten und herausnehmen\n"
            "4. Currypaste im Wok anrösten\n"
            "5. Kokosmilch hinzugeben und aufkochen\n"
            "6. Gemüse und Hähnchen hinzufügen\n"
            "7. 10 Minuten köcheln lassen\n"
            "8. Mit Fischsauce und Limettensaft abschmecken\n"
            "9. Mit Thai-Basilikum garnieren und mit Reis servieren"
        ),
        "ingredientListContent": [
            _section("t1", 0, "Hauptzutaten"),
            _ing("t2", 1, "Hähnchenbrust", 500, "g"),
            _ing("t3", 2, "Kokosmilch", 400, "ml"),
            _ing("t4", 3, "Rote Currypaste", 3, "EL"),
            _section("t5", 4, "Gemüse"),
            _ing("t6", 5, "Paprika rot", 1, "Stück"),
            _ing("t7", 6, "Paprika gelb", 1, "Stück"),
            _ing("t8", 7, "Zucchini", 1, "Stück"),
            _ing("t9", 8, "Bambussprossen", 200, "g"),
            _section("t10", 9, "Würzen"),
            _ing("t11", 10, "Fischsauce", 2, "EL"),
            _ing("t12", 11, "Limettensaft", 2, "EL"),
            _ing("t13", 12, "Thai-Basilikum", 1, "Bund"),
            _ing("t14", 13, "Jasminreis", 300, "g"),
        ],
    },
    {
        "name": "Kartoffelauflauf mit Käse",
        "recipeYield": 3,
        "tags": ["Auflauf", "Vegetarisch"],
        "recipeInstructions": (
            "## Zubereitung\n\n"
            "1. Kartoffeln schälen und in dünne Scheiben schneiden\n"
            "2. Sahne mit Salz, Pfeffer und Muskat verrühren\n"
            "3. Kartoffeln in eine Auflaufform schichten und mit Sahne übergießen\n"
            "4. Mit Käse bestreuen und bei 180 °C 45 Minuten backen"
        ),
        "ingredientListContent": [
            _ing("a1", 0, "Kartoffeln", 1, "kg"),
            _ing("a2", 1, "Sahne", 200, "ml"),
            _ing("a3", 2, "Gouda gerieben", 150, "g"),
            _ing("a4", 3, "Muskatnuss"),
            _ing("a5", 4, "Salz und Pfeffer"),
        ],
    },
]


async def seed(repo: RecipeRepository, recipes: List[Dict[str, Any]] = SAMPLE_RECIPES) -> int:
    """Insert every sample recipe not yet stored under the same name. Returns the number inserted."""
    inserted = 0
    for raw in recipes:
        payload = RecipeIn.model_validate(raw)
        existing = await repo.find_by_name(payload.name)
        if any(d.get("name") == payload.name for d in existing):
            log.info("skip %r (exists)", payload.name)
            continue
        doc = await repo.create(payload.model_dump(mode="json"))
        log.info("seeded %r -> %s", payload.name, doc["_id"])
        inserted += 1
    return inserted


async def main():
    db = await init_db()
    await ensure_indexes()
    try:
        n = await seed(RecipeRepository(db[RECIPES]))
        log.info("[seed] done. inserted=%d", n)
    finally:
        await close_db()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
