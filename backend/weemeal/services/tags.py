# weemeal/services/tags.py
# Tag suggestions for a recipe (German)
# - AI: comma-separated list following a fixed taxonomy
# - fallback: keyword checks on the name and ingredient names

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from weemeal.core.config import settings
from weemeal.models.recipe import MAX_TAG_LEN
from weemeal.services.ai import complete

log = logging.getLogger(__name__)

MAX_AI_TAGS = 8
MAX_FALLBACK_TAGS = 6
PROMPT_INGREDIENTS = 10
DEFAULT_TAG = "Hauptgericht"

TagSuggester = Callable[[str, List[str]], Awaitable[Optional[str]]]

PROMPT = (
    "Generate 3-6 relevant tags for this recipe. Tags should be short (1-2 words), "
    "in German, and describe:\n"
    "- Main dish type (e.g., Suppe, Auflauf, Salat, Pasta)\n"
    "- Main ingredient category (e.g., Fleisch, Vegetarisch, Fisch)\n"
    "- Cuisine style if applicable (e.g., Italienisch, Asiatisch)\n"
    "- Meal type (e.g., Hauptgericht, Beilage, Dessert)\n"
    "- Special dietary info (e.g., Vegan, Low-Carb, Schnell)\n\n"
    'Recipe name: "{name}"\n'
    "Main ingredients: {ingredients}\n\n"
    "Return ONLY the tags as a comma-separated list, nothing else. "
    "Example: Vegetarisch, Pasta, Italienisch, Schnell"
)

# (name substrings, tag)
DISH_KEYWORDS = [
    (("suppe",), "Suppe"),
    (("salat",), "Salat"),
    (("auflauf",), "Auflauf"),
    (("pasta", "nudel"), "Pasta"),
    (("kuchen", "torte"), "Dessert"),
    (("brot",), "Brot"),
]
MEAT_KEYWORDS = ("fleisch", "huhn", "hähnchen", "rind", "schwein", "hack")
FISH_KEYWORDS = ("fisch", "lachs", "thunfisch", "garnelen")


async def suggest_tags(name: str, ingredient_names: List[str]) -> Optional[str]:
    ingredients = ", ".join(ingredient_names[:PROMPT_INGREDIENTS])
    return await complete(PROMPT.format(name=name, ingredients=ingredients), max_tokens=200)


def parse_tag_list(text: str) -> List[str]:
    tags = [t.strip() for t in (text or "").split(",")]
    return [t for t in tags if 0 < len(t) <= MAX_TAG_LEN][:MAX_AI_TAGS]


def fallback_tags(name: str, ingredient_names: List[str]) -> List[str]:
    tags: List[str] = []
    name_lower = name.lower()
    ingredients_lower = " ".join(i.lower() for i in ingredient_names)

    for keywords, tag in DISH_KEYWORDS:
        if any(k in name_lower for k in keywords):
            tags.append(tag)

    # protein class needs at least one ingredient to judge from
    if ingredients_lower.strip():
        if any(m in ingredients_lower for m in MEAT_KEYWORDS):
            tags.append("Fleisch")
        elif any(f in ingredients_lower for f in FISH_KEYWORDS):
            tags.append("Fisch")
        else:
            tags.append("Vegetarisch")

    if not tags:
        tags.append(DEFAULT_TAG)
    return tags[:MAX_FALLBACK_TAGS]


async def generate_recipe_tags(
    name: str,
    ingredient_names: List[str],
    suggester: Optional[TagSuggester] = None,
) -> List[str]:
    suggester = suggester or suggest_tags
    try:
        text = await asyncio.wait_for(suggester(name, ingredient_names), timeout=settings.COLLABORATOR_TIMEOUT)
    except Exception as e:
        log.warning("Tag suggestion failed for %r: %s", name, e)
        text = None

    tags = parse_tag_list(text) if text else []
    if tags:
        log.info("AI tags for %r: %s", name, ", ".join(tags))
        return tags

    log.info("Using keyword tags for %r", name)
    return fallback_tags(name, ingredient_names)
