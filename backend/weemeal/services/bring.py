# weemeal/services/bring.py
# Bring! shopping list export
# - deep link: Bring! fetches our export page and scales by baseQuantity/requestedQuantity itself
# - export page: schema.org/Recipe JSON-LD (read by the Bring! scraper) + a plain visible copy

from __future__ import annotations

import html
import json
from typing import Optional
from urllib.parse import urlencode

from weemeal.models.recipe import Recipe
from weemeal.services.scaling import format_ingredient, sort_by_position

BRING_DEEPLINK_BASE = "https://api.getbring.com/rest/bringrecipes/deeplink"


def export_path(recipe_id: str) -> str:
    return f"/recipes/bring/{recipe_id}"


def generate_shopping_list_url(
    recipe_id: str,
    base_url: str,
    base_quantity: int,
    requested_quantity: Optional[int] = None,
) -> str:
    if requested_quantity is None:
        requested_quantity = base_quantity
    callback = base_url.rstrip("/") + export_path(recipe_id)
    query = urlencode({
        "url": callback,
        "source": "web",
        "baseQuantity": str(base_quantity),
        "requestedQuantity": str(requested_quantity),
    })
    return f"{BRING_DEEPLINK_BASE}?{query}"


def shopping_list_url_for(recipe: Recipe, base_url: str, requested_quantity: Optional[int] = None) -> str:
    # baseQuantity is always the stored yield
    return generate_shopping_list_url(
        recipe.id,
        base_url,
        recipe.recipeYield,
        requested_quantity,
    )


def _escape(text: str) -> str:
    return html.escape(text or "", quote=True)


def build_schema_org(recipe: Recipe) -> dict:
    ingredients = sort_by_position(recipe.ingredients())
    return {
        "@context": "https://schema.org",
        "@type": "Recipe",
        "name": recipe.name,
        "recipeYield": str(recipe.recipeYield),
        "recipeIngredient": [format_ingredient(i) for i in ingredients],
        "recipeInstructions": recipe.recipeInstructions,
    }


# markup characters inside a script element can end it ("</script>") or
# change how the parser scans it ("<!--<script>"); JSON unicode escapes decode back unchanged
_SCRIPT_UNSAFE = {"<": "\\u003c", ">": "\\u003e", "&": "\\u0026"}


def _json_ld(data: dict) -> str:
    text = json.dumps(data, ensure_ascii=False, indent=2)
    for char, escaped in _SCRIPT_UNSAFE.items():
        text = text.replace(char, escaped)
    return text


def render_export_document(recipe: Recipe) -> str:
    schema = build_schema_org(recipe)
    items = "\n".join(f"        <li>{_escape(line)}</li>" for line in schema["recipeIngredient"])
    title = _escape(recipe.name)

    return f"""<!DOCTYPE html>
<html lang="de">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <script type="application/ld+json">
{_json_ld(schema)}
    </script>
</head>
<body>
    <h1>{title}</h1>
    <p>Portionen: {recipe.recipeYield}</p>
    <h2>Zutaten</h2>
    <ul>
{items}
    </ul>
    <h2>Zubereitung</h2>
    <div>{_escape(recipe.recipeInstructions)}</div>
</body>
</html>"""
