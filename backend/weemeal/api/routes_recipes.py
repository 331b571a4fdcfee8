# weemeal/api/routes_recipes.py
# Recipe CRUD + notes/source + portion-scaled view + Bring! deep link

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pymongo.errors import PyMongoError

from weemeal.core.deps import get_recipe_repository, load_recipe, public_base_url
from weemeal.db.repository import RecipeRepository
from weemeal.models.recipe import (
    MAX_YIELD,
    MIN_YIELD,
    NotesIn,
    Recipe,
    RecipeIn,
    RecipeUpdate,
    SourceIn,
)
from weemeal.services.bring import shopping_list_url_for
from weemeal.services.scaling import portion_multiplier, scale_for_display

log = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes", tags=["recipes"])


def to_out(doc: Dict[str, Any]) -> Dict[str, Any]:
    return Recipe.from_document(doc).model_dump(mode="json", by_alias=True)


def _db_error(action: str, e: Exception) -> HTTPException:
    log.error("DB error while %s: %s", action, e)
    return HTTPException(status_code=503, detail=f"Database error while {action}")


# ------------------------------
# CRUD
# ------------------------------

@router.get("")
async def list_recipes(
    userId: Optional[str] = None,
    search: Optional[str] = None,
    repo: RecipeRepository = Depends(get_recipe_repository),
) -> List[Dict[str, Any]]:
    """All recipes newest first, or a case-insensitive name search sorted by name."""
    try:
        if search and search.strip():
            docs = await repo.find_by_name(search.strip(), user_id=userId)
        else:
            docs = await repo.find_all(user_id=userId)
    except PyMongoError as e:
        raise _db_error("listing recipes", e)
    return [to_out(d) for d in docs]


@router.post("", status_code=201)
async def create_recipe(payload: RecipeIn, repo: RecipeRepository = Depends(get_recipe_repository)):
    try:
        doc = await repo.create(payload.model_dump(mode="json"))
    except PyMongoError as e:
        raise _db_error("creating recipe", e)
    log.info("Created recipe %s (%r)", doc["_id"], payload.name)
    return to_out(doc)


@router.get("/{recipe_id}")
async def get_recipe(recipe_id: str, repo: RecipeRepository = Depends(get_recipe_repository)):
    try:
        recipe = await load_recipe(repo, recipe_id)
    except PyMongoError as e:
        raise _db_error("loading recipe", e)
    return recipe.model_dump(mode="json", by_alias=True)


@router.put("/{recipe_id}")
async def update_recipe(
    recipe_id: str,
    payload: RecipeUpdate,
    repo: RecipeRepository = Depends(get_recipe_repository),
):
    try:
        doc = await repo.update(recipe_id, payload.changes())
    except PyMongoError as e:
        raise _db_error("updating recipe", e)
    if not doc:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return to_out(doc)


@router.delete("/{recipe_id}")
async def delete_recipe(recipe_id: str, repo: RecipeRepository = Depends(get_recipe_repository)):
    try:
        deleted = await repo.delete(recipe_id)
    except PyMongoError as e:
        raise _db_error("deleting recipe", e)
    if not deleted:
        raise HTTPException(status_code=404, detail="Recipe not found")
    log.info("Deleted recipe %s", recipe_id)
    return {"success": True}


# ------------------------------
# single-field updates
# ------------------------------

@router.patch("/{recipe_id}/notes")
async def update_notes(recipe_id: str, payload: NotesIn, repo: RecipeRepository = Depends(get_recipe_repository)):
    try:
        doc = await repo.update(recipe_id, {"notes": payload.notes})
    except PyMongoError as e:
        raise _db_error("updating notes", e)
    if not doc:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return {"success": True, "notes": doc.get("notes", "")}


@router.patch("/{recipe_id}/source")
async def update_source(recipe_id: str, payload: SourceIn, repo: RecipeRepository = Depends(get_recipe_repository)):
    source = payload.model_dump(mode="json")["source"]
    try:
        doc = await repo.update(recipe_id, {"source": source})
    except PyMongoError as e:
        raise _db_error("updating source", e)
    if not doc:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return {"success": True, "source": doc.get("source")}


# ------------------------------
# portion view / Bring!
# ------------------------------

@router.get("/{recipe_id}/display")
async def display_recipe(
    recipe_id: str,
    request: Request,
    portions: Optional[int] = Query(None, ge=MIN_YIELD, le=MAX_YIELD),
    repo: RecipeRepository = Depends(get_recipe_repository),
):
    """Recipe scaled to `portions` (default: its yield) plus the matching Bring! link."""
    try:
        recipe = await load_recipe(repo, recipe_id)
    except PyMongoError as e:
        raise _db_error("loading recipe", e)

    target = portions or recipe.recipeYield
    multiplier = portion_multiplier(recipe.recipeYield, target)
    items = scale_for_display(recipe.ingredientListContent, multiplier)

    return {
        "recipe": recipe.model_dump(mode="json", by_alias=True),
        "portions": target,
        "multiplier": multiplier,
        "ingredientListContent": [i.model_dump(mode="json") for i in items],
        "bringUrl": shopping_list_url_for(recipe, public_base_url(request), target),
    }


@router.get("/{recipe_id}/bring-link")
async def bring_link(
    recipe_id: str,
    request: Request,
    portions: Optional[int] = Query(None, ge=MIN_YIELD, le=MAX_YIELD),
    repo: RecipeRepository = Depends(get_recipe_repository),
):
    try:
        recipe = await load_recipe(repo, recipe_id)
    except PyMongoError as e:
        raise _db_error("loading recipe", e)
    return {"url": shopping_list_url_for(recipe, public_base_url(request), portions)}
