# weemeal/api/routes_images.py
# Recipe image: read stored / resolve a fresh one / save / remove

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from pymongo.errors import PyMongoError

from weemeal.core.deps import get_recipe_repository, load_recipe
from weemeal.db.repository import RecipeRepository
from weemeal.models.image import ImageResponse
from weemeal.models.recipe import ImageSaveIn
from weemeal.services import recipe_image

log = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes", tags=["images"])


@router.get("/{recipe_id}/image", response_model=ImageResponse, response_model_exclude_none=True)
async def get_image(
    recipe_id: str,
    regenerate: bool = False,
    name: Optional[str] = None,
    repo: RecipeRepository = Depends(get_recipe_repository),
):
    """Stored image unless regenerate=true; `name` overrides the recipe name (unsaved edits)."""
    try:
        recipe = await load_recipe(repo, recipe_id)
    except PyMongoError:
        raise HTTPException(status_code=503, detail="Database error while loading recipe")

    if recipe.imageUrl and not regenerate:
        return ImageResponse(imageUrl=recipe.imageUrl, source="stored")

    result = await recipe_image.get_recipe_image((name or "").strip() or recipe.name)
    return ImageResponse(imageUrl=result.url, attribution=result.attribution, source=result.source)


@router.post("/{recipe_id}/image", response_model=ImageResponse, response_model_exclude_none=True)
async def save_image(
    recipe_id: str,
    payload: Optional[ImageSaveIn] = Body(None),
    repo: RecipeRepository = Depends(get_recipe_repository),
):
    try:
        recipe = await load_recipe(repo, recipe_id)
    except PyMongoError:
        raise HTTPException(status_code=503, detail="Database error while loading recipe")

    if payload and payload.imageUrl:
        url, source, attribution = payload.imageUrl, "custom", None
    else:
        result = await recipe_image.get_recipe_image(recipe.name)
        url, source, attribution = result.url, result.source, result.attribution

    try:
        await repo.update(recipe_id, {"imageUrl": url})
    except PyMongoError:
        raise HTTPException(status_code=503, detail="Database error while saving image")
    log.info("Saved %s image for recipe %s", source, recipe_id)
    return ImageResponse(imageUrl=url, attribution=attribution, source=source, message="Image saved successfully")


@router.delete("/{recipe_id}/image", response_model=ImageResponse, response_model_exclude_none=True)
async def delete_image(recipe_id: str, repo: RecipeRepository = Depends(get_recipe_repository)):
    try:
        doc = await repo.update(recipe_id, {"imageUrl": None})
    except PyMongoError:
        raise HTTPException(status_code=503, detail="Database error while removing image")
    if not doc:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return ImageResponse(message="Image removed successfully")
