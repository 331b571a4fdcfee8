# weemeal/core/deps.py
# Shared dependencies/helpers for the routers

from fastapi import HTTPException, Request

from weemeal.core.config import settings
from weemeal.db.indexes import RECIPES
from weemeal.db.init import get_db
from weemeal.db.repository import RecipeRepository
from weemeal.models.recipe import Recipe


def get_recipe_repository() -> RecipeRepository:
    # overridden in tests with an in-memory repository
    try:
        db = get_db()
    except RuntimeError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return RecipeRepository(db[RECIPES])


def public_base_url(request: Request) -> str:
    # APP_URL when deployed behind a proxy, else the host the client used
    return (settings.APP_URL or str(request.base_url)).rstrip("/")


async def load_recipe(repo: RecipeRepository, recipe_id: str) -> Recipe:
    doc = await repo.find_by_id(recipe_id)
    if not doc:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return Recipe.from_document(doc)
