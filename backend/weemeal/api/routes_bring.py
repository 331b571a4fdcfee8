# weemeal/api/routes_bring.py
# Export page fetched by the Bring! recipe importer (see services/bring.py)

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse
from pymongo.errors import PyMongoError

from weemeal.core.deps import get_recipe_repository, load_recipe
from weemeal.db.repository import RecipeRepository
from weemeal.services.bring import render_export_document

router = APIRouter(prefix="/recipes", tags=["bring"])

CACHE_CONTROL = "public, max-age=3600"


@router.get("/bring/{recipe_id}", response_class=HTMLResponse)
async def bring_export(recipe_id: str, repo: RecipeRepository = Depends(get_recipe_repository)):
    try:
        recipe = await load_recipe(repo, recipe_id)
    except PyMongoError:
        raise HTTPException(status_code=503, detail="Database error while loading recipe")
    return HTMLResponse(
        content=render_export_document(recipe),
        headers={"Cache-Control": CACHE_CONTROL},
    )
