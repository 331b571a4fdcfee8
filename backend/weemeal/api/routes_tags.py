# weemeal/api/routes_tags.py
# Tag suggestions for the recipe editor (works on unsaved recipes)

from __future__ import annotations

from typing import List

from fastapi import APIRouter
from pydantic import BaseModel

from weemeal.models.recipe import TagRequest
from weemeal.services import tags

router = APIRouter(prefix="/recipes", tags=["tags"])


class TagResponse(BaseModel):
    tags: List[str]


@router.post("/generate-tags", response_model=TagResponse)
async def generate_tags(payload: TagRequest):
    found = await tags.generate_recipe_tags(payload.name.strip(), payload.ingredient_names())
    return TagResponse(tags=found)
