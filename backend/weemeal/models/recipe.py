# weemeal/models/recipe.py
# Recipe aggregate + ordered ingredient/section list (pydantic v2)
# - request bodies validate strictly; stored documents load with context={"lenient": True}
# - ingredient list items are a discriminated union on contentType

from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union
from urllib.parse import urlparse

from bson import ObjectId
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from weemeal.services.utils import parse_amount

MAX_NAME = 200
MIN_YIELD = 1
MAX_YIELD = 100
MAX_TAGS = 10
MAX_TAG_LEN = 25
MAX_NOTES = 5000

INGREDIENT = "INGREDIENT"
SECTION_CAPTION = "SECTION_CAPTION"


def _is_lenient(info: ValidationInfo) -> bool:
    return bool((info.context or {}).get("lenient"))


# ------------------------------
# Ingredient list content
# ------------------------------

class Ingredient(BaseModel):
    contentId: str = Field(..., min_length=1)
    contentType: Literal["INGREDIENT"] = INGREDIENT
    position: int = Field(..., ge=0)
    ingredientName: str = Field(..., min_length=1)
    unit: Optional[str] = None
    amount: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)

    @field_validator("amount", mode="before")
    @classmethod
    def _v_amount(cls, v, info: ValidationInfo):
        # Legacy documents carry strings like "2 EL"; never fail a stored recipe on them
        if _is_lenient(info) and v is not None:
            parsed = parse_amount(v)
            return parsed if parsed is not None and parsed >= 0 else None
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("unit", mode="before")
    @classmethod
    def _v_unit(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class SectionCaption(BaseModel):
    contentId: str = Field(..., min_length=1)
    contentType: Literal["SECTION_CAPTION"] = SECTION_CAPTION
    position: int = Field(..., ge=0)
    sectionName: str = Field(..., min_length=1)


IngredientListContent = Annotated[
    Union[Ingredient, SectionCaption],
    Field(discriminator="contentType"),
]


# ------------------------------
# Source attribution
# ------------------------------

class BookSource(BaseModel):
    type: Literal["book"]
    title: str = Field(..., min_length=1, max_length=200)
    page: Optional[str] = Field(default=None, max_length=50)


class UrlSource(BaseModel):
    type: Literal["url"]
    href: str = Field(..., min_length=1, max_length=2000)

    @field_validator("href")
    @classmethod
    def _v_href(cls, v: str) -> str:
        v = v.strip()
        parsed = urlparse(v)
        if parsed.scheme.lower() not in ("http", "https") or not parsed.netloc:
            raise ValueError("Source URL must be an http(s) URL")
        return v


RecipeSource = Annotated[Union[BookSource, UrlSource], Field(discriminator="type")]


# ------------------------------
# Recipe
# ------------------------------

Tag = Annotated[str, Field(max_length=MAX_TAG_LEN)]


def _strip_name(v):
    return v.strip() if isinstance(v, str) else v


class RecipeIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=MAX_NAME)
    recipeYield: int = Field(..., ge=MIN_YIELD, le=MAX_YIELD)
    recipeInstructions: str = ""
    ingredientListContent: List[IngredientListContent] = Field(default_factory=list)
    imageUrl: Optional[str] = None
    tags: List[Tag] = Field(default_factory=list, max_length=MAX_TAGS)
    notes: str = Field(default="", max_length=MAX_NOTES)
    source: Optional[RecipeSource] = None
    userId: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _v_name(cls, v):
        return _strip_name(v)


class RecipeUpdate(BaseModel):
    # Required-on-create fields may be omitted here but not nulled (defaults are not validated)
    name: str = Field(default=None, min_length=1, max_length=MAX_NAME)
    recipeYield: int = Field(default=None, ge=MIN_YIELD, le=MAX_YIELD)
    recipeInstructions: str = None
    ingredientListContent: List[IngredientListContent] = None
    imageUrl: Optional[str] = None
    tags: List[Tag] = Field(default=None, max_length=MAX_TAGS)
    notes: str = Field(default=None, max_length=MAX_NOTES)
    source: Optional[RecipeSource] = None
    userId: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _v_name(cls, v):
        return _strip_name(v)

    @model_validator(mode="after")
    def _v_not_empty(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self

    def changes(self) -> dict:
        """Only the fields the client sent; None means "remove"."""
        return self.model_dump(exclude_unset=True)


class Recipe(RecipeIn):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def _v_id(cls, v):
        return str(v) if isinstance(v, ObjectId) else v

    @classmethod
    def from_document(cls, doc: dict) -> "Recipe":
        return cls.model_validate(doc, context={"lenient": True})

    def ingredients(self) -> List[Ingredient]:
        return [c for c in self.ingredientListContent if isinstance(c, Ingredient)]


# ------------------------------
# Request bodies for the single-field endpoints
# ------------------------------

class NotesIn(BaseModel):
    notes: str = Field(..., max_length=MAX_NOTES)


class SourceIn(BaseModel):
    source: Optional[RecipeSource]


class ImageSaveIn(BaseModel):
    imageUrl: Optional[str] = None


class TagRequest(BaseModel):
    name: str = Field(..., min_length=1)
    # raw editor content; only named INGREDIENT rows are used
    ingredients: List[dict] = Field(default_factory=list)

    def ingredient_names(self) -> List[str]:
        out: List[str] = []
        for item in self.ingredients:
            if item.get("contentType") == INGREDIENT and item.get("ingredientName"):
                out.append(str(item["ingredientName"]))
        return out
