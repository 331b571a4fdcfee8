# weemeal/db/repository.py
# Recipe persistence over one motor collection.
# Returns raw documents; routers turn them into Recipe models.

from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument


def _oid(recipe_id: str) -> Optional[ObjectId]:
    # malformed ids behave like unknown ids (404), not like validation errors
    if not isinstance(recipe_id, str) or not ObjectId.is_valid(recipe_id):
        return None
    return ObjectId(recipe_id)


def _owner_filter(user_id: Optional[str]) -> Dict[str, Any]:
    return {"userId": user_id} if user_id else {}


class RecipeRepository:
    def __init__(self, collection: AsyncIOMotorCollection):
        self.col = collection

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        now = datetime.utcnow()
        doc = {k: v for k, v in data.items() if v is not None}
        doc.setdefault("recipeInstructions", "")
        doc.setdefault("ingredientListContent", [])
        doc["createdAt"] = now
        doc["updatedAt"] = now
        res = await self.col.insert_one(doc)
        doc["_id"] = res.inserted_id
        return doc

    async def find_all(self, user_id: Optional[str] = None) -> List[Dict[str, Any]]:
        cursor = self.col.find(_owner_filter(user_id)).sort("createdAt", -1)
        return await cursor.to_list(length=None)

    async def find_by_id(self, recipe_id: str) -> Optional[Dict[str, Any]]:
        oid = _oid(recipe_id)
        if oid is None:
            return None
        return await self.col.find_one({"_id": oid})

    async def find_by_name(self, name: str, user_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """Case-insensitive substring match on the name, sorted A-Z."""
        query = {"name": {"$regex": re.escape(name), "$options": "i"}, **_owner_filter(user_id)}
        cursor = self.col.find(query).sort("name", 1)
        return await cursor.to_list(length=None)

    async def update(self, recipe_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        # None values are removed from the document (e.g. clearing imageUrl/source)
        oid = _oid(recipe_id)
        if oid is None:
            return None
        to_set = {k: v for k, v in changes.items() if v is not None}
        to_unset = {k: "" for k, v in changes.items() if v is None}
        to_set["updatedAt"] = datetime.utcnow()

        op: Dict[str, Any] = {"$set": to_set}
        if to_unset:
            op["$unset"] = to_unset
        return await self.col.find_one_and_update(
            {"_id": oid}, op, return_document=ReturnDocument.AFTER
        )

    async def delete(self, recipe_id: str) -> bool:
        oid = _oid(recipe_id)
        if oid is None:
            return False
        res = await self.col.delete_one({"_id": oid})
        return res.deleted_count > 0
