# tests/conftest.py
# In-memory stand-in for a motor collection + app client wired to it.
# The real RecipeRepository runs on top, so routes and queries are exercised end to end.
import copy
import re
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo import ReturnDocument

from weemeal.core.config import settings
from weemeal.core.deps import get_recipe_repository
from weemeal.db.repository import RecipeRepository
from weemeal.main import app

APP_URL = "https://weemeal.example"


def _matches(doc, query):
    for key, cond in query.items():
        if isinstance(cond, dict) and "$regex" in cond:
            flags = re.I if "i" in cond.get("$options", "") else 0
            if not re.search(cond["$regex"], str(doc.get(key, "")), flags):
                return False
        elif doc.get(key) != cond:
            return False
    return True


class FakeCursor:
    def __init__(self, docs):
        self._docs = list(docs)

    def sort(self, key, direction):
        self._docs.sort(key=lambda d: d.get(key), reverse=direction < 0)
        return self

    async def to_list(self, length=None):
        docs = self._docs if length is None else self._docs[:length]
        return [copy.deepcopy(d) for d in docs]


class FakeCollection:
    def __init__(self):
        self.docs = []
        self.queries = []

    async def insert_one(self, doc):
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    def find(self, query=None):
        query = query or {}
        self.queries.append(query)
        return FakeCursor(d for d in self.docs if _matches(d, query))

    async def find_one(self, query):
        self.queries.append(query)
        for d in self.docs:
            if _matches(d, query):
                return copy.deepcopy(d)
        return None

    async def find_one_and_update(self, query, op, return_document=ReturnDocument.BEFORE):
        for d in self.docs:
            if _matches(d, query):
                before = copy.deepcopy(d)
                d.update(copy.deepcopy(op.get("$set", {})))
                for key in op.get("$unset", {}):
                    d.pop(key, None)
                return copy.deepcopy(d) if return_document == ReturnDocument.AFTER else before
        return None

    async def delete_one(self, query):
        for i, d in enumerate(self.docs):
            if _matches(d, query):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    def stored(self, recipe_id):
        return next((d for d in self.docs if str(d["_id"]) == str(recipe_id)), None)


def bolognese(**overrides):
    data = {
        "name": "Spaghetti Bolognese",
        "recipeYield": 4,
        "recipeInstructions": "Zwiebeln anbraten, Hackfleisch dazu.",
        "ingredientListContent": [
            {"contentId": "s1", "contentType": "SECTION_CAPTION", "position": 0, "sectionName": "Sauce"},
            {"contentId": "i1", "contentType": "INGREDIENT", "position": 1,
             "ingredientName": "Hackfleisch", "amount": 500, "unit": "g"},
            {"contentId": "i2", "contentType": "INGREDIENT", "position": 2,
             "ingredientName": "Zwiebeln", "amount": 3},
            {"contentId": "i3", "contentType": "INGREDIENT", "position": 3, "ingredientName": "Salz"},
        ],
    }
    data.update(overrides)
    return data


@pytest.fixture(autouse=True)
def offline_settings(monkeypatch):
    # no collaborator is ever configured in tests; a local .env must not leak in
    monkeypatch.setattr(settings, "OPENAI_API_KEY", None)
    monkeypatch.setattr(settings, "UNSPLASH_ACCESS_KEY", None)
    monkeypatch.setattr(settings, "APP_URL", APP_URL)
    monkeypatch.setattr(settings, "COLLABORATOR_TIMEOUT", 1.0)


@pytest.fixture
def collection():
    return FakeCollection()


@pytest.fixture
def repo(collection):
    return RecipeRepository(collection)


@pytest.fixture
def client(repo):
    app.dependency_overrides[get_recipe_repository] = lambda: repo
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def created(client):
    r = client.post("/recipes", json=bolognese())
    assert r.status_code == 201
    return r.json()
