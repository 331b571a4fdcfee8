# weemeal/db/indexes.py
# Collection indexes. Awaited once from the startup hook.

from weemeal.db.init import get_db

RECIPES = "recipes"


async def ensure_recipe_indexes(db):
    col = db[RECIPES]
    await col.create_index([("createdAt", -1)])
    await col.create_index([("name", 1)])
    await col.create_index("tags")
    await col.create_index("userId", sparse=True)


async def ensure_indexes():
    db = get_db()
    await ensure_recipe_indexes(db)
