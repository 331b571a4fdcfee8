# weemeal/scripts/backfill_images.py
# Resolve and store an image for every recipe that has none.
#   python -m weemeal.scripts.backfill_images
import asyncio
import logging
from typing import Awaitable, Callable

from weemeal.db.indexes import RECIPES
from weemeal.db.init import close_db, init_db
from weemeal.db.repository import RecipeRepository
from weemeal.models.image import ImageResult
from weemeal.services.recipe_image import get_recipe_image

log = logging.getLogger(__name__)

# pause between recipes (Unsplash demo keys allow 50 requests/hour)
PAUSE_SECONDS = 0.5


async def backfill_images(
    repo: RecipeRepository,
    resolver: Callable[[str], Awaitable[ImageResult]] = get_recipe_image,
    pause: float = PAUSE_SECONDS,
) -> int:
    """Returns the number of recipes that got an image."""
    docs = await repo.find_all()
    todo = [d for d in docs if not d.get("imageUrl")]
    log.info("[backfill] %d of %d recipes without image", len(todo), len(docs))

    n = 0
    for i, doc in enumerate(todo):
        result = await resolver(doc["name"])
        await repo.update(str(doc["_id"]), {"imageUrl": result.url})
        log.info("[backfill] %r -> %s", doc["name"], result.source)
        n += 1
        if pause and i < len(todo) - 1:
            await asyncio.sleep(pause)
    return n


async def main():
    db = await init_db()
    try:
        n = await backfill_images(RecipeRepository(db[RECIPES]))
        log.info("[backfill] updated=%d", n)
    finally:
        await close_db()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
