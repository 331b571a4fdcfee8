# weemeal/services/recipe_image.py
# Recipe name -> image (url + provenance)
#
#   1) AI translation          (skipped without OPENAI_API_KEY)
#   2) dictionary substitution (always produces a phrase)
#   3) + "food delicious"
#   4) Unsplash search         (skipped without UNSPLASH_ACCESS_KEY)
#   5) SVG placeholder         (always succeeds)
#
# Each collaborator call gets one attempt under a timeout; any failure moves on to the next stage.

from __future__ import annotations

import asyncio
import logging
import random
from typing import Awaitable, Callable, List, Optional, Sequence

from weemeal.core.config import settings
from weemeal.models.image import ImageResult
from weemeal.services.dictionary import dictionary_translate
from weemeal.services.placeholder import generate_placeholder_image
from weemeal.services.translate import translate_for_image_search
from weemeal.services.unsplash import PhotoHit, search_photos

log = logging.getLogger(__name__)

SEARCH_SUFFIX = "food delicious"
TOP_RESULTS = 5

Translator = Callable[[str], Awaitable[Optional[str]]]
PhotoSearch = Callable[[str], Awaitable[Sequence[PhotoHit]]]


async def _guarded(stage: str, fn: Callable[[str], Awaitable], arg: str, timeout: Optional[float]):
    # one attempt; timeouts and collaborator errors are logged and swallowed
    try:
        return await asyncio.wait_for(fn(arg), timeout=timeout)
    except asyncio.TimeoutError:
        log.warning("%s timed out after %ss", stage, timeout)
    except Exception as e:
        log.warning("%s failed: %s", stage, e)
    return None


# ------------------------------
# phrase stages
# ------------------------------

async def _ai_phrase(name: str, translator: Translator, timeout: Optional[float]) -> Optional[str]:
    translation = await _guarded("AI translation", translator, name, timeout)
    if not translation or not translation.strip():
        return None
    if translation.strip().lower() == name.strip().lower():
        return None
    return translation.strip()


async def _dictionary_phrase(name: str, translator: Translator, timeout: Optional[float]) -> Optional[str]:
    return dictionary_translate(name)


PHRASE_STAGES = (_ai_phrase, _dictionary_phrase)


async def build_search_query(
    recipe_name: str,
    translator: Optional[Translator] = None,
    timeout: Optional[float] = None,
) -> str:
    translator = translator or translate_for_image_search
    timeout = settings.COLLABORATOR_TIMEOUT if timeout is None else timeout

    for stage in PHRASE_STAGES:
        phrase = await stage(recipe_name, translator, timeout)
        if phrase:
            return f"{phrase} {SEARCH_SUFFIX}"
    return SEARCH_SUFFIX


# ------------------------------
# image stages
# ------------------------------

def _pick(hits: List[PhotoHit]) -> PhotoHit:
    # random among the top results so repeated lookups don't always return the same photo
    return random.choice(hits[:TOP_RESULTS])


async def _from_photo_search(name: str, query: str, searcher: PhotoSearch, timeout: Optional[float]) -> Optional[ImageResult]:
    hits = await _guarded("Photo search", searcher, query, timeout)
    if not hits:
        log.info("No photo found for %r", query)
        return None
    hit = _pick(list(hits))
    return ImageResult(
        url=hit.url,
        attribution=f"Photo by {hit.photographerName} on Unsplash",
        source="unsplash",
    )


async def _from_placeholder(name: str, query: str, searcher: PhotoSearch, timeout: Optional[float]) -> ImageResult:
    return generate_placeholder_image(name)


IMAGE_STAGES = (_from_photo_search, _from_placeholder)


async def get_recipe_image(
    recipe_name: str,
    translator: Optional[Translator] = None,
    searcher: Optional[PhotoSearch] = None,
    timeout: Optional[float] = None,
) -> ImageResult:
    searcher = searcher or search_photos
    timeout = settings.COLLABORATOR_TIMEOUT if timeout is None else timeout

    query = await build_search_query(recipe_name, translator=translator, timeout=timeout)
    log.info("Image query for %r: %r", recipe_name, query)

    for stage in IMAGE_STAGES:
        result = await stage(recipe_name, query, searcher, timeout)
        if result:
            log.info("Image for %r from %s", recipe_name, result.source)
            return result
    return generate_placeholder_image(recipe_name)

