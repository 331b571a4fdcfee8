# weemeal/services/unsplash.py
# Unsplash photo search (async httpx)
# Missing key, HTTP errors and malformed payloads all come back as an empty list.

from __future__ import annotations

import logging
from typing import List

import httpx
from pydantic import BaseModel

from weemeal.core.config import settings

log = logging.getLogger(__name__)

SEARCH_URL = "https://api.unsplash.com/search/photos"
PER_PAGE = 5


class PhotoHit(BaseModel):
    url: str
    photographerName: str
    sourceLink: str = ""


def _to_hit(photo: dict) -> PhotoHit | None:
    urls = photo.get("urls") or {}
    user = photo.get("user") or {}
    url = urls.get("regular") or urls.get("small")
    if not url:
        return None
    return PhotoHit(
        url=url,
        photographerName=user.get("name") or "Unknown",
        sourceLink=(user.get("links") or {}).get("html") or "",
    )


async def search_photos(query: str, per_page: int = PER_PAGE) -> List[PhotoHit]:
    key = (settings.UNSPLASH_ACCESS_KEY or "").strip()
    if not key:
        log.info("No UNSPLASH_ACCESS_KEY configured, skipping photo search")
        return []

    params = {"query": query, "per_page": per_page, "orientation": "landscape"}
    headers = {"Authorization": f"Client-ID {key}", "Accept-Version": "v1"}
    try:
        async with httpx.AsyncClient(headers=headers, timeout=settings.COLLABORATOR_TIMEOUT) as cli:
            r = await cli.get(SEARCH_URL, params=params)
            r.raise_for_status()
            data = r.json()
    except (httpx.HTTPError, ValueError) as e:
        log.warning("Unsplash search failed for %r: %s", query, e)
        return []

    hits = [h for h in (_to_hit(p) for p in (data.get("results") or []) if isinstance(p, dict)) if h]
    log.info("Unsplash returned %d results for %r", len(hits), query)
    return hits
