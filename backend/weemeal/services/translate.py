# weemeal/services/translate.py
# AI translation of German recipe names into short English image-search phrases

from __future__ import annotations

import logging
import re
from typing import Optional

from weemeal.services.ai import complete

log = logging.getLogger(__name__)

_QUOTES = re.compile(r"^[\"']|[\"']$")

PROMPT = (
    "Translate this German recipe/food name to English for an image search. "
    "Return ONLY the English translation, nothing else. "
    "Keep it short and focused on visual food terms.\n\n"
    'German: "{text}"\n\n'
    "English translation:"
)


async def translate_for_image_search(german_text: str) -> Optional[str]:
    # None = not configured / failed; the image pipeline then uses the dictionary
    text = await complete(PROMPT.format(text=german_text), max_tokens=100)
    if not text:
        log.info("AI translation unavailable for %r", german_text)
        return None
    translation = _QUOTES.sub("", text.splitlines()[0].strip()).strip()
    log.info("AI translation %r -> %r", german_text, translation)
    return translation or None
