# weemeal/services/ai.py
# Shared OpenAI client for translation and tag suggestions.
# No key configured -> None; callers treat that as "not available", not as an error.

from __future__ import annotations

import logging
from typing import Optional

from openai import AsyncOpenAI, OpenAIError

from weemeal.core.config import settings

log = logging.getLogger(__name__)

_client: Optional[AsyncOpenAI] = None
_client_key: Optional[str] = None


def get_client() -> Optional[AsyncOpenAI]:
    global _client, _client_key
    api_key = (settings.OPENAI_API_KEY or "").strip()
    if not api_key:
        return None
    # rebuilt when the key changes (scripts may load .env after import)
    if _client is None or _client_key != api_key:
        _client = AsyncOpenAI(api_key=api_key)
        _client_key = api_key
    return _client


async def complete(prompt: str, max_tokens: int = 100, temperature: float = 0.2) -> Optional[str]:
    """
    Single-turn chat completion -> stripped text.
    None when no client is configured, the call fails, or the answer is empty.
    """
    client = get_client()
    if client is None:
        return None
    try:
        chat = await client.chat.completions.create(
            model=settings.OPENAI_MODEL,
            temperature=temperature,
            max_tokens=max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
    except OpenAIError as e:
        log.warning("OpenAI completion failed: %s", e)
        return None

    text = chat.choices[0].message.content if chat and chat.choices else ""
    text = (text or "").strip()
    return text or None
