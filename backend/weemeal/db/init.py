# weemeal/db/init.py
# Process-wide motor client for the recipe store
# - init_db: connect + ping, leaves nothing behind when Mongo is unreachable
# - get_db: handle for the routers (503 upstream while disconnected)

from __future__ import annotations

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from weemeal.core.config import settings

APP_NAME = "weemeal-backend"

_client: AsyncIOMotorClient | None = None
_db: AsyncIOMotorDatabase | None = None


async def init_db() -> AsyncIOMotorDatabase:
    global _client, _db
    if _db is not None:
        return _db

    client = AsyncIOMotorClient(
        settings.MONGODB_URI,
        appname=APP_NAME,
        serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
    )
    db = client[settings.MONGODB_DB]
    try:
        await db.command("ping")
    except Exception:
        client.close()
        raise

    _client, _db = client, db
    return _db


def get_db() -> AsyncIOMotorDatabase:
    if _db is None:
        raise RuntimeError("MongoDB is not initialized yet.")
    return _db


async def ping_db() -> str:
    try:
        await get_db().command("ping")
    except Exception as e:
        return f"error: {e}"
    return "ok"


async def close_db() -> None:
    global _client, _db
    if _client is not None:
        _client.close()
    _client = None
    _db = None
