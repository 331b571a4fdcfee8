# weemeal/main.py
# FastAPI app setup and router registration
# Routers live one per feature under weemeal/api

from __future__ import annotations

import logging
from asyncio import sleep

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from weemeal.api.routes_bring import router as bring_router
from weemeal.api.routes_images import router as images_router
from weemeal.api.routes_recipes import router as recipes_router
from weemeal.api.routes_tags import router as tags_router
from weemeal.core.config import settings
from weemeal.db.indexes import ensure_indexes
from weemeal.db.init import close_db, init_db, ping_db
from weemeal.models.recipe import INGREDIENT, SECTION_CAPTION

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
log = logging.getLogger(__name__)

app = FastAPI(title="WeeMeal - API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ------------------------------
# validation errors -> 400 {"error", "details": [{field, message}]}
# ------------------------------

_LOC_ROOTS = ("body", "query", "path")
# discriminated unions put the tag into the error location
_UNION_TAGS = (INGREDIENT, SECTION_CAPTION)


def _field(loc) -> str:
    parts = list(loc)
    if parts and parts[0] in _LOC_ROOTS:
        parts = parts[1:]
    return ".".join(str(p) for p in parts if p not in _UNION_TAGS)


def _message(msg: str) -> str:
    return msg[len("Value error, "):] if msg.startswith("Value error, ") else msg


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [{"field": _field(e.get("loc", ())), "message": _message(e.get("msg", ""))} for e in exc.errors()]
    return JSONResponse(status_code=400, content={"error": "Validation failed", "details": details})


# ------------------------------
# startup / shutdown
# ------------------------------

@app.on_event("startup")
async def on_startup() -> None:
    # 1) connect (bounded retries, 1s apart)
    db = None
    for i in range(settings.MONGODB_CONNECT_RETRIES):
        try:
            db = await init_db()
            log.info("db ready")
            break
        except Exception as e:
            log.warning("db init retry %d: %s", i + 1, e)
            await sleep(1.0)
    if db is None:
        log.error("db init failed after %d retries", settings.MONGODB_CONNECT_RETRIES)
        return

    # 2) indexes
    try:
        await ensure_indexes()
        log.info("indexes ensured")
    except Exception as e:
        log.error("ensure_indexes failed: %s", e)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await close_db()


@app.get("/")
async def root():
    return {"status": "ok"}


@app.get("/health")
async def health():
    return {"status": "ok", "db": await ping_db()}


# the export route must be matched before /recipes/{id}/...
app.include_router(bring_router)
app.include_router(tags_router)
app.include_router(images_router)
app.include_router(recipes_router)
