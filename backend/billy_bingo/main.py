# billy_bingo/main.py
import datetime as dt
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Configuration and DB
from billy_bingo.config import settings
from billy_bingo.core.db import init_db, close_db
from billy_bingo.core.errors import register_exception_handlers

from billy_bingo.api.v1.routers import bingo_cards, setlists, users

logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

@app.on_event("startup")
async def on_startup():
    await init_db()
    if not settings.setlist_api_key:
        logger.warning("[setlists] SETLIST_API_KEY not set -> song requests will use the fallback list")
    if settings.enable_user_admin_routes:
        logger.warning("[users] unauthenticated /users CRUD routes are enabled")
    logger.info("API endpoints available under %s", settings.api_prefix)

@app.on_event("shutdown")
async def on_shutdown():
    await close_db()

# REST (/users/me must be registered before /users/{user_id})
app.include_router(users.router, prefix=settings.api_prefix)
if settings.enable_user_admin_routes:
    app.include_router(users.admin_router, prefix=settings.api_prefix)
app.include_router(bingo_cards.router, prefix=settings.api_prefix)
app.include_router(setlists.router, prefix=settings.api_prefix)

@app.get(settings.api_prefix)
def api_root():
    return {
        "success": True,
        "message": "Billy Bingo API is running!",
        "timestamp": dt.datetime.now(dt.timezone.utc).isoformat(),
    }

@app.get("/healthz")
def healthz():
    return {"ok": True}
