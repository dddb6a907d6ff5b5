"""
Notekeeper - FastAPI Application Entry Point.

Feature-based modular architecture:
  Each feature in notekeeper/features/ has its own router and service.
  notes   - local note store, search, category stats
  assist  - text analysis / rewrite through a chat-completion API
  auth    - Supabase sign-in and profile; gates every notes/assist route
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notekeeper.config import get_settings
from notekeeper.core.logging import configure_logging

# ── Feature Routers ──────────────────────────────────────
from notekeeper.features.assist.router import router as assist_router
from notekeeper.features.auth.router import router as auth_router
from notekeeper.features.notes.router import router as notes_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup & shutdown."""
    settings = get_settings()
    logger.info("%s v%s starting", settings.APP_NAME, settings.APP_VERSION)
    logger.info("Text assist: %s (%s)", settings.TEXT_ASSIST_BASE_URL, settings.TEXT_ASSIST_MODEL)
    logger.info("Notes storage: %s", settings.NOTES_STORAGE_DIR)
    yield
    logger.info("Shutting down")


def create_app() -> FastAPI:
    """Application factory.

    Loads settings first so a missing secret stops the process with a
    ConfigurationError before anything is served.
    """
    settings = get_settings()
    configure_logging("DEBUG" if settings.DEBUG else settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Notes with optional AI analysis and rewriting",
        lifespan=lifespan,
    )

    # ── CORS ─────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Register Feature Routers ─────────────────────────
    app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
    app.include_router(notes_router, prefix="/api/notes", tags=["Notes"])
    app.include_router(assist_router, prefix="/api/assist", tags=["Assist"])

    # ── Health Check ─────────────────────────────────────
    @app.get("/health", tags=["System"])
    async def health_check():
        return {
            "status": "healthy",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
        }

    return app
