"""Filter Service API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Global error handlers map FilterServiceError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Exactly one provider built on startup, stored on app.state, closed on shutdown
    - The database engine is disposed on shutdown and when startup fails after init_db

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Database only initialized for the local provider: remote mode has no SQL dependency
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app import __version__
from app.api.error_handlers import register_error_handlers
from app.infrastructure.database import init_db
from app.infrastructure.observability import setup_logging
from app.infrastructure.provider_factory import build_provider
from app.config import get_settings
from app.api.routes import health, filters

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    db = None
    provider = None
    try:
        if settings.provider == "local":
            db = init_db(
                settings.database_url,
                pool_size=settings.database_pool_size,
                max_overflow=settings.database_max_overflow,
            )
            if settings.database_auto_create:
                await db.create_all()

        provider = app.state.provider = build_provider(settings, db)
        logger.info("Filter service started", extra={"provider": settings.provider})
        yield
    finally:
        logger.info("Filter service shutting down")
        app.state.provider = None
        try:
            if provider is not None:
                await provider.close()
        finally:
            if db is not None:
                await db.dispose()


app = FastAPI(
    title="Filter Service API", version=__version__, lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)

# Routes — explicit registration (ExMA: no convention-over-config)
app.include_router(health.router)
app.include_router(filters.router)

register_error_handlers(app)
