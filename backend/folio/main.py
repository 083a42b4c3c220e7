"""Folio API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map FolioError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - The store handle is created on startup and disposed on shutdown via lifespan;
      its engine connects lazily on first use, so an unreachable database never
      prevents startup

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from folio.api.error_handlers import register_error_handlers
from folio.api.routes import dashboard, experiences, health, portfolios
from folio.config import get_settings
from folio.core.errors import StoreUnavailableError
from folio.infrastructure.database import close_db, init_db
from folio.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_timeout=settings.database_pool_timeout,
    )
    if settings.database_create_tables:
        try:
            await manager.create_tables()
        except StoreUnavailableError:
            logger.error("Table creation skipped: database unavailable")
    logger.info("Folio API started")
    yield
    await close_db()
    logger.info("Folio API shutting down")


app = FastAPI(title="Folio API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(portfolios.router)
app.include_router(experiences.router)
app.include_router(dashboard.router)

register_error_handlers(app)
