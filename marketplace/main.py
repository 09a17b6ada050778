"""Academic NFT Marketplace API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map MarketplaceError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - SQLite URLs get their schema created at startup; Postgres goes through Alembic
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marketplace import __version__
from marketplace.api.error_handlers import register_error_handlers
from marketplace.api.routes import admin, auth, events, health, portfolio, pricing, tickets
from marketplace.config import get_settings
from marketplace.infrastructure.database import init_db
from marketplace.infrastructure.observability import setup_logging

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
    )
    if settings.database_url.startswith("sqlite"):
        await manager.create_schema()
    logger.info("Marketplace API started")
    yield
    await manager.dispose()
    logger.info("Marketplace API shutting down")


app = FastAPI(
    title="Academic NFT Marketplace API", version=__version__, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(events.router)
app.include_router(pricing.router)
app.include_router(tickets.router)
app.include_router(portfolio.achievements_router)
app.include_router(portfolio.credentials_router)
app.include_router(portfolio.users_router)
app.include_router(admin.router)

register_error_handlers(app)
