"""Standalone sessions for scripts (catalog seeding) outside the FastAPI app.

Invariants:
    - Request handlers never use this module; they depend on infrastructure.database.get_db
    - session_scope disposes its engine on exit, so one-off scripts leave no open pools
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)


def create_session_factory(
    database_url: str, echo: bool = False,
) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    """Fresh engine for `database_url` plus a session factory bound to it."""
    engine = create_async_engine(database_url, echo=echo)
    return engine, async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@asynccontextmanager
async def session_scope(database_url: str) -> AsyncGenerator[AsyncSession, None]:
    engine, factory = create_session_factory(database_url)
    try:
        async with factory() as session:
            yield session
    finally:
        await engine.dispose()
