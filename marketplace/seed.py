"""Catalog seeding - copy fixture events into the database.

Run with `python -m marketplace.seed` (or the `marketplace-seed` script) after
`alembic upgrade head`. Existing events are left untouched.
"""

import asyncio
import logging

from marketplace.config import get_settings
from marketplace.db.session import session_scope
from marketplace.infrastructure.observability import setup_logging
from marketplace.services.event_catalog import seed_catalog_from_fixtures
from marketplace.services.fixtures import JsonFixtureProvider

logger = logging.getLogger(__name__)


async def seed(database_url: str, fixtures_dir: str | None = None) -> int:
    async with session_scope(database_url) as db:
        return await seed_catalog_from_fixtures(db, JsonFixtureProvider(fixtures_dir))


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    added = asyncio.run(seed(settings.database_url, settings.fixtures_dir))
    logger.info(f"Catalog seeding finished ({added} new)")


if __name__ == "__main__":
    main()
