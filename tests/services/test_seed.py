"""Catalog seeding - verifies fixture events are copied once and only once."""

from sqlalchemy import func, select

from marketplace.infrastructure.database import DatabaseSessionManager
from marketplace.models.event import Event
from marketplace.seed import seed
from marketplace.services.event_catalog import seed_catalog_from_fixtures


async def test_seed_is_idempotent(test_db, fixtures):
    assert await seed_catalog_from_fixtures(test_db, fixtures) == 3
    assert await seed_catalog_from_fixtures(test_db, fixtures) == 0
    assert await test_db.scalar(select(func.count()).select_from(Event)) == 3


async def test_seeded_catalog_keeps_discounts(test_db, fixtures):
    await seed_catalog_from_fixtures(test_db, fixtures)
    event = await test_db.get(Event, "2")
    assert event.discount_table == {
        "gpa_guardian": 15, "research_rockstar": 20, "leadership_legend": 100,
    }
    assert event.seats_remaining == 122


async def test_seed_entry_point_against_file_database(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}"
    manager = DatabaseSessionManager(url)
    await manager.create_schema()
    await manager.dispose()

    assert await seed(url) == 3
    assert await seed(url) == 0
