"""Event Catalog - event lookup with fixture fallback, and catalog seeding.

Invariants:
    - Database events take precedence; the `events` fixture is used only when the
      events table is empty (fresh deployments still show a catalog)
    - Unknown event ids raise ResourceNotFoundError (404)
    - Listings show only events on sale (status active); get_event returns any
      status so detail pages still resolve for cancelled or completed events
    - CatalogEvent.to_pricing() is the only bridge from catalog data into core/pricing
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.domain_types import EventStatus
from marketplace.core.errors import ResourceNotFoundError
from marketplace.core.pricing import EventPricing, to_money
from marketplace.core.repository_protocols import FixtureProvider
from marketplace.models.event import Event

logger = logging.getLogger(__name__)


@dataclass
class CatalogEvent:
    id: str
    title: str
    description: str
    date: date
    time: str | None
    location: str
    organizer: str | None
    price: Decimal
    discount_table: dict[str, int] = field(default_factory=dict)
    tags: list[str] = field(default_factory=list)
    max_attendees: int = 0
    current_attendees: int = 0
    status: str = EventStatus.ACTIVE.value
    persisted: bool = False

    @property
    def seats_remaining(self) -> int:
        return max(self.max_attendees - self.current_attendees, 0)

    @property
    def is_on_sale(self) -> bool:
        return self.status == EventStatus.ACTIVE.value

    def to_pricing(self) -> EventPricing:
        return EventPricing(
            event_id=self.id, base_price=self.price,
            discount_table=dict(self.discount_table),
        )

    @classmethod
    def from_model(cls, event: Event) -> "CatalogEvent":
        return cls(
            id=event.id,
            title=event.title,
            description=event.description,
            date=event.event_date,
            time=event.time_label,
            location=event.location,
            organizer=event.organizer,
            price=to_money(event.price),
            discount_table=dict(event.discount_table or {}),
            tags=list(event.tags or []),
            max_attendees=event.max_attendees,
            current_attendees=event.current_attendees,
            status=event.status,
            persisted=True,
        )

    @classmethod
    def from_fixture(cls, data: dict) -> "CatalogEvent":
        return cls(
            id=str(data["id"]),
            title=data["title"],
            description=data.get("description", ""),
            date=date.fromisoformat(data["date"]),
            time=data.get("time"),
            location=data["location"],
            organizer=data.get("organizer"),
            price=to_money(data["price"]),
            discount_table=dict(data.get("nftDiscounts", {})),
            tags=list(data.get("tags", [])),
            max_attendees=int(data.get("maxAttendees", 0)),
            current_attendees=int(data.get("currentAttendees", 0)),
            status=data.get("status", EventStatus.ACTIVE.value),
        )


class EventCatalog:
    """Read access to events for listing, detail, pricing and purchase."""

    def __init__(self, db: AsyncSession, fixtures: FixtureProvider):
        self.db = db
        self.fixtures = fixtures

    async def _catalog_is_empty(self) -> bool:
        count = await self.db.scalar(select(func.count()).select_from(Event))
        return not count

    def _fixture_events(self) -> list[CatalogEvent]:
        return [CatalogEvent.from_fixture(e) for e in self.fixtures.get("events")]

    async def list_events(self) -> list[CatalogEvent]:
        """Active events, soonest first."""
        if await self._catalog_is_empty():
            logger.info("Events table empty, serving fixture catalog")
            events = [e for e in self._fixture_events() if e.is_on_sale]
            return sorted(events, key=lambda e: (e.date, e.id))
        result = await self.db.execute(
            select(Event)
            .where(Event.status == EventStatus.ACTIVE.value)
            .order_by(Event.event_date.asc(), Event.id.asc()),
        )
        return [CatalogEvent.from_model(e) for e in result.scalars().all()]

    async def get_model(self, event_id: str) -> Event | None:
        return await self.db.get(Event, event_id)

    async def get_event(self, event_id: str) -> CatalogEvent:
        event = await self.get_model(event_id)
        if event is not None:
            return CatalogEvent.from_model(event)
        if await self._catalog_is_empty():
            for candidate in self._fixture_events():
                if candidate.id == event_id:
                    return candidate
        raise ResourceNotFoundError("Event", event_id)


async def seed_catalog_from_fixtures(db: AsyncSession, fixtures: FixtureProvider) -> int:
    """Insert fixture events that are not yet in the database. Returns rows added."""
    added = 0
    for data in fixtures.get("events"):
        item = CatalogEvent.from_fixture(data)
        if await db.get(Event, item.id) is not None:
            continue
        db.add(Event(
            id=item.id,
            title=item.title,
            description=item.description,
            event_date=item.date,
            time_label=item.time,
            location=item.location,
            organizer=item.organizer,
            price=item.price,
            discount_table=item.discount_table,
            tags=item.tags,
            max_attendees=item.max_attendees,
            current_attendees=item.current_attendees,
            status=item.status,
        ))
        added += 1
    await db.commit()
    logger.info(f"Seeded {added} event(s) from fixtures")
    return added
