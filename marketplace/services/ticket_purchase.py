"""Ticket Purchase Service - quote, buy and list tickets for a principal.

Invariants:
    - Pricing always goes through core.pricing.compute_purchase (single best discount)
    - Held credentials come from the principal's own portfolio; a request may only
      override them for the demo principal, whose portfolio is fixture data
    - quantity <= Settings.max_tickets_per_purchase, checked before any IO
    - Only events on sale (status active) can be purchased; others raise
      EventNotOnSaleError (409). Quotes are price-only and ignore status
    - Seats are reserved with a conditional UPDATE (current + quantity <= max);
      zero affected rows means SoldOutError and nothing is written. Seat labels
      come from the counter the UPDATE returns, so concurrent buyers never share one
    - Demo purchases are priced and numbered but never persisted

Design Decisions:
    - Fixture-only catalogs are seeded into the database on the first real purchase,
      so tickets always reference an events row
"""

import logging
import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.config import Settings
from marketplace.core.domain_types import EventStatus, TicketStatus
from marketplace.core.errors import (
    EventNotOnSaleError, SoldOutError, TicketLimitExceededError,
)
from marketplace.core.pricing import PurchaseResult, compute_purchase, to_money
from marketplace.core.repository_protocols import FixtureProvider, Principal
from marketplace.core.ticketing import (
    TicketStub, TicketSummary, issue_tickets, summarize_tickets,
)
from marketplace.models.event import Event
from marketplace.models.ticket import Ticket
from marketplace.services.event_catalog import (
    CatalogEvent, EventCatalog, seed_catalog_from_fixtures,
)
from marketplace.services.portfolio import PortfolioService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TicketView:
    """A ticket as shown in the wallet, regardless of where it is stored."""
    id: str
    event_id: str
    event_title: str | None
    event_date: date | None
    ticket_number: str
    qr_code: str
    price_paid: Decimal
    original_price: Decimal
    discount_percent: int
    credential_applied: str | None
    purchased_at: datetime | str | None
    status: str
    seat: str | None = None


@dataclass(frozen=True)
class PurchaseOutcome:
    event: CatalogEvent
    result: PurchaseResult
    tickets: list[TicketView]
    persisted: bool


def _view_from_stub(stub: TicketStub, event: CatalogEvent, seat: int) -> TicketView:
    return TicketView(
        id=stub.ticket_number,
        event_id=stub.event_id,
        event_title=event.title,
        event_date=event.date,
        ticket_number=stub.ticket_number,
        qr_code=stub.qr_code,
        price_paid=stub.price_paid,
        original_price=stub.original_price,
        discount_percent=stub.discount_percent,
        credential_applied=stub.credential_applied,
        purchased_at=stub.purchased_at,
        status=TicketStatus.ACTIVE.value,
        seat=str(seat),
    )


def _view_from_model(row: Ticket, event: CatalogEvent | None = None) -> TicketView:
    if event is None and row.event is not None:
        event = CatalogEvent.from_model(row.event)
    return TicketView(
        id=str(row.id),
        event_id=row.event_id,
        event_title=event.title if event else None,
        event_date=event.date if event else None,
        ticket_number=row.ticket_number,
        qr_code=row.qr_code,
        price_paid=to_money(row.price_paid),
        original_price=to_money(row.original_price),
        discount_percent=row.discount_percent,
        credential_applied=row.credential_applied,
        purchased_at=row.purchased_at,
        status=row.status,
        seat=row.seat,
    )


def _view_from_fixture(data: dict) -> TicketView:
    event_date = data.get("eventDate")
    return TicketView(
        id=data["id"],
        event_id=str(data["eventId"]),
        event_title=data.get("eventTitle"),
        event_date=date.fromisoformat(event_date) if event_date else None,
        ticket_number=data["ticketNumber"],
        qr_code=data["qrCode"],
        price_paid=to_money(data["pricePaid"], "pricePaid"),
        original_price=to_money(data["originalPrice"], "originalPrice"),
        discount_percent=int(data.get("discountPercent", 0)),
        credential_applied=data.get("credentialApplied"),
        purchased_at=data.get("purchasedAt"),
        status=data.get("status", TicketStatus.ACTIVE.value),
        seat=data.get("seat"),
    )


class TicketPurchaseService:
    def __init__(self, db: AsyncSession, settings: Settings, fixtures: FixtureProvider):
        self.db = db
        self.settings = settings
        self.fixtures = fixtures
        self.catalog = EventCatalog(db, fixtures)
        self.portfolio = PortfolioService(db, fixtures)

    async def held_credentials(
        self, principal: Principal, requested: Iterable[str] | None = None,
    ) -> set[str]:
        """Credential tags that may earn a discount for this principal."""
        if principal.is_demo and requested is not None:
            return set(requested)
        return await self.portfolio.held_tags(principal)

    async def quote(
        self,
        event_id: str,
        quantity: int,
        held: Iterable[str],
    ) -> tuple[CatalogEvent, PurchaseResult]:
        """Price a purchase without reserving seats or checking capacity."""
        self._check_limit(quantity)
        event = await self.catalog.get_event(event_id)
        return event, compute_purchase(event.to_pricing(), quantity, held)

    def _check_limit(self, quantity: int) -> None:
        limit = self.settings.max_tickets_per_purchase
        if isinstance(quantity, int) and not isinstance(quantity, bool) and quantity > limit:
            raise TicketLimitExceededError(quantity, limit)

    async def purchase(
        self,
        principal: Principal,
        event_id: str,
        quantity: int,
        requested_credentials: Iterable[str] | None = None,
    ) -> PurchaseOutcome:
        held = await self.held_credentials(principal, requested_credentials)
        event, result = await self.quote(event_id, quantity, held)
        if not event.is_on_sale:
            raise EventNotOnSaleError(event.id, event.status)
        if quantity > event.seats_remaining:
            raise SoldOutError(event.id, event.seats_remaining)

        issued_at = datetime.now(timezone.utc)
        stubs = issue_tickets(result, issued_at, uuid.uuid4().hex[:8])

        if principal.is_demo:
            first_seat = event.current_attendees + 1
            logger.info(
                "Demo purchase priced (not persisted)",
                extra={
                    "user_id": principal.user_id, "event_id": event.id,
                    "quantity": quantity, "discount_percent": result.discount_percent,
                },
            )
            views = [
                _view_from_stub(stub, event, first_seat + i)
                for i, stub in enumerate(stubs)
            ]
            return PurchaseOutcome(event=event, result=result, tickets=views, persisted=False)

        if not event.persisted:
            await seed_catalog_from_fixtures(self.db, self.fixtures)

        reserved = await self.db.execute(
            update(Event)
            .where(
                Event.id == event.id,
                Event.status == EventStatus.ACTIVE.value,
                Event.current_attendees + quantity <= Event.max_attendees,
            )
            .values(current_attendees=Event.current_attendees + quantity)
            .returning(Event.current_attendees)
            .execution_options(synchronize_session=False),
        )
        attendees_after = reserved.scalar_one_or_none()
        if attendees_after is None:
            await self.db.rollback()
            raise SoldOutError(event.id, 0)
        # Seats are labelled from the row's own counter, not the earlier read
        first_seat = attendees_after - quantity + 1

        rows = [
            Ticket(
                user_id=uuid.UUID(principal.user_id),
                event_id=stub.event_id,
                ticket_number=stub.ticket_number,
                qr_code=stub.qr_code,
                price_paid=stub.price_paid,
                original_price=stub.original_price,
                discount_percent=stub.discount_percent,
                credential_applied=stub.credential_applied,
                status=TicketStatus.ACTIVE.value,
                seat=str(first_seat + i),
                purchased_at=stub.purchased_at,
            )
            for i, stub in enumerate(stubs)
        ]
        self.db.add_all(rows)
        await self.db.commit()

        logger.info(
            "Tickets purchased",
            extra={
                "user_id": principal.user_id, "event_id": event.id,
                "quantity": quantity, "discount_percent": result.discount_percent,
            },
        )
        return PurchaseOutcome(
            event=event,
            result=result,
            tickets=[_view_from_model(r, event) for r in rows],
            persisted=True,
        )

    async def user_tickets(
        self, principal: Principal, today: date | None = None,
    ) -> tuple[list[TicketView], TicketSummary]:
        """The principal's wallet, newest purchase first, with its summary."""
        today = today or datetime.now(timezone.utc).date()
        if principal.is_demo:
            tickets = [_view_from_fixture(t) for t in self.fixtures.get("tickets")]
        else:
            result = await self.db.execute(
                select(Ticket)
                .where(Ticket.user_id == uuid.UUID(principal.user_id))
                .order_by(Ticket.purchased_at.desc(), Ticket.ticket_number.asc()),
            )
            tickets = [_view_from_model(t) for t in result.scalars().all()]
        return tickets, summarize_tickets(tickets, today)
