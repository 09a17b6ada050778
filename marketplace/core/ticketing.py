"""Ticket Bookkeeping - ticket numbering and the ticket-wallet summary.

Invariants:
    - Pure: the issue timestamp and "today" are parameters, never read from a clock
    - issue_tickets returns exactly `quantity` stubs; numbers are unique across
      purchases issued at the same instant as long as their batch tokens differ
    - Cancelled tickets count toward neither total_spent nor total_saved
    - upcoming_events counts distinct events of active tickets dated today or later
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from marketplace.core.domain_types import TicketStatus
from marketplace.core.pricing import PurchaseResult, to_money

TICKET_PREFIX = "ANM"
QR_PREFIX = "ACAD-NFT"


@dataclass(frozen=True)
class TicketStub:
    """A freshly issued ticket, before persistence assigns an id."""
    event_id: str
    ticket_number: str
    qr_code: str
    price_paid: Decimal
    original_price: Decimal
    discount_percent: int
    credential_applied: str | None
    purchased_at: datetime


@dataclass(frozen=True)
class TicketSummary:
    total_tickets: int
    active_tickets: int
    used_tickets: int
    cancelled_tickets: int
    total_spent: Decimal
    total_saved: Decimal
    upcoming_events: int


def issue_tickets(
    result: PurchaseResult, issued_at: datetime, batch: str,
) -> list[TicketStub]:
    """One stub per seat, numbered from the issue timestamp, batch id and seat index.

    `batch` distinguishes purchases issued in the same millisecond; callers pass a
    fresh random token per purchase.
    """
    stamp = int(issued_at.timestamp() * 1000)
    return [
        TicketStub(
            event_id=result.event_id,
            ticket_number=f"{TICKET_PREFIX}-{issued_at.year}-{stamp}-{batch}-{seat}",
            qr_code=f"{QR_PREFIX}-{result.event_id}-{stamp}-{batch}-{seat}",
            price_paid=result.unit_price,
            original_price=result.base_price,
            discount_percent=result.discount_percent,
            credential_applied=result.applied_credential,
            purchased_at=issued_at,
        )
        for seat in range(1, result.quantity + 1)
    ]


def _get(ticket: object, name: str, default=None):
    if isinstance(ticket, dict):
        return ticket.get(name, default)
    return getattr(ticket, name, default)


def _as_date(value: object) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


def summarize_tickets(tickets: Iterable[object], today: date) -> TicketSummary:
    """Aggregate a user's ticket wallet."""
    tickets = list(tickets)
    by_status = {s: 0 for s in TicketStatus}
    spent = Decimal("0.00")
    saved = Decimal("0.00")
    upcoming: set[str] = set()

    for ticket in tickets:
        status = TicketStatus(_get(ticket, "status", TicketStatus.ACTIVE.value))
        by_status[status] += 1
        if status is TicketStatus.CANCELLED:
            continue
        paid = to_money(_get(ticket, "price_paid", 0), "price_paid")
        original = to_money(_get(ticket, "original_price", paid), "original_price")
        spent += paid
        saved += max(original - paid, Decimal("0.00"))
        event_date = _as_date(_get(ticket, "event_date"))
        if status is TicketStatus.ACTIVE and event_date and event_date >= today:
            upcoming.add(str(_get(ticket, "event_id")))

    return TicketSummary(
        total_tickets=len(tickets),
        active_tickets=by_status[TicketStatus.ACTIVE],
        used_tickets=by_status[TicketStatus.USED],
        cancelled_tickets=by_status[TicketStatus.CANCELLED],
        total_spent=spent,
        total_saved=saved,
        upcoming_events=len(upcoming),
    )
