"""Ticket Schemas - purchase request/response and the ticket wallet.

Invariants:
    - PurchaseRequest.quantity >= 1 (the upper limit is a Settings business rule)
    - heldCredentials is honoured only for the demo account
"""

from datetime import date, datetime

from pydantic import Field

from marketplace.schemas.common import CamelModel


class PurchaseRequest(CamelModel):
    event_id: str = Field(min_length=1, max_length=36)
    quantity: int = Field(1, ge=1)
    held_credentials: list[str] | None = None


class TicketResponse(CamelModel):
    id: str
    event_id: str
    event_title: str | None
    event_date: date | None
    ticket_number: str
    qr_code: str
    price_paid: float
    original_price: float
    discount_percent: int
    credential_applied: str | None
    purchased_at: datetime | str | None
    status: str
    seat: str | None = None


class PurchaseResponse(CamelModel):
    event_id: str
    quantity: int
    unit_price: float
    total_price: float
    discount_percent: int
    applied_credential: str | None
    total_saved: float
    persisted: bool
    tickets: list[TicketResponse]


class TicketSummaryResponse(CamelModel):
    total_tickets: int
    active_tickets: int
    used_tickets: int
    cancelled_tickets: int
    total_spent: float
    total_saved: float
    upcoming_events: int


class UserTicketsResponse(CamelModel):
    tickets: list[TicketResponse]
    summary: TicketSummaryResponse
