"""Ticket Routes - authenticated purchase and the user's ticket wallet."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, status

from marketplace.api.dependencies import get_current_principal, get_ticket_service
from marketplace.core.repository_protocols import Principal
from marketplace.schemas.tickets import (
    PurchaseRequest, PurchaseResponse, TicketResponse,
    TicketSummaryResponse, UserTicketsResponse,
)
from marketplace.services.ticket_purchase import TicketPurchaseService, TicketView

router = APIRouter(prefix="/api/v1/tickets", tags=["tickets"])


def to_ticket_response(ticket: TicketView) -> TicketResponse:
    data = asdict(ticket)
    data["price_paid"] = float(ticket.price_paid)
    data["original_price"] = float(ticket.original_price)
    return TicketResponse(**data)


@router.post(
    "/purchase", response_model=PurchaseResponse,
    status_code=status.HTTP_201_CREATED,
)
async def purchase(
    body: PurchaseRequest,
    principal: Principal = Depends(get_current_principal),
    tickets: TicketPurchaseService = Depends(get_ticket_service),
):
    outcome = await tickets.purchase(
        principal, body.event_id, body.quantity, body.held_credentials,
    )
    result = outcome.result
    return PurchaseResponse(
        event_id=result.event_id,
        quantity=result.quantity,
        unit_price=float(result.unit_price),
        total_price=float(result.total_price),
        discount_percent=result.discount_percent,
        applied_credential=result.applied_credential,
        total_saved=float(result.total_saved),
        persisted=outcome.persisted,
        tickets=[to_ticket_response(t) for t in outcome.tickets],
    )


@router.get("/user", response_model=UserTicketsResponse)
async def user_tickets(
    principal: Principal = Depends(get_current_principal),
    tickets: TicketPurchaseService = Depends(get_ticket_service),
):
    wallet, summary = await tickets.user_tickets(principal)
    return UserTicketsResponse(
        tickets=[to_ticket_response(t) for t in wallet],
        summary=TicketSummaryResponse(
            total_tickets=summary.total_tickets,
            active_tickets=summary.active_tickets,
            used_tickets=summary.used_tickets,
            cancelled_tickets=summary.cancelled_tickets,
            total_spent=float(summary.total_spent),
            total_saved=float(summary.total_saved),
            upcoming_events=summary.upcoming_events,
        ),
    )
