"""Event Routes - public catalog listing and detail."""

from fastapi import APIRouter, Depends

from marketplace.api.dependencies import get_event_catalog
from marketplace.schemas.events import EventResponse
from marketplace.services.event_catalog import CatalogEvent, EventCatalog

router = APIRouter(prefix="/api/v1/events", tags=["events"])


def to_event_response(event: CatalogEvent) -> EventResponse:
    return EventResponse(
        id=event.id,
        title=event.title,
        description=event.description,
        date=event.date,
        time=event.time,
        location=event.location,
        organizer=event.organizer,
        price=float(event.price),
        max_attendees=event.max_attendees,
        current_attendees=event.current_attendees,
        seats_remaining=event.seats_remaining,
        nft_discounts=event.discount_table,
        tags=event.tags,
        status=event.status,
    )


@router.get("", response_model=list[EventResponse])
async def list_events(catalog: EventCatalog = Depends(get_event_catalog)):
    return [to_event_response(e) for e in await catalog.list_events()]


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: str, catalog: EventCatalog = Depends(get_event_catalog)):
    return to_event_response(await catalog.get_event(event_id))
