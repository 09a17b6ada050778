"""Event Schemas - catalog entries as the frontend consumes them."""

import datetime

from pydantic import Field

from marketplace.schemas.common import CamelModel


class EventResponse(CamelModel):
    id: str
    title: str
    description: str
    date: datetime.date
    time: str | None
    location: str
    organizer: str | None
    price: float
    max_attendees: int
    current_attendees: int
    seats_remaining: int
    nft_discounts: dict[str, int] = Field(default_factory=dict, alias="nftDiscounts")
    tags: list[str] = Field(default_factory=list)
    status: str
