"""Event ORM - ticketed academic events with per-credential discounts.

Invariants:
    - price is non-negative, two decimal places
    - discount_table maps credential tag -> integer percent 0..100 (validated in core/pricing)
    - current_attendees <= max_attendees (conditional UPDATE in the purchase service,
      CHECK constraint as the backstop)

Design Decisions:
    - id is a short string so catalog ids ("1", "2", ...) survive fixture seeding unchanged
    - JSON column for discount_table and tags: read whole, never queried by key
"""

from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import CheckConstraint, String, Text, Integer, Numeric, Date, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from marketplace.core.domain_types import EventStatus
from marketplace.db.base import Base


class Event(Base):
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint("current_attendees <= max_attendees", name="capacity"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    event_date: Mapped[date] = mapped_column(Date, nullable=False)
    time_label: Mapped[str | None] = mapped_column(String(100), nullable=True)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    organizer: Mapped[str | None] = mapped_column(String(255), nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    discount_table: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    max_attendees: Mapped[int] = mapped_column(Integer, nullable=False)
    current_attendees: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=EventStatus.ACTIVE.value)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    @property
    def seats_remaining(self) -> int:
        return max(self.max_attendees - self.current_attendees, 0)
