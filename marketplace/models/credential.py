"""Credential ORM - a minted, achievement-backed collectible held by a user.

Invariants:
    - credential_tag is the discount-eligibility key (e.g. "research_rockstar")
    - rarity is one of Common, Rare, Epic, Legendary (Rarity)
    - achievement_id is nullable: credentials may be granted without a source record;
      when set it is unique (an achievement mints at most one credential)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, Float, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from marketplace.db.base import Base


class Credential(Base):
    __tablename__ = "credentials"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    achievement_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("achievements.id", ondelete="SET NULL"),
        nullable=True, unique=True,
    )
    credential_tag: Mapped[str] = mapped_column(String(64), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    rarity: Mapped[str] = mapped_column(String(20), nullable=False, default="Common")
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    staking_rewards: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    token_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    user: Mapped["User"] = relationship("User", back_populates="credentials")
