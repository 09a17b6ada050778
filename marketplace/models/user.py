"""User ORM - registered students; the aggregate root for achievements, credentials, tickets.

Invariants:
    - id is UUID primary key
    - email is unique and stored lower-cased
    - password_hash is a PBKDF2 record (services/passwords.py), never plaintext
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from marketplace.db.base import Base


class User(Base):
    """A marketplace user (student or admin)."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    university: Mapped[str] = mapped_column(String(255), nullable=False)
    student_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default="student",
    )
    email_verified: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    achievements: Mapped[list["Achievement"]] = relationship(
        "Achievement", back_populates="user",
        cascade="all, delete-orphan", lazy="selectin",
    )
    credentials: Mapped[list["Credential"]] = relationship(
        "Credential", back_populates="user",
        cascade="all, delete-orphan", lazy="selectin",
    )
    tickets: Mapped[list["Ticket"]] = relationship(
        "Ticket", back_populates="user",
        cascade="all, delete-orphan", lazy="selectin",
    )
