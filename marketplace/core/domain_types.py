"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, EventId, AchievementId, CredentialId, TicketId wrap identifiers
    - DiscountPercent is an integer in 0..100 (100 = free)
    - All valid states encoded as Enums, no raw string matching in core logic

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
AchievementId = NewType("AchievementId", UUID)
CredentialId = NewType("CredentialId", UUID)
TicketId = NewType("TicketId", UUID)

# Catalog ids are short strings ("1", "2", ...) in the demo catalog
EventId = NewType("EventId", str)


# ─── Value Types ─────────────────────────────────────────────────

CredentialTag = NewType("CredentialTag", str)
DiscountPercent = NewType("DiscountPercent", int)   # 0..100

MAX_DISCOUNT_PERCENT: int = 100
MAX_STREAK_DAYS: int = 30
DEFAULT_TOTAL_XP: int = 5000


# ─── Enums ───────────────────────────────────────────────────────

class Rarity(str, Enum):
    """Credential rarity tiers, lowest to highest."""
    COMMON = "Common"
    RARE = "Rare"
    EPIC = "Epic"
    LEGENDARY = "Legendary"


# Rarities counted toward the "rare" tier of the dashboard counts
RARE_TIER: frozenset[Rarity] = frozenset({Rarity.RARE, Rarity.EPIC})


class AchievementStatus(str, Enum):
    """Achievement review lifecycle."""
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class TicketStatus(str, Enum):
    """Ticket lifecycle: active until checked in (used) or cancelled."""
    ACTIVE = "active"
    USED = "used"
    CANCELLED = "cancelled"


class EventStatus(str, Enum):
    ACTIVE = "active"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class RankLabel(str, Enum):
    """Dashboard rank labels in priority order (first match wins)."""
    LEGENDARY_SCHOLAR = "Legendary Scholar"
    EPIC_SCHOLAR = "Epic Scholar"
    DISTINGUISHED_STUDENT = "Distinguished Student"
    RISING_SCHOLAR = "Rising Scholar"


class UserRole(str, Enum):
    STUDENT = "student"
    ADMIN = "admin"
