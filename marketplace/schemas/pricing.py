"""Pricing & Stats Schemas - JSON contracts of the two pure calculators.

Invariants:
    - QuoteRequest.quantity >= 1; held credential tags are non-empty strings
    - StatsRequest counts are non-negative (defaults 0)
    - Money leaves the API as float; it is Decimal everywhere behind this boundary

Design Decisions:
    - totalXP keeps its legacy capitalisation through an explicit alias
"""

from pydantic import Field, field_validator

from marketplace.schemas.common import CamelModel


class QuoteRequest(CamelModel):
    """Price `quantity` tickets for an event given the caller's credentials."""
    event_id: str = Field(min_length=1, max_length=36)
    quantity: int = Field(ge=1)
    held_credentials: list[str] = Field(default_factory=list)

    @field_validator("held_credentials")
    @classmethod
    def strip_tags(cls, v: list[str]) -> list[str]:
        tags = [t.strip() for t in v]
        if any(not t for t in tags):
            raise ValueError("credential tags cannot be empty")
        return tags


class QuoteResponse(CamelModel):
    unit_price: float
    total_price: float
    discount_percent: int
    applied_credential: str | None


class StatsRequest(CamelModel):
    verified_achievements: int = Field(0, ge=0)
    minted_credentials: int = Field(0, ge=0)
    rare_count: int = Field(0, ge=0)
    legendary_count: int = Field(0, ge=0)
    total_achievements: int = Field(0, ge=0)


class StatsResponse(CamelModel):
    level: int
    xp: int
    total_xp: int = Field(alias="totalXP")
    streak_days: int
    rank: str
    battle_pass_level: int
    skill_points: int
    unlocked_opportunities: int
