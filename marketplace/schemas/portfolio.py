"""Portfolio Schemas - achievements, credentials and the dashboard.

Design Decisions:
    - mintedNFTs and totalXP keep the frontend's capitalisation via explicit aliases
"""

from datetime import date, datetime

from pydantic import Field

from marketplace.schemas.common import CamelModel


class AchievementCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    type: str = Field(min_length=1, max_length=40)
    description: str | None = Field(None, max_length=5000)
    category: str | None = Field(None, max_length=100)
    proof_url: str | None = Field(None, max_length=2000)
    date_achieved: date | None = None


class AchievementUpdate(CamelModel):
    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)


class AchievementReview(CamelModel):
    approved: bool
    reason: str | None = Field(None, max_length=500)


class MintRequest(CamelModel):
    achievement_id: str = Field(min_length=1, max_length=64)


class AchievementResponse(CamelModel):
    id: str
    title: str
    description: str | None
    type: str
    category: str | None
    status: str
    nft_minted: bool
    date_achieved: date | None
    rarity: str | None = None


class CredentialResponse(CamelModel):
    id: str
    credential_tag: str
    name: str
    rarity: str
    level: int
    staking_rewards: float
    minted_at: datetime | str | None
    achievement_title: str | None = None


class CredentialTypesResponse(CamelModel):
    credential_types: list[str]


class DashboardStatsResponse(CamelModel):
    total_achievements: int
    verified_achievements: int
    minted_nfts: int = Field(alias="mintedNFTs")
    unlocked_opportunities: int
    level: int
    xp: int
    total_xp: int = Field(alias="totalXP")
    streak_days: int
    rank: str
    battle_pass_level: int
    skill_points: int
    rare_achievements: int
    legendary_achievements: int
    staking_rewards: float
