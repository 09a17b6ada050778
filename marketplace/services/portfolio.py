"""Portfolio Service - a principal's achievements and minted credentials.

Invariants:
    - Demo principals read fixtures; everyone else reads their own rows (scoped by user_id)
    - held_tags() is a set: duplicate credentials of the same tag collapse
    - Demo portfolios are read-only (PermissionDeniedError on writes)
    - Only pending achievements can be edited, deleted or reviewed
    - Reviews require the admin role; minting requires ownership and a verified,
      unminted achievement, and sets nft_minted in the same commit as the Credential

Design Decisions:
    - Another user's achievement is reported as not found, never as forbidden
    - The unique credentials.achievement_id constraint backs the "mint once" check;
      losing that race surfaces as ConflictError
"""

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core.domain_types import AchievementStatus, UserRole
from marketplace.core.errors import (
    ConflictError, PermissionDeniedError, ResourceNotFoundError,
)
from marketplace.core.minting import draft_credential, ensure_mintable
from marketplace.core.repository_protocols import FixtureProvider, Principal
from marketplace.models.achievement import Achievement
from marketplace.models.credential import Credential

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AchievementView:
    id: str
    title: str
    description: str | None
    type: str
    category: str | None
    status: str
    nft_minted: bool
    date_achieved: date | None
    rarity: str | None = None


@dataclass(frozen=True)
class CredentialView:
    id: str
    credential_tag: str
    name: str
    rarity: str
    level: int
    staking_rewards: float
    minted_at: datetime | str | None
    achievement_title: str | None = None


def _achievement_from_fixture(data: dict) -> AchievementView:
    achieved = data.get("dateAchieved")
    return AchievementView(
        id=data["id"],
        title=data["title"],
        description=data.get("description"),
        type=data["type"],
        category=data.get("category"),
        status=data["status"],
        nft_minted=bool(data.get("nftMinted")),
        date_achieved=date.fromisoformat(achieved) if achieved else None,
        rarity=data.get("rarity"),
    )


def _achievement_from_model(row: Achievement) -> AchievementView:
    return AchievementView(
        id=str(row.id),
        title=row.title,
        description=row.description,
        type=row.achievement_type,
        category=row.category,
        status=row.status,
        nft_minted=row.nft_minted,
        date_achieved=row.date_achieved,
    )


def _credential_from_fixture(data: dict) -> CredentialView:
    return CredentialView(
        id=data["id"],
        credential_tag=data["credentialTag"],
        name=data["name"],
        rarity=data["rarity"],
        level=int(data.get("level", 1)),
        staking_rewards=float(data.get("stakingRewards", 0)),
        minted_at=data.get("mintedAt"),
        achievement_title=data.get("achievementTitle"),
    )


def _credential_from_model(row: Credential) -> CredentialView:
    return CredentialView(
        id=str(row.id),
        credential_tag=row.credential_tag,
        name=row.name,
        rarity=row.rarity,
        level=row.level,
        staking_rewards=row.staking_rewards,
        minted_at=row.created_at,
    )


class PortfolioService:
    def __init__(self, db: AsyncSession, fixtures: FixtureProvider):
        self.db = db
        self.fixtures = fixtures

    async def achievements(self, principal: Principal) -> list[AchievementView]:
        """Newest first."""
        if principal.is_demo:
            return [_achievement_from_fixture(a) for a in self.fixtures.get("achievements")]
        result = await self.db.execute(
            select(Achievement)
            .where(Achievement.user_id == uuid.UUID(principal.user_id))
            .order_by(Achievement.created_at.desc()),
        )
        return [_achievement_from_model(a) for a in result.scalars().all()]

    async def credentials(self, principal: Principal) -> list[CredentialView]:
        if principal.is_demo:
            return [_credential_from_fixture(c) for c in self.fixtures.get("credentials")]
        result = await self.db.execute(
            select(Credential)
            .where(Credential.user_id == uuid.UUID(principal.user_id))
            .order_by(Credential.created_at.desc()),
        )
        return [_credential_from_model(c) for c in result.scalars().all()]

    async def held_tags(self, principal: Principal) -> set[str]:
        return {c.credential_tag for c in await self.credentials(principal)}

    async def create_achievement(
        self,
        principal: Principal,
        *,
        title: str,
        achievement_type: str,
        description: str | None = None,
        category: str | None = None,
        proof_url: str | None = None,
        date_achieved: date | None = None,
    ) -> AchievementView:
        """Submit an achievement for review; it starts as pending."""
        if principal.is_demo:
            raise PermissionDeniedError("Demo accounts are read-only")
        row = Achievement(
            user_id=uuid.UUID(principal.user_id),
            title=title,
            description=description,
            achievement_type=achievement_type,
            category=category,
            proof_url=proof_url,
            date_achieved=date_achieved,
            status=AchievementStatus.PENDING.value,
            nft_minted=False,
        )
        self.db.add(row)
        await self.db.commit()
        await self.db.refresh(row)
        logger.info(
            "Achievement submitted",
            extra={"user_id": principal.user_id},
        )
        return _achievement_from_model(row)

    # ─── Owner operations ───────────────────────────────────────

    async def _find_achievement(self, achievement_id: str) -> Achievement | None:
        try:
            key = uuid.UUID(achievement_id)
        except ValueError:
            return None
        return await self.db.get(Achievement, key)

    async def _own_achievement(self, principal: Principal, achievement_id: str) -> Achievement:
        row = await self._find_achievement(achievement_id)
        if row is None or str(row.user_id) != principal.user_id:
            raise ResourceNotFoundError("Achievement", achievement_id)
        return row

    async def _own_pending_achievement(
        self, principal: Principal, achievement_id: str,
    ) -> Achievement:
        if principal.is_demo:
            raise PermissionDeniedError("Demo accounts are read-only")
        row = await self._own_achievement(principal, achievement_id)
        if row.status != AchievementStatus.PENDING.value:
            raise ConflictError(f"Achievement is {row.status}; only pending ones can change")
        return row

    async def get_achievement(self, principal: Principal, achievement_id: str) -> AchievementView:
        if principal.is_demo:
            for data in self.fixtures.get("achievements"):
                if data["id"] == achievement_id:
                    return _achievement_from_fixture(data)
            raise ResourceNotFoundError("Achievement", achievement_id)
        return _achievement_from_model(await self._own_achievement(principal, achievement_id))

    async def update_achievement(
        self,
        principal: Principal,
        achievement_id: str,
        *,
        title: str | None = None,
        description: str | None = None,
    ) -> AchievementView:
        row = await self._own_pending_achievement(principal, achievement_id)
        if title is not None:
            row.title = title
        if description is not None:
            row.description = description
        await self.db.commit()
        return _achievement_from_model(row)

    async def delete_achievement(self, principal: Principal, achievement_id: str) -> None:
        row = await self._own_pending_achievement(principal, achievement_id)
        await self.db.delete(row)
        await self.db.commit()
        logger.info("Achievement deleted", extra={"user_id": principal.user_id})

    async def mint_credential(self, principal: Principal, achievement_id: str) -> CredentialView:
        """Turn a verified achievement into a discount-bearing credential."""
        if principal.is_demo:
            raise PermissionDeniedError("Demo accounts are read-only")
        achievement = await self._own_achievement(principal, achievement_id)
        ensure_mintable(achievement.status, achievement.nft_minted)

        minted_at = datetime.now(timezone.utc)
        draft = draft_credential(achievement.achievement_type, minted_at, uuid.uuid4().hex[:9])
        row = Credential(
            user_id=achievement.user_id,
            achievement_id=achievement.id,
            credential_tag=draft.credential_tag,
            name=draft.name,
            rarity=draft.rarity.value,
            level=draft.level,
            staking_rewards=0.0,
            token_id=draft.token_id,
            created_at=minted_at,
        )
        achievement.nft_minted = True
        self.db.add(row)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ConflictError("A credential was already minted for this achievement") from e

        logger.info(
            f"Credential minted: {draft.credential_tag}",
            extra={"user_id": principal.user_id},
        )
        return replace(_credential_from_model(row), achievement_title=achievement.title)

    # ─── Review (admin) ─────────────────────────────────────────

    @staticmethod
    def _require_admin(principal: Principal) -> None:
        if principal.is_demo or principal.role is not UserRole.ADMIN:
            raise PermissionDeniedError("Reviewing achievements requires the admin role")

    async def pending_achievements(self, reviewer: Principal) -> list[AchievementView]:
        """Oldest submission first, across all users."""
        self._require_admin(reviewer)
        result = await self.db.execute(
            select(Achievement)
            .where(Achievement.status == AchievementStatus.PENDING.value)
            .order_by(Achievement.created_at.asc()),
        )
        return [_achievement_from_model(a) for a in result.scalars().all()]

    async def review_achievement(
        self,
        reviewer: Principal,
        achievement_id: str,
        *,
        approved: bool,
        note: str | None = None,
    ) -> AchievementView:
        self._require_admin(reviewer)
        row = await self._find_achievement(achievement_id)
        if row is None:
            raise ResourceNotFoundError("Achievement", achievement_id)
        if row.status != AchievementStatus.PENDING.value:
            raise ConflictError(f"Achievement was already reviewed ({row.status})")

        row.status = (
            AchievementStatus.VERIFIED if approved else AchievementStatus.REJECTED
        ).value
        row.reviewed_by = uuid.UUID(reviewer.user_id)
        row.reviewed_at = datetime.now(timezone.utc)
        row.review_note = note
        await self.db.commit()
        logger.info(
            f"Achievement {row.status}",
            extra={"user_id": str(row.user_id)},
        )
        return _achievement_from_model(row)
