"""Dashboard Service - gamification stats for the signed-in principal."""

import logging
from dataclasses import dataclass

from marketplace.config import Settings
from marketplace.core.dashboard_stats import (
    DashboardCounts, DerivedStats, compute_stats, count_records, total_staking_rewards,
)
from marketplace.core.domain_types import RankLabel
from marketplace.core.repository_protocols import FixtureProvider, Principal
from marketplace.services.portfolio import PortfolioService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardReport:
    counts: DashboardCounts
    stats: DerivedStats
    staking_rewards: float


def report_from_fixture(data: dict) -> DashboardReport:
    """The demo dashboard is hand-authored and shown as-is, not recomputed."""
    counts = DashboardCounts(
        total_achievements=data["totalAchievements"],
        verified_achievements=data["verifiedAchievements"],
        minted_credentials=data["mintedNFTs"],
        rare_count=data.get("rareAchievements", 0),
        legendary_count=data.get("legendaryAchievements", 0),
    )
    stats = DerivedStats(
        level=data["level"],
        xp=data["xp"],
        total_xp=data["totalXP"],
        streak_days=data["streakDays"],
        rank=RankLabel(data["rank"]),
        battle_pass_level=data["battlePassLevel"],
        skill_points=data["skillPoints"],
        unlocked_opportunities=data["unlockedOpportunities"],
    )
    return DashboardReport(
        counts=counts, stats=stats,
        staking_rewards=float(data.get("stakingRewards", 0.0)),
    )


class DashboardService:
    def __init__(self, portfolio: PortfolioService, settings: Settings, fixtures: FixtureProvider):
        self.portfolio = portfolio
        self.settings = settings
        self.fixtures = fixtures

    async def report(self, principal: Principal) -> DashboardReport:
        if principal.is_demo:
            return report_from_fixture(self.fixtures.get("dashboard_stats"))

        achievements = await self.portfolio.achievements(principal)
        credentials = await self.portfolio.credentials(principal)
        counts = count_records(achievements, credentials)
        stats = compute_stats(counts, total_xp=self.settings.total_xp_target)
        logger.info(
            f"Dashboard computed: level={stats.level} rank={stats.rank.value}",
            extra={"user_id": principal.user_id},
        )
        return DashboardReport(
            counts=counts, stats=stats,
            staking_rewards=total_staking_rewards(credentials),
        )
