"""Dashboard Stats - gamification metrics derived from achievement/credential counts.

Invariants:
    - Pure: counts in, derived stats out; nothing persisted, recomputed on every read
    - Counts are non-negative integers; violations raise InvalidArgumentError
    - Rank is a priority lookup evaluated in fixed order (first match wins)
    - streak_days never exceeds MAX_STREAK_DAYS

Design Decisions:
    - total_xp is injected (Settings.total_xp_target), not a module constant
    - count_records accepts dicts or ORM objects so routes and tests share one counter
"""

from collections.abc import Iterable
from dataclasses import dataclass, asdict

from marketplace.core.domain_types import (
    AchievementStatus, Rarity, RankLabel, RARE_TIER,
    DEFAULT_TOTAL_XP, MAX_STREAK_DAYS,
)
from marketplace.core.errors import InvalidArgumentError


@dataclass(frozen=True)
class DashboardCounts:
    """Raw counts the derived stats are computed from."""
    total_achievements: int = 0
    verified_achievements: int = 0
    minted_credentials: int = 0
    rare_count: int = 0
    legendary_count: int = 0

    def __post_init__(self) -> None:
        for name, value in asdict(self).items():
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidArgumentError(f"{name} must be an integer", name)
            if value < 0:
                raise InvalidArgumentError(f"{name} cannot be negative", name)


@dataclass(frozen=True)
class DerivedStats:
    level: int
    xp: int
    total_xp: int
    streak_days: int
    rank: RankLabel
    battle_pass_level: int
    skill_points: int
    unlocked_opportunities: int


def determine_rank(counts: DashboardCounts) -> RankLabel:
    """Legendary beats rare beats verified volume; everyone else is rising."""
    if counts.legendary_count > 0:
        return RankLabel.LEGENDARY_SCHOLAR
    if counts.rare_count > 2:
        return RankLabel.EPIC_SCHOLAR
    if counts.verified_achievements > 5:
        return RankLabel.DISTINGUISHED_STUDENT
    return RankLabel.RISING_SCHOLAR


def compute_stats(
    counts: DashboardCounts, total_xp: int = DEFAULT_TOTAL_XP,
) -> DerivedStats:
    """Apply the fixed linear formulas and thresholds. Pure, no IO."""
    verified = counts.verified_achievements
    minted = counts.minted_credentials
    return DerivedStats(
        level=(verified + minted) // 2 + 1,
        xp=verified * 200 + minted * 300,
        total_xp=total_xp,
        streak_days=min(counts.total_achievements * 2, MAX_STREAK_DAYS),
        rank=determine_rank(counts),
        battle_pass_level=(verified + minted) // 3 + 1,
        skill_points=verified * 10 + minted * 15,
        unlocked_opportunities=verified * 2 + minted * 3,
    )


def _field(record: object, name: str, default=None):
    if isinstance(record, dict):
        return record.get(name, default)
    return getattr(record, name, default)


def _rarity(record: object) -> Rarity | None:
    raw = _field(record, "rarity")
    try:
        return Rarity(raw)
    except ValueError:
        return None


def count_records(
    achievements: Iterable[object], credentials: Iterable[object],
) -> DashboardCounts:
    """Count achievements (status, nft_minted) and credentials (rarity tiers)."""
    achievements = list(achievements)
    rarities = [_rarity(c) for c in credentials]
    return DashboardCounts(
        total_achievements=len(achievements),
        verified_achievements=sum(
            1 for a in achievements
            if _field(a, "status") == AchievementStatus.VERIFIED.value
        ),
        minted_credentials=sum(1 for a in achievements if _field(a, "nft_minted")),
        rare_count=sum(1 for r in rarities if r in RARE_TIER),
        legendary_count=sum(1 for r in rarities if r is Rarity.LEGENDARY),
    )


def total_staking_rewards(credentials: Iterable[object]) -> float:
    """Sum of staking rewards across credentials; missing values count as 0."""
    return float(sum(_field(c, "staking_rewards", 0) or 0 for c in credentials))
