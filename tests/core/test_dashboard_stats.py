"""Dashboard Stats - verifies the linear formulas, rank priority and counters."""

import pytest

from marketplace.core.dashboard_stats import (
    DashboardCounts, compute_stats, count_records, determine_rank,
    total_staking_rewards,
)
from marketplace.core.domain_types import RankLabel
from marketplace.core.errors import InvalidArgumentError


def test_formulas_for_eight_verified_five_minted():
    stats = compute_stats(DashboardCounts(
        total_achievements=12, verified_achievements=8, minted_credentials=5,
    ))
    assert stats.level == 7
    assert stats.xp == 8 * 200 + 5 * 300
    assert stats.total_xp == 5000
    assert stats.streak_days == 24
    assert stats.battle_pass_level == 5
    assert stats.skill_points == 155
    assert stats.unlocked_opportunities == 31


def test_empty_counts_give_starting_values():
    stats = compute_stats(DashboardCounts())
    assert stats.level == 1
    assert stats.xp == 0
    assert stats.streak_days == 0
    assert stats.battle_pass_level == 1
    assert stats.rank is RankLabel.RISING_SCHOLAR


def test_streak_is_capped_at_thirty():
    assert compute_stats(DashboardCounts(total_achievements=100)).streak_days == 30


def test_total_xp_is_injected():
    assert compute_stats(DashboardCounts(), total_xp=12000).total_xp == 12000


@pytest.mark.parametrize("counts, rank", [
    (DashboardCounts(legendary_count=1, rare_count=5), RankLabel.LEGENDARY_SCHOLAR),
    (DashboardCounts(rare_count=3, verified_achievements=9), RankLabel.EPIC_SCHOLAR),
    (DashboardCounts(rare_count=2, verified_achievements=6), RankLabel.DISTINGUISHED_STUDENT),
    (DashboardCounts(verified_achievements=5), RankLabel.RISING_SCHOLAR),
])
def test_rank_priority(counts, rank):
    assert determine_rank(counts) is rank


@pytest.mark.parametrize("field", [
    "total_achievements", "verified_achievements", "minted_credentials",
    "rare_count", "legendary_count",
])
def test_negative_counts_are_rejected(field):
    with pytest.raises(InvalidArgumentError) as exc:
        DashboardCounts(**{field: -1})
    assert exc.value.context.field_name == field


def test_non_integer_counts_are_rejected():
    with pytest.raises(InvalidArgumentError):
        DashboardCounts(verified_achievements=2.5)
    with pytest.raises(InvalidArgumentError):
        DashboardCounts(minted_credentials=True)


def test_count_records_from_fixture_shaped_dicts():
    achievements = [
        {"status": "verified", "nft_minted": True},
        {"status": "verified", "nft_minted": False},
        {"status": "pending", "nft_minted": False},
    ]
    credentials = [
        {"rarity": "Rare"}, {"rarity": "Epic"}, {"rarity": "Legendary"},
        {"rarity": "Common"}, {"rarity": "Mythic"},
    ]
    counts = count_records(achievements, credentials)
    assert counts == DashboardCounts(
        total_achievements=3, verified_achievements=2, minted_credentials=1,
        rare_count=2, legendary_count=1,
    )


def test_staking_rewards_sum_ignores_missing_values():
    credentials = [{"staking_rewards": 12.5}, {"staking_rewards": None}, {}]
    assert total_staking_rewards(credentials) == 12.5
