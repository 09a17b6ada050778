"""Portfolio Routes - achievements, credentials and dashboard stats for the caller.

Invariants:
    - Every endpoint requires a principal; data is always the caller's own
    - /achievements/user is declared before /achievements/{achievement_id}
    - Demo principals see fixtures; dashboard fixtures are shown as authored
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Response, status

from marketplace.api.dependencies import (
    get_current_principal, get_dashboard_service, get_portfolio,
)
from marketplace.core.repository_protocols import Principal
from marketplace.schemas.portfolio import (
    AchievementCreate, AchievementResponse, AchievementUpdate, CredentialResponse,
    CredentialTypesResponse, DashboardStatsResponse, MintRequest,
)
from marketplace.services.dashboard import DashboardService
from marketplace.services.portfolio import PortfolioService

achievements_router = APIRouter(prefix="/api/v1/achievements", tags=["achievements"])
credentials_router = APIRouter(prefix="/api/v1/credentials", tags=["credentials"])
users_router = APIRouter(prefix="/api/v1/users", tags=["users"])


# ─── Achievements ───────────────────────────────────────────────

@achievements_router.get("/user", response_model=list[AchievementResponse])
async def user_achievements(
    principal: Principal = Depends(get_current_principal),
    portfolio: PortfolioService = Depends(get_portfolio),
):
    return [AchievementResponse(**asdict(a)) for a in await portfolio.achievements(principal)]


@achievements_router.post(
    "", response_model=AchievementResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_achievement(
    body: AchievementCreate,
    principal: Principal = Depends(get_current_principal),
    portfolio: PortfolioService = Depends(get_portfolio),
):
    """Submit an achievement; it stays pending until verified."""
    created = await portfolio.create_achievement(
        principal,
        title=body.title,
        achievement_type=body.type,
        description=body.description,
        category=body.category,
        proof_url=body.proof_url,
        date_achieved=body.date_achieved,
    )
    return AchievementResponse(**asdict(created))


@achievements_router.get("/{achievement_id}", response_model=AchievementResponse)
async def get_achievement(
    achievement_id: str,
    principal: Principal = Depends(get_current_principal),
    portfolio: PortfolioService = Depends(get_portfolio),
):
    return AchievementResponse(**asdict(await portfolio.get_achievement(principal, achievement_id)))


@achievements_router.put("/{achievement_id}", response_model=AchievementResponse)
async def update_achievement(
    achievement_id: str,
    body: AchievementUpdate,
    principal: Principal = Depends(get_current_principal),
    portfolio: PortfolioService = Depends(get_portfolio),
):
    """Edit title or description while the achievement is still pending."""
    updated = await portfolio.update_achievement(
        principal, achievement_id, title=body.title, description=body.description,
    )
    return AchievementResponse(**asdict(updated))


@achievements_router.delete("/{achievement_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_achievement(
    achievement_id: str,
    principal: Principal = Depends(get_current_principal),
    portfolio: PortfolioService = Depends(get_portfolio),
):
    await portfolio.delete_achievement(principal, achievement_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ─── Credentials ────────────────────────────────────────────────

@credentials_router.get("/user", response_model=list[CredentialResponse])
async def user_credentials(
    principal: Principal = Depends(get_current_principal),
    portfolio: PortfolioService = Depends(get_portfolio),
):
    return [CredentialResponse(**asdict(c)) for c in await portfolio.credentials(principal)]


@credentials_router.get("/types", response_model=CredentialTypesResponse)
async def credential_types(
    principal: Principal = Depends(get_current_principal),
    portfolio: PortfolioService = Depends(get_portfolio),
):
    """Distinct credential tags held by the caller, sorted."""
    return CredentialTypesResponse(
        credential_types=sorted(await portfolio.held_tags(principal)),
    )


@credentials_router.post(
    "/mint", response_model=CredentialResponse,
    status_code=status.HTTP_201_CREATED,
)
async def mint_credential(
    body: MintRequest,
    principal: Principal = Depends(get_current_principal),
    portfolio: PortfolioService = Depends(get_portfolio),
):
    """Mint the credential for one of the caller's verified achievements."""
    minted = await portfolio.mint_credential(principal, body.achievement_id)
    return CredentialResponse(**asdict(minted))


# ─── Dashboard ──────────────────────────────────────────────────

@users_router.get("/dashboard-stats", response_model=DashboardStatsResponse)
async def dashboard_stats(
    principal: Principal = Depends(get_current_principal),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    report = await dashboard.report(principal)
    counts, stats = report.counts, report.stats
    return DashboardStatsResponse(
        total_achievements=counts.total_achievements,
        verified_achievements=counts.verified_achievements,
        minted_nfts=counts.minted_credentials,
        unlocked_opportunities=stats.unlocked_opportunities,
        level=stats.level,
        xp=stats.xp,
        total_xp=stats.total_xp,
        streak_days=stats.streak_days,
        rank=stats.rank.value,
        battle_pass_level=stats.battle_pass_level,
        skill_points=stats.skill_points,
        rare_achievements=counts.rare_count,
        legendary_achievements=counts.legendary_count,
        staking_rewards=report.staking_rewards,
    )
