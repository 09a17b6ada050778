"""Admin Routes - achievement review queue and verification.

Invariants:
    - Callers without the admin role get 403 PERMISSION_DENIED (checked in the service)
    - Only pending achievements can be reviewed; a second review is 409
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from marketplace.api.dependencies import get_current_principal, get_portfolio
from marketplace.core.repository_protocols import Principal
from marketplace.schemas.portfolio import AchievementResponse, AchievementReview
from marketplace.services.portfolio import PortfolioService

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


@router.get("/achievements/pending", response_model=list[AchievementResponse])
async def pending_achievements(
    principal: Principal = Depends(get_current_principal),
    portfolio: PortfolioService = Depends(get_portfolio),
):
    return [AchievementResponse(**asdict(a)) for a in await portfolio.pending_achievements(principal)]


@router.post("/achievements/{achievement_id}/verify", response_model=AchievementResponse)
async def verify_achievement(
    achievement_id: str,
    body: AchievementReview,
    principal: Principal = Depends(get_current_principal),
    portfolio: PortfolioService = Depends(get_portfolio),
):
    """Approve (verified) or reject a pending achievement."""
    reviewed = await portfolio.review_achievement(
        principal, achievement_id, approved=body.approved, note=body.reason,
    )
    return AchievementResponse(**asdict(reviewed))
