"""Calculator Routes - stateless pricing quotes and dashboard stat computation.

Invariants:
    - No authentication and no writes: both endpoints are pure functions over the request
    - Quotes resolve the event from the catalog (404 if unknown) but ignore capacity
"""

import logging

from fastapi import APIRouter, Depends

from marketplace.api.dependencies import get_event_catalog
from marketplace.config import Settings, get_settings
from marketplace.core.dashboard_stats import DashboardCounts, compute_stats
from marketplace.core.pricing import compute_purchase
from marketplace.schemas.pricing import (
    QuoteRequest, QuoteResponse, StatsRequest, StatsResponse,
)
from marketplace.services.event_catalog import EventCatalog

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["calculators"])


@router.post("/pricing/quote", response_model=QuoteResponse)
async def quote(
    body: QuoteRequest,
    catalog: EventCatalog = Depends(get_event_catalog),
):
    """Best single credential discount for `quantity` tickets."""
    event = await catalog.get_event(body.event_id)
    result = compute_purchase(event.to_pricing(), body.quantity, body.held_credentials)
    logger.info(
        "Quote computed",
        extra={
            "event_id": event.id, "quantity": body.quantity,
            "discount_percent": result.discount_percent,
        },
    )
    return QuoteResponse(
        unit_price=float(result.unit_price),
        total_price=float(result.total_price),
        discount_percent=result.discount_percent,
        applied_credential=result.applied_credential,
    )


@router.post("/stats/compute", response_model=StatsResponse)
async def compute(
    body: StatsRequest,
    settings: Settings = Depends(get_settings),
):
    counts = DashboardCounts(
        total_achievements=body.total_achievements,
        verified_achievements=body.verified_achievements,
        minted_credentials=body.minted_credentials,
        rare_count=body.rare_count,
        legendary_count=body.legendary_count,
    )
    stats = compute_stats(counts, total_xp=settings.total_xp_target)
    return StatsResponse(
        level=stats.level,
        xp=stats.xp,
        total_xp=stats.total_xp,
        streak_days=stats.streak_days,
        rank=stats.rank.value,
        battle_pass_level=stats.battle_pass_level,
        skill_points=stats.skill_points,
        unlocked_opportunities=stats.unlocked_opportunities,
    )
