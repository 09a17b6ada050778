"""API Dependencies - FastAPI providers for fixtures, authenticators and services.

Invariants:
    - Fixture provider is built once per fixtures_dir (cached), never per request
    - get_current_principal raises AuthenticationError; routes never inspect headers
    - Services receive the request-scoped AsyncSession from get_db

Design Decisions:
    - Authenticator is a dependency so tests can override it like get_db
"""

from functools import lru_cache

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.config import Settings, get_settings
from marketplace.core.bearer import parse_bearer_token
from marketplace.core.errors import AuthenticationError
from marketplace.core.repository_protocols import (
    Authenticator, FixtureProvider, Principal,
)
from marketplace.infrastructure.database import get_db
from marketplace.services.accounts import AccountService
from marketplace.services.authenticators import (
    ChainAuthenticator, DemoTokenAuthenticator, VerifiedSessionAuthenticator,
)
from marketplace.services.dashboard import DashboardService
from marketplace.services.event_catalog import EventCatalog
from marketplace.services.fixtures import JsonFixtureProvider
from marketplace.services.portfolio import PortfolioService
from marketplace.services.ticket_purchase import TicketPurchaseService


@lru_cache
def _fixture_provider(directory: str | None) -> JsonFixtureProvider:
    return JsonFixtureProvider(directory)


def get_fixtures(settings: Settings = Depends(get_settings)) -> FixtureProvider:
    return _fixture_provider(settings.fixtures_dir)


def get_authenticator(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    fixtures: FixtureProvider = Depends(get_fixtures),
) -> Authenticator:
    return ChainAuthenticator(
        DemoTokenAuthenticator(settings, fixtures),
        VerifiedSessionAuthenticator(db, settings),
    )


async def get_current_principal(
    authorization: str | None = Header(None),
    authenticator: Authenticator = Depends(get_authenticator),
) -> Principal:
    token = parse_bearer_token(authorization)
    principal = await authenticator.authenticate(token)
    if principal is None:
        raise AuthenticationError("Invalid or expired token", code="INVALID_TOKEN")
    return principal


def get_account_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    fixtures: FixtureProvider = Depends(get_fixtures),
) -> AccountService:
    return AccountService(db, settings, fixtures)


def get_event_catalog(
    db: AsyncSession = Depends(get_db),
    fixtures: FixtureProvider = Depends(get_fixtures),
) -> EventCatalog:
    return EventCatalog(db, fixtures)


def get_portfolio(
    db: AsyncSession = Depends(get_db),
    fixtures: FixtureProvider = Depends(get_fixtures),
) -> PortfolioService:
    return PortfolioService(db, fixtures)


def get_ticket_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    fixtures: FixtureProvider = Depends(get_fixtures),
) -> TicketPurchaseService:
    return TicketPurchaseService(db, settings, fixtures)


def get_dashboard_service(
    portfolio: PortfolioService = Depends(get_portfolio),
    settings: Settings = Depends(get_settings),
    fixtures: FixtureProvider = Depends(get_fixtures),
) -> DashboardService:
    return DashboardService(portfolio, settings, fixtures)
