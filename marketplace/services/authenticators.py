"""Authenticators - resolve bearer tokens to Principals (demo token, signed session).

Invariants:
    - Every variant satisfies core.repository_protocols.Authenticator
    - Unrecognised tokens yield None; only the API dependency turns None into 401
    - The exact demo token and session signatures are compared in constant time;
      configured demo_token_prefixes are a plain startswith match (off by default)
    - Session tokens are HS256 JWTs carrying sub=user_id and exp; the user must still exist

Design Decisions:
    - ChainAuthenticator tries variants in order so routes depend on one object
    - Demo principal comes from the demo_user fixture, not from the database
"""

import hmac
import logging
import uuid
from datetime import datetime, timedelta, timezone

import jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.config import Settings
from marketplace.core.domain_types import UserRole
from marketplace.core.repository_protocols import (
    Authenticator, FixtureProvider, Principal,
)
from marketplace.models.user import User

logger = logging.getLogger(__name__)

SESSION_TOKEN_TYPE = "session"


def principal_from_user(user: User) -> Principal:
    return Principal(
        user_id=str(user.id),
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        university=user.university,
        role=UserRole(user.role),
        email_verified=user.email_verified,
    )


def demo_principal(fixtures: FixtureProvider) -> Principal:
    data = fixtures.get("demo_user")
    return Principal(
        user_id=data["id"],
        email=data["email"],
        first_name=data["firstName"],
        last_name=data["lastName"],
        university=data["university"],
        role=UserRole(data.get("role", "student")),
        email_verified=data.get("emailVerified", True),
        is_demo=True,
    )


def issue_session_token(
    user_id: str, settings: Settings, now: datetime | None = None,
) -> str:
    """Sign a session token for `user_id` valid for settings.session_ttl_minutes."""
    issued = now or datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "typ": SESSION_TOKEN_TYPE,
        "iat": issued,
        "exp": issued + timedelta(minutes=settings.session_ttl_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


class DemoTokenAuthenticator:
    """Accepts the configured demo token, or any token starting with a configured prefix."""

    def __init__(self, settings: Settings, fixtures: FixtureProvider):
        self._token = settings.demo_token
        self._prefixes = tuple(p for p in settings.demo_token_prefixes if p)
        self._fixtures = fixtures

    def matches(self, token: str) -> bool:
        if hmac.compare_digest(token.encode(), self._token.encode()):
            return True
        return bool(self._prefixes) and token.startswith(self._prefixes)

    async def authenticate(self, token: str) -> Principal | None:
        if not self.matches(token):
            return None
        return demo_principal(self._fixtures)


class VerifiedSessionAuthenticator:
    """Accepts signed session tokens whose subject is an existing user."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self._db = db
        self._secret = settings.jwt_secret
        self._algorithm = settings.jwt_algorithm

    async def authenticate(self, token: str) -> Principal | None:
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.PyJWTError as e:
            logger.info(f"Rejected session token: {e}")
            return None
        if claims.get("typ") != SESSION_TOKEN_TYPE:
            return None
        try:
            user_id = uuid.UUID(str(claims.get("sub")))
        except ValueError:
            return None

        result = await self._db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if user is None:
            logger.warning(
                "Session token for unknown user", extra={"user_id": str(user_id)},
            )
            return None
        return principal_from_user(user)


class ChainAuthenticator:
    """First authenticator to recognise the token wins."""

    def __init__(self, *authenticators: Authenticator):
        self._authenticators = authenticators

    async def authenticate(self, token: str) -> Principal | None:
        for authenticator in self._authenticators:
            principal = await authenticator.authenticate(token)
            if principal is not None:
                return principal
        return None
