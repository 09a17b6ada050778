"""Account Service - registration and login.

Invariants:
    - E-mails are normalised (stripped, lower-cased) before lookup and storage
    - Login with the configured demo e-mail returns the demo token without a password
    - Wrong e-mail and wrong password produce the same InvalidCredentialsError
"""

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.config import Settings
from marketplace.core.errors import ConflictError, InvalidCredentialsError
from marketplace.core.repository_protocols import FixtureProvider, Principal
from marketplace.models.user import User
from marketplace.services.authenticators import (
    demo_principal, issue_session_token, principal_from_user,
)
from marketplace.services.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    principal: Principal
    token: str


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AccountService:
    def __init__(self, db: AsyncSession, settings: Settings, fixtures: FixtureProvider):
        self.db = db
        self.settings = settings
        self.fixtures = fixtures

    async def _find_user(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def register(
        self,
        *,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        university: str,
        student_id: str | None = None,
    ) -> Principal:
        """Create a student account. E-mail verification is not part of this service."""
        email = normalize_email(email)
        if email == normalize_email(self.settings.demo_user_email):
            raise ConflictError("Email is already registered")
        if await self._find_user(email) is not None:
            raise ConflictError("Email is already registered")

        user = User(
            email=email,
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
            university=university,
            student_id=student_id,
            role="student",
            email_verified=True,
        )
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        logger.info("User registered", extra={"user_id": str(user.id)})
        return principal_from_user(user)

    async def login(self, email: str, password: str | None) -> LoginResult:
        email = normalize_email(email)
        if email == normalize_email(self.settings.demo_user_email):
            return LoginResult(
                principal=demo_principal(self.fixtures),
                token=self.settings.demo_token,
            )

        user = await self._find_user(email)
        if user is None or not password or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()
        principal = principal_from_user(user)
        logger.info("User logged in", extra={"user_id": principal.user_id})
        return LoginResult(
            principal=principal,
            token=issue_session_token(principal.user_id, self.settings),
        )
