"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Authentication and fixture access go through Protocol types
    - Implementations provided by shell (services/) via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Authenticator is async because the session variant reads the database;
      the demo variant satisfies the same signature without doing IO
"""

from dataclasses import dataclass
from typing import Any, Protocol

from marketplace.core.domain_types import UserRole


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, independent of how it was authenticated."""
    user_id: str
    email: str
    first_name: str
    last_name: str
    university: str
    role: UserRole = UserRole.STUDENT
    email_verified: bool = True
    is_demo: bool = False

    def to_public(self) -> dict:
        return {
            "id": self.user_id,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "university": self.university,
            "role": self.role.value,
            "emailVerified": self.email_verified,
            "isDemo": self.is_demo,
        }


class Authenticator(Protocol):
    """Resolves a bearer token to a Principal, or None if not recognised."""
    async def authenticate(self, token: str) -> Principal | None: ...


class FixtureProvider(Protocol):
    """Canned demo payloads keyed by logical name (e.g. 'dashboard_stats')."""
    def get(self, key: str) -> Any: ...
    def has(self, key: str) -> bool: ...
