"""Bearer token extraction from the Authorization header. Pure, no IO."""

from marketplace.core.errors import AuthenticationError

BEARER_SCHEME = "bearer"


def parse_bearer_token(header: str | None) -> str:
    """Return the token from 'Bearer <token>' or raise AuthenticationError."""
    if not header:
        raise AuthenticationError("No authorization token provided")
    scheme, _, token = header.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != BEARER_SCHEME or not token or " " in token:
        raise AuthenticationError(
            "Malformed authorization header", "INVALID_TOKEN",
        )
    return token
