"""Root conftest - shared test configuration."""

import os

# Keep tests off any real database and away from production secrets
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production-use-0123456789")
os.environ.setdefault("LOG_FORMAT", "text")
