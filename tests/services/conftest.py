"""Service test fixtures - async DB, FastAPI test client, seeded users.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features are not exercised here)
"""

import uuid

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from marketplace.config import get_settings
from marketplace.db.base import Base
from marketplace.infrastructure.database import get_db, DatabaseSessionManager
import marketplace.infrastructure.database as db_module
import marketplace.models  # noqa: F401
from marketplace.main import app
from marketplace.models.achievement import Achievement
from marketplace.models.credential import Credential
from marketplace.models.user import User
from marketplace.services.authenticators import issue_session_token
from marketplace.services.fixtures import JsonFixtureProvider
from marketplace.services.passwords import hash_password

STUDENT_PASSWORD = "correct horse battery"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def fixtures():
    return JsonFixtureProvider()


@pytest.fixture
async def student(test_db):
    """A registered student with no achievements or credentials."""
    user = User(
        email="ada@uni.edu",
        password_hash=hash_password(STUDENT_PASSWORD, iterations=1_000),
        first_name="Ada",
        last_name="Lovelace",
        university="Analytical University",
        role="student",
        email_verified=True,
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest.fixture
def student_headers(student, settings):
    token = issue_session_token(str(student.id), settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def admin(test_db):
    """A reviewer account; registration never grants this role."""
    user = User(
        email="registrar@uni.edu",
        password_hash=hash_password("review-queue", iterations=1_000),
        first_name="Rosalind",
        last_name="Franklin",
        university="Analytical University",
        role="admin",
        email_verified=True,
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest.fixture
def admin_headers(admin, settings):
    token = issue_session_token(str(admin.id), settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def demo_headers(settings):
    return {"Authorization": f"Bearer {settings.demo_token}"}


@pytest.fixture
def add_portfolio(test_db):
    """Attach (tag, rarity) credentials and (status, minted) achievements to a user."""
    async def _add(
        user_id: uuid.UUID,
        credentials: list[tuple[str, str]],
        achievements: list[tuple[str, bool]] = (),
    ):
        for i, (status, minted) in enumerate(achievements):
            test_db.add(Achievement(
                user_id=user_id, title=f"Achievement {i}", achievement_type="academic",
                status=status, nft_minted=minted,
            ))
        for tag, rarity in credentials:
            test_db.add(Credential(
                user_id=user_id, credential_tag=tag, name=tag.replace("_", " ").title(),
                rarity=rarity, staking_rewards=5.0,
            ))
        await test_db.commit()
    return _add
