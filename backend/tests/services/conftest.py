"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched for the readiness probe, which bypasses get_db
    - Rate limiter replaced per test; tests that exercise limits install their own

Design Decisions:
    - StaticPool keeps one connection so every session sees the same :memory: DB
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from notes_api.api.dependencies import get_rate_limiter
from notes_api.core.domain_types import RateLimitPolicy
from notes_api.db.base import Base
from notes_api.infrastructure.database import get_db, DatabaseSessionManager
from notes_api.services.rate_limiter import RateLimiter
import notes_api.infrastructure.database as db_module
from notes_api.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
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
def install_limiter():
    """Swap the app's rate limiter; returns the installed instance."""
    def _install(limiter: RateLimiter) -> RateLimiter:
        app.dependency_overrides[get_rate_limiter] = lambda: limiter
        return limiter
    return _install


@pytest.fixture
async def client(test_engine, test_session_factory, install_limiter):
    """FastAPI test client with DB dependency overridden."""
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory

    async def override_get_db():
        async with fake_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    install_limiter(RateLimiter.from_policy(RateLimitPolicy.KEYED, limit=10_000))

    original_manager = db_module.db_manager
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
