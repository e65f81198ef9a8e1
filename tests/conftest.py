from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from src.api.deps import get_db_session
from src.api.main import app
from src.core.auth import create_access_token
from src.domain.reference_data import (
    ADMIN_USER_ID,
    CATALOG_BADGE_DEFINITIONS,
    USER_DEFINITIONS,
)
from src.infrastructure.db import Base, enable_sqlite_foreign_keys, seed_catalog

from tests.utils import INACTIVE_BADGE


@pytest.fixture()
async def engine() -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture()
async def seeded(session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Sample catalog plus one inactive badge only admins can see."""
    async with session_factory() as session:
        await seed_catalog(
            session,
            users=USER_DEFINITIONS,
            badges=[*CATALOG_BADGE_DEFINITIONS, INACTIVE_BADGE],
        )


@pytest.fixture()
async def db(
    session_factory: async_sessionmaker[AsyncSession], seeded: None
) -> AsyncIterator[AsyncSession]:
    """Provide a database session for tests that need direct DB access."""
    async with session_factory() as session:
        yield session


@pytest.fixture()
async def async_client(
    session_factory: async_sessionmaker[AsyncSession], seeded: None
) -> AsyncIterator[AsyncClient]:
    """Async HTTP client wired to the seeded in-memory database."""

    async def override_db_session() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.pop(get_db_session, None)


@pytest.fixture()
def admin_token() -> str:
    """JWT for the seeded admin user."""
    return create_access_token(ADMIN_USER_ID, roles=["admin"], email="admin@badger.com")


@pytest.fixture()
def member_token() -> str:
    """JWT for a regular (non-admin) member."""
    return create_access_token("member-user", roles=["member"])
