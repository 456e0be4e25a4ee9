"""Root conftest — shared test configuration and in-memory database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Environment defaults are set before identity_access.config is imported

Design Decisions:
    - StaticPool: one shared connection, so every session sees the same :memory: DB
"""

import os

# Never touch a real database or run production-strength hashing in tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("PASSWORD_HASH_METHOD", "pbkdf2:sha256:1000")
os.environ.setdefault("EVENT_PUBLISHER", "memory")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from identity_access.db.base import Base  # noqa: E402
import identity_access.models  # noqa: E402,F401


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
