"""Database Session Manager — rollback and error propagation over in-memory SQLite.

Tests cover:
    - Exceptions escaping a session propagate unchanged and roll back
    - Repository errors (ConflictError) reach the caller as raised
    - health_check on a live engine
"""

import uuid

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from identity_access.core.errors import ConflictError
from identity_access.infrastructure.database import DatabaseSessionManager
from identity_access.models.user import UserRecord


@pytest.fixture
def manager(test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


def _record(email="new@example.com"):
    return UserRecord(id=uuid.uuid4(), email=email, password_hash="h")


async def test_escaping_exception_is_reraised_unchanged(manager):
    error = IntegrityError("INSERT INTO users", {}, Exception("UNIQUE failed"))

    with pytest.raises(IntegrityError) as exc_info:
        async with manager.session():
            raise error

    assert exc_info.value is error


async def test_escaping_exception_rolls_back_pending_rows(manager, test_db):
    with pytest.raises(ConflictError):
        async with manager.session() as session:
            session.add(_record())
            await session.flush()
            raise ConflictError()

    rows = (await test_db.execute(select(UserRecord))).scalars().all()
    assert rows == []


async def test_committed_rows_survive_the_session(manager, test_db):
    async with manager.session() as session:
        session.add(_record())
        await session.commit()

    rows = (await test_db.execute(select(UserRecord))).scalars().all()
    assert [r.email for r in rows] == ["new@example.com"]


async def test_health_check_on_live_engine(manager):
    assert await manager.health_check() is True
