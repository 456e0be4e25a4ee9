"""API test fixtures — FastAPI test client over an in-memory SQLite database.

Invariants:
    - get_db overridden to use the per-test engine
    - db_manager patched so the readiness probe sees the test engine
    - Each test gets its own InMemoryEventPublisher (exposed as client.events)
"""

import pytest
from httpx import ASGITransport, AsyncClient

from identity_access.api.dependencies import get_event_publisher
from identity_access.infrastructure.database import get_db, DatabaseSessionManager
from identity_access.infrastructure.event_publisher import InMemoryEventPublisher
import identity_access.infrastructure.database as db_module
from identity_access.main import app


@pytest.fixture
def events():
    return InMemoryEventPublisher()


@pytest.fixture
async def client(test_engine, test_session_factory, events):
    """FastAPI test client with DB and event publisher dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_event_publisher] = lambda: events

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
