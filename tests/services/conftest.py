"""Service test fixtures — fake collaborators for RegisterUserHandler.

Invariants:
    - Every test gets fresh fakes (no state shared between tests)
    - Fakes record their calls so tests can assert which steps ran

Design Decisions:
    - In-memory repository/publisher for realistic behavior (uniqueness, listeners),
      AsyncMock wrappers where a test needs call assertions or injected failures
"""

import hashlib
import logging
import uuid
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from identity_access.core.domain_types import HashedPassword, PlainPassword
from identity_access.infrastructure.event_publisher import InMemoryEventPublisher
from identity_access.infrastructure.user_repository import InMemoryUserRepository
from identity_access.services.register_user import RegisterUserHandler


class FakeHasher:
    """Deterministic, non-reversible-looking hash for tests."""

    def __init__(self):
        self.calls: list[PlainPassword] = []

    async def hash(self, plain: PlainPassword) -> HashedPassword:
        self.calls.append(plain)
        return HashedPassword("fake-sha256$" + hashlib.sha256(plain.value.encode()).hexdigest())


class FixedIdGenerator:
    def __init__(self, value=None):
        self.value = value or uuid.UUID("12345678-1234-5678-1234-567812345678")
        self.calls = 0

    async def generate(self):
        self.calls += 1
        return self.value


@pytest.fixture
def fakes():
    """Collaborators: real in-memory behavior, wrapped so calls are observable."""
    repository = InMemoryUserRepository()
    publisher = InMemoryEventPublisher()
    return SimpleNamespace(
        ids=FixedIdGenerator(),
        hasher=FakeHasher(),
        repository=repository,
        publisher=publisher,
        get_by_email=AsyncMock(side_effect=repository.get_by_email),
        save=AsyncMock(side_effect=repository.save),
        publish=AsyncMock(side_effect=publisher.publish),
    )


@pytest.fixture
def handler(fakes):
    repository = SimpleNamespace(
        get_by_email=fakes.get_by_email, save=fakes.save,
    )
    publisher = SimpleNamespace(publish=fakes.publish)
    return RegisterUserHandler(
        id_generator=fakes.ids,
        password_hasher=fakes.hasher,
        user_repository=repository,
        event_publisher=publisher,
        logger=logging.getLogger("tests.SignUp"),
    )
