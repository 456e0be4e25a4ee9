"""Dependencies — wires RegisterUserHandler from settings and the request DB session.

Invariants:
    - One RegisterUserHandler per request (repository bound to the request session)
    - Hasher, id generator and event publisher are process-wide (stateless or shared)

Design Decisions:
    - lru_cache on the process-wide collaborators: the in-memory publisher must keep
      its events and listeners across requests
"""

import logging
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from identity_access.config import get_settings
from identity_access.core.repository_protocols import DomainEventPublisher
from identity_access.infrastructure.database import get_db
from identity_access.infrastructure.event_publisher import (
    InMemoryEventPublisher, LoggingEventPublisher,
)
from identity_access.infrastructure.id_generator import UUID4Generator
from identity_access.infrastructure.password_hasher import WerkzeugPasswordHasher
from identity_access.infrastructure.user_repository import SqlAlchemyUserRepository
from identity_access.services.register_user import RegisterUserHandler


@lru_cache
def get_event_publisher() -> DomainEventPublisher:
    if get_settings().event_publisher == "memory":
        return InMemoryEventPublisher()
    return LoggingEventPublisher()


@lru_cache
def get_password_hasher() -> WerkzeugPasswordHasher:
    settings = get_settings()
    return WerkzeugPasswordHasher(
        method=settings.password_hash_method,
        salt_length=settings.password_salt_length,
    )


async def get_register_user_handler(
    db: AsyncSession = Depends(get_db),
    password_hasher: WerkzeugPasswordHasher = Depends(get_password_hasher),
    event_publisher: DomainEventPublisher = Depends(get_event_publisher),
) -> RegisterUserHandler:
    return RegisterUserHandler(
        id_generator=UUID4Generator(),
        password_hasher=password_hasher,
        user_repository=SqlAlchemyUserRepository(db),
        event_publisher=event_publisher,
        logger=logging.getLogger("identity_access.SignUp"),
        password_policy=get_settings().password_policy,
    )
