"""User Repositories — SQLAlchemy and in-memory implementations of UserRepository.

Invariants:
    - save() rejects a second user with the same email (ConflictError); this is the
      authoritative uniqueness guard; the pipeline's lookup is only best-effort
    - get_by_email failures raise UserLookupError, save failures raise PersistenceError
    - A failed save leaves nothing stored (session rolled back)

Design Decisions:
    - Repository commits its own unit of work: registration stores exactly one row,
      and publishing must only start after the commit is durable
    - Rows rehydrated through User.create: a corrupt row surfaces as UserLookupError
      instead of a half-valid entity
"""

import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from identity_access.core.domain_types import VerifiedEmail
from identity_access.core.errors import (
    ConflictError, PersistenceError, UserLookupError,
)
from identity_access.core.user_entity import User
from identity_access.models.user import UserRecord

logger = logging.getLogger(__name__)


class SqlAlchemyUserRepository:
    """UserRepository backed by the `users` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: VerifiedEmail) -> User | None:
        try:
            result = await self.db.execute(
                select(UserRecord).where(UserRecord.email == email),
            )
        except SQLAlchemyError as e:
            logger.error(f"User lookup query failed: {e}")
            raise UserLookupError("database query failed") from e
        record = result.scalar_one_or_none()
        if record is None:
            return None
        return _to_entity(record)

    async def save(self, user: User) -> None:
        self.db.add(UserRecord(
            id=user.id, email=user.email, password_hash=user.password,
        ))
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Duplicate email rejected by storage: {e.orig}")
            raise ConflictError("Email already exists.") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"User save failed: {e}")
            raise PersistenceError("could not store user", "commit") from e


class InMemoryUserRepository:
    """UserRepository kept in a dict, for tests and local runs without a database."""

    def __init__(self):
        self._users: dict[str, User] = {}
        self._lock = asyncio.Lock()

    async def get_by_email(self, email: VerifiedEmail) -> User | None:
        return self._users.get(email)

    async def save(self, user: User) -> None:
        async with self._lock:
            if user.email in self._users:
                raise ConflictError("Email already exists.")
            self._users[user.email] = user

    @property
    def users(self) -> list[User]:
        return list(self._users.values())


def _to_entity(record: UserRecord) -> User:
    result = User.create(
        id=record.id, email=record.email, password=record.password_hash,
    )
    if not result.is_ok():
        raise UserLookupError(f"stored user {record.id} is invalid")
    return result.value
