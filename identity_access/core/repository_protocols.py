"""Boundary Protocols — contracts between the registration pipeline and its collaborators.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Collaborators signal failure by raising an IdentityError subclass

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do IO; the pipeline awaits them through
      services/step_chain.perform, which turns raised errors into Err
"""

from typing import Protocol
from uuid import UUID

from identity_access.core.domain_types import (
    VerifiedEmail, PlainPassword, HashedPassword,
)
from identity_access.core.user_entity import User, DomainEvent


class IdentifierGenerator(Protocol):
    """Produces fresh user ids. Raises IdentifierGenerationError."""
    async def generate(self) -> UUID: ...


class PasswordHasher(Protocol):
    """One-way password hashing. Raises HashingError."""
    async def hash(self, plain: PlainPassword) -> HashedPassword: ...


class UserRepository(Protocol):
    """User persistence. save() is the authoritative email-uniqueness guard.

    get_by_email raises UserLookupError; save raises PersistenceError, or
    ConflictError when the email is already stored.
    """
    async def get_by_email(self, email: VerifiedEmail) -> User | None: ...
    async def save(self, user: User) -> None: ...


class DomainEventPublisher(Protocol):
    """Event delivery. Raises EventPublicationError."""
    async def publish(self, event: DomainEvent) -> None: ...
