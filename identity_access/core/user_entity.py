"""User Entity — the aggregate persisted on registration, and its domain event.

Invariants:
    - A User is only built through User.create, which re-validates id and email
    - User.password is a HashedPassword, never a PlainPassword
    - user_created_event draws the email from the User (validated, canonical)

Design Decisions:
    - Frozen dataclass: the entity is handed to storage as-is, nobody mutates it
    - create() returns Result instead of raising: it is a pipeline step like any other
"""

from dataclasses import dataclass, field
from typing import Any

from identity_access.core.domain_types import (
    UserId, VerifiedEmail, HashedPassword, PlainPassword, EventKey,
)
from identity_access.core.errors import EntityConstructionError
from identity_access.core.result import Ok, Err, Result
from identity_access.core.validation import validate_user_id, validate_email


@dataclass(frozen=True)
class User:
    """Registered user. Construct with User.create()."""
    id: UserId
    email: VerifiedEmail
    password: HashedPassword = field(repr=False)

    @classmethod
    def create(cls, id: Any, email: Any, password: Any) -> Result["User"]:
        """Build a User after checking entity invariants."""
        if isinstance(password, PlainPassword):
            return Err(EntityConstructionError("password must be hashed"))
        if not isinstance(password, str) or not password:
            return Err(EntityConstructionError("hashed password must be a non-empty string"))

        checked_id = validate_user_id(id)
        if not checked_id.is_ok():
            return Err(EntityConstructionError(checked_id.error.message))
        checked_email = validate_email(email)
        if not checked_email.is_ok():
            return Err(EntityConstructionError(checked_email.error.message))
        if checked_email.value != email:
            return Err(EntityConstructionError("email is not in canonical form"))

        return Ok(cls(
            id=checked_id.value,
            email=checked_email.value,
            password=HashedPassword(password),
        ))


@dataclass(frozen=True)
class DomainEvent:
    """Event handed to the publisher after a state change is committed."""
    event_key: EventKey
    payload: dict[str, Any]


def user_created_event(user: User) -> DomainEvent:
    return DomainEvent(
        event_key=EventKey.USER_CREATED,
        payload={"email": user.email},
    )
