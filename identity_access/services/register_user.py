"""Register User — the SignUp command and its step-by-step handler.

Invariants:
    - Step order is fixed: validate → check email unicity → hash → build User →
      save → publish USER_CREATED → Success
    - First failing step ends the run; later collaborators are never called
    - id, email and password are validated concurrently and joined in that order
    - No event is published unless save() succeeded
    - The plaintext password only ever reaches PasswordHasher.hash
    - The handler holds no per-call state; concurrent executes are independent

Design Decisions:
    - Event email comes from the saved User (validated, lower-cased), not from the
      raw command: the event is prepared from the persisted entity so both agree
    - Publication failure after a successful save is reported as EVENT_PUBLICATION;
      the user stays stored (no compensation, recovery belongs to the caller)
    - Email unicity check here is best-effort; UserRepository.save is the real guard
"""

import logging
from dataclasses import dataclass, field
from functools import partial

from identity_access.core.domain_types import (
    UserId, VerifiedEmail, PlainPassword, HashedPassword, PasswordPolicy, EventKey,
)
from identity_access.core.errors import (
    ConflictError, EventPublicationError, HashingError,
    IdentifierGenerationError, PersistenceError, UserLookupError,
)
from identity_access.core.repository_protocols import (
    DomainEventPublisher, IdentifierGenerator, PasswordHasher, UserRepository,
)
from identity_access.core.result import Ok, Err, Result
from identity_access.core.user_entity import User, DomainEvent, user_created_event
from identity_access.core.validation import (
    validate_user_id, validate_email, validate_plain_password,
)
from identity_access.services.outcome import Outcome, to_outcome
from identity_access.services.step_chain import (
    chain, gather, perform, right, validated,
)


@dataclass(frozen=True)
class SignUp:
    """Raw registration input, exactly as the caller supplied it."""
    email: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class ValidatedSignUp:
    id: UserId
    email: VerifiedEmail
    plain_password: PlainPassword


class RegisterUserHandler:
    """Runs the SignUp command against the injected collaborators."""

    def __init__(
        self,
        id_generator: IdentifierGenerator,
        password_hasher: PasswordHasher,
        user_repository: UserRepository,
        event_publisher: DomainEventPublisher,
        logger: logging.Logger | None = None,
        password_policy: PasswordPolicy | None = None,
    ):
        self.id_generator = id_generator
        self.password_hasher = password_hasher
        self.user_repository = user_repository
        self.event_publisher = event_publisher
        self.logger = logger or logging.getLogger("identity_access.SignUp")
        self.password_policy = password_policy or PasswordPolicy()

    async def register_user(self, email: str, password: str) -> Outcome:
        return await self.execute(SignUp(email=email, password=password))

    async def execute(self, command: SignUp) -> Outcome:
        return to_outcome(await self.run(command))

    async def run(self, command: SignUp) -> Result[None]:
        """Pipeline with the raw Result, before adaptation to Outcome."""
        return await chain(
            self._validate(command),
            self._check_email_unicity,
            self._hash_password,
            self._build_user,
            self._store_user,
            self._publish_event,
        )

    # ─── Steps ───────────────────────────────────────────────────

    async def _validate(self, command: SignUp) -> Result[ValidatedSignUp]:
        return await chain(
            gather(
                self._generate_user_id(),
                validated(
                    command.email, validate_email,
                    logger=self.logger, tag="email",
                ),
                validated(
                    command.password,
                    partial(validate_plain_password, policy=self.password_policy),
                    logger=self.logger, tag="plain password",
                ),
            ),
            lambda fields: Ok(ValidatedSignUp(*fields)),
        )

    async def _generate_user_id(self) -> Result[UserId]:
        return await chain(
            perform(
                self.id_generator.generate,
                logger=self.logger, tag="generate uuid",
                on_error=IdentifierGenerationError,
            ),
            lambda raw_id: validated(
                raw_id, validate_user_id, logger=self.logger, tag="uuid",
            ),
        )

    async def _check_email_unicity(
        self, data: ValidatedSignUp,
    ) -> Result[ValidatedSignUp]:
        return await chain(
            gather(
                perform(
                    self.user_repository.get_by_email, data.email,
                    logger=self.logger, tag="get user by email",
                    on_error=UserLookupError,
                ),
                right(data),
            ),
            lambda pair: validated(
                pair, _reject_existing_user,
                logger=self.logger, tag="check email unicity",
            ),
        )

    async def _hash_password(
        self, data: ValidatedSignUp,
    ) -> Result[tuple[HashedPassword, ValidatedSignUp]]:
        return await gather(
            perform(
                self.password_hasher.hash, data.plain_password,
                logger=self.logger, tag="hash plain password",
                on_error=HashingError,
            ),
            right(data),
        )

    async def _build_user(
        self, pair: tuple[HashedPassword, ValidatedSignUp],
    ) -> Result[User]:
        hashed, data = pair
        return await validated(
            {"id": data.id, "email": data.email, "password": hashed},
            lambda fields: User.create(**fields),
            logger=self.logger, tag="user",
        )

    async def _store_user(self, user: User) -> Result[DomainEvent]:
        event = user_created_event(user)
        return await chain(
            perform(
                self.user_repository.save, user,
                logger=self.logger, tag="save user in storage system",
                on_error=PersistenceError,
            ),
            lambda _: Ok(event),
        )

    async def _publish_event(self, event: DomainEvent) -> Result[None]:
        result = await perform(
            self.event_publisher.publish, event,
            logger=self.logger, tag="emit user created event",
            on_error=partial(
                EventPublicationError, event_key=EventKey.USER_CREATED.value,
            ),
        )
        if result.is_ok():
            self.logger.info(
                "User registered",
                extra={"event_key": event.event_key.value},
            )
        return result.map(lambda _: None)


def _reject_existing_user(
    pair: tuple[User | None, ValidatedSignUp],
) -> Result[ValidatedSignUp]:
    existing, data = pair
    if existing is None:
        return Ok(data)
    return Err(ConflictError("Email already exists."))
