"""Password Hasher — werkzeug.security hashing behind the PasswordHasher protocol.

Invariants:
    - hash() output never equals or contains the plaintext
    - Errors are mapped to HashingError without echoing the password
    - Hashing runs in a worker thread: scrypt/pbkdf2 are CPU-bound and must not
      block the event loop

Design Decisions:
    - werkzeug's method string ("scrypt", "pbkdf2:sha256:600000") is configuration,
      so the algorithm can change without touching the pipeline
"""

import asyncio
import logging

from werkzeug.security import generate_password_hash, check_password_hash

from identity_access.core.domain_types import PlainPassword, HashedPassword
from identity_access.core.errors import HashingError

logger = logging.getLogger(__name__)


class WerkzeugPasswordHasher:
    """PasswordHasher using werkzeug.security.generate_password_hash."""

    def __init__(self, method: str = "scrypt", salt_length: int = 16):
        self.method = method
        self.salt_length = salt_length

    async def hash(self, plain: PlainPassword) -> HashedPassword:
        try:
            hashed = await asyncio.to_thread(
                generate_password_hash,
                plain.value,
                method=self.method,
                salt_length=self.salt_length,
            )
        except (ValueError, TypeError) as e:
            logger.error(
                f"Password hashing with method '{self.method}' failed: {type(e).__name__}",
            )
            raise HashingError(f"unsupported hash method '{self.method}'") from e
        return HashedPassword(hashed)

    async def verify(self, hashed: HashedPassword, plain: PlainPassword) -> bool:
        return await asyncio.to_thread(check_password_hash, hashed, plain.value)
