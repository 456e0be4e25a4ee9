"""Identifier Generator — random UUIDs for new users."""

import uuid

from identity_access.core.errors import IdentifierGenerationError


class UUID4Generator:
    """IdentifierGenerator producing version-4 UUIDs."""

    async def generate(self) -> uuid.UUID:
        try:
            return uuid.uuid4()
        except NotImplementedError as e:
            # os.urandom has no entropy source on this platform
            raise IdentifierGenerationError("no randomness source available") from e
