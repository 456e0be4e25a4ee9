"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps UUID — never use bare UUID in domain logic
    - VerifiedEmail is only produced by validate_email (stripped, lower-cased)
    - PlainPassword never renders its value in repr/str (safe to log by accident)
    - HashedPassword is opaque; it never carries the plaintext it came from

Design Decisions:
    - NewType over dataclass wrappers where zero runtime cost is enough
    - PlainPassword is a frozen dataclass: the type itself must stop the plaintext
      from reaching User and from leaking through log formatting
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

VerifiedEmail = NewType("VerifiedEmail", str)
HashedPassword = NewType("HashedPassword", str)


@dataclass(frozen=True)
class PlainPassword:
    """Validated plaintext password. Only the hasher reads `.value`."""
    value: str = field(repr=False)

    def __str__(self) -> str:
        return "PlainPassword(***)"


@dataclass(frozen=True)
class PasswordPolicy:
    """Length bounds applied by validate_plain_password."""
    min_length: int = 1
    max_length: int = 128


# ─── Enums ───────────────────────────────────────────────────────

class EventKey(str, Enum):
    """Domain event keys published by the identity context."""
    USER_CREATED = "user_created"
