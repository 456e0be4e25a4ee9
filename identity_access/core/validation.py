"""Validation — pure functions turning untyped input into domain values.

Invariants:
    - Each validator returns Ok(typed) or Err(ValidationError(field, reason))
    - Validators never raise and never log (logging lives in services/step_chain.from_unknown)
    - Same raw input always yields an equal typed value (idempotent)
    - Email canonical form: stripped, lower-cased

Design Decisions:
    - Regex over a third-party email library: format check only, deliverability is
      not a registration concern
    - Field names double as the tag in ValidationError.field ("id", "email", "password")
"""

import re
from typing import Any
from uuid import UUID

from identity_access.core.domain_types import (
    UserId, VerifiedEmail, PlainPassword, PasswordPolicy,
)
from identity_access.core.errors import ValidationError
from identity_access.core.result import Ok, Err, Result

MAX_EMAIL_LENGTH = 254

_EMAIL_PATTERN = re.compile(
    r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)+$"
)


def validate_user_id(raw: Any) -> Result[UserId]:
    """Accept a UUID instance or its canonical string form."""
    if isinstance(raw, UUID):
        return Ok(UserId(raw))
    if not isinstance(raw, str):
        return Err(ValidationError("id", "must be a UUID"))
    try:
        return Ok(UserId(UUID(raw)))
    except ValueError:
        return Err(ValidationError("id", "malformed UUID"))


def validate_email(raw: Any) -> Result[VerifiedEmail]:
    if not isinstance(raw, str):
        return Err(ValidationError("email", "must be a string"))
    email = raw.strip()
    if not email:
        return Err(ValidationError("email", "must not be empty"))
    if len(email) > MAX_EMAIL_LENGTH:
        return Err(ValidationError(
            "email", f"must be at most {MAX_EMAIL_LENGTH} characters",
        ))
    if ".." in email or not _EMAIL_PATTERN.match(email):
        return Err(ValidationError("email", "not a well-formed address"))
    return Ok(VerifiedEmail(email.lower()))


def validate_plain_password(
    raw: Any, policy: PasswordPolicy | None = None,
) -> Result[PlainPassword]:
    """Check the password against the length policy. Never echoes the value."""
    policy = policy or PasswordPolicy()
    if not isinstance(raw, str):
        return Err(ValidationError("password", "must be a string"))
    if not raw or not raw.strip():
        return Err(ValidationError("password", "must not be empty"))
    if len(raw) < policy.min_length:
        return Err(ValidationError(
            "password", f"must be at least {policy.min_length} characters",
        ))
    if len(raw) > policy.max_length:
        return Err(ValidationError(
            "password", f"must be at most {policy.max_length} characters",
        ))
    return Ok(PlainPassword(raw))
