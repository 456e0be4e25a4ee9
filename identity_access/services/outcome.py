"""Outcome — caller-visible result of a command, and the adapter from Result to Outcome.

Invariants:
    - Ok(...) always becomes Success(); the success value is discarded
    - Err(error) becomes exactly one Failure carrying the error's kind
    - Only CONFLICT and VALIDATION failures expose their own message;
      every other kind gets a generic message (no hashing/storage internals)
    - This module is the only place that maps ErrorKind to HTTP status

Design Decisions:
    - Outcome instead of raising: the handler's caller (route, CLI, test) decides
      how to surface a failure
    - EVENT_PUBLICATION keeps a distinct public message: the user is already stored,
      so callers must not read the failure as "nothing happened"
"""

from dataclasses import dataclass
from typing import Union

from identity_access.core.errors import ErrorKind, ErrorSeverity
from identity_access.core.result import Err, Result

GENERIC_FAILURE_MESSAGE = "Registration failed."
EVENT_FAILURE_MESSAGE = (
    "User was registered, but the registration event could not be published."
)

_HTTP_STATUS: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.CONFLICT: 409,
}


@dataclass(frozen=True)
class Success:
    """Command completed; nothing to report."""

    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Command aborted with a classified error."""
    kind: ErrorKind
    message: str
    field: str | None = None

    def is_success(self) -> bool:
        return False

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS.get(self.kind, 500)

    @property
    def code(self) -> str:
        if self.kind is ErrorKind.CONFLICT:
            return "EMAIL_ALREADY_EXISTS"
        if self.kind is ErrorKind.VALIDATION:
            return "VALIDATION_ERROR"
        return "REGISTRATION_FAILED"

    def to_response(self) -> dict:
        """REST envelope used by the users route and the IdentityError handler."""
        body = {
            "code": self.code,
            "message": self.message,
            "category": "conflict" if self.kind is ErrorKind.CONFLICT else (
                "validation" if self.kind is ErrorKind.VALIDATION else "internal"
            ),
            "severity": (
                ErrorSeverity.WARNING.value if self.http_status < 500
                else ErrorSeverity.ERROR.value
            ),
        }
        if self.field is not None:
            body["field"] = self.field
        return {"error": body}


Outcome = Union[Success, Failure]


def to_outcome(result: Result) -> Outcome:
    """Translate the pipeline's terminal Result into the caller-facing Outcome."""
    if not isinstance(result, Err):
        return Success()
    error = result.error
    if error.kind is ErrorKind.VALIDATION:
        return Failure(error.kind, error.message, getattr(error, "field", None))
    if error.kind is ErrorKind.CONFLICT:
        return Failure(error.kind, error.message)
    if error.kind is ErrorKind.EVENT_PUBLICATION:
        return Failure(error.kind, EVENT_FAILURE_MESSAGE)
    return Failure(error.kind, GENERIC_FAILURE_MESSAGE)
