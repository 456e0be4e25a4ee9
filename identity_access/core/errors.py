"""Error Hierarchy — typed, categorized exceptions for every registration failure mode.

Invariants:
    - Every error has a code (str), kind (ErrorKind), category (ErrorCategory), severity
    - Each pipeline step fails with exactly one error kind
    - Errors carry no HTTP status: services/outcome.py is the only ErrorKind → status map
    - Severity drives log level only (WARNING for caller mistakes, ERROR/CRITICAL otherwise)

Design Decisions:
    - Single hierarchy with IdentityError base: the combinator propagates it opaquely,
      the result adapter is the only reader of `kind`
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    DOMAIN = "domain"
    DATABASE = "database"
    EXTERNAL = "external"
    INTERNAL = "internal"


class ErrorKind(str, Enum):
    """Terminal failure kinds — one per pipeline step."""
    VALIDATION = "validation_error"
    CONFLICT = "conflict_error"
    IDENTIFIER_GENERATION = "identifier_generation_error"
    USER_LOOKUP = "user_lookup_error"
    HASHING = "hashing_error"
    ENTITY_CONSTRUCTION = "entity_construction_error"
    PERSISTENCE = "persistence_error"
    EVENT_PUBLICATION = "event_publication_error"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    step: str | None = None
    debug_info: dict[str, Any] | None = None


class IdentityError(Exception):
    """Base exception for all identity & access errors."""

    def __init__(
        self,
        message: str,
        code: str,
        kind: ErrorKind,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.kind = kind
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()


# ─── Domain Errors ──────────────────────────────────

class ValidationError(IdentityError):
    """Raw input could not be turned into a well-formed domain value."""
    def __init__(self, field: str, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid {field}: {reason}", "VALIDATION_ERROR",
            ErrorKind.VALIDATION, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context,
        )
        self.field = field
        self.reason = reason


class ConflictError(IdentityError):
    """A user with the same email is already registered."""
    def __init__(
        self, message: str = "Email already exists.", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "EMAIL_ALREADY_EXISTS", ErrorKind.CONFLICT,
            ErrorCategory.CONFLICT, ErrorSeverity.WARNING, context,
        )


class EntityConstructionError(IdentityError):
    """User entity invariants rejected the assembled data."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"User entity could not be constructed: {reason}",
            "ENTITY_CONSTRUCTION_ERROR", ErrorKind.ENTITY_CONSTRUCTION,
            ErrorCategory.DOMAIN, ErrorSeverity.ERROR, context,
        )
        self.reason = reason


# ─── Collaborator Errors ────────────────────────────

class IdentifierGenerationError(IdentityError):
    """Identifier generator failed to produce an id."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Identifier generation failed: {message}",
            "IDENTIFIER_GENERATION_ERROR", ErrorKind.IDENTIFIER_GENERATION,
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL, context,
        )


class HashingError(IdentityError):
    """Password hasher failed. Message never includes the plaintext."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Password hashing failed: {message}",
            "HASHING_ERROR", ErrorKind.HASHING,
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL, context,
        )


class UserLookupError(IdentityError):
    """Lookup of an existing user by email failed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"User lookup failed: {message}",
            "USER_LOOKUP_ERROR", ErrorKind.USER_LOOKUP,
            ErrorCategory.DATABASE, ErrorSeverity.CRITICAL, context,
        )


class PersistenceError(IdentityError):
    """Storage refused or failed to save the user."""
    def __init__(self, message: str, operation: str = "save", context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "PERSISTENCE_ERROR", ErrorKind.PERSISTENCE,
            ErrorCategory.DATABASE, ErrorSeverity.CRITICAL, context,
        )
        self.operation = operation


class EventPublicationError(IdentityError):
    """Domain event could not be published. The user is already persisted."""
    def __init__(self, message: str, event_key: str, context: ErrorContext | None = None):
        super().__init__(
            f"Publishing '{event_key}' failed: {message}",
            "EVENT_PUBLICATION_ERROR", ErrorKind.EVENT_PUBLICATION,
            ErrorCategory.EXTERNAL, ErrorSeverity.ERROR, context,
        )
        self.event_key = event_key
