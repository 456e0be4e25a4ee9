"""User ORM — persisted form of the User entity.

Invariants:
    - id is the UUID chosen by the identifier generator (no server default)
    - email is unique: this constraint is the authoritative duplicate guard
    - password_hash only ever stores HashedPassword values

Design Decisions:
    - Generic Uuid type: native on PostgreSQL, CHAR(32) on SQLite test databases
    - created_at set application-side for parity across dialects
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from identity_access.db.base import Base


class UserRecord(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    email: Mapped[str] = mapped_column(
        String(254), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
