"""ORM Models — SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - ORM records never leave infrastructure/; repositories convert them to core entities

Design Decisions:
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from identity_access.models.user import UserRecord  # noqa: F401
