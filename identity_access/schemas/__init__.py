"""Pydantic Schemas — request/response shapes for API endpoints.

Invariants:
    - Schemas only check transport shape (types, size caps); domain validation
      (email format, password policy) happens in the registration pipeline

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
