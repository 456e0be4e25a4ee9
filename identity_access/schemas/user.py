"""User Schemas — registration request body."""

from pydantic import BaseModel, Field


class SignUpRequest(BaseModel):
    """Raw credentials. Format rules are enforced by RegisterUserHandler."""
    email: str = Field(max_length=1024)
    password: str = Field(max_length=4096, repr=False)
