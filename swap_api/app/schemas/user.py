"""
Pydantic models for user data.

A user has a first name, a last name and an e‑mail address.  All three
are required on creation.  On update every field is optional but a
field that is sent must satisfy the same rule; sending ``null`` is
rejected.  E‑mail uniqueness is enforced by the store, not here.
"""

from typing import Annotated

from pydantic import BeforeValidator, EmailStr, Field

from swap_api.app.core.validation import require_text, with_message
from swap_api.app.schemas.common import CamelModel

FirstName = Annotated[str, BeforeValidator(require_text("First name cannot be empty"))]
LastName = Annotated[str, BeforeValidator(require_text("Last name cannot be empty"))]
Email = Annotated[EmailStr, with_message("email", "Email required")]


class UserCreate(CamelModel):
    """Schema for registering a user."""

    first_name: FirstName = Field(None, validate_default=True, examples=["John"])
    last_name: LastName = Field(None, validate_default=True, examples=["Doe"])
    email: Email = Field(None, validate_default=True, examples=["johndoe@example.com"])


class UserUpdate(CamelModel):
    """Schema for a partial user update; omitted fields stay unchanged."""

    first_name: FirstName = None
    last_name: LastName = None
    email: Email = None


class UserRead(CamelModel):
    """Schema for reading a user from the API."""

    id: str = Field(alias="_id")
    first_name: str
    last_name: str
    email: str
