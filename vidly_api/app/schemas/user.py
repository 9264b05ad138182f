"""
Pydantic models for user data.

Passwords are accepted on registration only and never returned.  The
``isAdmin`` flag is assigned by the service (the first registered user
becomes the administrator) and cannot be set by the client.
"""

from pydantic import BaseModel, Field


class UserBase(BaseModel):
    name: str = Field(..., min_length=5, max_length=50)
    email: str = Field(..., min_length=5, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")


class UserCreate(UserBase):
    """Schema for registering a user."""

    password: str = Field(..., min_length=5, max_length=255)


class UserRead(UserBase):
    """Schema for reading a user from the API."""

    id: int
    is_admin: bool = Field(False, alias="isAdmin")

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }
