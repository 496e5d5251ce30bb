"""
User models for the Library System API.

Users are staff accounts. The plaintext password only ever exists on
``UserCreate`` (request body); it is hashed before it reaches the store and
no response model carries it or its hash.
"""

import enum

from pydantic import BaseModel, ConfigDict, Field


class UserRole(enum.IntEnum):
    """Staff role."""

    ADMIN = 1
    LIBRARIAN = 2
    ASSISTANT = 3


class UserCreate(BaseModel):
    """Request body for ``POST /Users``."""

    user_id: int = Field(default=-1, description="Ignored on create")
    username: str = Field(default="", max_length=50, examples=["amal.k"])
    password: str = Field(
        default="",
        max_length=72,  # bcrypt input limit
        repr=False,
        exclude=True,
    )
    role: UserRole = Field(default=UserRole.LIBRARIAN)
    is_active: bool = Field(default=True)
    permissions: int = Field(
        default=0,
        description="Permission bitmask; -1 grants everything",
    )


class User(BaseModel):
    """User record as returned by the API."""

    user_id: int
    username: str
    role: UserRole
    is_active: bool
    permissions: int

    model_config = ConfigDict(from_attributes=True)


class UserSummary(BaseModel):
    """List projection of a user."""

    user_id: int
    username: str
    role: UserRole
    is_active: bool

    model_config = ConfigDict(from_attributes=True)
