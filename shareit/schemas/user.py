"""Pydantic v2 request/response schemas for user endpoints."""

from pydantic import EmailStr, Field

from shareit.schemas.base import CamelModel

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class UserCreate(CamelModel):
    """Schema for registering a user."""

    name: str = Field(..., min_length=1, max_length=255, pattern=r"\S")
    email: EmailStr


class UserUpdate(CamelModel):
    """Schema for partially updating a user. All fields optional."""

    name: str | None = Field(None, max_length=255)
    email: EmailStr | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class UserResponse(CamelModel):
    id: int
    name: str
    email: str
