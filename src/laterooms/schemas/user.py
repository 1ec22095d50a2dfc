"""User and session schemas for request/response validation."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class UserSignup(BaseModel):
    """Schema for customer sign up request."""

    full_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str


class UserLogin(BaseModel):
    """Schema for login request."""

    email: EmailStr
    password: str


class AuthUser(BaseModel):
    """The signed-in identity returned by the auth client."""

    id: UUID
    email: str
    full_name: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class AuthSessionResponse(BaseModel):
    """A fresh session: bearer token plus the user it belongs to."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: AuthUser


class AuthResult(BaseModel):
    """Result of a sign in / sign up / sign out page action."""

    session: AuthSessionResponse | None = None
    redirect_to: str
