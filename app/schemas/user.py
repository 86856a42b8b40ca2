"""
Pydantic schemas for users, registration and login.
"""

from typing import Optional
from pydantic import EmailStr, Field, field_validator

from app.models.user import UserRole
from app.schemas.base import CamelModel, UpdateModel, UtcDatetime, validate_http_url


class UserCreate(CamelModel):
    """Insertable user: what a client supplies at registration."""
    username: str = Field(..., min_length=3, description="Username must be at least 3 characters")
    email: EmailStr
    password: str = Field(..., min_length=6, description="Password must be at least 6 characters")
    full_name: str = Field(..., min_length=2, description="Full name must be at least 2 characters")
    role: UserRole
    avatar_url: Optional[str] = None

    @field_validator("avatar_url")
    @classmethod
    def check_avatar_url(cls, v: Optional[str]) -> Optional[str]:
        return validate_http_url(v)


class UserUpdate(UpdateModel):
    """Profile fields a user may change. Username and role are immutable."""
    nullable_fields = frozenset({"avatar_url"})

    email: Optional[EmailStr] = None
    full_name: Optional[str] = Field(None, min_length=2)
    avatar_url: Optional[str] = None

    @field_validator("avatar_url")
    @classmethod
    def check_avatar_url(cls, v: Optional[str]) -> Optional[str]:
        return validate_http_url(v)


class UserResponse(CamelModel):
    """User profile response (credential stripped)."""
    id: int
    username: str
    email: str
    full_name: str
    role: UserRole
    avatar_url: Optional[str] = None
    created_at: UtcDatetime


class UserRecord(UserResponse):
    """Stored user, including the credential. Never returned over HTTP."""
    password: str

    def public(self) -> UserResponse:
        return UserResponse.model_validate(self.model_dump())


class LoginRequest(CamelModel):
    """Login body. Presence is checked by the endpoint to report a single message."""
    username: Optional[str] = None
    password: Optional[str] = None
