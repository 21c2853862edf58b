"""
Zyx Dashboard - Auth API Models
===============================

Authentication request/response models.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from zyx.api.models.base import CamelModel, StrictCamelModel


# =============================================================================
# Request Models
# =============================================================================

class _Credentials(StrictCamelModel):
    """Email and password pair. Emptiness is checked by the router."""

    email: str = Field("", max_length=254, description="Account email")
    password: str = Field("", max_length=256, description="Account password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        value = value.strip().lower()
        if value and ("@" not in value or value.startswith("@") or value.endswith("@")):
            raise ValueError("Invalid email address")
        return value


class RegisterRequest(_Credentials):
    """Request to create a dashboard account."""

    first_name: Optional[str] = Field(None, max_length=100, description="Given name")
    last_name: Optional[str] = Field(None, max_length=100, description="Family name")


class LoginRequest(_Credentials):
    """Request to log in."""


# =============================================================================
# Response Models
# =============================================================================

class UserResponse(CamelModel):
    """Account returned by login and registration."""

    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class CurrentUserResponse(UserResponse):
    """Profile of the logged-in user."""

    profile_image_url: Optional[str] = None


# =============================================================================
# Token Models (Internal Use)
# =============================================================================

class TokenPayload(CamelModel):
    """JWT token payload."""

    sub: str = Field(description="Subject (user ID)")
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    exp: datetime = Field(description="Expiration time")
    iat: datetime = Field(description="Issued at time")
    type: str = Field(default="access", description="Token type")
    jti: str = Field(description="Token ID, keys the session row")


__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "UserResponse",
    "CurrentUserResponse",
    "TokenPayload",
]
