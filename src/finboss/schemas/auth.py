"""Pydantic schemas for authentication endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field

from finboss.schemas.common import CamelModel


class UserRegister(CamelModel):
    """Request model for user registration."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")
    first_name: str = Field(..., min_length=1, max_length=50, description="First name")
    last_name: str = Field(..., min_length=1, max_length=50, description="Last name")


class LoginRequest(CamelModel):
    """Request model for user login."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class TokenPair(CamelModel):
    """Access and refresh tokens issued together."""

    access_token: str = Field(..., description="JWT access token (7 days)")
    refresh_token: str = Field(..., description="JWT refresh token (30 days, single use)")
    token_type: str = Field(default="bearer", description="Token type")


class RefreshRequest(CamelModel):
    """Request model for token refresh and logout."""

    refresh_token: str = Field(..., min_length=1, description="JWT refresh token")


class AuthResult(CamelModel):
    """User identity plus a fresh token pair (register / login)."""

    user_id: UUID
    email: str
    first_name: str
    last_name: str
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class UserProfile(CamelModel):
    """Profile data (without sensitive fields)."""

    user_id: UUID = Field(validation_alias="id", serialization_alias="userId")
    email: str
    first_name: str
    last_name: str
    created_at: datetime


class ProfileUpdate(CamelModel):
    """Partial profile update."""

    email: EmailStr | None = None
    first_name: str | None = Field(default=None, min_length=1, max_length=50)
    last_name: str | None = Field(default=None, min_length=1, max_length=50)


class PasswordChange(CamelModel):
    """Request model for changing the password."""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, description="New password (min 8 characters)")


class Preferences(CamelModel):
    """Notification preferences."""

    email_notifications: bool
    budget_alerts: bool
    weekly_report: bool


class PreferencesUpdate(CamelModel):
    """Partial preferences update; at least one flag must be given."""

    email_notifications: bool | None = None
    budget_alerts: bool | None = None
    weekly_report: bool | None = None
