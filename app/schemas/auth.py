"""Request/response schemas for auth and user endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.core.security import (
    NICKNAME_MAX_LEN,
    NICKNAME_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)


class SignupRequest(BaseModel):
    """New account details. Role is always ROLE_USER for self-registration."""

    email: EmailStr = Field(..., description="Login email; must be unique")
    nickname: str = Field(
        ..., min_length=NICKNAME_MIN_LEN, max_length=NICKNAME_MAX_LEN, description="Display name"
    )
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )
    introduction: str | None = Field(default=None, max_length=2000, description="Profile introduction")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Login email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1, description="Refresh token issued at login")


class TokenResponse(BaseModel):
    """Access/refresh JWT pair. Send the access token as: Authorization: Bearer <access_token>"""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field(default="bearer", description="Token type")


class LoginResponse(TokenResponse):
    """Token pair plus the identity of the user who logged in."""

    user_id: int
    email: str
    nickname: str


class ProfileUpdateRequest(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""

    nickname: str | None = Field(
        default=None, min_length=NICKNAME_MIN_LEN, max_length=NICKNAME_MAX_LEN
    )
    introduction: str | None = Field(default=None, max_length=2000)
    profile_image: str | None = Field(default=None, max_length=1024)


class CurrentUser(BaseModel):
    """Authenticated user (id, email, nickname, role) for dependency injection."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    nickname: str
    role: str


class UserResponse(BaseModel):
    """Public view of a user (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    nickname: str
    role: str
    introduction: str | None = None
    profile_image: str | None = None
    created_at: datetime | None = None


class UsersListResponse(BaseModel):
    """Response for GET /auth/admin/users (admin only)."""

    users: list[UserResponse]
