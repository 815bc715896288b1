"""Pydantic request/response schemas."""

from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    ProfileUpdateRequest,
    RefreshRequest,
    SignupRequest,
    TokenResponse,
    UserResponse,
    UsersListResponse,
)
from app.schemas.feed import BundleResponse, CardBundleQuery
from app.schemas.health import HealthResponse

__all__ = [
    "BundleResponse",
    "CardBundleQuery",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "ProfileUpdateRequest",
    "RefreshRequest",
    "SignupRequest",
    "TokenResponse",
    "UserResponse",
    "UsersListResponse",
]
