"""Role-gated user endpoints under /auth/user, /auth/manager and /auth/admin."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, require_roles
from app.core.access import ADMIN_ROLES, MANAGER_ROLES
from app.core.database import get_db
from app.repositories import users
from app.schemas.auth import (
    CurrentUser,
    ProfileUpdateRequest,
    UserResponse,
    UsersListResponse,
)
from app.services import auth as auth_service

router = APIRouter()

# Enforced per route, independent of the app-wide path gate.
require_manager = require_roles(MANAGER_ROLES)
require_admin = require_roles(ADMIN_ROLES)


@router.get("/user/me", response_model=UserResponse)
def get_me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """Profile of the authenticated user."""
    user = users.find_by_id(db, current_user.id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
    return UserResponse.model_validate(user)


@router.patch("/user/me", response_model=UserResponse)
def update_me(
    body: ProfileUpdateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """Update nickname, introduction or profile image of the authenticated user."""
    return auth_service.update_profile(db, current_user.id, body)


@router.get("/manager/users/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    _manager: Annotated[CurrentUser, Depends(require_manager)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """Look up any user by id (manager or admin)."""
    user = users.find_by_id(db, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
    return UserResponse.model_validate(user)


@router.get("/admin/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List all users (admin only)."""
    return UsersListResponse(
        users=[UserResponse.model_validate(u) for u in users.list_all(db)]
    )
