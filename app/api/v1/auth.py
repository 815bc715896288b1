"""JWT signup/login/refresh/logout routes and auth dependencies (get_current_user, authorize_request)."""

import logging
from collections.abc import Callable
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.access import required_roles
from app.core.config import settings
from app.core.database import get_db
from app.core.security import get_user_id
from app.repositories import users
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    RefreshRequest,
    SignupRequest,
    TokenResponse,
    UserResponse,
)
from app.services import auth as auth_service

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """Dependency: require valid Bearer access JWT and return the current user. Raises 401 if missing or invalid."""
    cached = getattr(request.state, "current_user", None)
    if cached is not None:
        return cached
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        user_id = get_user_id(credentials.credentials, "access")
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    user = users.find_by_id(db, user_id)
    if user is None:
        raise _unauthorized("User not found")
    current = CurrentUser.model_validate(user)
    request.state.current_user = current
    return current


def _forbidden() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Insufficient role for this resource",
    )


def require_roles(allowed: frozenset[str]) -> Callable[..., CurrentUser]:
    """Build a route dependency: current user must hold one of `allowed`. Raises 401/403."""

    def dependency(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if current_user.role not in allowed:
            raise _forbidden()
        return current_user

    return dependency


def authorize_request(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> None:
    """
    App-wide dependency enforcing the path-based role rules.

    Public paths pass without looking at the Authorization header. Gated paths
    need a valid access token (401) whose user has an allowed role (403).
    """
    allowed = required_roles(request.url.path, settings.API_V1_PREFIX)
    if allowed is None:
        return
    current = get_current_user(request, credentials, db)
    if current.role not in allowed:
        logger.info(
            "Access denied: user_id=%s role=%s path=%s",
            current.id,
            current.role,
            request.url.path,
        )
        raise _forbidden()


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def signup(
    body: SignupRequest,
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """Register a new account with role ROLE_USER. Returns 409 if the email is taken."""
    return auth_service.sign_up(db, body)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns an access/refresh token pair.
    Include the access token in the Authorization header as: Bearer <access_token>
    """
    result = auth_service.login(db, body.email, body.password)
    response.headers["Authorization"] = f"Bearer {result.access_token}"
    return result


@router.post("/refresh", response_model=TokenResponse)
def refresh(
    body: RefreshRequest,
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    """Exchange the stored refresh token for a new token pair; the old refresh token stops working."""
    pair = auth_service.refresh(db, body.refresh_token)
    return TokenResponse(access_token=pair.access_token, refresh_token=pair.refresh_token)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Revoke the caller's refresh token. Requires the access token as Bearer."""
    if credentials is None:
        raise _unauthorized("Not authenticated")
    auth_service.logout(db, credentials.credentials)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
