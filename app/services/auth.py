"""
Authentication flows: sign up, log in, refresh, log out, and profile updates.

Each mutating function commits the session it is given. Refresh tokens are
stored one row per user and overwritten on every login and refresh, so a
previously issued refresh token stops working as soon as a newer one exists.
"""

import logging

import jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    InvalidAccessTokenError,
    InvalidCredentialsError,
    RefreshTokenInvalidError,
    RefreshTokenNotFoundError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from app.core.security import (
    TokenPair,
    create_token_pair,
    get_user_id,
    hash_password,
    verify_password,
)
from app.models import User, UserRefreshToken, UserRole
from app.repositories import refresh_tokens, users
from app.schemas.auth import (
    LoginResponse,
    ProfileUpdateRequest,
    SignupRequest,
    UserResponse,
)

logger = logging.getLogger(__name__)


def sign_up(db: Session, request: SignupRequest) -> UserResponse:
    """Create a ROLE_USER account. Raises UserAlreadyExistsError for a taken email."""
    if users.exists_by_email(db, request.email):
        raise UserAlreadyExistsError()

    user = User(
        email=request.email,
        nickname=request.nickname,
        password_hash=hash_password(request.password),
        introduction=request.introduction,
        role=UserRole.USER.value,
    )
    try:
        users.save(db, user)
        db.commit()
    except IntegrityError as e:
        # Another signup with the same email committed between the check and the insert.
        db.rollback()
        raise UserAlreadyExistsError() from e
    db.refresh(user)
    logger.info("Signed up user_id=%s", user.id)
    return UserResponse.model_validate(user)


def _store_refresh_token(db: Session, user_id: int, pair: TokenPair) -> None:
    """Insert the user's refresh token row, or overwrite it when one exists."""
    stored = refresh_tokens.find_by_user_id(db, user_id)
    if stored is None:
        try:
            refresh_tokens.save(
                db,
                UserRefreshToken(
                    user_id=user_id,
                    refresh_token=pair.refresh_token,
                    expires_at=pair.refresh_expires_at,
                ),
            )
            logger.info("Created refresh token for user_id=%s", user_id)
            return
        except IntegrityError:
            # A concurrent login inserted the row first; user_id is unique.
            db.rollback()
            stored = refresh_tokens.find_by_user_id(db, user_id)
            if stored is None:
                raise
    stored.update_token(pair.refresh_token, pair.refresh_expires_at)
    logger.info("Overwrote refresh token for user_id=%s", user_id)


def login(db: Session, email: str, password: str) -> LoginResponse:
    """Check credentials, mint a token pair, and store the refresh token for the user."""
    user = users.find_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Login rejected for email=%s", email)
        raise InvalidCredentialsError()

    pair = create_token_pair(user.id, user.role)
    _store_refresh_token(db, user.id, pair)
    db.commit()
    logger.info("Logged in user_id=%s", user.id)

    return LoginResponse(
        access_token=pair.access_token,
        refresh_token=pair.refresh_token,
        user_id=user.id,
        email=user.email,
        nickname=user.nickname,
    )


def refresh(db: Session, refresh_token: str) -> TokenPair:
    """
    Exchange a valid refresh token for a new token pair.

    The presented token must verify, belong to an existing user, and equal the
    token stored for that user. The stored token is replaced by the new one.
    """
    try:
        user_id = get_user_id(refresh_token, "refresh")
    except jwt.PyJWTError as e:
        logger.warning("Refresh rejected: signature, expiry, type or subject check failed")
        raise RefreshTokenInvalidError() from e

    user = users.find_by_id(db, user_id)
    if user is None:
        logger.warning("Refresh rejected: user_id=%s no longer exists", user_id)
        raise UserNotFoundError()

    stored = refresh_tokens.find_by_user_id(db, user_id)
    if stored is None:
        logger.warning("Refresh rejected: no stored refresh token for user_id=%s", user_id)
        raise RefreshTokenNotFoundError()

    if stored.refresh_token != refresh_token:
        logger.warning("Refresh rejected: token mismatch for user_id=%s", user_id)
        raise RefreshTokenInvalidError()

    pair = create_token_pair(user.id, user.role)
    stored.update_token(pair.refresh_token, pair.refresh_expires_at)
    db.commit()
    logger.info("Reissued tokens for user_id=%s", user_id)
    return pair


def logout(db: Session, access_token: str) -> None:
    """Revoke the refresh token of the access token's user. Raises RefreshTokenNotFoundError if none."""
    try:
        user_id = get_user_id(access_token, "access")
    except jwt.PyJWTError as e:
        raise InvalidAccessTokenError() from e

    if refresh_tokens.delete_by_user_id(db, user_id) <= 0:
        db.rollback()
        raise RefreshTokenNotFoundError()
    db.commit()
    logger.info("Logged out user_id=%s", user_id)


def update_profile(db: Session, user_id: int, request: ProfileUpdateRequest) -> UserResponse:
    """Apply the provided profile fields; email and role are not changeable here."""
    user = users.find_by_id(db, user_id)
    if user is None:
        raise UserNotFoundError()
    for field, value in request.model_dump(exclude_unset=True).items():
        # nickname is required; null means "leave as is", other fields may be cleared
        if field == "nickname" and value is None:
            continue
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return UserResponse.model_validate(user)
