"""Password hashing and JWT access/refresh token creation and verification."""

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Literal

import bcrypt
import jwt

from app.core.config import settings

TokenType = Literal["access", "refresh"]

# Min/max lengths for credential validation on signup and login.
NICKNAME_MIN_LEN = 1
NICKNAME_MAX_LEN = 50
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128


@dataclass(frozen=True)
class TokenPair:
    """Access/refresh JWTs minted together for one user."""

    access_token: str
    refresh_token: str
    refresh_expires_at: datetime


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def refresh_token_expiry(now: datetime | None = None) -> datetime:
    """Expiry instant for a refresh token issued at `now`."""
    now = now or datetime.now(UTC)
    return now + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)


def _encode(sub: str | int, role: str, token_type: TokenType, now: datetime, expire: datetime) -> str:
    payload: dict[str, Any] = {
        "sub": str(sub),
        "role": role,
        "type": token_type,
        "iat": now,
        "exp": expire,
        # Unique per token so pairs minted within the same second still differ.
        "jti": uuid.uuid4().hex,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(payload, secret, algorithm=settings.JWT_ALGORITHM)


def create_access_token(sub: str | int, role: str) -> str:
    """Create a short-lived JWT access token with sub (user id), role, type, and exp."""
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode(sub, role, "access", now, expire)


def create_token_pair(sub: str | int, role: str) -> TokenPair:
    """Mint an access token and a long-lived refresh token for the same user."""
    now = datetime.now(UTC)
    refresh_expires_at = refresh_token_expiry(now)
    return TokenPair(
        access_token=create_access_token(sub, role),
        refresh_token=_encode(sub, role, "refresh", now, refresh_expires_at),
        refresh_expires_at=refresh_expires_at,
    )


def decode_token(token: str, expected_type: TokenType = "access") -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, role, type, exp, iat, jti).
    Raises jwt.PyJWTError on invalid or expired token, or when the token type differs.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    payload = jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["sub", "exp", "type"]},
    )
    if payload.get("type") != expected_type:
        raise jwt.InvalidTokenError(f"Expected a {expected_type} token")
    return payload


def verify_token(token: str, expected_type: TokenType = "refresh") -> bool:
    """True when the token has a valid signature, is not expired, and has the expected type."""
    try:
        decode_token(token, expected_type)
    except jwt.PyJWTError:
        return False
    return True


def get_user_id(token: str, expected_type: TokenType = "access") -> int:
    """Return the user id (sub) of a valid token. Raises jwt.PyJWTError otherwise."""
    payload = decode_token(token, expected_type)
    try:
        return int(payload["sub"])
    except (TypeError, ValueError) as e:
        raise jwt.InvalidTokenError("Token subject is not a user id") from e
