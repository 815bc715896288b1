"""Persistence for the one-per-user refresh token row."""

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.models import UserRefreshToken


def find_by_user_id(db: Session, user_id: int) -> UserRefreshToken | None:
    return db.execute(
        select(UserRefreshToken).where(UserRefreshToken.user_id == user_id)
    ).scalar_one_or_none()


def save(db: Session, token: UserRefreshToken) -> UserRefreshToken:
    db.add(token)
    db.flush()
    return token


def delete_by_user_id(db: Session, user_id: int) -> int:
    """Delete the user's refresh token; return the number of rows removed (0 or 1)."""
    result = db.execute(
        delete(UserRefreshToken).where(UserRefreshToken.user_id == user_id)
    )
    return result.rowcount or 0


def delete_expired(db: Session, now: datetime) -> int:
    """Delete refresh tokens whose expiry is before `now`; return the count removed."""
    return (
        db.query(UserRefreshToken)
        .filter(UserRefreshToken.expires_at < now)
        .delete(synchronize_session=False)
    )
