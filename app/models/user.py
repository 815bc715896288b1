"""ORM models for application users and their stored refresh tokens."""

import enum
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from app.models.base import Base


class UserRole(str, enum.Enum):
    """Roles checked by the security gate; fixed when the user is created."""

    USER = "ROLE_USER"
    MANAGER = "ROLE_MANAGER"
    ADMIN = "ROLE_ADMIN"


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    role: one of UserRole values, stored as its string value.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    nickname = Column(String(50), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=UserRole.USER.value)
    introduction = Column(Text, nullable=True)
    profile_image = Column(String(1024), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


class UserRefreshToken(Base):
    """The single live refresh token of a user; overwritten on login/refresh, deleted on logout."""

    __tablename__ = "user_refresh_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    refresh_token = Column(String(1024), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def update_token(self, refresh_token: str, expires_at: datetime) -> None:
        self.refresh_token = refresh_token
        self.expires_at = expires_at
