"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.feed import Bundle, Card, CardBundle, CardType, Category
from app.models.user import User, UserRefreshToken, UserRole

__all__ = [
    "Base",
    "Bundle",
    "Card",
    "CardBundle",
    "CardType",
    "Category",
    "User",
    "UserRefreshToken",
    "UserRole",
]
