"""ORM models for feed content: categories, cards, and bundles of cards."""

import enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from app.models.base import Base


class CardType(str, enum.Enum):
    QUESTION = "CARD_QUESTION"
    ANSWER = "CARD_ANSWER"
    LINK = "CARD_LINK"


class Category(Base):
    """Two-level category tree; top-level categories have no parent."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    parent_id = Column(
        Integer,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    parent = relationship("Category", remote_side=[id])


class Card(Base):
    """A single feed card written by a user."""

    __tablename__ = "cards"

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    card_type = Column(String(32), nullable=False, default=CardType.QUESTION.value)
    writer_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    feed_title = Column(String(255), nullable=False)
    feed_content = Column(Text, nullable=False, default="")
    category_id = Column(
        Integer,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    scrap_count = Column(Integer, nullable=False, default=0)
    like_count = Column(Integer, nullable=False, default=0)
    comment_count = Column(Integer, nullable=False, default=0)

    writer = relationship("User")
    category = relationship("Category")


class Bundle(Base):
    """A titled collection of cards shown in the feed."""

    __tablename__ = "bundles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    writer_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    feed_title = Column(String(255), nullable=False)
    feed_content = Column(Text, nullable=False, default="")
    thumbnail = Column(String(1024), nullable=True)
    thumbnail_text = Column(String(255), nullable=True)

    writer = relationship("User")


class CardBundle(Base):
    """Association row placing a card inside a bundle."""

    __tablename__ = "card_bundles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    bundle_id = Column(
        Integer,
        ForeignKey("bundles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    card_id = Column(
        Integer,
        ForeignKey("cards.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    bundle = relationship("Bundle")
    card = relationship("Card")
