"""Pydantic schemas for the bundle feed assembled by the feed query repository."""

from datetime import datetime

from pydantic import BaseModel, Field


class CardBundleQuery(BaseModel):
    """One card inside a bundle, flattened with its writer and category (parent included)."""

    bundle_id: int
    card_id: int
    created_at: datetime | None = None
    card_type: str
    writer_id: int
    writer_profile_image: str | None = None
    writer_nickname: str
    feed_title: str
    feed_content: str
    parent_category_id: int | None = Field(
        default=None, description="Parent category; null when the card's category is top-level."
    )
    parent_category_name: str | None = None
    category_id: int | None = None
    category_name: str | None = None
    scrap_count: int = 0
    like_count: int = 0
    comment_count: int = 0


class BundleResponse(BaseModel):
    """A bundle in the feed with its writer and the cards it contains."""

    bundle_id: int
    created_at: datetime | None = None
    writer_id: int
    writer_profile_image: str | None = None
    writer_nickname: str
    feed_title: str
    feed_content: str
    thumbnail: str | None = None
    thumbnail_text: str | None = None
    cards: list[CardBundleQuery] = Field(default_factory=list)
