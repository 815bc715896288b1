"""
Read-side queries for the bundle feed.

Bundles are loaded in one query and all their cards in a second query keyed by
bundle id, so building the feed costs two round trips regardless of bundle count.
"""

import logging
from collections import defaultdict

from sqlalchemy import select
from sqlalchemy.orm import Session, aliased

from app.models import Bundle, Card, CardBundle, Category, User
from app.schemas.feed import BundleResponse, CardBundleQuery

logger = logging.getLogger(__name__)


def find_all_with_cards(db: Session) -> list[BundleResponse]:
    """Return every bundle (newest first) with its cards attached."""
    bundles = find_bundles(db)
    card_map = find_card_bundle_map(db, [b.bundle_id for b in bundles])
    for bundle in bundles:
        bundle.cards = card_map.get(bundle.bundle_id, [])
    return bundles


def find_bundles(db: Session) -> list[BundleResponse]:
    """Bundles joined with their writer, without cards."""
    stmt = (
        select(
            Bundle.id,
            Bundle.created_at,
            User.id,
            User.profile_image,
            User.nickname,
            Bundle.feed_title,
            Bundle.feed_content,
            Bundle.thumbnail,
            Bundle.thumbnail_text,
        )
        .select_from(Bundle)
        .join(User, Bundle.writer_id == User.id)
        .order_by(Bundle.created_at.desc(), Bundle.id.desc())
    )
    return [
        BundleResponse(
            bundle_id=row[0],
            created_at=row[1],
            writer_id=row[2],
            writer_profile_image=row[3],
            writer_nickname=row[4],
            feed_title=row[5],
            feed_content=row[6],
            thumbnail=row[7],
            thumbnail_text=row[8],
        )
        for row in db.execute(stmt)
    ]


def find_card_bundle_map(db: Session, bundle_ids: list[int]) -> dict[int, list[CardBundleQuery]]:
    """Cards of the given bundles grouped by bundle id, in insertion order of the bundle."""
    if not bundle_ids:
        return {}

    parent = aliased(Category)
    stmt = (
        select(
            CardBundle.bundle_id,
            Card.id,
            Card.created_at,
            Card.card_type,
            User.id,
            User.profile_image,
            User.nickname,
            Card.feed_title,
            Card.feed_content,
            parent.id,
            parent.name,
            Category.id,
            Category.name,
            Card.scrap_count,
            Card.like_count,
            Card.comment_count,
        )
        .select_from(CardBundle)
        .join(Card, CardBundle.card_id == Card.id)
        .join(User, Card.writer_id == User.id)
        .outerjoin(Category, Card.category_id == Category.id)
        .outerjoin(parent, Category.parent_id == parent.id)
        .where(CardBundle.bundle_id.in_(bundle_ids))
        .order_by(CardBundle.bundle_id, CardBundle.id)
    )

    grouped: dict[int, list[CardBundleQuery]] = defaultdict(list)
    for row in db.execute(stmt):
        grouped[row[0]].append(
            CardBundleQuery(
                bundle_id=row[0],
                card_id=row[1],
                created_at=row[2],
                card_type=row[3],
                writer_id=row[4],
                writer_profile_image=row[5],
                writer_nickname=row[6],
                feed_title=row[7],
                feed_content=row[8],
                parent_category_id=row[9],
                parent_category_name=row[10],
                category_id=row[11],
                category_name=row[12],
                scrap_count=row[13],
                like_count=row[14],
                comment_count=row[15],
            )
        )
    logger.debug("Loaded cards for %s of %s bundles", len(grouped), len(bundle_ids))
    return dict(grouped)
