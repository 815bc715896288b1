"""Bundle feed assembly."""

from sqlalchemy.orm import Session

from app.repositories import feed_query
from app.schemas.feed import BundleResponse


def list_bundle_feed(db: Session) -> list[BundleResponse]:
    return feed_query.find_all_with_cards(db)
