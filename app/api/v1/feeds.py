"""Feed endpoint: bundles with their cards, writers and categories."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.feed import BundleResponse
from app.services.feed import list_bundle_feed

router = APIRouter()


@router.get("/bundles", response_model=list[BundleResponse])
def get_bundle_feed(
    db: Annotated[Session, Depends(get_db)],
) -> list[BundleResponse]:
    """
    Return every bundle, newest first, each with the cards it contains.

    Cards carry their writer and category (with parent category when the
    category is nested). A bundle without cards has an empty `cards` list.
    """
    return list_bundle_feed(db)
