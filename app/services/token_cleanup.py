"""Token cleanup: delete stored refresh tokens whose expiry has passed."""

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from app.repositories import refresh_tokens

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


def run_token_cleanup(session: Session, settings: "Settings") -> int:
    """
    Delete refresh tokens that expired before now and return how many were removed.

    Idempotent: safe to run repeatedly. Users whose token is purged must log in again.
    """
    if not settings.TOKEN_CLEANUP_ENABLED:
        logger.info("Token cleanup is disabled (TOKEN_CLEANUP_ENABLED=false); skipping.")
        return 0

    now = datetime.now(timezone.utc)
    deleted_count = refresh_tokens.delete_expired(session, now)
    session.commit()

    if deleted_count > 0:
        logger.info(
            "Token cleanup run: cutoff=%s, tokens_deleted=%s",
            now.isoformat(),
            deleted_count,
        )
    return deleted_count
