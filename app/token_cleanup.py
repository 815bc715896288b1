"""
CLI entrypoint for the expired refresh token cleanup job. Run from cron, e.g.:

  python -m app.token_cleanup

Or daily: 0 3 * * * cd /path/to/bundler && .venv/bin/python -m app.token_cleanup
"""

import logging
import sys
import time

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.services.token_cleanup import run_token_cleanup

# Timestamps carry a "Z" suffix, so render them in UTC.
LOG_FORMATTER = logging.Formatter(
    fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
LOG_FORMATTER.converter = time.gmtime
_handler = logging.StreamHandler()
_handler.setFormatter(LOG_FORMATTER)
logging.basicConfig(level=get_settings().LOG_LEVEL, handlers=[_handler])
logger = logging.getLogger(__name__)


def main() -> int:
    """Run cleanup: delete refresh tokens past their expiry."""
    settings = get_settings()
    db = SessionLocal()
    try:
        tokens_deleted = run_token_cleanup(db, settings)
        logger.info("Token cleanup completed: tokens_deleted=%s", tokens_deleted)
        return 0
    except Exception as e:
        logger.exception("Token cleanup job failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
