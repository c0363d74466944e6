"""
CLI entrypoint for the refresh token cleanup job. Run from cron, e.g.:

  python -m pos_backend.cleanup

Or hourly: 0 * * * * cd /path/to/pos-backend && .venv/bin/python -m pos_backend.cleanup
"""

import logging
import sys

from pos_backend.core.config import get_settings
from pos_backend.core.database import SessionLocal
from pos_backend.core.logging_config import configure_logging
from pos_backend.services.retention import run_refresh_token_cleanup

logger = logging.getLogger(__name__)


def main() -> int:
    """Run cleanup: delete expired and revoked refresh tokens."""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    db = SessionLocal()
    try:
        deleted = run_refresh_token_cleanup(db, settings)
        logger.info("Refresh token cleanup completed: tokens_deleted=%s", deleted)
        return 0
    except Exception as e:
        logger.exception("Refresh token cleanup failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
