"""Retention: purge expired and revoked refresh tokens."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from pos_backend.core.clock import Clock, utc_now
from pos_backend.services.refresh_tokens import RefreshTokenService

if TYPE_CHECKING:
    from pos_backend.core.config import Settings

logger = logging.getLogger(__name__)


def run_refresh_token_cleanup(session: Session, settings: "Settings", clock: Clock = utc_now) -> int:
    """
    Delete refresh tokens whose expiry has passed or that were revoked.

    Returns the number of rows deleted. Idempotent: safe to run repeatedly.
    """
    if not settings.REFRESH_TOKEN_CLEANUP_ENABLED:
        logger.info("Refresh token cleanup is disabled (REFRESH_TOKEN_CLEANUP_ENABLED=false); skipping.")
        return 0
    service = RefreshTokenService.from_settings(session, settings, clock=clock)
    return service.cleanup_expired()
