"""Refresh token lifecycle: create, look up, validate, revoke, delete, clean up."""

import logging
import secrets
from datetime import timedelta
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from pos_backend.core.clock import Clock, as_utc, utc_now
from pos_backend.core.errors import (
    RefreshTokenExpired,
    RefreshTokenNotFound,
    RefreshTokenRevoked,
)
from pos_backend.models.refresh_token import RefreshToken
from pos_backend.repositories.refresh_tokens import RefreshTokenRepository

if TYPE_CHECKING:
    from pos_backend.core.config import Settings
    from pos_backend.models.user import User

logger = logging.getLogger(__name__)

# 32 random bytes, url-safe base64 (43 chars).
TOKEN_BYTES = 32


class RefreshTokenService:
    """
    Each token moves ACTIVE -> EXPIRED | REVOKED | DELETED and never comes back.

    create/revoke_all/delete_all join the caller's transaction. verify_valid commits
    the deletion of an expired token itself, because the call then fails and the
    caller rolls back. cleanup_expired commits (it runs as a standalone job).
    """

    def __init__(
        self,
        session: Session,
        ttl: timedelta,
        clock: Clock = utc_now,
        repository: RefreshTokenRepository | None = None,
    ) -> None:
        self.session = session
        self.ttl = ttl
        self.clock = clock
        self.repository = repository or RefreshTokenRepository(session)

    @classmethod
    def from_settings(
        cls, session: Session, settings: "Settings", clock: Clock = utc_now
    ) -> "RefreshTokenService":
        return cls(session, timedelta(seconds=settings.REFRESH_TOKEN_TTL_SECONDS), clock)

    def create(self, user: "User") -> RefreshToken:
        """Persist a new token for user. No deduplication: one row per session/device."""
        token = RefreshToken(
            token=secrets.token_urlsafe(TOKEN_BYTES),
            user_id=user.id,
            expiry_date=self.clock() + self.ttl,
            revoked=False,
        )
        self.repository.add(token)
        logger.info("Refresh token created for user: %s (ID: %s)", user.username, user.id)
        return token

    def find_by_token(self, token: str) -> RefreshToken:
        found = self.repository.find_by_token(token)
        if found is None:
            # Never log the token value itself
            logger.warning("Refresh token not found")
            raise RefreshTokenNotFound()
        return found

    def is_expired(self, token: RefreshToken) -> bool:
        return self.clock() >= as_utc(token.expiry_date)

    def verify_valid(self, token: RefreshToken) -> RefreshToken:
        """
        Raise RefreshTokenExpired (and delete the row) or RefreshTokenRevoked (row kept).

        Expiry is checked first, so an expired token that is also revoked is deleted.
        """
        if self.is_expired(token):
            logger.warning("Refresh token expired for user ID: %s", token.user_id)
            self.repository.delete(token)
            self.session.commit()
            raise RefreshTokenExpired()
        if token.revoked:
            logger.warning("Refresh token was revoked for user ID: %s", token.user_id)
            raise RefreshTokenRevoked()
        return token

    def revoke_all(self, user: "User") -> int:
        """Mark every token of user revoked (forced logout of all sessions)."""
        count = self.repository.revoke_all_for_user(user.id)
        logger.info("Revoked %s refresh tokens for user: %s (ID: %s)", count, user.username, user.id)
        return count

    def delete_all(self, user: "User") -> int:
        count = self.repository.delete_all_for_user(user.id)
        logger.info("Deleted %s refresh tokens for user: %s (ID: %s)", count, user.username, user.id)
        return count

    def cleanup_expired(self) -> int:
        """Delete tokens that are expired or revoked. Idempotent: safe to run repeatedly."""
        now = self.clock()
        deleted = self.repository.delete_expired_and_revoked(now)
        self.session.commit()
        if deleted > 0:
            logger.info(
                "Refresh token cleanup: cutoff=%s, tokens_deleted=%s",
                now.isoformat(),
                deleted,
            )
        return deleted
