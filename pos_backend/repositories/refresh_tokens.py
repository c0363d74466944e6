"""Refresh token store."""

from datetime import datetime

from sqlalchemy import delete, or_, select, update
from sqlalchemy.orm import Session

from pos_backend.models.refresh_token import RefreshToken


class RefreshTokenRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, token: RefreshToken) -> RefreshToken:
        self.session.add(token)
        self.session.flush()
        return token

    def find_by_token(self, token: str) -> RefreshToken | None:
        return self.session.scalars(select(RefreshToken).where(RefreshToken.token == token)).first()

    def delete(self, token: RefreshToken) -> None:
        self.session.delete(token)
        self.session.flush()

    def revoke_all_for_user(self, user_id: int) -> int:
        result = self.session.execute(
            update(RefreshToken)
            .where(RefreshToken.user_id == user_id)
            .values(revoked=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_all_for_user(self, user_id: int) -> int:
        result = self.session.execute(
            delete(RefreshToken)
            .where(RefreshToken.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_expired_and_revoked(self, now: datetime) -> int:
        result = self.session.execute(
            delete(RefreshToken)
            .where(or_(RefreshToken.expiry_date < now, RefreshToken.revoked.is_(True)))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
