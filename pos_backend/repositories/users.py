"""Credential store: user lookups and inserts."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pos_backend.core.errors import EmailTaken, PosError, UsernameTaken
from pos_backend.models.user import User

logger = logging.getLogger(__name__)

# Markers that identify the violated unique constraint in SQLite and PostgreSQL messages.
_USERNAME_MARKERS = ("users.username", "ix_users_username", "key (username)")
_EMAIL_MARKERS = ("users.email", "ix_users_email", "key (email)")


def duplicate_user_error(exc: IntegrityError) -> PosError | None:
    """Map a unique violation on users to UsernameTaken/EmailTaken; None if it is something else."""
    msg = str(exc.orig).lower()
    if any(m in msg for m in _USERNAME_MARKERS):
        return UsernameTaken()
    if any(m in msg for m in _EMAIL_MARKERS):
        return EmailTaken()
    return None


class UserRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, user_id: int) -> User | None:
        return self.session.get(User, user_id)

    def get_by_username(self, username: str) -> User | None:
        return self.session.scalars(select(User).where(User.username == username)).first()

    def exists_by_username(self, username: str) -> bool:
        return self.session.scalar(select(User.id).where(User.username == username)) is not None

    def exists_by_email(self, email: str) -> bool:
        return self.session.scalar(select(User.id).where(User.email == email)) is not None

    def add(self, user: User) -> User:
        """
        Insert and flush so the id is assigned.

        The unique constraints are the real guard against concurrent registrations;
        a violation rolls the session back and surfaces as UsernameTaken or EmailTaken.
        """
        self.session.add(user)
        try:
            self.session.flush()
        except IntegrityError as e:
            self.session.rollback()
            err = duplicate_user_error(e)
            if err is None:
                raise
            logger.warning("Unique constraint hit while inserting user %s: %s", user.username, err.message)
            raise err from e
        return user
