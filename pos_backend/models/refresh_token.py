"""ORM model for persisted refresh tokens."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String

from pos_backend.models.base import Base


class RefreshToken(Base):
    """
    Opaque refresh token owned by a user; a user may hold several (one per device).

    No relationship() to User: the service loads the owner explicitly by user_id.
    """

    __tablename__ = "refresh_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    token = Column(String(255), nullable=False, unique=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    expiry_date = Column(DateTime(timezone=True), nullable=False)
    revoked = Column(Boolean, nullable=False, default=False)
