"""ORM model for application users (auth and RBAC)."""

from enum import StrEnum

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func

from pos_backend.models.base import Base


class Role(StrEnum):
    """Roles checked by the route guards. Stored as plain strings."""

    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    STAFF = "STAFF"


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    The four status flags are all true at registration; login refuses the
    account when any of them is false.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=Role.STAFF.value)
    enabled = Column(Boolean, nullable=False, default=True)
    account_non_expired = Column(Boolean, nullable=False, default=True)
    account_non_locked = Column(Boolean, nullable=False, default=True)
    credentials_non_expired = Column(Boolean, nullable=False, default=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    @property
    def is_active(self) -> bool:
        return bool(
            self.enabled
            and self.account_non_expired
            and self.account_non_locked
            and self.credentials_non_expired
        )
