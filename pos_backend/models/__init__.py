"""SQLAlchemy ORM models."""

from pos_backend.models.base import Base
from pos_backend.models.product import Product
from pos_backend.models.refresh_token import RefreshToken
from pos_backend.models.user import Role, User

__all__ = ["Base", "Product", "RefreshToken", "Role", "User"]
