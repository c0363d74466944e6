"""Data access: explicit query methods over a SQLAlchemy Session. Callers own the transaction."""

from pos_backend.repositories.products import ProductRepository
from pos_backend.repositories.refresh_tokens import RefreshTokenRepository
from pos_backend.repositories.users import UserRepository

__all__ = ["ProductRepository", "RefreshTokenRepository", "UserRepository"]
