"""Core app configuration, database and security primitives."""

from pos_backend.core.config import get_settings, settings
from pos_backend.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
