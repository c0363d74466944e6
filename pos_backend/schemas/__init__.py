"""Pydantic request/response schemas."""

from pos_backend.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    UserResponse,
)
from pos_backend.schemas.common import HealthResponse, MessageResponse
from pos_backend.schemas.product import ProductRequest, ProductResponse

__all__ = [
    "AuthResponse",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "ProductRequest",
    "ProductResponse",
    "RefreshTokenRequest",
    "RegisterRequest",
    "UserResponse",
]
