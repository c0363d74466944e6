"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from pos_backend.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from pos_backend.models.user import Role


class RegisterRequest(BaseModel):
    """New account. Role defaults to STAFF."""

    username: str = Field(
        ..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN, description="Username"
    )
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )
    role: Role = Field(default=Role.STAFF, description="ADMIN, MANAGER or STAFF")


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=USERNAME_MAX_LEN, description="Username")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class RefreshTokenRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1, description="Refresh token is required")


class AuthResponse(BaseModel):
    """Tokens plus the public identity of the authenticated user."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="Opaque refresh token")
    token_type: str = Field(default="bearer", description="Token type")
    username: str
    email: str
    role: Role


class UserResponse(BaseModel):
    """Public projection of a user; the password hash is never part of it."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    role: Role


class CurrentUser(BaseModel):
    """Authenticated principal (id, username, role) passed explicitly to routes and guards."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: Role
