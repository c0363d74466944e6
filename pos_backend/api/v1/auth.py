"""Auth routes and auth dependencies (get_current_user, require_roles)."""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from pos_backend.api.deps import get_auth_service, get_token_signer
from pos_backend.core.authorization import is_authorized
from pos_backend.core.database import get_db
from pos_backend.core.security import TokenSigner
from pos_backend.models.user import Role
from pos_backend.repositories.users import UserRepository
from pos_backend.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    UserResponse,
)
from pos_backend.schemas.common import MessageResponse
from pos_backend.services.auth import AuthService

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    signer: Annotated[TokenSigner, Depends(get_token_signer)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT and return the principal.

    Token errors (InvalidToken, ExpiredToken, MalformedToken) propagate to the
    error handlers as 401. The subject is re-read from the database on every request.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")
    claims = signer.verify(credentials.credentials)
    user = UserRepository(db).get_by_username(claims.subject)
    if user is None:
        raise _unauthorized("User not found")
    if not user.is_active:
        raise _unauthorized("Account is disabled")
    return CurrentUser(id=user.id, username=user.username, role=Role(user.role))


def require_roles(*roles: Role) -> Callable[..., CurrentUser]:
    """Build a dependency that allows only principals holding one of roles (403 otherwise)."""
    allowed = frozenset(roles)

    def guard(current_user: Annotated[CurrentUser, Depends(get_current_user)]) -> CurrentUser:
        if not is_authorized(current_user, allowed):
            logger.warning(
                "Access denied for user %s with role %s (requires %s)",
                current_user.username,
                current_user.role,
                ", ".join(sorted(allowed)),
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient role for this operation",
            )
        return current_user

    return guard


@router.post("/register", response_model=AuthResponse)
def register(
    body: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """Create an account and return an access token plus a refresh token."""
    logger.info("Registration attempt for username: %s", body.username)
    return service.register(body.username, body.email, body.password, body.role)


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """
    Authenticate with username and password; returns access and refresh tokens.
    Include the access token in the Authorization header as: Bearer <access_token>
    """
    logger.info("Login attempt for username: %s", body.username)
    return service.login(body.username, body.password)


@router.get("/me", response_model=UserResponse)
def me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserResponse:
    return service.get_current_user(current_user.username)


@router.post("/refresh", response_model=AuthResponse)
def refresh(
    body: RefreshTokenRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """Exchange a refresh token for a new access token. The refresh token is returned unchanged."""
    logger.info("Refresh token request received")
    return service.refresh_token(body.refresh_token)


@router.post("/logout", response_model=MessageResponse)
def logout(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    """Delete all refresh tokens of the caller. Outstanding access tokens expire on their own."""
    service.logout(current_user.username)
    return MessageResponse(message="Logged out successfully")
