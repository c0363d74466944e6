"""Composition root: builds services from their collaborators for each request."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from pos_backend.core.config import get_settings
from pos_backend.core.database import get_db
from pos_backend.core.security import TokenSigner
from pos_backend.repositories.users import UserRepository
from pos_backend.services.auth import AuthService, PasswordAuthenticator
from pos_backend.services.products import ProductService
from pos_backend.services.refresh_tokens import RefreshTokenService


@lru_cache
def get_token_signer() -> TokenSigner:
    """Process-wide signer; built once from settings."""
    return TokenSigner.from_settings(get_settings())


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    signer: Annotated[TokenSigner, Depends(get_token_signer)],
) -> AuthService:
    users = UserRepository(db)
    return AuthService(
        session=db,
        users=users,
        refresh_tokens=RefreshTokenService.from_settings(db, get_settings()),
        signer=signer,
        authenticator=PasswordAuthenticator(users),
    )


def get_product_service(db: Annotated[Session, Depends(get_db)]) -> ProductService:
    return ProductService(db)
