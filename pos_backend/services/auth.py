"""Auth orchestration: register, login, current user, token refresh and logout."""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session

from pos_backend.core.errors import (
    AccountDisabled,
    BadCredentials,
    EmailTaken,
    UserNotFound,
    UsernameTaken,
)
from pos_backend.core.security import TokenSigner, hash_password, verify_password
from pos_backend.models.user import Role, User
from pos_backend.repositories.users import UserRepository
from pos_backend.schemas.auth import AuthResponse, UserResponse
from pos_backend.services.refresh_tokens import RefreshTokenService

logger = logging.getLogger(__name__)


class PasswordAuthenticator:
    """Verifies a username/password pair against the stored bcrypt hash."""

    def __init__(
        self,
        users: UserRepository,
        verify: Callable[[str, str], bool] = verify_password,
    ) -> None:
        self.users = users
        self.verify = verify

    def authenticate(self, username: str, password: str) -> User:
        """Return the user or raise BadCredentials (AccountDisabled if a status flag is off)."""
        user = self.users.get_by_username(username)
        # Same error for unknown user and wrong password
        if user is None or not self.verify(password, user.password_hash):
            raise BadCredentials()
        if not user.is_active:
            raise AccountDisabled()
        return user


class AuthService:
    """
    Stateless: all state lives in the user and refresh token stores.

    Every public operation is one transaction on the session; it commits on
    success and rolls back on any error.
    """

    def __init__(
        self,
        session: Session,
        users: UserRepository,
        refresh_tokens: RefreshTokenService,
        signer: TokenSigner,
        authenticator: PasswordAuthenticator,
        password_hasher: Callable[[str], str] = hash_password,
    ) -> None:
        self.session = session
        self.users = users
        self.refresh_tokens = refresh_tokens
        self.signer = signer
        self.authenticator = authenticator
        self.password_hasher = password_hasher

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        try:
            yield
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def _issue_tokens(self, user: User) -> AuthResponse:
        access_token = self.signer.issue(user)
        logger.debug("JWT token generated for user: %s", user.username)
        refresh_token = self.refresh_tokens.create(user)
        return AuthResponse(
            access_token=access_token,
            refresh_token=refresh_token.token,
            username=user.username,
            email=user.email,
            role=Role(user.role),
        )

    def register(
        self,
        username: str,
        email: str,
        password: str,
        role: Role = Role.STAFF,
    ) -> AuthResponse:
        logger.debug("Starting registration process for username: %s", username)
        with self._transaction():
            if self.users.exists_by_username(username):
                logger.warning("Registration failed: Username already taken - %s", username)
                raise UsernameTaken()
            if self.users.exists_by_email(email):
                logger.warning("Registration failed: Email already in use - %s", email)
                raise EmailTaken()

            user = self.users.add(
                User(
                    username=username,
                    email=email,
                    password_hash=self.password_hasher(password),
                    role=Role(role).value,
                    enabled=True,
                    account_non_expired=True,
                    account_non_locked=True,
                    credentials_non_expired=True,
                )
            )
            logger.info(
                "User registered successfully: %s (ID: %s) with role: %s",
                user.username,
                user.id,
                user.role,
            )
            return self._issue_tokens(user)

    def login(self, username: str, password: str) -> AuthResponse:
        logger.debug("Attempting authentication for username: %s", username)
        with self._transaction():
            try:
                user = self.authenticator.authenticate(username, password)
            except BadCredentials as e:
                logger.warning("Authentication failed for username: %s - %s", username, e.message)
                raise
            logger.info("Authentication successful for user: %s (ID: %s)", user.username, user.id)
            return self._issue_tokens(user)

    def get_current_user(self, username: str) -> UserResponse:
        user = self.users.get_by_username(username)
        if user is None:
            logger.warning("User not found: %s", username)
            raise UserNotFound()
        return UserResponse(id=user.id, username=user.username, email=user.email, role=Role(user.role))

    def refresh_token(self, refresh_token: str) -> AuthResponse:
        """
        Mint a new access token from a valid refresh token.

        The refresh token is not rotated: the same string is returned and stays
        usable until it expires, is revoked, or the user logs out.
        """
        logger.debug("Processing refresh token request")
        with self._transaction():
            token = self.refresh_tokens.find_by_token(refresh_token)
            self.refresh_tokens.verify_valid(token)

            user = self.users.get_by_id(token.user_id)
            if user is None:
                raise UserNotFound()
            logger.info("Generating new access token for user: %s (ID: %s)", user.username, user.id)
            return AuthResponse(
                access_token=self.signer.issue(user),
                refresh_token=token.token,
                username=user.username,
                email=user.email,
                role=Role(user.role),
            )

    def logout(self, username: str) -> None:
        """Delete every refresh token of the user. Issued access tokens stay valid until exp."""
        logger.info("Processing logout request for username: %s", username)
        with self._transaction():
            user = self.users.get_by_username(username)
            if user is None:
                logger.warning("User not found during logout: %s", username)
                raise UserNotFound()
            self.refresh_tokens.delete_all(user)
            logger.info("User logged out successfully: %s (ID: %s)", user.username, user.id)
