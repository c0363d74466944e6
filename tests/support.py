"""Shared test helpers: in-memory SQLite sessions, a controllable clock, service builders."""

from datetime import UTC, datetime, timedelta

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from pos_backend.core.security import TokenSigner, hash_password
from pos_backend.models import Base
from pos_backend.repositories.users import UserRepository
from pos_backend.services.auth import AuthService, PasswordAuthenticator
from pos_backend.services.refresh_tokens import RefreshTokenService

TEST_SECRET = "test-secret-key-not-for-production-0123456789"


class FakeClock:
    """Callable clock whose time only moves when advance() is called."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 3, 1, 12, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


def make_session_factory() -> sessionmaker:
    """Fresh in-memory database shared by every session from the factory."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def fast_hash(password: str) -> str:
    """bcrypt with the minimum cost so tests stay quick."""
    return hash_password(password, rounds=4)


def build_auth_service(
    session: Session,
    clock: FakeClock,
    access_ttl: timedelta = timedelta(minutes=15),
    refresh_ttl: timedelta = timedelta(days=7),
) -> AuthService:
    users = UserRepository(session)
    return AuthService(
        session=session,
        users=users,
        refresh_tokens=RefreshTokenService(session, refresh_ttl, clock=clock),
        signer=TokenSigner(TEST_SECRET, access_ttl, clock=clock),
        authenticator=PasswordAuthenticator(users),
        password_hasher=fast_hash,
    )
