"""Password hashing and JWT access token signing/verification."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt

from pos_backend.core.clock import Clock, utc_now
from pos_backend.core.errors import ExpiredToken, InvalidToken, MalformedToken

if TYPE_CHECKING:
    from pos_backend.core.config import Settings
    from pos_backend.models.user import User

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 50
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@dataclass(frozen=True)
class TokenClaims:
    """Verified identity carried by an access token."""

    subject: str
    role: str
    issued_at: datetime
    expires_at: datetime


class TokenSigner:
    """
    Issues and verifies HMAC-signed JWT access tokens.

    Expiry is checked against the injected clock instead of PyJWT's wall clock,
    so a test clock can expire tokens without sleeping.
    """

    def __init__(
        self,
        secret: str,
        ttl: timedelta,
        algorithm: str = "HS256",
        clock: Clock = utc_now,
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must be non-empty")
        self._secret = secret
        self._ttl = ttl
        self._algorithm = algorithm
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: "Settings", clock: Clock = utc_now) -> "TokenSigner":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            ttl=timedelta(seconds=settings.ACCESS_TOKEN_TTL_SECONDS),
            algorithm=settings.JWT_ALGORITHM,
            clock=clock,
        )

    def issue(self, user: "User") -> str:
        """Create a JWT with sub=username, role, iat and exp."""
        now = self._clock()
        payload: dict[str, Any] = {
            "sub": user.username,
            "role": str(user.role),
            "iat": now.timestamp(),
            "exp": (now + self._ttl).timestamp(),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Check signature and expiry; return the claims.

        Raises InvalidToken, ExpiredToken or MalformedToken.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": ["sub", "exp", "iat"]},
            )
        except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError) as e:
            raise InvalidToken() from e
        except jwt.MissingRequiredClaimError as e:
            raise MalformedToken(f"Malformed token: {e}") from e
        except jwt.PyJWTError as e:
            # DecodeError and friends: not a parseable JWT
            raise MalformedToken() from e

        role = payload.get("role")
        if not isinstance(payload["sub"], str) or not isinstance(role, str):
            raise MalformedToken("Malformed token: sub and role must be strings")
        try:
            expires_at = datetime.fromtimestamp(float(payload["exp"]), UTC)
            issued_at = datetime.fromtimestamp(float(payload["iat"]), UTC)
        except (TypeError, ValueError, OverflowError, OSError) as e:
            raise MalformedToken("Malformed token: bad timestamps") from e

        if self._clock() >= expires_at:
            raise ExpiredToken()
        return TokenClaims(
            subject=payload["sub"],
            role=role,
            issued_at=issued_at,
            expires_at=expires_at,
        )
