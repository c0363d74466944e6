"""Domain errors raised by services. Translated to HTTP responses in pos_backend.api.errors."""


class PosError(Exception):
    """Base class for every error the service layer raises on purpose."""

    default_message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


# Registration


class UsernameTaken(PosError):
    default_message = "Username is already taken"


class EmailTaken(PosError):
    default_message = "Email is already in use"


# Credentials and users


class BadCredentials(PosError):
    default_message = "Invalid username or password"


class AccountDisabled(BadCredentials):
    """Credentials matched but one of the account status flags is off."""

    default_message = "Account is disabled, locked or expired"


class UserNotFound(PosError):
    default_message = "User not found"


# Refresh tokens


class RefreshTokenNotFound(PosError):
    default_message = "Refresh token not found"


class RefreshTokenExpired(PosError):
    default_message = "Refresh token was expired. Please make a new login request"


class RefreshTokenRevoked(PosError):
    default_message = "Refresh token was revoked. Please make a new login request"


# Access tokens


class InvalidToken(PosError):
    default_message = "Invalid token signature"


class ExpiredToken(PosError):
    default_message = "Token has expired"


class MalformedToken(PosError):
    default_message = "Malformed token"


# Products


class ProductNotFound(PosError):
    default_message = "Product not found"


class SkuTaken(PosError):
    default_message = "SKU is already in use"
