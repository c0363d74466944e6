"""Translate domain errors into HTTP responses (same body shape as HTTPException)."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from pos_backend.core.errors import (
    BadCredentials,
    EmailTaken,
    ExpiredToken,
    InvalidToken,
    MalformedToken,
    PosError,
    ProductNotFound,
    RefreshTokenExpired,
    RefreshTokenNotFound,
    RefreshTokenRevoked,
    SkuTaken,
    UserNotFound,
    UsernameTaken,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[PosError], int] = {
    UsernameTaken: status.HTTP_409_CONFLICT,
    EmailTaken: status.HTTP_409_CONFLICT,
    SkuTaken: status.HTTP_409_CONFLICT,
    BadCredentials: status.HTTP_401_UNAUTHORIZED,
    InvalidToken: status.HTTP_401_UNAUTHORIZED,
    ExpiredToken: status.HTTP_401_UNAUTHORIZED,
    MalformedToken: status.HTTP_401_UNAUTHORIZED,
    RefreshTokenNotFound: status.HTTP_401_UNAUTHORIZED,
    RefreshTokenExpired: status.HTTP_401_UNAUTHORIZED,
    RefreshTokenRevoked: status.HTTP_401_UNAUTHORIZED,
    UserNotFound: status.HTTP_404_NOT_FOUND,
    ProductNotFound: status.HTTP_404_NOT_FOUND,
}


def status_for(exc: PosError) -> int:
    """Most specific mapped status along the exception's MRO; 400 if none is mapped."""
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return status.HTTP_400_BAD_REQUEST


async def pos_error_handler(request: Request, exc: PosError) -> JSONResponse:
    code = status_for(exc)
    logger.warning(
        "%s on %s %s -> %s: %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        code,
        exc.message,
    )
    headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=code, content={"detail": exc.message}, headers=headers)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PosError, pos_error_handler)
