"""HTTP error mapping for authentication endpoints.

Every core error carries a ``kind``; this module turns it into a status
code and a public message. Response bodies have the shape
``{"error": "<message>"}`` and never include driver or provider text.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from iam.ports.exceptions import (
    DirectoryError,
    DuplicateIdentityError,
    StoreUnavailableError,
)
from shared_kernel.auth.exceptions import (
    AuthError,
    MalformedTokenError,
    ProviderIdentityInvalidError,
    ProviderRejectedTokenError,
    ProviderResponseInvalidError,
    ProviderUnreachableError,
    SignatureInvalidError,
    SigningFailureError,
    SigningKeyMissingError,
    TokenExpiredError,
)

logger = structlog.get_logger()


class InvalidRequestError(Exception):
    """Raised when a request body cannot be parsed into the expected shape."""

    kind = "InputInvalid"

    def __init__(self, message: str = "Invalid request body"):
        super().__init__(message)
        self.message = message


class InvalidAuthorizationHeaderError(Exception):
    """Raised when the Authorization header is missing or not a Bearer credential."""

    kind = "InputInvalid"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# (status code, public message) per error class. Lookup walks the MRO, so
# subclasses not listed fall back to their base entry.
ERROR_RESPONSES: dict[type[Exception], tuple[int, str]] = {
    ProviderRejectedTokenError: (
        status.HTTP_401_UNAUTHORIZED,
        "Authentication failed",
    ),
    ProviderIdentityInvalidError: (
        status.HTTP_401_UNAUTHORIZED,
        "Authentication failed",
    ),
    ProviderResponseInvalidError: (
        status.HTTP_502_BAD_GATEWAY,
        "Identity provider returned an invalid response",
    ),
    ProviderUnreachableError: (
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "Identity provider unavailable",
    ),
    StoreUnavailableError: (
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "User store unavailable",
    ),
    DuplicateIdentityError: (
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "User store unavailable",
    ),
    SigningKeyMissingError: (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Session signing is not configured",
    ),
    SigningFailureError: (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Failed to issue session",
    ),
    SignatureInvalidError: (status.HTTP_401_UNAUTHORIZED, "Invalid token"),
    MalformedTokenError: (status.HTTP_401_UNAUTHORIZED, "Invalid token"),
    TokenExpiredError: (status.HTTP_401_UNAUTHORIZED, "Token expired"),
    AuthError: (status.HTTP_401_UNAUTHORIZED, "Authentication failed"),
    DirectoryError: (
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "User store unavailable",
    ),
}


def resolve_error(exc: Exception) -> tuple[int, str]:
    """Return the (status code, public message) for a core error."""
    for cls in type(exc).__mro__:
        if cls in ERROR_RESPONSES:
            return ERROR_RESPONSES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build a JSON error response."""
    return JSONResponse(status_code=status_code, content={"error": message})


async def _handle_core_error(request: Request, exc: Exception) -> JSONResponse:
    status_code, message = resolve_error(exc)
    log = logger.error if status_code >= 500 else logger.info
    log(
        "request_failed",
        path=request.url.path,
        kind=getattr(exc, "kind", type(exc).__name__),
        status_code=status_code,
        error=str(exc),
    )
    return error_response(status_code, message)


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "request_failed_unexpectedly",
        path=request.url.path,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return error_response(*resolve_error(exc))


async def _handle_invalid_request(
    request: Request, exc: InvalidRequestError
) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, exc.message)


async def _handle_invalid_authorization(
    request: Request, exc: InvalidAuthorizationHeaderError
) -> JSONResponse:
    return error_response(status.HTTP_401_UNAUTHORIZED, exc.message)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error handlers on an application."""
    app.add_exception_handler(AuthError, _handle_core_error)
    app.add_exception_handler(DirectoryError, _handle_core_error)
    app.add_exception_handler(InvalidRequestError, _handle_invalid_request)
    app.add_exception_handler(
        InvalidAuthorizationHeaderError, _handle_invalid_authorization
    )
    app.add_exception_handler(Exception, _handle_unexpected_error)
